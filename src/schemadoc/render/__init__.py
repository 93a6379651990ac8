"""HTML rendering and output directory handling."""

from schemadoc.render.html import HTMLRenderer, table_filename
from schemadoc.render.output import copy_assets, prepare_output_dir

__all__ = ["HTMLRenderer", "table_filename", "copy_assets", "prepare_output_dir"]
