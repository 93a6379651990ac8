"""Output directory preparation."""

from __future__ import annotations

import shutil
from pathlib import Path

from schemadoc.errors import OutputTargetError
from schemadoc.utils.logging import get_logger

logger = get_logger(__name__)

ASSETS_DIR = Path(__file__).parent / "assets"


def prepare_output_dir(path: str | Path) -> Path:
    """Remove ``path`` if it exists and create it empty.

    Args:
        path: Output directory

    Returns:
        The created directory

    Raises:
        OutputTargetError: If the directory cannot be removed or created
    """
    path = Path(path)

    if path.exists():
        if not path.is_dir():
            raise OutputTargetError(f'Output path "{path}" exists and is not a directory')
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise OutputTargetError(f'Could not delete directory "{path}": {e}') from e
        logger.debug(f"Removed existing output directory {path}")

    try:
        path.mkdir(parents=True)
    except OSError as e:
        raise OutputTargetError(f'Could not create directory "{path}": {e}') from e

    logger.info(f"Prepared output directory {path}")
    return path


def copy_assets(output_dir: str | Path) -> Path:
    """Copy the bundled stylesheet directory into ``output_dir/assets``.

    Raises:
        OutputTargetError: If the copy fails
    """
    target = Path(output_dir) / "assets"
    try:
        shutil.copytree(ASSETS_DIR, target)
    except OSError as e:
        raise OutputTargetError(f'Could not copy assets to "{target}": {e}') from e
    return target
