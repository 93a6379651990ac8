"""schemadoc - Browsable documentation for MySQL schemas."""

__version__ = "0.1.0"

# Catalog readers
from schemadoc.catalog import (
    BaseCatalogReader,
    CatalogReaderFactory,
    MySQLCatalogReader,
    SQLiteCatalogReader,
)

# Core modules
from schemadoc.core import (
    ColumnAnnotator,
    DocumentationPipeline,
    DocumentModel,
    NamingConventionFKDetector,
    RelationshipResolver,
    Table,
    build_document,
    build_table_registry,
)

# Errors
from schemadoc.errors import (
    CatalogQueryError,
    ConfigError,
    EmptySchemaError,
    OutputTargetError,
    SchemaDocError,
    UsageError,
)

# Rendering
from schemadoc.render import HTMLRenderer

# Utils
from schemadoc.utils.config import Config, get_config, load_config

__all__ = [
    # Version
    "__version__",
    # Catalog
    "BaseCatalogReader",
    "CatalogReaderFactory",
    "MySQLCatalogReader",
    "SQLiteCatalogReader",
    # Core
    "ColumnAnnotator",
    "DocumentationPipeline",
    "DocumentModel",
    "NamingConventionFKDetector",
    "RelationshipResolver",
    "Table",
    "build_document",
    "build_table_registry",
    # Errors
    "SchemaDocError",
    "UsageError",
    "EmptySchemaError",
    "CatalogQueryError",
    "OutputTargetError",
    "ConfigError",
    # Rendering
    "HTMLRenderer",
    # Config
    "Config",
    "get_config",
    "load_config",
]
