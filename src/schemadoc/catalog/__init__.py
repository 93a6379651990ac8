"""Catalog readers for schemadoc."""

from schemadoc.catalog.base import BaseCatalogReader
from schemadoc.catalog.mysql import MySQLCatalogReader
from schemadoc.catalog.registry import CATALOG_READER_REGISTRY, CatalogReaderFactory
from schemadoc.catalog.sqlite import SQLiteCatalogReader

__all__ = [
    "BaseCatalogReader",
    "MySQLCatalogReader",
    "SQLiteCatalogReader",
    "CatalogReaderFactory",
    "CATALOG_READER_REGISTRY",
]
