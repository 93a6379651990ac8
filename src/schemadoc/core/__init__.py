"""Schema introspection and relationship inference."""

from schemadoc.core.annotator import ColumnAnnotator
from schemadoc.core.document import DocumentModel, build_document
from schemadoc.core.fk_inference import NamingConventionFKDetector
from schemadoc.core.pipeline import DocumentationPipeline
from schemadoc.core.registry import build_table_registry
from schemadoc.core.resolver import RelationshipResolver
from schemadoc.core.types import (
    AnnotatedColumn,
    ColumnRecord,
    ForeignKey,
    Index,
    IndexColumn,
    ResolvedForeignKey,
    Table,
    Trigger,
)

__all__ = [
    "AnnotatedColumn",
    "ColumnAnnotator",
    "ColumnRecord",
    "DocumentModel",
    "DocumentationPipeline",
    "ForeignKey",
    "Index",
    "IndexColumn",
    "NamingConventionFKDetector",
    "RelationshipResolver",
    "ResolvedForeignKey",
    "Table",
    "Trigger",
    "build_document",
    "build_table_registry",
]
