"""Adapters: identifier normalization, error mapping, schema conversion, annotation mapping."""

from gravatar_mcp.adapters.annotations import AnnotationMapper
from gravatar_mcp.adapters.errors import ErrorMapper
from gravatar_mcp.adapters.identifiers import IdentifierNormalizer
from gravatar_mcp.adapters.schema import SchemaConverter

__all__ = ["AnnotationMapper", "ErrorMapper", "IdentifierNormalizer", "SchemaConverter"]
