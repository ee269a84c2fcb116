"""Source analysis: parsing, comment lookup, type classification and prop extraction."""

from .comments import CommentIndex
from .props import PropertyExtractor, PropsExtraction, component_name_for
from .tree_sitter import ParseError, ParsedSource, SourceParser
from .types import TypeClassification, TypeClassifier, normalize_type

__all__ = [
    "CommentIndex",
    "ParseError",
    "ParsedSource",
    "PropertyExtractor",
    "PropsExtraction",
    "SourceParser",
    "TypeClassification",
    "TypeClassifier",
    "component_name_for",
    "normalize_type",
]
