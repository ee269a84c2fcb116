"""Extraction of a component's property records from its parsed source."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Iterator, List, Optional

from tree_sitter import Node

from ..models import PropertyRecord
from .comments import CommentIndex
from .tree_sitter import ParsedSource
from .types import TypeClassifier

_SOURCE_EXTENSION = re.compile(r"\.(tsx?|jsx?)$")
_PROPS_MARKER = "Props"
_STRUCTURAL_DECLARATIONS = {"interface_declaration", "type_alias_declaration"}


@dataclass
class PropsExtraction:
    """Everything recovered from one file before example synthesis."""

    component_name: str
    documentation: str
    props: List[PropertyRecord] = field(default_factory=list)


def component_name_for(filename: str) -> str:
    """``src/components/Button.tsx`` -> ``Button``."""
    return _SOURCE_EXTENSION.sub("", PurePath(filename).name)


class PropertyExtractor:
    """Locates the ``*Props`` declaration of a file and documents its fields."""

    def __init__(self, classifier: TypeClassifier | None = None) -> None:
        self.classifier = classifier or TypeClassifier()

    def extract(self, filename: str, parsed: ParsedSource) -> PropsExtraction:
        component_name = component_name_for(filename)
        comments = CommentIndex(parsed.comments)
        extraction = PropsExtraction(
            component_name=component_name,
            documentation=comments.component_doc(component_name),
        )

        body = self.find_props_body(parsed)
        if body is None:
            return extraction

        for member in body.named_children:
            record = self._document_member(member, parsed, comments)
            if record is not None:
                extraction.props.append(record)
        return extraction

    def find_props_body(self, parsed: ParsedSource) -> Optional[Node]:
        """Return the member list of the first top-level ``*Props`` declaration."""
        for declaration in _top_level_declarations(parsed.root):
            name_node = declaration.child_by_field_name("name")
            if name_node is None or _PROPS_MARKER not in parsed.text(name_node):
                continue
            if declaration.type == "interface_declaration":
                return declaration.child_by_field_name("body")
            value = declaration.child_by_field_name("value")
            if value is not None and value.type == "object_type":
                return value
        return None

    def _document_member(
        self, member: Node, parsed: ParsedSource, comments: CommentIndex
    ) -> Optional[PropertyRecord]:
        if member.type != "property_signature":
            return None
        key = member.child_by_field_name("name")
        annotation = member.child_by_field_name("type")
        if key is None or key.type != "property_identifier" or annotation is None:
            return None

        name = parsed.text(key)
        classification = self.classifier.classify(annotation, parsed.source)
        return PropertyRecord(
            name=name,
            type=classification.type,
            values=classification.values,
            description=comments.property_description(member.start_point[0] + 1, name),
        )


def _top_level_declarations(root: Node) -> Iterator[Node]:
    for node in root.named_children:
        if node.type in _STRUCTURAL_DECLARATIONS:
            yield node
        elif node.type == "export_statement":
            declaration = node.child_by_field_name("declaration")
            if declaration is not None and declaration.type in _STRUCTURAL_DECLARATIONS:
                yield declaration


__all__ = ["PropertyExtractor", "PropsExtraction", "component_name_for"]
