"""Classification of property type annotations into canonical type tags.

Unions of literals become ``enum`` tags carrying their values, array and
function types get dedicated tags, and anything else is reduced to a readable
string by :func:`normalize_type`.  Normalisation is a heuristic: shapes no rule
recognises fall through as lowercased, whitespace-free text rather than failing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union

from tree_sitter import Node

from .tree_sitter import node_text

ENUM = "enum"
FUNCTION = "function"

_LITERAL_VALUE_TYPES = {"string", "number", "true", "false", "unary_expression"}
_SIMPLE_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v", "0": "\0"}
_CODE_POINT_ESCAPE = re.compile(r"\\(?:x([0-9a-fA-F]{2})|u\{([0-9a-fA-F]+)\}|u([0-9a-fA-F]{4}))")
_LINE_TERMINATORS = ("\n", "\r", "\u2028", "\u2029")
_WHITESPACE = re.compile(r"\s+")
_ARROW = "=>"


@dataclass(frozen=True)
class RewriteRule:
    """One textual substitution in the normalisation pipeline."""

    name: str
    pattern: Union[str, "re.Pattern[str]"]
    replacement: str
    count: int = 0

    def apply(self, text: str) -> str:
        if isinstance(self.pattern, str):
            return text.replace(self.pattern, self.replacement, self.count or -1)
        return self.pattern.sub(self.replacement, text, count=self.count)


# Applied left to right; append new rules here rather than branching in callers.
REWRITE_RULES: Tuple[RewriteRule, ...] = (
    RewriteRule("whitespace", re.compile(r"\s+"), ""),
    RewriteRule("react-namespace", "react.", ""),
    RewriteRule("node-content", re.compile(r"\breactnode\b"), "reactnode", count=1),
    RewriteRule("function-component", re.compile(r"\bfunctioncomponent\b"), "FC", count=1),
    RewriteRule("void-callback", "()=>void", FUNCTION, count=1),
    RewriteRule("boolean", "boolean", "bool", count=1),
    RewriteRule("array-spelling", re.compile(r"(\w+)\[\]"), "array", count=1),
    RewriteRule("promise", re.compile(r"promise<.*>"), "Promise", count=1),
    RewriteRule("generics", re.compile(r"<.*>"), ""),
)


@dataclass(frozen=True)
class TypeClassification:
    """A type tag plus the literal values of an enum."""

    type: str
    values: Optional[Tuple[str, ...]] = None


def normalize_type(text: str, rules: Sequence[RewriteRule] = REWRITE_RULES) -> str:
    """Reduce raw type text to a canonical, comparable spelling."""
    normalized = text.lower()
    for rule in rules:
        normalized = rule.apply(normalized)

    if _ARROW in normalized:
        parts = normalized.split(_ARROW)
        params = _unwrap_parens(parts[0].strip())
        return_type = parts[1].strip()
        return f"({params}) {_ARROW} {return_type}"

    return normalized


def _unwrap_parens(text: str) -> str:
    """Drop one pair of parentheses when they enclose the whole text."""
    if not (text.startswith("(") and text.endswith(")")):
        return text
    depth = 0
    for index, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0 and index != len(text) - 1:
                return text
    return text[1:-1] if depth == 0 else text


def union_members(node: Node) -> List[Node]:
    """Flatten tree-sitter's left-nested binary unions into declaration order."""
    members: List[Node] = []
    for child in node.named_children:
        if child.type == "comment":
            continue
        if child.type == "union_type":
            members.extend(union_members(child))
        else:
            members.append(child)
    return members


def literal_value(node: Node, source: bytes) -> Optional[str]:
    """Return the literal a ``literal_type`` node denotes, or None for other nodes.

    ``null`` and ``undefined`` are keyword types rather than literals.
    """
    if node.type != "literal_type":
        return None
    inner = [child for child in node.named_children if child.type != "comment"]
    if len(inner) != 1 or inner[0].type not in _LITERAL_VALUE_TYPES:
        return None
    if inner[0].type == "string":
        return string_value(inner[0], source)
    return node_text(inner[0], source)


def string_value(node: Node, source: bytes) -> str:
    """Decode a ``string`` node to the value it denotes, without its quotes."""
    parts: List[str] = []
    for child in node.named_children:
        text = node_text(child, source)
        parts.append(_decode_escape(text) if child.type == "escape_sequence" else text)
    return "".join(parts)


def _decode_escape(text: str) -> str:
    match = _CODE_POINT_ESCAPE.fullmatch(text)
    if match:
        digits = next(group for group in match.groups() if group)
        return chr(int(digits, 16))
    escaped = text[1:]
    # line continuation
    if escaped.startswith(_LINE_TERMINATORS):
        return ""
    return _SIMPLE_ESCAPES.get(escaped, escaped)


class TypeClassifier:
    """Maps a type annotation node to a :class:`TypeClassification`."""

    def __init__(self, normalizer: Callable[[str], str] = normalize_type) -> None:
        self._normalize = normalizer

    def classify(self, node: Node, source: bytes) -> TypeClassification:
        if node.type == "type_annotation":
            node = next(child for child in node.named_children if child.type != "comment")

        if node.type == "union_type":
            return self._classify_union(node, source)

        if node.type == "array_type":
            element = node.named_children[0]
            return TypeClassification(f"{self._normalize(node_text(element, source))}[]")

        if node.type == "function_type":
            return TypeClassification(FUNCTION)

        return TypeClassification(self._tag(node, source))

    def _classify_union(self, node: Node, source: bytes) -> TypeClassification:
        members = union_members(node)
        literals = [literal_value(member, source) for member in members]
        if members and all(value is not None for value in literals):
            return TypeClassification(ENUM, tuple(value for value in literals if value is not None))
        joined = " | ".join(self._tag(member, source) for member in members)
        return TypeClassification(joined)

    def _tag(self, node: Node, source: bytes) -> str:
        """Normalised text of ``node``; never the bare enum tag, which requires values."""
        text = node_text(node, source)
        normalized = self._normalize(text)
        if normalized == ENUM:
            return _WHITESPACE.sub("", text)
        return normalized


__all__ = [
    "ENUM",
    "FUNCTION",
    "REWRITE_RULES",
    "RewriteRule",
    "TypeClassification",
    "TypeClassifier",
    "literal_value",
    "normalize_type",
    "string_value",
    "union_members",
]
