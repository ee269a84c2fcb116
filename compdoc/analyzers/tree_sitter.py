"""Tree-sitter powered parsing of component sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..models import Comment, CommentKind

_GRAMMARS = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


class ParseError(ValueError):
    """Raised when a source file does not parse cleanly."""


@dataclass
class ParsedSource:
    """A parsed file: raw bytes, syntax tree and every comment in source order."""

    source: bytes
    tree: Tree
    comments: List[Comment] = field(default_factory=list)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return node_text(node, self.source)


def node_text(node: Node, source: bytes) -> str:
    """Return the exact source text spanned by ``node``."""
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def grammar_for_file(filename: str) -> str:
    """Plain ``.ts`` files use the TypeScript grammar; everything else may hold JSX."""
    lower = filename.lower()
    if lower.endswith(".ts"):
        return "typescript"
    return "tsx"


class SourceParser:
    """Parses TypeScript/TSX text into :class:`ParsedSource` objects."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}

    def parse(self, text: str, filename: str = "component.tsx") -> ParsedSource:
        source = text.encode("utf-8")
        parser = self._get_parser(grammar_for_file(filename))
        tree = parser.parse(source)
        error = _first_error(tree.root_node)
        if error is not None:
            row, column = error.start_point
            kind = f"missing {error.type}" if error.is_missing else "unexpected token"
            raise ParseError(f"Syntax error ({kind}) at line {row + 1}:{column + 1}")
        return ParsedSource(source=source, tree=tree, comments=list(_collect_comments(tree.root_node, source)))

    def _get_parser(self, grammar: str) -> Parser:
        parser = self._parsers.get(grammar)
        if parser is None:
            parser = Parser(Language(_GRAMMARS[grammar]()))
            self._parsers[grammar] = parser
        return parser


def _walk(root: Node) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _first_error(root: Node) -> Optional[Node]:
    if not root.has_error:
        return None
    for node in _walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return root


def _collect_comments(root: Node, source: bytes) -> Iterator[Comment]:
    for node in _walk(root):
        if node.type != "comment":
            continue
        raw = node_text(node, source)
        if raw.startswith("/*"):
            kind = CommentKind.BLOCK
            body = raw[2:-2] if raw.endswith("*/") and len(raw) >= 4 else raw[2:]
        else:
            kind = CommentKind.LINE
            body = raw[2:] if raw.startswith("//") else raw
        yield Comment(
            kind=kind,
            text=body,
            start_line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
        )


__all__ = ["ParseError", "ParsedSource", "SourceParser", "grammar_for_file", "node_text"]
