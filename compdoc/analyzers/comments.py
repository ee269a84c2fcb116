"""Positional index over the free-floating comments of a parsed file."""

from __future__ import annotations

import re
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..models import Comment, CommentKind

_LEADING_STARS = re.compile(r"^\s*\*+")
_INTERIOR_STARS = re.compile(r"\n\s*\*\s*")
_EXAMPLE_TAG = re.compile(r"@example\s*\n")
_TSX_FENCE = re.compile(r"```tsx?\s*\n")
_NEWLINE_RUNS = re.compile(r"\n+")

_COMPONENT_MARKERS = ("@component", "@description")


def clean_doc_comment(text: str) -> str:
    """Normalise a ``/** ... */`` body for component-level documentation."""
    cleaned = _LEADING_STARS.sub("", text, count=1)
    cleaned = _INTERIOR_STARS.sub("\n", cleaned)
    cleaned = _EXAMPLE_TAG.sub("@example\n", cleaned)
    cleaned = _TSX_FENCE.sub("```tsx\n", cleaned)
    cleaned = _NEWLINE_RUNS.sub("\n", cleaned)
    return cleaned.strip()


def clean_property_comment(text: str) -> str:
    """Flatten a property comment onto a single line."""
    cleaned = _LEADING_STARS.sub("", text, count=1)
    cleaned = _INTERIOR_STARS.sub(" ", cleaned)
    return cleaned.strip()


def is_doc_comment(comment: Comment) -> bool:
    return comment.kind is CommentKind.BLOCK and comment.text.startswith("*")


class CommentIndex:
    """Comments of one file, keyed by the line they end on.

    Built once per file so per-property lookups do not rescan the comment list.
    """

    def __init__(self, comments: Iterable[Comment]) -> None:
        self._comments: List[Comment] = list(comments)
        self._by_end_line: Dict[int, List[Comment]] = defaultdict(list)
        for comment in self._comments:
            self._by_end_line[comment.end_line].append(comment)

    def __len__(self) -> int:
        return len(self._comments)

    @property
    def comments(self) -> Sequence[Comment]:
        return tuple(self._comments)

    def ending_on(self, line: int) -> Optional[Comment]:
        """Return the first comment (source order) ending on ``line``."""
        matches = self._by_end_line.get(line)
        return matches[0] if matches else None

    def find_doc(self, predicate: Callable[[str], bool]) -> str:
        """Return the cleaned text of the lowest doc comment satisfying ``predicate``."""
        ordered = sorted(self._comments, key=lambda comment: comment.start_line, reverse=True)
        for comment in ordered:
            if not is_doc_comment(comment):
                continue
            text = clean_doc_comment(comment.text)
            if predicate(text):
                return text
        return ""

    def component_doc(self, component_name: str) -> str:
        """Return the doc comment describing ``component_name`` or an empty string."""
        needle = component_name.lower()

        def _describes_component(text: str) -> bool:
            lowered = text.lower()
            if needle in lowered or "component" in lowered:
                return True
            return any(marker in text for marker in _COMPONENT_MARKERS)

        return self.find_doc(_describes_component)

    def property_description(self, property_start_line: int, property_name: str) -> str:
        """Describe a property from the comment directly above it."""
        comment = self.ending_on(property_start_line - 1)
        if comment is None:
            return f"{property_name} property"
        return clean_property_comment(comment.text)


__all__ = [
    "CommentIndex",
    "clean_doc_comment",
    "clean_property_comment",
    "is_doc_comment",
]
