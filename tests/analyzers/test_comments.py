"""Tests for the comment index."""

from __future__ import annotations

from compdoc.analyzers.comments import (
    CommentIndex,
    clean_doc_comment,
    clean_property_comment,
)
from compdoc.models import Comment, CommentKind


def _block(text: str, start: int, end: int | None = None) -> Comment:
    return Comment(CommentKind.BLOCK, text, start, end if end is not None else start)


def _line(text: str, line: int) -> Comment:
    return Comment(CommentKind.LINE, text, line, line)


def test_component_doc_prefers_closest_comment_above_scan_start() -> None:
    index = CommentIndex(
        [
            _block("*\n * Tooltip component helpers.\n ", 1, 3),
            _block("*\n * Shows a tooltip component on hover.\n ", 10, 12),
        ]
    )

    assert index.component_doc("Tooltip") == "Shows a tooltip component on hover."


def test_component_doc_ignores_line_and_plain_block_comments() -> None:
    index = CommentIndex(
        [
            _line(" Tabs component", 1),
            _block(" Tabs component, not a doc comment ", 3),
        ]
    )

    assert index.component_doc("Tabs") == ""


def test_component_doc_matches_annotation_markers() -> None:
    index = CommentIndex([_block("* Renders a pill.\n * @description pill ", 2, 3)])

    assert index.component_doc("Badge") == "Renders a pill.\n@description pill"


def test_component_doc_skips_unrelated_doc_comments() -> None:
    index = CommentIndex(
        [
            _block("* Formats a date for display. ", 5),
            _block("* The Avatar shows a user image. ", 1),
        ]
    )

    assert index.component_doc("Avatar") == "The Avatar shows a user image."


def test_clean_doc_comment_normalises_examples_and_fences() -> None:
    text = "*\n * Thing docs.\n * @example   \n * ```ts  \n * <Thing />\n * ```\n "

    assert clean_doc_comment(text) == "Thing docs.\n@example\n```tsx\n<Thing />\n```"


def test_property_description_uses_comment_ending_on_previous_line() -> None:
    index = CommentIndex([_block("*\n   * Size of the\n   * badge\n   ", 3, 6)])

    assert index.property_description(7, "size") == "Size of the badge"


def test_property_description_does_not_tolerate_gap() -> None:
    index = CommentIndex([_line(" detached", 3)])

    assert index.property_description(5, "size") == "size property"


def test_property_description_takes_first_comment_on_line() -> None:
    index = CommentIndex([_block(" first ", 4), _line(" second", 4)])

    assert index.property_description(5, "label") == "first"
    assert index.ending_on(4) is not None
    assert index.ending_on(9) is None


def test_clean_property_comment_flattens_lines() -> None:
    assert clean_property_comment("** Click\n * handler ") == "Click handler"
