"""Tests for rebuilding text lines from positioned PDF words."""

from __future__ import annotations

import asyncio

import pytest

from linkedin_import.document import (
    COLUMN_BREAK,
    Line,
    detect_column_split,
    is_page_header,
    lines_to_text,
    read_document,
    split_line_words,
)
from linkedin_import.errors import DocumentError


def word(text: str, x0: float, top: float = 100.0) -> dict:
    return {"text": text, "x0": x0, "x1": x0 + 6 * len(text), "top": top, "bottom": top + 10}


def two_column_page(page: int = 0) -> list[Line]:
    lines = []
    for row in range(10):
        top = 50.0 + row * 15
        lines.append(Line(f"side {row}", top, 30.0, page))
        lines.append(Line(f"main {row}", top, 220.0, page))
    return lines


def test_is_page_header() -> None:
    assert is_page_header("Page 1 of 3")
    assert is_page_header("page 2 / 3")
    assert not is_page_header("Pages of history")


def test_split_line_words_at_wide_gaps() -> None:
    words = [word("Top", 30), word("Skills", 55), word("Jane", 220), word("Doe", 250)]
    lines = split_line_words(words, 0, gap_threshold=40)
    assert [line.text for line in lines] == ["Top Skills", "Jane Doe"]
    assert lines[1] == Line("Jane Doe", 100.0, 220, 0)


def test_split_line_words_strips_cid_glyphs() -> None:
    lines = split_line_words([word("(cid:127)", 30), word("Python", 90)], 0, gap_threshold=100)
    assert [line.text for line in lines] == ["Python"]


def test_detect_column_split() -> None:
    assert detect_column_split(two_column_page()) == pytest.approx(125.0)
    assert detect_column_split(two_column_page()[:6]) is None


def test_lines_to_text_reads_sidebar_first() -> None:
    lines = two_column_page() + [Line("Page 1 of 1", 800.0, 250.0, 0)]
    text = lines_to_text(lines).split("\n")
    assert text[:10] == [f"side {row}" for row in range(10)]
    assert text[10] == COLUMN_BREAK
    assert text[11:] == [f"main {row}" for row in range(10)]


def test_lines_to_text_single_column() -> None:
    lines = [Line("second", 30.0, 40.0, 1), Line("first", 30.0, 40.0, 0)]
    assert lines_to_text(lines) == "first\nsecond"


def test_read_document_rejects_non_pdf() -> None:
    with pytest.raises(DocumentError):
        asyncio.run(read_document(b"this is not a pdf"))
