"""
LinkedIn "Save to PDF" document -> text with approximate line breaks.

pdfplumber gives positioned words; they are regrouped into lines by their
vertical position, split where a wide horizontal gap separates the sidebar
from the main column, and emitted sidebar first. A form feed line marks the
jump from the sidebar to the main column.
"""

from __future__ import annotations

import asyncio
import dataclasses
import io
import logging
import re
import warnings

import pdfplumber

from .errors import DocumentError

logger = logging.getLogger(__name__)

# pdfminer is chatty about CropBox and font fallbacks
logging.getLogger("pdfplumber").setLevel(logging.ERROR)
logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", category=UserWarning, module="pdfminer")

COLUMN_BREAK = "\f"
LINE_TOLERANCE = 2.5
MIN_COLUMN_GAP = 80.0
MIN_LINES_FOR_COLUMNS = 20

CID_RE = re.compile(r"\(cid:\d+\)")
PAGE_RE = re.compile(r"^page\s+\d+\s+(?:of|/)\s*\d+$", re.I)


@dataclasses.dataclass(frozen=True)
class Line:
    text: str
    top: float
    x0: float
    page: int


def is_page_header(text: str) -> bool:
    return bool(PAGE_RE.match(text.strip()))


def page_lines(page, page_index: int) -> list[Line]:
    words = page.extract_words(use_text_flow=True, keep_blank_chars=False)
    if not words:
        return []
    words = sorted(words, key=lambda w: (w["top"], w["x0"]))
    gap_threshold = max(30.0, page.width * 0.08)
    lines: list[Line] = []
    current_words: list[dict] = []
    current_top: float | None = None
    for word in words:
        if current_top is None or abs(word["top"] - current_top) <= LINE_TOLERANCE:
            if current_top is None:
                current_top = word["top"]
            current_words.append(word)
            continue
        lines.extend(split_line_words(current_words, page_index, gap_threshold))
        current_words = [word]
        current_top = word["top"]
    if current_words:
        lines.extend(split_line_words(current_words, page_index, gap_threshold))
    return lines


def split_line_words(
    words: list[dict], page_index: int, gap_threshold: float
) -> list[Line]:
    words = sorted(words, key=lambda w: w["x0"])
    segments: list[list[dict]] = []
    current: list[dict] = []
    last_x1: float | None = None
    for word in words:
        if last_x1 is not None and word["x0"] - last_x1 > gap_threshold:
            segments.append(current)
            current = []
        current.append(word)
        last_x1 = word["x1"]
    if current:
        segments.append(current)
    lines = [words_to_line(segment, page_index) for segment in segments]
    return [line for line in lines if line.text]


def words_to_line(words: list[dict], page_index: int) -> Line:
    text = " ".join(word["text"] for word in words)
    text = " ".join(CID_RE.sub("", text).split())
    return Line(
        text=text,
        top=min(word["top"] for word in words),
        x0=min(word["x0"] for word in words),
        page=page_index,
    )


def detect_column_split(lines: list[Line]) -> float | None:
    if len(lines) < MIN_LINES_FOR_COLUMNS:
        return None
    x0s = sorted(line.x0 for line in lines)
    gaps = [(x0s[i + 1] - x0s[i], i) for i in range(len(x0s) - 1)]
    gap, idx = max(gaps, default=(0.0, 0))
    if gap < MIN_COLUMN_GAP:
        return None
    return (x0s[idx] + x0s[idx + 1]) / 2


def lines_to_text(lines: list[Line]) -> str:
    split = detect_column_split(lines)
    texts: list[str] = []
    for page in sorted({line.page for line in lines}):
        on_page = sorted(
            (line for line in lines if line.page == page and not is_page_header(line.text)),
            key=lambda line: (line.top, line.x0),
        )
        if split is None:
            texts.extend(line.text for line in on_page)
            continue
        left = [line.text for line in on_page if line.x0 <= split]
        right = [line.text for line in on_page if line.x0 > split]
        texts.extend(left)
        if left and right:
            texts.append(COLUMN_BREAK)
        texts.extend(right)
    return "\n".join(texts)


def open_document(data: bytes):
    try:
        return pdfplumber.open(io.BytesIO(data))
    except Exception as exc:
        raise DocumentError("The file doesn't appear to be a valid PDF document") from exc


async def read_document(data: bytes) -> str:
    pdf = open_document(data)
    lines: list[Line] = []
    with pdf:
        for index, page in enumerate(pdf.pages):
            extracted = await asyncio.to_thread(page_lines, page, index)
            logger.debug("Page %d: %d lines", index + 1, len(extracted))
            lines.extend(extracted)
    text = lines_to_text(lines)
    logger.info("Extracted %d lines of text from PDF", len(lines))
    return text
