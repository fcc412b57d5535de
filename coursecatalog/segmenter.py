# -*- coding: utf-8 -*-
"""
Split raw catalog text into per-course blocks.

Catalog layout this expects (Vanderbilt-style, after pdftotext):

    CS 3250 - Algorithms
    Course Description
    Study of algorithms. Prerequisite: CS 2201, CS 2212. FALL, SPRING. [3]

A block starts at a header line and runs up to the next header, or to the end
of the input for the last one.
"""

from __future__ import annotations
from typing import Iterator, List, NamedTuple
import logging
import re

logger = logging.getLogger(__name__)

HEADER_RE = re.compile(
    r"^[ \t]*(?P<dept>(?!FALL[ \t]*\d)[A-Z]{2,4})[ \t]*(?P<num>\d{4}[A-Z]?)[ \t]*[-–—][ \t]*(?P<title>[^\n]*)$",
    re.MULTILINE,
)
DESCRIPTION_LABEL_RE = re.compile(r"\A\s*Course Description[ \t]*(?:\n|\Z)", re.IGNORECASE)
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")


class CatalogBlock(NamedTuple):
    course_code: str
    title: str
    body: str
    index: int
    malformed: bool = False


def _clean_body(raw: str) -> str:
    body = DESCRIPTION_LABEL_RE.sub("", raw, count=1)
    return body.strip()


class CatalogBlocks:
    """Lazy, restartable view over the blocks of one catalog text.

    Each iteration runs a fresh ``finditer`` so no scan position is ever
    shared between two passes. CRLF and CR line endings are read as LF.
    """

    def __init__(self, text: str):
        self.text = text.replace("\r\n", "\n").replace("\r", "\n")

    def __iter__(self) -> Iterator[CatalogBlock]:
        headers = list(HEADER_RE.finditer(self.text))
        for i, m in enumerate(headers):
            end = headers[i + 1].start() if i + 1 < len(headers) else len(self.text)
            code = f"{m.group('dept')} {m.group('num')}"
            title = m.group("title").strip()
            body = _clean_body(self.text[m.end():end])
            malformed = not title or not body
            if malformed:
                logger.debug("Malformed block %s at index %d", code, i)
            yield CatalogBlock(code, title, body, i, malformed)

    def skipped_regions(self) -> List[str]:
        """Paragraphs of text that sit before the first course header."""
        m = HEADER_RE.search(self.text)
        preamble = self.text[:m.start()] if m else self.text
        return [p.strip() for p in _PARAGRAPH_SPLIT_RE.split(preamble) if p.strip()]


def segment_blocks(text: str) -> CatalogBlocks:
    return CatalogBlocks(text)
