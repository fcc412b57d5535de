# -*- coding: utf-8 -*-
"""Credit hours, terms offered and the cleaned description of one course body."""

from __future__ import annotations
from typing import FrozenSet, NamedTuple, Optional, Tuple
import re

CREDIT_RE = re.compile(r"\[\s*(\d+(?:\.\d+)?)\s*\]\s*$")
TERM_RE = re.compile(r"\b(FALL|SPRING|SUMMER|WINTER)\b", re.IGNORECASE)

_TERM = r"\b(?:FALL|SPRING|SUMMER|WINTER)\b"
# "FALL, SPRING." as its own sentence, ending the line or just before "[3]"
TERM_LIST_RE = re.compile(
    r"(?:^|(?<=[.;:!?]))[ \t]*"
    rf"(?P<terms>{_TERM}(?:[ \t]*(?:,|/|&|\band\b)?[ \t]*{_TERM})*)"
    r"[ \t]*[.;]?(?=[ \t]*(?:\[[^\]\n]*\][ \t]*)?$)",
    re.IGNORECASE | re.MULTILINE,
)


class ExtractedFields(NamedTuple):
    credit_hours: Optional[float]
    terms_offered: FrozenSet[str]
    description: str


def extract_credit_hours(body: Optional[str]) -> Optional[float]:
    m = CREDIT_RE.search(body or "")
    if not m:
        return None
    raw = m.group(1)
    if "." in raw and len(raw.split(".", 1)[1]) > 1:
        return None
    value = float(raw)
    return value if value > 0 else None


def _overlaps(a: Tuple[int, int], b: Optional[Tuple[int, int]]) -> bool:
    return b is not None and a[0] < b[1] and b[0] < a[1]


def find_term_list(body: Optional[str], clause_span: Optional[Tuple[int, int]] = None) -> Optional[re.Match]:
    """Last term-list token in ``body`` that sits outside the prerequisite clause."""
    found = None
    for m in TERM_LIST_RE.finditer(body or ""):
        if not _overlaps(m.span(), clause_span):
            found = m
    return found


def extract_terms(body: Optional[str], clause_span: Optional[Tuple[int, int]] = None) -> FrozenSet[str]:
    m = find_term_list(body, clause_span)
    if not m:
        return frozenset()
    return frozenset(t.upper() for t in TERM_RE.findall(m.group("terms")))


def clean_description(body: Optional[str], clause_span: Optional[Tuple[int, int]] = None) -> str:
    text = body or ""
    cuts = [clause_span] if clause_span else []
    term_list = find_term_list(text, clause_span)
    if term_list:
        cuts.append(term_list.span())
    for start, end in sorted(cuts, reverse=True):
        text = text[:start] + " " + text[end:]
    text = CREDIT_RE.sub(" ", text)

    text = re.sub(r"\s+", " ", text).strip()
    text = re.sub(r"\s+([.,;:])", r"\1", text)
    text = re.sub(r"([.,;:])(?:\s*[.,;:])+", r"\1", text)
    return text.strip(" ,;:").lstrip(".").strip()


def extract_fields(body: Optional[str], clause_span: Optional[Tuple[int, int]] = None) -> ExtractedFields:
    return ExtractedFields(
        credit_hours=extract_credit_hours(body),
        terms_offered=extract_terms(body, clause_span),
        description=clean_description(body, clause_span),
    )
