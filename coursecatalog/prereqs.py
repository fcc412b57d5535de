# -*- coding: utf-8 -*-
"""
Prerequisite clauses: find them in a course body and turn them into
expressions over course codes.

Examples:
- "CS 1101 or CS 1104"  -> Or(CS 1101, CS 1104)
- "CS 2201, CS 2212"    -> And(CS 2201, CS 2212)
- "MATH 1300"           -> Leaf(MATH 1300)
- "None"                -> NoPrerequisite
- "junior standing"     -> Unparsed("junior standing")

The and/or rules are flat on purpose: no nesting, no precedence grammar.
Mixed clauses such as "CS 1101 and MATH 1300, or CS 1104" come out as And.
"""

from __future__ import annotations
from typing import Iterator, List, NamedTuple, Optional, Protocol, Sequence, Tuple
import logging
import re

from .config import ParserConfig
from .models import And, Leaf, NoPrerequisite, Or, PrerequisiteExpression, Unparsed

logger = logging.getLogger(__name__)

# -------------------------
# Clause isolation
# -------------------------

# a '.' between two digits ("2.5 GPA") does not end the clause
_CLAUSE_BODY = r"(?P<clause>(?:(?<=\d)\.(?=\d)|[^.!?\n])*)[.!?]?"

PRIMARY_MARKERS: Tuple[re.Pattern, ...] = (
    re.compile(r"\bprereq(?:uisite)?s?\s*:\s*" + _CLAUSE_BODY, re.IGNORECASE),
)
EXTENDED_MARKERS: Tuple[re.Pattern, ...] = (
    re.compile(r"\brequired\s*:\s*" + _CLAUSE_BODY, re.IGNORECASE),
    re.compile(r"\bcompletion of\s+" + _CLAUSE_BODY, re.IGNORECASE),
    re.compile(r"\bmust have completed\s+" + _CLAUSE_BODY, re.IGNORECASE),
)


class ClauseMatch(NamedTuple):
    clause: Optional[str]
    reason: Optional[str]  # "absent" | "too_short" | "self_reference"
    span: Optional[Tuple[int, int]] = None


def _markers(config: ParserConfig) -> Tuple[re.Pattern, ...]:
    if config.extended_markers:
        return PRIMARY_MARKERS + EXTENDED_MARKERS
    return PRIMARY_MARKERS


def clean_clause(text: str) -> str:
    text = re.sub(r"\s+", " ", text).strip()
    return text.rstrip(".").strip()


def isolate_clause_with_reason(body: Optional[str], owner_code: str,
                               config: Optional[ParserConfig] = None) -> ClauseMatch:
    """
    Locate the prerequisite clause in ``body``.

    ``span`` is set whenever a marker matched, even if the clause was then
    rejected, so the caller can still strip the sentence from the description.
    """
    if not body:
        return ClauseMatch(None, "absent")
    config = config or ParserConfig()

    first_span = None
    first_reason = "absent"
    for pattern in _markers(config):
        m = pattern.search(body)
        if not m:
            continue
        if first_span is None:
            first_span = m.span()

        clause = clean_clause(m.group("clause"))
        if len(clause) <= config.min_clause_length:
            reason = "too_short"
        elif owner_code in scan_course_codes(clause):
            logger.debug("SelfReferenceNoise: %s prerequisite clause %r names itself", owner_code, clause)
            reason = "self_reference"
        else:
            return ClauseMatch(clause, None, m.span())

        if first_reason == "absent":
            first_reason = reason

    return ClauseMatch(None, first_reason, first_span)


def isolate_clause(body: Optional[str], owner_code: str, config: Optional[ParserConfig] = None) -> Optional[str]:
    return isolate_clause_with_reason(body, owner_code, config).clause

# -------------------------
# Course-code scanning
# -------------------------

# connectives that would otherwise read as a department ("or 1104", "and 2212")
_CODE_TOKEN_RE = re.compile(
    r"\b(?!(?i:and|or|of|in|to|the|with)\b)([A-Za-z]{2,4})\s*(\d{4}[A-Za-z]?)\b"
)


def iter_course_codes(text: Optional[str]) -> Iterator[str]:
    for m in _CODE_TOKEN_RE.finditer(text or ""):
        yield f"{m.group(1).upper()} {m.group(2).upper()}"


def scan_course_codes(text: Optional[str], owner_code: Optional[str] = None) -> List[str]:
    """Normalized codes in first-seen order, deduplicated, owner dropped."""
    seen = set()
    out = []
    for code in iter_course_codes(text):
        if code == owner_code or code in seen:
            continue
        seen.add(code)
        out.append(code)
    return out

# -------------------------
# Classification
# -------------------------

_OR_RE = re.compile(r"\bor\b", re.IGNORECASE)
_AND_RE = re.compile(r"\band\b", re.IGNORECASE)


class PrerequisiteClassifier(Protocol):
    def classify(self, clause: str, leaves: Sequence[str]) -> PrerequisiteExpression:
        ...


class FlatHeuristicClassifier:
    """
    First matching rule wins:
      1. "or" anywhere                               -> Or
      2. ';', ',', "and", or several codes           -> And
      3. exactly one code                            -> Leaf
      4. no codes                                    -> Unparsed
    Rule 1 is skipped when the clause has "and" together with a comma or
    semicolon.
    """

    def classify(self, clause: str, leaves: Sequence[str]) -> PrerequisiteExpression:
        if not leaves:
            return Unparsed(raw=clause)

        has_or = bool(_OR_RE.search(clause))
        has_and = bool(_AND_RE.search(clause))
        has_separator = ";" in clause or "," in clause

        if has_or and not (has_and and has_separator):
            return Or.of(*leaves)
        if has_separator or has_and or len(leaves) > 1:
            return And.of(*leaves)
        return Leaf(course_code=leaves[0])


DEFAULT_CLASSIFIER = FlatHeuristicClassifier()


def build_expression(clause: Optional[str], owner_code: str,
                     classifier: Optional[PrerequisiteClassifier] = None) -> PrerequisiteExpression:
    if clause is None:
        return NoPrerequisite()
    clause = clean_clause(clause)
    if not clause or clause.lower() == "none":
        return NoPrerequisite()

    leaves = scan_course_codes(clause, owner_code)
    return (classifier or DEFAULT_CLASSIFIER).classify(clause, leaves)
