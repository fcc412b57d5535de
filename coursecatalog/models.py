# -*- coding: utf-8 -*-
"""
Structured output of a catalog parse.

Everything handed to downstream collaborators (database upsert, prerequisite
graph, operator reports) is one of these pydantic models, so a whole run
serializes with ``ParseResult.model_dump_json()``.
"""

from __future__ import annotations
from typing import Annotated, List, Optional, Literal, Union, Dict, Tuple, FrozenSet
from datetime import datetime, timezone
import hashlib
import re

from pydantic import BaseModel, ConfigDict, Field, constr, field_serializer, field_validator, model_validator

# -------------------------
# Shared types
# -------------------------

Term = Literal["FALL", "SPRING", "SUMMER", "WINTER"]
TERM_ORDER: Tuple[str, ...] = ("FALL", "SPRING", "SUMMER", "WINTER")

CourseCode = constr(pattern=r"^[A-Z]{2,4} \d{4}[A-Z]?$")  # "CS 3250", "MATH 1300L"

_CODE_RE = re.compile(r"\b([A-Za-z]{2,4})\s*(\d{4}[A-Za-z]?)\b")  # CS 2201, cs2201, BSCI 1510L


def normalize_code(text: Optional[str]) -> Optional[str]:
    if not text: return None
    m = _CODE_RE.search(text.replace("\xa0", " "))
    if not m: return None
    subj, num = m.group(1), m.group(2)
    return f"{subj.upper()} {num.upper()}"


def split_code(code: str) -> Tuple[str, str]:
    dept, _, number = code.partition(" ")
    return dept, number


def fingerprint(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

# -------------------------
# Prerequisite expressions
# -------------------------

class _Expression(BaseModel):
    model_config = ConfigDict(frozen=True)

    def leaves(self) -> Tuple[str, ...]:
        return ()


class NoPrerequisite(_Expression):
    type: Literal["none"] = "none"


class Leaf(_Expression):
    type: Literal["leaf"] = "leaf"
    course_code: CourseCode

    def leaves(self) -> Tuple[str, ...]:
        return (self.course_code,)


class _Combinator(_Expression):
    items: Tuple[Leaf, ...] = ()

    @classmethod
    def of(cls, *codes: str):
        return cls(items=[Leaf(course_code=c) for c in codes])

    def leaves(self) -> Tuple[str, ...]:
        return tuple(leaf.course_code for leaf in self.items)


class And(_Combinator):
    type: Literal["and"] = "and"


class Or(_Combinator):
    type: Literal["or"] = "or"


class Unparsed(_Expression):
    """Prerequisite language was found but no course codes could be pulled out."""
    type: Literal["unparsed"] = "unparsed"
    raw: str


PrerequisiteExpression = Annotated[
    Union[NoPrerequisite, Leaf, And, Or, Unparsed],
    Field(discriminator="type"),
]

# -------------------------
# Records
# -------------------------

class Provenance(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    parsed_at: str
    fingerprint: Optional[str] = None
    block_index: Optional[int] = None


class CourseRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    course_code: CourseCode
    department: str
    number: str
    title: str = ""
    credit_hours: Optional[float] = None
    description: str = ""
    terms_offered: FrozenSet[Term] = frozenset()
    prerequisite_text: Optional[str] = None
    prerequisite_expression: PrerequisiteExpression = Field(default_factory=NoPrerequisite)
    provenance: Provenance
    malformed: bool = False

    @field_validator("credit_hours")
    @classmethod
    def _check_credit_hours(cls, v: Optional[float]) -> Optional[float]:
        if v is None:
            return v
        if v <= 0:
            raise ValueError("credit hours must be positive")
        if round(v, 1) != v:
            raise ValueError("credit hours carry at most one fractional digit")
        return v

    @model_validator(mode="after")
    def _no_self_leaf(self) -> "CourseRecord":
        if self.course_code in self.prerequisite_expression.leaves():
            raise ValueError(f"{self.course_code} lists itself as a prerequisite")
        return self

    @field_serializer("terms_offered")
    def _serialize_terms(self, terms: FrozenSet[str]) -> List[str]:
        return [t for t in TERM_ORDER if t in terms]

# -------------------------
# Run output
# -------------------------

class ParseDiagnostics(BaseModel):
    skipped_blocks: int = 0
    malformed_blocks: List[str] = Field(default_factory=list)
    unparsed: List[str] = Field(default_factory=list)
    self_references: List[str] = Field(default_factory=list)
    overwrite_count: int = 0
    overwritten_codes: List[str] = Field(default_factory=list)

    total_courses: int = 0
    courses_with_prereqs: int = 0
    departments: List[str] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.skipped_blocks or self.malformed_blocks or self.unparsed or self.overwrite_count)


class ParseResult(BaseModel):
    records: Dict[str, CourseRecord] = Field(default_factory=dict)
    diagnostics: ParseDiagnostics = Field(default_factory=ParseDiagnostics)

    def get_course(self, code: str) -> Optional[CourseRecord]:
        key = normalize_code(code)
        return self.records.get(key) if key else None

    def by_department(self, department: str) -> List[CourseRecord]:
        dept = department.upper()
        return sorted(
            (r for r in self.records.values() if r.department == dept),
            key=lambda r: r.course_code,
        )
