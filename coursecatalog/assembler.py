# -*- coding: utf-8 -*-
"""
Turn blocks into CourseRecords and fold them into one mapping per run.

``build_record`` touches no shared state and can run on any worker.
``RecordAssembler`` owns the mapping; only the thread that drives the run
calls ``add``, in block order.
"""

from __future__ import annotations
from typing import Dict, List, NamedTuple, Optional
import logging

from .config import ParserConfig
from .fields import extract_fields
from .models import (
    CourseRecord, NoPrerequisite, ParseDiagnostics, ParseResult, Provenance, Unparsed,
    fingerprint, split_code,
)
from .prereqs import PrerequisiteClassifier, build_expression, isolate_clause_with_reason
from .segmenter import CatalogBlock

logger = logging.getLogger(__name__)


class BuiltRecord(NamedTuple):
    record: CourseRecord
    index: int
    self_reference: bool = False


def build_record(block: CatalogBlock, source: str, parsed_at: str,
                 config: Optional[ParserConfig] = None,
                 classifier: Optional[PrerequisiteClassifier] = None) -> BuiltRecord:
    config = config or ParserConfig()
    code = block.course_code
    dept, number = split_code(code)

    match = isolate_clause_with_reason(block.body, code, config)
    fields = extract_fields(block.body, match.span)
    expression = build_expression(match.clause, code, classifier)

    record = CourseRecord(
        course_code=code,
        department=dept,
        number=number,
        title=block.title,
        credit_hours=fields.credit_hours,
        description=fields.description,
        terms_offered=fields.terms_offered,
        prerequisite_text=match.clause,
        prerequisite_expression=expression,
        provenance=Provenance(
            source=source,
            parsed_at=parsed_at,
            fingerprint=fingerprint(f"{code}\n{block.title}\n{block.body}"),
            block_index=block.index,
        ),
        malformed=block.malformed,
    )
    return BuiltRecord(record, block.index, match.reason == "self_reference")


class RecordAssembler:
    def __init__(self):
        self._records: Dict[str, CourseRecord] = {}
        self.skipped_blocks = 0
        self.malformed_blocks: List[str] = []
        self.unparsed: List[str] = []
        self.self_references: List[str] = []
        self.overwrite_count = 0
        self.overwritten_codes: List[str] = []

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, code: str) -> bool:
        return code in self._records

    def add(self, record: CourseRecord) -> None:
        """Insert ``record``; an existing record with the same code is replaced."""
        code = record.course_code
        if code in self._records:
            self.overwrite_count += 1
            self.overwritten_codes.append(code)
            logger.info("Duplicate block for %s; keeping the later one", code)
        self._records[code] = record

    def add_built(self, built: BuiltRecord) -> None:
        record = built.record
        if record.malformed:
            self.note_malformed(record.course_code)
        if isinstance(record.prerequisite_expression, Unparsed):
            self.note_unparsed(record.course_code)
        if built.self_reference:
            self.note_self_reference(record.course_code)
        self.add(record)

    def note_skipped(self, count: int = 1) -> None:
        self.skipped_blocks += count

    def note_malformed(self, code: str) -> None:
        logger.debug("MalformedBlock: %s", code)
        self.malformed_blocks.append(code)

    def note_unparsed(self, code: str) -> None:
        logger.debug("UnparsedPrerequisite: %s", code)
        self.unparsed.append(code)

    def note_self_reference(self, code: str) -> None:
        self.self_references.append(code)

    def finish(self) -> ParseResult:
        records = dict(self._records)
        with_prereqs = sum(
            1 for r in records.values() if not isinstance(r.prerequisite_expression, NoPrerequisite)
        )
        diagnostics = ParseDiagnostics(
            skipped_blocks=self.skipped_blocks,
            malformed_blocks=list(self.malformed_blocks),
            unparsed=list(self.unparsed),
            self_references=list(self.self_references),
            overwrite_count=self.overwrite_count,
            overwritten_codes=list(self.overwritten_codes),
            total_courses=len(records),
            courses_with_prereqs=with_prereqs,
            departments=sorted({r.department for r in records.values()}),
        )
        return ParseResult(records=records, diagnostics=diagnostics)
