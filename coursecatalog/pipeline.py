# -*- coding: utf-8 -*-
"""
Parse a whole catalog text into CourseRecords plus diagnostics.

Usage:
  from coursecatalog import parse_catalog
  result = parse_catalog(open("catalog.txt", encoding="utf-8").read(), source="vanderbilt_2024")
"""

from __future__ import annotations
from typing import List, Optional
from concurrent.futures import ThreadPoolExecutor, as_completed
import logging

from .assembler import BuiltRecord, RecordAssembler, build_record
from .config import ParserConfig
from .errors import EmptyInputError
from .models import ParseResult, now_iso
from .prereqs import PrerequisiteClassifier
from .segmenter import CatalogBlock, segment_blocks

logger = logging.getLogger(__name__)


def _build_sequential(blocks: List[CatalogBlock], source: str, parsed_at: str,
                      config: ParserConfig, classifier) -> List[BuiltRecord]:
    return [build_record(b, source, parsed_at, config, classifier) for b in blocks]


def _build_parallel(blocks: List[CatalogBlock], source: str, parsed_at: str,
                    config: ParserConfig, classifier, max_workers: int) -> List[BuiltRecord]:
    built: List[BuiltRecord] = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_block = {
            executor.submit(build_record, block, source, parsed_at, config, classifier): block
            for block in blocks
        }
        for future in as_completed(future_to_block):
            built.append(future.result())
    # completion order is arbitrary; merge must follow input order
    built.sort(key=lambda b: b.index)
    return built


def parse_catalog(text, source: Optional[str] = None, parsed_at: Optional[str] = None,
                  config: Optional[ParserConfig] = None,
                  classifier: Optional[PrerequisiteClassifier] = None,
                  workers: Optional[int] = None) -> ParseResult:
    """
    Run segmenter -> field extraction -> prerequisite expression -> assembly.

    Raises EmptyInputError when ``text`` is not a string or holds only
    whitespace. Every other problem ends up in ``result.diagnostics``.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EmptyInputError(f"catalog text is not valid UTF-8: {e}") from e
    if not isinstance(text, str) or not text.strip():
        raise EmptyInputError("catalog text is empty")

    config = config or ParserConfig()
    source = source or config.source_tag
    parsed_at = parsed_at or now_iso()
    max_workers = workers if workers is not None else config.workers

    blocks = segment_blocks(text)
    block_list = list(blocks)

    assembler = RecordAssembler()
    assembler.note_skipped(len(blocks.skipped_regions()))

    if max_workers > 1 and len(block_list) > 1:
        built = _build_parallel(block_list, source, parsed_at, config, classifier, max_workers)
    else:
        built = _build_sequential(block_list, source, parsed_at, config, classifier)

    for item in built:
        assembler.add_built(item)

    result = assembler.finish()
    d = result.diagnostics
    logger.info(
        "Parsed %d blocks into %d courses (%d with prerequisites); skipped=%d malformed=%d unparsed=%d overwrites=%d",
        len(block_list), d.total_courses, d.courses_with_prereqs, d.skipped_blocks,
        len(d.malformed_blocks), len(d.unparsed), d.overwrite_count,
    )
    return result
