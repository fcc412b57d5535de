# -*- coding: utf-8 -*-
"""
Command line front end.

Usage:
  python -m coursecatalog catalog.txt              # summary
  python -m coursecatalog catalog.txt --dept CS    # CS courses with prerequisites
  python -m coursecatalog catalog.txt --json       # database records as JSON
  python -m coursecatalog catalog.txt --edges      # prerequisite edges as JSON
  python -m coursecatalog catalog.txt --course cs3250  # one record as JSON
  python -m coursecatalog - --workers 4 < catalog.txt
"""

from __future__ import annotations
from typing import List, Optional
import argparse
import json
import logging
import os
import sys

from pydantic import ValidationError

from .config import ParserConfig
from .errors import CatalogError, ConfigError
from .export import database_records, department_report, prerequisite_edges, summary_lines
from .pipeline import parse_catalog
from .sources import load_text


def parse_args(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(prog="coursecatalog", description="Parse catalog text into course records and prerequisites.")
    ap.add_argument("input", help="Catalog text file, '-' for stdin, or an http(s) URL")
    out = ap.add_mutually_exclusive_group()
    out.add_argument("--json", action="store_true", help="Print database records as JSON")
    out.add_argument("--edges", action="store_true", help="Print prerequisite edges as JSON")
    out.add_argument("--dept", help="Show courses with prerequisites for one department (e.g. CS, MATH)")
    out.add_argument("--course", help="Print one course record as JSON (e.g. \"CS 3250\" or cs3250)")
    ap.add_argument("--source", default=None, help="Provenance source tag (default: COURSECATALOG_SOURCE_TAG, else the input location)")
    ap.add_argument("--workers", type=int, default=None, help="Number of concurrent workers (default: 1)")
    ap.add_argument("--extended-markers", action="store_true", default=None,
                    help="Also look for 'Required:', 'Completion of' and 'Must have completed'")
    ap.add_argument("--log-level", default=os.environ.get("COURSECATALOG_LOG_LEVEL", "WARNING"),
                    help="Logging level (default: WARNING)")
    return ap.parse_args(argv)


def _configure_logging(level: str) -> None:
    name = level.upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ConfigError(f"unknown log level {level!r}")
    logging.basicConfig(level=name, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        _configure_logging(args.log_level)
        config = ParserConfig.from_env(source_tag=args.source, workers=args.workers,
                                       extended_markers=args.extended_markers)
        if "source_tag" not in config.model_fields_set:
            config = config.model_copy(update={"source_tag": args.input})
        text = load_text(args.input, timeout=config.fetch_timeout)
        result = parse_catalog(text, config=config)
    except (CatalogError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(database_records(result, config), indent=2, ensure_ascii=False))
    elif args.edges:
        print(json.dumps(prerequisite_edges(result), indent=2, ensure_ascii=False))
    elif args.dept:
        print("\n".join(department_report(result, args.dept)))
    elif args.course:
        record = result.get_course(args.course)
        if record is None:
            print(f"Error: {args.course} not found in catalog", file=sys.stderr)
            return 1
        print(record.model_dump_json(indent=2))
    else:
        print("\n".join(summary_lines(result)))
        if result.diagnostics.has_warnings:
            print("\nSome blocks were skipped, malformed or unparsed; rerun with --log-level DEBUG for details.")
    return 0
