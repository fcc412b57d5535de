# -*- coding: utf-8 -*-
"""
Shapes handed to downstream consumers: flat database rows, prerequisite
edges for the graph view, and plain-text reports.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from .config import ParserConfig
from .models import And, CourseRecord, Leaf, NoPrerequisite, Or, ParseResult, Unparsed

_TYPE_LABELS = {
    NoPrerequisite: "none",
    Leaf: "single",
    And: "and",
    Or: "or",
    Unparsed: "unparsed",
}


def prerequisite_type(record: CourseRecord) -> str:
    return _TYPE_LABELS[type(record.prerequisite_expression)]


def database_records(result: ParseResult, config: Optional[ParserConfig] = None) -> List[Dict[str, Any]]:
    """One row per course that carries a prerequisite clause."""
    config = config or ParserConfig()
    rows = []
    for code, record in result.records.items():
        if record.prerequisite_text is None:
            continue
        rows.append({
            "courseId": code,
            "prerequisiteText": record.prerequisite_text,
            "prerequisiteType": prerequisite_type(record),
            "prerequisiteCourses": list(record.prerequisite_expression.leaves()),
            "courseTitle": record.title,
            "creditHours": record.credit_hours,
            "department": record.department,
            "lastUpdated": record.provenance.parsed_at,
            "dataSource": config.data_source,
            "extractionMethod": config.extraction_method,
        })
    return rows


def prerequisite_edges(result: ParseResult) -> List[Dict[str, Any]]:
    """
    Lower each expression to PREREQ edges (source -> target).

    Edges from one Or share a group with logic ANY; everything else is ALL.
    """
    edges = []
    seen_edges = set()
    for target, record in result.records.items():
        expr = record.prerequisite_expression
        codes = expr.leaves()
        if not codes:
            continue
        if isinstance(expr, Or):
            logic, gid = "ANY", f"{target}_prereq_or_1"
        else:
            logic, gid = "ALL", f"{target}_prereq_all_1"
        for code in codes:
            edge_key = (code, target, "PREREQ")
            if edge_key in seen_edges:
                continue
            seen_edges.add(edge_key)
            edges.append({
                "source": code,
                "target": target,
                "type": "PREREQ",
                "logic": logic,
                "group_id": gid,
            })
    return edges


def department_report(result: ParseResult, department: str) -> List[str]:
    dept = department.upper()
    lines = [f"{dept} COURSES WITH PREREQUISITES:"]
    for record in result.by_department(dept):
        if record.prerequisite_text is None:
            continue
        parsed = ", ".join(record.prerequisite_expression.leaves()) or "None"
        lines.append("")
        lines.append(f"{record.course_code}: {record.title or 'Unknown Title'}")
        lines.append(f"   Prerequisites: {record.prerequisite_text}")
        lines.append(f"   Parsed ({prerequisite_type(record)}): {parsed}")
    return lines


def summary_lines(result: ParseResult) -> List[str]:
    d = result.diagnostics
    depts = d.departments
    shown = ", ".join(depts[:10]) + ("..." if len(depts) > 10 else "")
    return [
        "CATALOG PARSE SUMMARY:",
        "=" * 50,
        f"Total courses found: {d.total_courses}",
        f"Courses with prerequisites: {d.courses_with_prereqs}",
        f"Departments: {len(depts)} ({shown})",
        f"Skipped regions: {d.skipped_blocks}",
        f"Malformed blocks: {len(d.malformed_blocks)}",
        f"Unparsed prerequisites: {len(d.unparsed)}",
        f"Self-references ignored: {len(d.self_references)}",
        f"Overwritten duplicates: {d.overwrite_count}",
    ]
