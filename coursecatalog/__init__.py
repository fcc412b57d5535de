# -*- coding: utf-8 -*-
"""Extract course records and prerequisite expressions from catalog text."""

from .config import ParserConfig
from .errors import CatalogError, ConfigError, EmptyInputError, SourceError
from .models import (
    And, CourseRecord, Leaf, NoPrerequisite, Or, ParseDiagnostics, ParseResult,
    PrerequisiteExpression, Provenance, Unparsed,
)
from .pipeline import parse_catalog
from .prereqs import FlatHeuristicClassifier, PrerequisiteClassifier, build_expression, isolate_clause
from .segmenter import CatalogBlock, segment_blocks

__version__ = "0.1.0"

__all__ = [
    "And", "CatalogBlock", "CatalogError", "ConfigError", "CourseRecord", "EmptyInputError",
    "FlatHeuristicClassifier", "Leaf", "NoPrerequisite", "Or", "ParseDiagnostics",
    "ParseResult", "ParserConfig", "PrerequisiteClassifier", "PrerequisiteExpression",
    "Provenance", "SourceError", "Unparsed", "build_expression", "isolate_clause",
    "parse_catalog", "segment_blocks",
]
