# -*- coding: utf-8 -*-
"""
Parser settings.

Defaults live on the model; environment variables override them and CLI
flags override the environment.
"""

from __future__ import annotations
from typing import Optional, Mapping
import os

from pydantic import BaseModel, Field

from .errors import ConfigError

ENV_PREFIX = "COURSECATALOG_"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_number(env: Mapping[str, str], name: str, cast):
    raw = env[ENV_PREFIX + name]
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from e


class ParserConfig(BaseModel):
    source_tag: str = "catalog_text"
    workers: int = Field(default=1, ge=1)
    extended_markers: bool = False
    # clauses this long or shorter are treated as noise
    min_clause_length: int = Field(default=3, ge=0)
    fetch_timeout: float = Field(default=30.0, gt=0)

    # labels stamped onto exported database records
    data_source: str = "catalog_pdf"
    extraction_method: str = "catalog_text_parsing"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ParserConfig":
        env = os.environ if environ is None else environ
        values = {}
        if env.get(ENV_PREFIX + "SOURCE_TAG"):
            values["source_tag"] = env[ENV_PREFIX + "SOURCE_TAG"]
        if env.get(ENV_PREFIX + "WORKERS"):
            values["workers"] = _env_number(env, "WORKERS", int)
        if env.get(ENV_PREFIX + "EXTENDED_MARKERS"):
            values["extended_markers"] = _env_flag(env[ENV_PREFIX + "EXTENDED_MARKERS"])
        if env.get(ENV_PREFIX + "FETCH_TIMEOUT"):
            values["fetch_timeout"] = _env_number(env, "FETCH_TIMEOUT", float)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
