# -*- coding: utf-8 -*-
"""Exceptions raised by the catalog parser.

Per-block problems never raise; they are collected as diagnostics instead.
"""


class CatalogError(Exception):
    """Base class for every error the package raises."""


class EmptyInputError(CatalogError, ValueError):
    """The catalog text is empty, blank or not text at all."""


class SourceError(CatalogError):
    """Catalog text could not be loaded (missing file, HTTP failure)."""


class ConfigError(CatalogError, ValueError):
    """A setting from the environment or the command line cannot be used."""
