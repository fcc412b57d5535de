# -*- coding: utf-8 -*-
"""
Load catalog text for the command line.

The parser itself never does I/O; these helpers sit on the caller's side.
Catalog PDFs still have to be converted first (``pdftotext catalog.pdf catalog.txt``).
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional
import logging
import sys

import requests
from bs4 import BeautifulSoup

from .errors import SourceError

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; coursecatalog)"


def looks_like_html(text: str) -> bool:
    head = text.lstrip()[:512].lower()
    return head.startswith("<!doctype html") or "<html" in head or "<body" in head


def html_to_text(html: str) -> str:
    """Flatten an HTML catalog page, one block-level element per line."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return soup.get_text("\n", strip=True)


def fetch_url(url: str, timeout: float = 30.0) -> str:
    try:
        resp = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise SourceError(f"Error fetching {url}: {e}") from e

    content_type = resp.headers.get("Content-Type", "")
    if "pdf" in content_type.lower():
        raise SourceError(f"{url} is a PDF; convert it with pdftotext first")
    text = resp.text
    if "html" in content_type.lower() or looks_like_html(text):
        text = html_to_text(text)
    logger.info("Fetched %d characters from %s", len(text), url)
    return text


def read_file(path: str) -> str:
    p = Path(path)
    if not p.exists():
        raise SourceError(f"{p} not found")
    if p.suffix.lower() == ".pdf":
        raise SourceError(f"{p} is a PDF; convert it with pdftotext first")
    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceError(f"{p} is not UTF-8 text: {e}") from e
    if p.suffix.lower() in (".html", ".htm") or looks_like_html(text):
        text = html_to_text(text)
    logger.info("Loaded %d characters from %s", len(text), p)
    return text


def load_text(location: str, timeout: Optional[float] = None) -> str:
    """Path, '-' for stdin, or an http(s) URL."""
    if location == "-":
        return sys.stdin.read()
    if location.startswith(("http://", "https://")):
        return fetch_url(location, timeout=timeout or 30.0)
    return read_file(location)
