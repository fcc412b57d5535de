import io

import pytest
import requests

from coursecatalog import parse_catalog
from coursecatalog.errors import SourceError
from coursecatalog.sources import fetch_url, html_to_text, load_text, looks_like_html, read_file

HTML_PAGE = """<!DOCTYPE html>
<html><head><title>Catalog</title><style>p { color: red; }</style></head>
<body>
<p>CS 3250 - Algorithms</p>
<p>Study of algorithms. Prerequisite: CS 2201. FALL. [3]</p>
<script>var tracking = 1;</script>
</body></html>
"""


class FakeResponse:
    def __init__(self, text, status_code=200, content_type="text/plain"):
        self.text = text
        self.status_code = status_code
        self.headers = {"Content-Type": content_type}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


def test_html_to_text_drops_markup():
    text = html_to_text(HTML_PAGE)
    assert text.splitlines()[:3] == [
        "Catalog",
        "CS 3250 - Algorithms",
        "Study of algorithms. Prerequisite: CS 2201. FALL. [3]",
    ]
    assert "tracking" not in text
    assert "color" not in text


def test_html_page_parses():
    result = parse_catalog(html_to_text(HTML_PAGE))
    assert result.records["CS 3250"].prerequisite_expression.leaves() == ("CS 2201",)


def test_looks_like_html():
    assert looks_like_html(HTML_PAGE)
    assert not looks_like_html("CS 3250 - Algorithms\nbody")


def test_read_file(catalog_file, sample_catalog):
    assert read_file(str(catalog_file)) == sample_catalog


def test_read_html_file(tmp_path):
    path = tmp_path / "catalog.html"
    path.write_text(HTML_PAGE, encoding="utf-8")
    assert "<p>" not in read_file(str(path))


def test_read_missing_file(tmp_path):
    with pytest.raises(SourceError, match="not found"):
        read_file(str(tmp_path / "missing.txt"))


def test_read_pdf_refused(tmp_path):
    path = tmp_path / "catalog.pdf"
    path.write_bytes(b"%PDF-1.7")
    with pytest.raises(SourceError, match="pdftotext"):
        read_file(str(path))


def test_fetch_url(monkeypatch, sample_catalog):
    calls = {}

    def fake_get(url, headers=None, timeout=None):
        calls["url"], calls["timeout"] = url, timeout
        return FakeResponse(sample_catalog)

    monkeypatch.setattr(requests, "get", fake_get)
    assert fetch_url("https://example.edu/catalog.txt", timeout=5) == sample_catalog
    assert calls == {"url": "https://example.edu/catalog.txt", "timeout": 5}


def test_fetch_url_flattens_html(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, **kw: FakeResponse(HTML_PAGE, content_type="text/html"))
    assert "CS 3250 - Algorithms" in fetch_url("https://example.edu/catalog")


def test_fetch_url_http_error(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, **kw: FakeResponse("", status_code=404))
    with pytest.raises(SourceError, match="404"):
        fetch_url("https://example.edu/missing")


def test_fetch_url_connection_error(monkeypatch):
    def boom(url, **kw):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(requests, "get", boom)
    with pytest.raises(SourceError, match="connection refused"):
        fetch_url("https://example.edu/catalog")


def test_load_text_dispatch(monkeypatch, catalog_file, sample_catalog):
    monkeypatch.setattr("sys.stdin", io.StringIO("from stdin"))
    assert load_text("-") == "from stdin"
    assert load_text(str(catalog_file)) == sample_catalog

    monkeypatch.setattr(requests, "get", lambda url, **kw: FakeResponse("fetched"))
    assert load_text("http://example.edu/catalog.txt") == "fetched"
