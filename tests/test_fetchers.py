# tests/test_fetchers.py
import pytest
import requests

from comic_mirror import fetchers
from comic_mirror.errors import FetchError
from comic_mirror.extract import PageExtractor

from conftest import make_comic


class FakeResponse:
    def __init__(self, status=200, text="", content=b"", content_type="text/html; charset=utf-8"):
        self.status_code = status
        self.text = text
        self.content = content
        self.headers = {"Content-Type": content_type}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_retries_once_then_succeeds(monkeypatch, capsys):
    calls = []

    def fake_get(url, **kwargs):
        calls.append(url)
        if len(calls) == 1:
            raise requests.ConnectionError("reset")
        return FakeResponse(text="<html>ok</html>")

    monkeypatch.setattr(fetchers.requests, "get", fake_get)
    assert fetchers.fetch_page("https://example.com/comic/1") == "<html>ok</html>"
    assert len(calls) == 2
    assert "[retry] https://example.com/comic/1" in capsys.readouterr().out


def test_second_failure_is_fatal(monkeypatch):
    calls = []

    def fake_get(url, **kwargs):
        calls.append(url)
        return FakeResponse(status=503)

    monkeypatch.setattr(fetchers.requests, "get", fake_get)
    with pytest.raises(FetchError):
        fetchers.fetch_image("https://example.com/img/1.png")
    assert len(calls) == 2


def test_image_bytes(monkeypatch):
    monkeypatch.setattr(fetchers.requests, "get", lambda url, **kw: FakeResponse(content=b"GIF89a"))
    assert fetchers.fetch_image("https://example.com/img/1.gif") == b"GIF89a"


def test_unsupported_scheme_is_not_fetched(monkeypatch):
    def fake_get(url, **kwargs):
        raise AssertionError("should not be called")

    monkeypatch.setattr(fetchers.requests, "get", fake_get)
    with pytest.raises(FetchError, match="Unsupported protocol"):
        fetchers.fetch_page("ftp://example.com/comic/1")


def test_page_without_charset_is_read_as_utf8(monkeypatch):
    body = '<html><body><h1>Café</h1><img class="strip" src="/1.gif"></body></html>'.encode("utf-8")
    # what requests would produce by falling back to ISO-8859-1
    resp = FakeResponse(text=body.decode("iso-8859-1"), content=body, content_type="text/html")
    monkeypatch.setattr(fetchers.requests, "get", lambda url, **kw: resp)

    url = "https://example.com/comic/1"
    page = PageExtractor(make_comic(pageTitle="h1")).extract(fetchers.fetch_page(url), url)
    assert page.page_title == "Café"


def test_page_without_header_charset_uses_meta_charset(monkeypatch):
    body = '<html><head><meta charset="iso-8859-1"></head><body>Caf\xe9</body></html>'.encode("iso-8859-1")
    resp = FakeResponse(text="", content=body, content_type="text/html")
    monkeypatch.setattr(fetchers.requests, "get", lambda url, **kw: resp)
    assert "Café" in fetchers.fetch_page("https://example.com/comic/1")


def test_declared_charset_is_trusted(monkeypatch):
    resp = FakeResponse(text="<p>declared</p>", content=b"ignored", content_type="text/html; charset=windows-1252")
    monkeypatch.setattr(fetchers.requests, "get", lambda url, **kw: resp)
    assert fetchers.fetch_page("https://example.com/comic/1") == "<p>declared</p>"
