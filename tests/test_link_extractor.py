import pytest
from bs4 import ParserRejectedMarkup

import site_mirror.crawler.link_extractor as link_extractor
from site_mirror.crawler.link_extractor import defrag, extract_links, resolve
from site_mirror.errors import MalformedUrl, ParseError


def test_extract_links_keeps_order_and_duplicates():
    html = (
        b'<html><body><a href="/b">B</a><p><a href="https://x.org/">X</a></p>'
        b'<a href="/b">B again</a><a href="">empty</a><a name="anchor">no href</a>'
        b'<link href="/style.css"></body></html>'
    )
    assert extract_links(html) == ["/b", "https://x.org/", "/b", ""]


def test_extract_links_from_non_html_bytes():
    assert extract_links(b"just some text") == []


def test_extract_links_parse_error(monkeypatch):
    def reject(*args, **kwargs):
        raise ParserRejectedMarkup("broken")

    monkeypatch.setattr(link_extractor, "BeautifulSoup", reject)
    with pytest.raises(ParseError):
        extract_links(b"<a href='/x'>")


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("https://x/y#section", "https://x/y"),
        ("https://x/y", "https://x/y"),
        ("/about#team", "/about"),
        ("#top", ""),
        ("page?q=1#frag", "page?q=1"),
    ],
)
def test_defrag(raw, expected):
    assert defrag(raw) == expected


def test_defrag_malformed():
    with pytest.raises(MalformedUrl):
        defrag("http://[::1#frag")


@pytest.mark.parametrize(
    "base,ref,expected",
    [
        ("https://example.com/", "/about", "https://example.com/about"),
        ("https://example.com/docs/", "intro", "https://example.com/docs/intro"),
        ("https://example.com/docs/", "../up", "https://example.com/up"),
        ("https://example.com/", "//cdn.example.com/a.js", "https://cdn.example.com/a.js"),
        ("https://example.com/list", "?page=2", "https://example.com/list?page=2"),
        ("https://example.com/", "https://other.com/", "https://other.com/"),
        ("https://example.com/", "", "https://example.com/"),
    ],
)
def test_resolve(base, ref, expected):
    assert resolve(base, ref) == expected


def test_resolve_malformed():
    with pytest.raises(MalformedUrl):
        resolve("https://example.com/", "http://[::1/")
