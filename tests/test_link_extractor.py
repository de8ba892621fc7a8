# File: tests/test_link_extractor.py
import pytest
from bs4 import ParserRejectedMarkup

import site_mirror.crawler.link_extractor as link_extractor
from site_mirror.crawler.link_extractor import extract_links
from site_mirror.errors import ParseError


def test_document_order(mock_page_data):
    assert extract_links(mock_page_data.content) == ["/link1.html", "http://external.com/x.html"]


def test_nested_and_malformed_markup():
    html = (
        b"<html><body><div><p><a href='one.html'>1</a>"
        b"<table><tr><td><a href=two.html>2</td></tr></table>"
        b"<a href=\"three.html\"><span>3</a></div>"
        b"<a name='anchor-only'>no href</a>"
    )
    assert extract_links(html) == ["one.html", "two.html", "three.html"]


def test_href_values_are_verbatim():
    html = b'<a href=" spaced.html ">x</a><a href="">empty</a><a href="#top">top</a>'
    assert extract_links(html) == [" spaced.html ", "", "#top"]


def test_no_anchors_is_empty():
    assert extract_links(b"<html><head><title>t</title></head><body>text</body></html>") == []
    assert extract_links(b"") == []


def test_non_utf8_bytes_are_tolerated():
    html = '<a href="caf\xe9.html">x</a>'.encode("latin-1")
    assert len(extract_links(html)) == 1


def test_not_markup_at_all():
    with pytest.raises(ParseError):
        extract_links(12345)


def test_rejected_markup_becomes_parse_error(monkeypatch):
    def reject(markup, features):
        raise ParserRejectedMarkup("markup rejected")

    monkeypatch.setattr(link_extractor, "BeautifulSoup", reject)
    with pytest.raises(ParseError) as excinfo:
        extract_links(b"<a href='x.html'>x</a>")
    assert isinstance(excinfo.value.__cause__, ParserRejectedMarkup)
