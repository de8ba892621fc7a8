# site_mirror/crawler/link_extractor.py
"""
Link extraction for SiteMirror: raw ``href`` values of every ``<a>`` tag.
"""
from __future__ import annotations

from typing import List, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from site_mirror.errors import ParseError


def extract_links(content: Union[bytes, str]) -> List[str]:
    """
    Return href values of all anchors in document order.

    Values are returned verbatim: no stripping, resolving or filtering.
    Malformed markup is tolerated by the parser; only markup the parser
    rejects outright raises :class:`ParseError`.
    """
    if not isinstance(content, (bytes, str)):
        raise ParseError(f"cannot parse {type(content).__name__} as HTML")
    try:
        soup = BeautifulSoup(content, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"failed to parse HTML content: {exc}") from exc

    links: List[str] = []
    for tag in soup.find_all("a"):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if isinstance(href_val, str):
            links.append(href_val)
    return links
