# site_mirror/crawler/link_filter.py
"""
Link Filter: decides whether a discovered link belongs to the crawl.

Two scope modes exist:

* ``origin`` checks the URL of the page the link was *found on* against the
  start URL, not the link itself. A link to another host found on an
  in-prefix page therefore passes. This is the historical behaviour and
  remains the default.
* ``link`` resolves the link against its origin page and checks the
  resolved URL against the start URL.

In both modes the path must end in exactly ``.html``.
"""
from __future__ import annotations

from typing import Mapping
from urllib.parse import SplitResult, urldefrag, urljoin, urlsplit, urlunsplit

from site_mirror.config import ScopeMode
from site_mirror.errors import LinkParseError
from site_mirror.logger import logger

__all__ = ("HTML_EXT", "parse_link", "resolve_link", "link_path", "has_html_extension", "is_in_scope", "is_unvisited")

HTML_EXT = ".html"


def parse_link(link: str) -> SplitResult:
    """Split *link* into URL components, raising :class:`LinkParseError` on garbage."""
    try:
        parts = urlsplit(link)
        # port is validated lazily by urllib
        parts.port
    except ValueError as exc:
        raise LinkParseError(link, str(exc)) from exc
    return parts


def resolve_link(link: str, origin_url: str) -> str:
    """Absolute form of *link* relative to *origin_url*, without fragment.

    Scheme and host are lower-cased; the path is left untouched.
    """
    parse_link(link)
    try:
        absolute, _ = urldefrag(urljoin(origin_url, link))
        parts = urlsplit(absolute)
    except ValueError as exc:
        raise LinkParseError(link, str(exc)) from exc
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path, parts.query, ""))


def link_path(parts: SplitResult) -> str:
    """Hierarchical path of *parts*; empty for opaque URIs like ``tel:x.html``."""
    if parts.scheme and not parts.netloc and not parts.path.startswith("/"):
        return ""
    return parts.path


def has_html_extension(path: str) -> bool:
    # extension is taken from the last segment only, so "/.html" counts
    return path.rsplit("/", 1)[-1].endswith(HTML_EXT)


def is_in_scope(link: str, start_url: str, origin_url: str, mode: ScopeMode = "origin") -> bool:
    """Return True if *link*, found on *origin_url*, should be crawled."""
    try:
        if mode == "link":
            target = urlsplit(resolve_link(link, origin_url))
            if not urlunsplit(target).startswith(start_url):
                logger.debug("Skip out-of-prefix URL %s", link)
                return False
        else:
            target = parse_link(link)
            if target.netloc and not origin_url.startswith(start_url):
                logger.debug("Skip URL with a different origin %s (found on %s)", link, origin_url)
                return False
    except LinkParseError as exc:
        logger.warning("%s", exc)
        return False

    if not has_html_extension(link_path(target)):
        logger.debug("Skip non-HTML URL %s", link)
        return False
    return True


def is_unvisited(link: str, state: Mapping[str, bool]) -> bool:
    """Membership test by exact string; no normalisation happens here."""
    return link not in state
