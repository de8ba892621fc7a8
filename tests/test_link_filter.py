# File: tests/test_link_filter.py
import pytest

from site_mirror.crawler.link_filter import (
    is_in_scope,
    is_unvisited,
    link_path,
    parse_link,
    resolve_link,
)
from site_mirror.crawler.state import VisitState
from site_mirror.errors import LinkParseError

START = "http://a.test/x/"
ORIGIN = "http://a.test/x/index.html"


def test_same_prefix_link_is_in_scope():
    assert is_in_scope("http://a.test/x/y.html", START, ORIGIN)


def test_foreign_host_followed_when_origin_matches_prefix():
    # the prefix check looks at the page the link was found on
    assert is_in_scope("http://b.test/y.html", START, ORIGIN)


def test_foreign_host_dropped_when_origin_outside_prefix():
    assert not is_in_scope("http://b.test/y.html", START, "http://b.test/other.html")


def test_relative_link_ignores_origin_prefix():
    assert is_in_scope("y.html", START, "http://b.test/other.html")


def test_link_mode_checks_the_link_itself():
    assert not is_in_scope("http://b.test/y.html", START, ORIGIN, mode="link")
    assert is_in_scope("y.html", START, ORIGIN, mode="link")
    assert is_in_scope("/x/deep/z.html", START, ORIGIN, mode="link")
    assert not is_in_scope("/elsewhere/z.html", START, ORIGIN, mode="link")


@pytest.mark.parametrize(
    "link,expected",
    [
        ("page.html", True),
        ("page.htm", False),
        ("dir/", False),
        ("dir", False),
        ("PAGE.HTML", False),
        ("page.html?lang=en", True),
        ("page.html#section", True),
        ("archive.html.gz", False),
        ("/.html", True),
        ("dir/.html", True),
        ("tel:help.html", False),
        ("mailto:someone@a.test.html", False),
        ("file:/docs/page.html", True),
    ],
)
def test_extension_filter(link, expected):
    assert is_in_scope(link, START, ORIGIN) is expected


def test_unparsable_link_is_skipped_not_raised():
    assert not is_in_scope("http://[::1/broken.html", START, ORIGIN)
    assert not is_in_scope("http://a.test:port/y.html", START, ORIGIN)


def test_parse_link_raises_link_parse_error():
    with pytest.raises(LinkParseError):
        parse_link("http://[::1/broken.html")


def test_dedup_is_by_raw_string():
    state = VisitState()
    state.mark("http://a.test/x.html")
    assert not is_unvisited("http://a.test/x.html", state)
    # same resource, different spelling: not deduplicated
    assert is_unvisited("/x.html", state)


@pytest.mark.parametrize(
    "link,expected",
    [
        ("y.html", "http://a.test/x/y.html"),
        ("/x.html", "http://a.test/x.html"),
        ("../z.html#frag", "http://a.test/z.html"),
        ("HTTP://A.TEST/x/y.html", "http://a.test/x/y.html"),
        ("y.html?q=1", "http://a.test/x/y.html?q=1"),
    ],
)
def test_resolve_link(link, expected):
    assert resolve_link(link, ORIGIN) == expected


@pytest.mark.parametrize(
    "link,expected",
    [
        ("tel:help.html", ""),
        ("http://a.test/x.html", "/x.html"),
        ("x/y.html", "x/y.html"),
        ("file:/abs/y.html", "/abs/y.html"),
    ],
)
def test_link_path_is_empty_for_opaque_links(link, expected):
    assert link_path(parse_link(link)) == expected
