# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union

import pytest
import pytest_asyncio
from aiohttp import web

from site_mirror.config import CrawlerConfig
from site_mirror.crawler.models import PageData

#: page body, or an HTTP status to answer with
PageT = Union[str, int]


@dataclass
class SiteServer:
    """Test site: fill ``pages`` (path -> body or status) before crawling."""

    base: str
    pages: Dict[str, PageT] = field(default_factory=dict)
    hits: List[str] = field(default_factory=list)
    #: seconds to wait before answering, per path
    delays: Dict[str, float] = field(default_factory=dict)

    def url(self, path: str) -> str:
        return f"{self.base}{path}"


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def site_server(unused_tcp_port: int) -> AsyncIterator[SiteServer]:
    server = SiteServer(base=f"http://localhost:{unused_tcp_port}")

    async def handle(request: web.Request) -> web.Response:
        server.hits.append(request.path)
        if request.path in server.delays:
            await asyncio.sleep(server.delays[request.path])
        body = server.pages.get(request.path)
        if body is None:
            return web.Response(status=404)
        if isinstance(body, int):
            return web.Response(status=body)
        return web.Response(text=body, content_type="text/html")

    app = web.Application()
    app.router.add_get("/{tail:.*}", handle)

    async for _ in _serve_app(app, unused_tcp_port):
        yield server


@pytest.fixture()
def make_config(tmp_path: Path):
    """
    Return a factory for CrawlerConfig rooted in tmp_path.
    """

    def _make(start_url: str, **overrides) -> CrawlerConfig:
        params = dict(
            start_url=start_url,
            dest_dir=tmp_path / "mirror",
            state_file=tmp_path / "state.json",
            timeout=5.0,
        )
        params.update(overrides)
        return CrawlerConfig(**params)

    return _make


@pytest.fixture()
def mock_page_data() -> PageData:
    """
    Provide a simple PageData instance with HTML content.
    """
    html = b'<html><body><a href="/link1.html">L1</a><a href="http://external.com/x.html">X</a></body></html>'
    return PageData(url="http://example.com/", content=html)
