# site_mirror/crawler/fetcher.py
"""
Fetcher module: one HTTP GET per URL, no retries.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession

from site_mirror.config import CrawlerConfig
from site_mirror.crawler.models import PageData
from site_mirror.errors import FetchError


class Fetcher:
    """Thin wrapper over :class:`aiohttp.ClientSession` that raises :class:`FetchError`."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> PageData:
        """
        Fetch *url* and return its raw body.

        Transport errors, timeouts and any status >= 400 become
        :class:`FetchError`. Redirects follow aiohttp defaults.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if resp.status >= 400:
                    raise FetchError(url, f"HTTP {resp.status}")
                body = await resp.read()
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timed out after {self.config.timeout}s") from exc
        except (ClientError, ValueError) as exc:
            # yarl raises plain ValueError for URLs it cannot build
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
        return PageData(url, body)
