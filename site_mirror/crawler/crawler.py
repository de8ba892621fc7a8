# === FILE: site_mirror/crawler/crawler.py ===
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from aiohttp import ClientSession, ClientTimeout

from site_mirror.config import CrawlerConfig
from site_mirror.crawler.fetcher import Fetcher
from site_mirror.crawler.link_extractor import extract_links
from site_mirror.crawler.link_filter import is_in_scope, is_unvisited, resolve_link
from site_mirror.crawler.models import CrawlReport, VisitOutcome
from site_mirror.crawler.persister import PagePersister
from site_mirror.crawler.state import VisitState, load_state, save_state
from site_mirror.errors import AlreadyExistsError, FetchError, LinkParseError, PageWriteError, ParseError
from site_mirror.logger import LOGGER_NAME

__all__ = ("CrawlContext", "MirrorCrawler")


@dataclass(slots=True)
class CrawlContext:
    """Everything one crawl invocation owns: the visited set and where it is saved."""

    start_url: str
    state: VisitState
    state_path: Path
    report: CrawlReport

    def should_visit(self, url: str) -> bool:
        return is_unvisited(url, self.state) and url not in self.report.failed

    def checkpoint(self, url: str) -> None:
        """Mark *url* visited and flush the whole state to disk."""
        self.state.mark(url)
        save_state(self.state, self.state_path)


class MirrorCrawler:
    """Краулер в глубину: скачивает .html страницы в каталог и ведёт state.json.

    Обход идёт по явному стеку, а не рекурсией; порядок посещения тот же,
    что у рекурсивного pre-order обхода.
    """

    def __init__(self, config: CrawlerConfig, persister: Optional[PagePersister] = None) -> None:
        self.config = config
        self.persister = persister or PagePersister(config.dest_dir)
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.logger = logging.getLogger(LOGGER_NAME)

    async def __aenter__(self) -> MirrorCrawler:
        headers = {"User-Agent": self.config.user_agent} if self.config.user_agent else None
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers=headers,
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlReport:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        state = load_state(self.config.state_file)
        ctx = CrawlContext(
            start_url=self.config.start_url,
            state=state,
            state_path=Path(self.config.state_file),
            report=CrawlReport(state=state),
        )
        self.logger.info("Старт обхода: %s (уже посещено: %d)", ctx.start_url, len(state))
        start = time.monotonic()

        stack: List[str] = [ctx.start_url]
        while stack:
            url = stack.pop()
            # a sibling's subtree may have reached this URL since it was pushed
            if not ctx.should_visit(url):
                continue
            outcome, links = await self._visit(url, ctx)
            if outcome is VisitOutcome.FAILED:
                continue
            stack.extend(reversed(self._select(links, url, ctx)))

        report = ctx.report
        self.logger.info(
            "Завершено: %d страниц за %.2f с (пропущено: %d, ошибок: %d)",
            len(report.visited), time.monotonic() - start, len(report.skipped), len(report.failed),
        )
        return report

    async def _visit(self, url: str, ctx: CrawlContext) -> Tuple[VisitOutcome, List[str]]:
        """Fetch, extract, persist and checkpoint one URL."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        try:
            page = await self.fetcher.fetch(url)
            links = extract_links(page.content)
            try:
                self.persister.save(page.content, url)
                outcome = VisitOutcome.VISITED
            except AlreadyExistsError:
                if self.config.exists_policy != "skip":
                    raise
                self.logger.warning("Already saved, marking visited: %s", url)
                outcome = VisitOutcome.SKIPPED
        except (FetchError, ParseError, PageWriteError) as exc:
            if self.config.error_policy == "abort":
                raise
            self.logger.warning("Failed %s: %s", url, exc)
            ctx.report.record(url, VisitOutcome.FAILED, str(exc))
            return VisitOutcome.FAILED, []

        # state errors are fatal under every policy
        ctx.checkpoint(url)
        ctx.report.record(url, outcome)
        return outcome, links

    def _select(self, links: List[str], origin: str, ctx: CrawlContext) -> List[str]:
        """In-scope, not yet visited links of *origin*, in document order."""
        selected: List[str] = []
        for link in links:
            if not is_in_scope(link, ctx.start_url, origin, mode=self.config.scope):
                continue
            key = link
            if self.config.dedup == "normalized":
                try:
                    key = resolve_link(link, origin)
                except LinkParseError as exc:
                    self.logger.warning("%s", exc)
                    continue
            if not ctx.should_visit(key):
                self.logger.debug("Already visited %s", key)
                continue
            selected.append(key)
        return selected
