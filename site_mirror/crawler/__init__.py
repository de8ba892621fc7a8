"""site_mirror.crawler: обход сайта, извлечение ссылок, сохранение страниц и состояния."""

from site_mirror.crawler.crawler import CrawlContext, MirrorCrawler
from site_mirror.crawler.models import CrawlReport, PageData, VisitOutcome
from site_mirror.crawler.state import VisitState, load_state, save_state

__all__ = [
    "CrawlContext",
    "MirrorCrawler",
    "CrawlReport",
    "PageData",
    "VisitOutcome",
    "VisitState",
    "load_state",
    "save_state",
]
