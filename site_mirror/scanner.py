# === FILE: site_mirror/scanner.py ===
"""
Модуль-обёртка для функции запуска обхода.
"""
from site_mirror.config import CrawlerConfig
from site_mirror.crawler.crawler import MirrorCrawler
from site_mirror.crawler.models import CrawlReport


async def start_crawl(cfg: CrawlerConfig) -> CrawlReport:
    """
    Запускает краулер в контексте и возвращает отчёт об обходе.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода.

    Returns
    -------
    CrawlReport
        Посещённые, пропущенные и упавшие URL плюс полное состояние.
    """
    async with MirrorCrawler(cfg) as crawler:
        report = await crawler.crawl()
    return report

__all__ = ["start_crawl"]
