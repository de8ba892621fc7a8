# site_mirror/crawler/models.py
"""
Data models for the SiteMirror crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from site_mirror.crawler.state import VisitState


@dataclass(frozen=True, slots=True)
class PageData:
    """Raw bytes fetched from one URL."""

    url: str
    content: bytes


class VisitOutcome(str, Enum):
    """Result of processing one entry of the work stack."""

    VISITED = "visited"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(slots=True)
class CrawlReport:
    """What one crawl invocation did.

    ``visited`` and ``skipped`` keep processing order; ``failed`` is only
    filled when the error policy is ``continue``.
    """

    state: "VisitState"
    visited: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    def record(self, url: str, outcome: VisitOutcome, reason: str = "") -> None:
        if outcome is VisitOutcome.VISITED:
            self.visited.append(url)
        elif outcome is VisitOutcome.SKIPPED:
            self.skipped.append(url)
        else:
            self.failed[url] = reason
