# site_mirror/crawler/state.py
"""
State Store: the set of visited URLs, persisted as a flat JSON object
``{"<url>": true, ...}`` so an interrupted crawl can be resumed.
"""
from __future__ import annotations

import json
from collections.abc import MutableMapping
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Union

from site_mirror.errors import StateCorruptError, StateWriteError
from site_mirror.logger import logger

__all__ = ("VisitState", "load_state", "save_state")

_PathT = Union[str, Path]


class VisitState(MutableMapping):
    """Mapping ``url -> bool``; only key presence matters."""

    def __init__(self, data: Optional[Mapping[str, bool]] = None) -> None:
        self._data: Dict[str, bool] = dict(data or {})

    def __getitem__(self, url: str) -> bool:
        return self._data[url]

    def __setitem__(self, url: str, value: bool) -> None:
        self._data[url] = bool(value)

    def __delitem__(self, url: str) -> None:
        del self._data[url]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"VisitState({self._data!r})"

    def mark(self, url: str) -> None:
        self._data[url] = True

    def to_dict(self) -> Dict[str, bool]:
        return dict(self._data)


def load_state(path: _PathT) -> VisitState:
    """Read the state file; a missing file means an empty state."""
    p = Path(path)
    if not p.exists():
        logger.debug("No state file at %s, starting fresh", p)
        return VisitState()
    try:
        raw = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise StateCorruptError(p, f"cannot read state: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StateCorruptError(p, f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise StateCorruptError(p, f"expected a JSON object, got {type(data).__name__}")
    bad = [k for k, v in data.items() if not isinstance(v, bool)]
    if bad:
        raise StateCorruptError(p, f"non-boolean value for {bad[0]!r}")
    logger.debug("Loaded %d visited URLs from %s", len(data), p)
    return VisitState(data)


def save_state(state: Mapping[str, bool], path: _PathT) -> None:
    """Overwrite *path* with the whole state (create-or-truncate, then write)."""
    p = Path(path)
    payload = json.dumps(dict(state), ensure_ascii=False, separators=(",", ":")) + "\n"
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", encoding="utf-8") as f:
            f.write(payload)
    except OSError as exc:
        raise StateWriteError(p, f"cannot write state: {exc}") from exc
