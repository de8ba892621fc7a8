# site_mirror/crawler/persister.py
"""
Page Persister: writes fetched pages under ``dest_dir/<host>/<url path>``.

Existing files are never overwritten; :class:`AlreadyExistsError` is raised
instead and the file on disk is left as it was.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union
from urllib.parse import urlsplit

from site_mirror.errors import AlreadyExistsError, PageWriteError
from site_mirror.logger import logger

__all__ = ("PagePersister", "INDEX_NAME")

INDEX_NAME = "index.html"


class PagePersister:
    """Mirror pages into a directory tree keyed by host and path."""

    def __init__(self, dest_dir: Union[str, Path]) -> None:
        self.dest_dir = Path(dest_dir)

    def target_path(self, url: str) -> Path:
        """Map *url* to its file inside :attr:`dest_dir`.

        Directory-style paths (empty or ending in ``/``) map to
        ``index.html`` inside that directory.
        """
        parts = urlsplit(url)
        host = parts.hostname or ""
        rel = parts.path
        if not rel or rel.endswith("/"):
            rel += INDEX_NAME
        segments = [seg for seg in rel.split("/") if seg and seg != "."]
        if ".." in segments:
            raise PageWriteError(self.dest_dir / host / rel.lstrip("/"), "path escapes the host directory")
        return self.dest_dir.joinpath(host, *segments)

    def save(self, content: bytes, url: str) -> Path:
        """Write *content* for *url*; returns the path written."""
        path = self.target_path(url)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PageWriteError(path, f"cannot create directory: {exc}") from exc
        try:
            # "x" fails if anything already sits at the path
            with path.open("xb") as fh:
                fh.write(content)
        except FileExistsError as exc:
            raise AlreadyExistsError(path) from exc
        except OSError as exc:
            raise PageWriteError(path, str(exc)) from exc
        logger.info("Saved %s → %s (%d bytes)", url, path, len(content))
        return path
