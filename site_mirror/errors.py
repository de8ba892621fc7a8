# File: site_mirror/errors.py
"""site_mirror.errors: исключения краулера.

Все ошибки наследуются от :class:`SiteMirrorError`, поэтому CLI может
поймать их одним ``except``. :class:`LinkParseError` всегда обрабатывается
на месте (ссылка пропускается), остальные по умолчанию прерывают обход.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

__all__ = (
    "SiteMirrorError",
    "FetchError",
    "ParseError",
    "StateError",
    "StateCorruptError",
    "StateWriteError",
    "PageWriteError",
    "AlreadyExistsError",
    "LinkParseError",
)

_PathT = Union[str, Path]


class SiteMirrorError(Exception):
    """Базовый класс для всех ошибок SiteMirror."""


class FetchError(SiteMirrorError):
    """Сетевая ошибка или HTTP-статус >= 400 при загрузке страницы."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"failed to get URL {url}: {reason}")


class ParseError(SiteMirrorError):
    """Тело страницы невозможно разобрать как HTML."""


class StateError(SiteMirrorError):
    """Проблема с файлом состояния."""

    def __init__(self, path: _PathT, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class StateCorruptError(StateError):
    """Файл состояния существует, но не является плоским JSON-объектом url -> bool."""


class StateWriteError(StateError):
    """Файл состояния не удалось записать."""


class PageWriteError(SiteMirrorError):
    """Страницу не удалось сохранить на диск."""

    def __init__(self, path: _PathT, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot save {self.path}: {reason}")


class AlreadyExistsError(PageWriteError):
    """Целевой файл уже есть; перезапись запрещена."""

    def __init__(self, path: _PathT) -> None:
        super().__init__(path, "file already exists")


class LinkParseError(SiteMirrorError):
    """Отдельная ссылка не разбирается как URL."""

    def __init__(self, link: str, reason: str) -> None:
        self.link = link
        self.reason = reason
        super().__init__(f"failed to parse URL {link!r}: {reason}")
