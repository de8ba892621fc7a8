# === FILE: site_mirror/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера SiteMirror.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union
from urllib.parse import urlsplit

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

ScopeMode = Literal["origin", "link"]
DedupMode = Literal["raw", "normalized"]
ExistsPolicy = Literal["abort", "skip"]
ErrorPolicy = Literal["abort", "continue"]


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: str = Field(..., description="Стартовый URL и префикс области обхода.")
    dest_dir: Path = Field(..., description="Каталог, куда зеркалируются страницы.")
    state_file: Path = Field(Path("state.json"), description="Файл со списком посещённых URL.")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: Optional[str] = Field(None, min_length=1, description="Заголовок User-Agent.")
    scope: ScopeMode = Field("origin", description="Проверять префикс у страницы-источника или у самой ссылки.")
    dedup: DedupMode = Field("raw", description="Ключ состояния: сырая ссылка или нормализованный URL.")
    exists_policy: ExistsPolicy = Field("abort", description="Что делать, если файл страницы уже есть.")
    error_policy: ErrorPolicy = Field("abort", description="Прерывать весь обход или продолжать соседние ветки.")

    # start_url сравнивается как строковый префикс, поэтому хранится как есть
    @field_validator("start_url")
    def _check_absolute(cls, v: str) -> str:
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"start_url must be an absolute http(s) URL, got {v!r}")
        return v


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlerConfig:
    """
    Читает YAML или JSON (если задан *path*), накладывает *overrides*
    (значения ``None`` игнорируются) и возвращает проверенный CrawlerConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    data: dict[str, Any] = {}
    if path is not None:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

        suffix = path_obj.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data = _read_yaml(path_obj)
        elif suffix == ".json":
            data = _read_json(path_obj)
        else:
            raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "load_config", "ScopeMode", "DedupMode", "ExistsPolicy", "ErrorPolicy"]
