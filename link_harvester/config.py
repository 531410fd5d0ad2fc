# === FILE: link_harvester/config.py ===
"""
Модуль для загрузки и валидации конфигурации LinkHarvester.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class HarvestConfig(BaseModel):
    """Конфигурация одного запуска сбора ссылок."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seeds_file: Path = Field(Path("urls.txt"), description="Файл со списком стартовых URL.")
    output_dir: Path = Field(Path("raw-results"), description="Каталог для файлов <site>.txt.")
    parallelism: int = Field(2, ge=1, description="Макс. число одновременных запросов к домену.")
    delay: float = Field(1.0, ge=0, description="Пауза между стартами запросов к домену (секунд).")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("LinkHarvesterBot/1.0", min_length=1, description="Заголовок User-Agent.")
    crawl_timeout: Optional[float] = Field(
        None, gt=0, description="Лимит времени на обход одного сайта (секунд)."
    )
    max_concurrent_sites: Optional[int] = Field(
        None, ge=1, description="Сколько сайтов обходить одновременно (None — все сразу)."
    )
    strict_scope: bool = Field(
        False, description="Требовать точного совпадения хоста вместо поиска подстроки."
    )

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


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


def load_config(path: Union[str, Path, None]) -> HarvestConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект HarvestConfig.
    Без явного пути берёт configs/default.yaml, а если его нет — значения по умолчанию.
    Явно указанный, но отсутствующий файл — FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return HarvestConfig()
        path_obj = _DEFAULT_CFG
    else:
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

    return HarvestConfig(**data)


__all__ = ["HarvestConfig", "load_config"]
