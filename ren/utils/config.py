"""
Настройки запуска приложения.

* ``AppOptions`` – неизменяемый набор параметров окна и GL‑контекста.
* ``Config``     – простой загрузчик/сохранитель тех же параметров в JSON.
  Если файл не найден – используются настройки по‑умолчанию.
"""

import copy
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from ren.utils.logger import logger


def _default_title() -> str:
    name = Path(sys.argv[0]).stem if sys.argv and sys.argv[0] else ""
    return name or "ren"


@dataclass(frozen=True)
class AppOptions:
    """Параметры окна и контекста. Все поля необязательны."""
    DEFAULT_WINDOW_SIZE = (856, 482)
    DEFAULT_GL_VERSION = (4, 5)
    DEFAULT_GL_DEBUG_OUTPUT = __debug__

    title: str = field(default_factory=_default_title)
    window_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE
    gl_version: Tuple[int, int] = DEFAULT_GL_VERSION
    gl_debug_output: bool = DEFAULT_GL_DEBUG_OUTPUT
    # Esc закрывает окно, GL‑ошибки вычитываются каждый кадр
    debug: bool = __debug__


DEFAULT_CONFIG = {
    "window": {
        "width": AppOptions.DEFAULT_WINDOW_SIZE[0],
        "height": AppOptions.DEFAULT_WINDOW_SIZE[1],
        "title": None,
    },
    "gl_version": list(AppOptions.DEFAULT_GL_VERSION),
    "gl_debug_output": AppOptions.DEFAULT_GL_DEBUG_OUTPUT,
}


class Config:
    """JSON‑конфигурация, из которой строится ``AppOptions``."""

    def __init__(self, path: str = "ren.json"):
        self.path = Path(path)
        self._load()

    def _load(self):
        if self.path.is_file():
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    self.data = json.load(f)
                logger.info("[Config] Loaded configuration.")
            except (OSError, ValueError) as exc:
                logger.error(f"[Config] Failed to read config: {exc}")
                self.data = copy.deepcopy(DEFAULT_CONFIG)
        else:
            logger.info("[Config] No config file – using defaults.")
            self.data = copy.deepcopy(DEFAULT_CONFIG)

    def save(self):
        try:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=4)
            logger.info("[Config] Configuration saved.")
        except OSError as exc:
            logger.error(f"[Config] Unable to save config: {exc}")

    def __getitem__(self, key):
        return self.data.get(key, DEFAULT_CONFIG.get(key))

    def __setitem__(self, key, value):
        self.data[key] = value

    def get(self, key, default=None):
        return self.data.get(key, default)

    def to_options(self, **overrides) -> AppOptions:
        """Собрать ``AppOptions``; ``overrides`` имеют приоритет над файлом."""
        win = self["window"] or {}
        default_win = DEFAULT_CONFIG["window"]
        kwargs = {
            "window_size": (
                int(win.get("width", default_win["width"])),
                int(win.get("height", default_win["height"])),
            ),
            "gl_version": tuple(self["gl_version"]),
            "gl_debug_output": bool(self["gl_debug_output"]),
        }
        if win.get("title"):
            kwargs["title"] = win["title"]
        kwargs.update(overrides)
        return AppOptions(**kwargs)
