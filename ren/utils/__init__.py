# ren/utils/__init__.py
"""
Пакет утилит.

Экспортируем:
    * logger          – готовый объект logging.Logger (с level INFO)
    * drain_gl_errors – вычитывает и логирует все накопленные GL‑ошибки
    * AppOptions, Config – настройки запуска приложения
"""

from .logger import logger, drain_gl_errors
from .config import AppOptions, Config

__all__ = ["logger", "drain_gl_errors", "AppOptions", "Config"]
