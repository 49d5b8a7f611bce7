"""
Базовый класс всех GPU‑ресурсов.

Ресурс владеет ровно одним нативным id. Если ресурс создан через
``RenderingContext``, он регистрируется в арене контекста и становится
непригодным, как только контекст закрыт.

id освобождается ровно один раз: явным ``destroy()``, при потере
последней ссылки на ресурс (пока контекст жив) или при ``close()``
контекста. Unchecked‑ресурс (без контекста) освобождает только
``destroy()``.
"""

from __future__ import annotations

import weakref
from typing import Optional

from ren.gl45.errors import ContextLostError, GLAssertionError


def _release_dropped(driver, deleter: str, handle: int, context_ref) -> None:
    """Последняя ссылка на ресурс потеряна: удалить id, если контекст жив."""
    context = context_ref()
    if context is None or not context.alive:
        return
    getattr(driver, deleter)(handle)


class GLResource:
    """Exclusive owner of one native GL object id."""

    # ключ пространства имён id внутри арены
    _kind = "resource"
    # человекочитаемое имя для сообщений ("buffer", "texture" ...)
    _label = "resource"
    # метод драйвера, удаляющий нативный объект
    _deleter = None

    def __init__(self, driver, handle: int, context=None):
        if not handle:
            raise GLAssertionError(f"failed creating {self._label}")
        self._driver = driver
        self._handle = int(handle)
        self._context = context
        self._destroyed = False
        self._finalizer = None
        if context is not None:
            context._arena.register(self)
            self._finalizer = weakref.finalize(
                self, _release_dropped, driver, self._deleter, self._handle, weakref.ref(context)
            )
            # после выхода из интерпретатора GL‑контекста уже нет
            self._finalizer.atexit = False

    # -----------------------------------------------------------------
    @staticmethod
    def _require(ctx) -> None:
        """Фабрики принимают только живой контекст."""
        if ctx is None:
            raise TypeError("a RenderingContext is required")
        ctx._check()

    def _check(self) -> None:
        if self._context is not None and not self._context.alive:
            raise ContextLostError(
                f"{self!r} used after its rendering context was closed"
            )
        if self._destroyed:
            raise GLAssertionError(f"{self!r} used after destroy()")

    def _release(self) -> None:
        getattr(self._driver, self._deleter)(self._handle)

    # -----------------------------------------------------------------
    @property
    def gl_handle(self) -> int:
        """Сырой нативный id (только для передачи в драйвер)."""
        self._check()
        return self._handle

    @property
    def context(self):
        """Владеющий контекст или ``None`` для unchecked‑ресурса."""
        return self._context

    @property
    def is_alive(self) -> bool:
        if self._destroyed:
            return False
        return self._context is None or self._context.alive

    def destroy(self) -> None:
        """Освободить нативный id. Повторный вызов ничего не делает."""
        if self._destroyed:
            return
        self._destroyed = True
        if self._finalizer is not None:
            self._finalizer.detach()
        self._release()
        if self._context is not None:
            self._context._arena.unregister(self)

    def __enter__(self):
        self._check()
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.destroy()
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._handle})"
