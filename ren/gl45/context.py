"""
Контекст рендеринга – «доказательство» того, что на текущем потоке есть
живой GL‑контекст. Любая безопасная фабрика ресурсов требует его явно.

Все ресурсы, созданные через контекст, живут в его арене
(``ResourceArena``); ``close()`` освобождает их разом, после чего любое
обращение к таким ресурсам – ``ContextLostError``.
"""

from __future__ import annotations

import weakref
from typing import List

from ren.gl45.errors import ContextLostError, GLAssertionError
from ren.utils.logger import logger, drain_gl_errors


class ResourceArena:
    """Таблица живых ресурсов одного контекста, ключ – (вид, нативный id).

    Ссылки слабые: арена не удерживает брошенный ресурс, его id удаляет
    финализатор ресурса.
    """

    def __init__(self):
        # WeakValueDictionary поверх dict, порядок создания сохраняется
        self._slots = weakref.WeakValueDictionary()

    def register(self, resource) -> None:
        key = (resource._kind, resource._handle)
        if key in self._slots:
            raise GLAssertionError(
                f"native {resource._label} id {resource._handle} is already owned by a live handle"
            )
        self._slots[key] = resource

    def unregister(self, resource) -> None:
        key = (resource._kind, resource._handle)
        if self._slots.get(key) is resource:
            del self._slots[key]

    def live(self) -> List[object]:
        return list(self._slots.values())

    def release_all(self) -> int:
        """Уничтожить всё в обратном порядке создания."""
        # сильные ссылки на время обхода
        resources = list(self._slots.values())
        for resource in reversed(resources):
            resource.destroy()
        self._slots.clear()
        return len(resources)

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, resource) -> bool:
        return self._slots.get((resource._kind, resource._handle)) is resource


class RenderingContext:
    """
    Единственный на поток объект, через который создаются ресурсы.

    Создаётся только после того, как нативный контекст стал текущим
    (см. ``ren.engine``). Не копируется.
    """

    def __init__(self, driver):
        self.driver = driver
        self._alive = True
        self._arena = ResourceArena()
        # пиксельные строки текстур не выравниваются
        driver.pixel_store_unpack_alignment(1)

    # -----------------------------------------------------------------
    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def live_resources(self) -> int:
        return len(self._arena)

    def _check(self) -> None:
        if not self._alive:
            raise ContextLostError("rendering context is closed")

    # -----------------------------------------------------------------
    def set_clear_color(self, color) -> None:
        r, g, b, a = color
        self._check()
        self.driver.clear_color(float(r), float(g), float(b), float(a))

    def clear_color_buffer(self) -> None:
        self._check()
        self.driver.clear_color_buffer()

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self._check()
        self.driver.viewport(int(x), int(y), int(width), int(height))

    def drain_errors(self) -> list:
        self._check()
        return drain_gl_errors(self.driver)

    # -----------------------------------------------------------------
    def close(self) -> None:
        """Освободить все ресурсы и «закрыть» контекст."""
        if not self._alive:
            return
        released = self._arena.release_all()
        self._alive = False
        if released:
            logger.debug(f"[RenderingContext] Released {released} resource(s) on close")

    def __enter__(self):
        self._check()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return None

    def __copy__(self):
        raise TypeError("RenderingContext cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("RenderingContext cannot be copied")

    def __repr__(self) -> str:
        state = "alive" if self._alive else "closed"
        return f"RenderingContext({state}, resources={len(self._arena)})"
