"""
GPU‑буфер (glCreateBuffers / glNamedBufferData).
"""

from __future__ import annotations

from enum import Enum
from typing import List

import numpy as np

from ren.gl45.errors import GLAssertionError
from ren.gl45.handle import GLResource


class BufferUsage(Enum):
    """Подсказка драйверу о характере использования данных."""
    # записывается один раз, читается несколько раз
    STREAM = "GL_STREAM_DRAW"
    # записывается один раз, читается много раз
    STATIC = "GL_STATIC_DRAW"
    # записывается и читается много раз
    DYNAMIC = "GL_DYNAMIC_DRAW"


def as_bytes(data) -> bytes:
    """bytes / bytearray / memoryview / numpy‑массив → bytes."""
    if isinstance(data, np.ndarray):
        return np.ascontiguousarray(data).tobytes()
    return memoryview(data).tobytes()


class Buffer(GLResource):
    """Буфер с данными на стороне GPU; помнит размер последней записи."""
    _kind = "buffer"
    _label = "buffer"
    _deleter = "delete_buffer"

    def __init__(self, driver, handle: int, context=None):
        super().__init__(driver, handle, context)
        self._size = 0

    # -----------------------------------------------------------------
    # Фабрики
    # -----------------------------------------------------------------
    @classmethod
    def new(cls, ctx) -> "Buffer":
        return cls.new_multi(ctx, 1)[0]

    @classmethod
    def new_multi(cls, ctx, count: int) -> List["Buffer"]:
        cls._require(ctx)
        return cls._create_multi(ctx.driver, count, ctx)

    @classmethod
    def with_data(cls, ctx, usage: BufferUsage, data) -> "Buffer":
        buf = cls.new(ctx)
        buf.write(usage, data)
        return buf

    @classmethod
    def new_unchecked(cls, driver) -> "Buffer":
        """
        Буфер без владеющего контекста.

        Вызывающий код гарантирует, что GL‑контекст жив всё время жизни
        буфера, и сам вызывает ``destroy()``: арена контекста о таком
        буфере не знает.
        """
        return cls._create_multi(driver, 1, None)[0]

    @classmethod
    def new_multi_unchecked(cls, driver, count: int) -> List["Buffer"]:
        """См. ``new_unchecked``."""
        return cls._create_multi(driver, count, None)

    @classmethod
    def _create_multi(cls, driver, count: int, ctx) -> List["Buffer"]:
        handles = driver.create_buffers(count)
        if not all(handles):
            # ни один выданный id не должен утечь
            for handle in handles:
                if handle:
                    driver.delete_buffer(handle)
            raise GLAssertionError(f"failed creating {cls._label}")
        return [cls(driver, handle, ctx) for handle in handles]

    # -----------------------------------------------------------------
    def write(self, usage: BufferUsage, data) -> None:
        """Заменить всё содержимое буфера."""
        self._check()
        raw = as_bytes(data)
        self._size = len(raw)
        self._driver.named_buffer_data(self._handle, raw, BufferUsage(usage).value)

    def read(self, offset: int, out):
        """
        Прочитать ``len(out)`` байт начиная с ``offset`` в ``out``.

        ``out`` – записываемый буфер (bytearray, numpy‑массив).
        Выход за границы последней записи – ``GLAssertionError``.
        """
        self._check()
        view = memoryview(out).cast("B")
        read_size = view.nbytes
        read_end = offset + read_size

        if offset < 0 or read_end > self._size:
            raise GLAssertionError(
                f"index out of bounds: the size is {self._size} but the end index is {read_end}"
            )

        data = self._driver.get_named_buffer_sub_data(self._handle, offset, read_size)
        view[:] = data
        return out

    @property
    def size(self) -> int:
        """Размер данных в байтах (по последнему ``write``)."""
        return self._size

    def gl_size(self) -> int:
        """Размер буфера по мнению драйвера."""
        self._check()
        return self._driver.get_named_buffer_size(self._handle)
