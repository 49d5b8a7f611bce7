"""
Vertex array object и его builder.
"""

from __future__ import annotations

from typing import List

from ren.gl45.attrib import AttribBindPoint, AttribBinding, AttribFormat
from ren.gl45.buffer import Buffer
from ren.gl45.errors import GLAssertionError
from ren.gl45.handle import GLResource


class VertexArrayDesc:
    """
    Накапливает буферы, точки привязки, привязки атрибутов и форматы
    атрибутов в порядке добавления. Точка привязки N берёт буфер N.
    """

    def __init__(self):
        self.buffers: List[Buffer] = []
        self.bind_points: List[AttribBindPoint] = []
        self.bindings: List[AttribBinding] = []
        self.attribs: List[AttribFormat] = []

    def with_buffer(self, buffer: Buffer) -> "VertexArrayDesc":
        self.buffers.append(buffer)
        return self

    def with_bind_point(self, bind_point: AttribBindPoint) -> "VertexArrayDesc":
        self.bind_points.append(bind_point)
        return self

    def with_binding(self, binding: AttribBinding) -> "VertexArrayDesc":
        self.bindings.append(binding)
        return self

    def with_attrib(self, attrib: AttribFormat) -> "VertexArrayDesc":
        self.attribs.append(attrib)
        return self

    def apply(self, driver, vao: int, ctx=None) -> None:
        # Порядок важен: формат/enable атрибута без валидной привязки
        # на устройстве не определён.
        for buffer_index, bind_point in enumerate(self.bind_points):
            if buffer_index >= len(self.buffers):
                raise GLAssertionError(
                    f"bind point {bind_point.binding_index} has no buffer at index {buffer_index}"
                )
            buffer = self.buffers[buffer_index]
            if ctx is not None and buffer.context is not None and buffer.context is not ctx:
                raise GLAssertionError(f"{buffer!r} belongs to a different rendering context")
            bind_point.apply(driver, vao, buffer.gl_handle)

        for binding in self.bindings:
            binding.apply(driver, vao)

        for attrib in self.attribs:
            attrib.enable(driver, vao)
            attrib.apply(driver, vao)

    def __repr__(self) -> str:
        return (
            f"VertexArrayDesc(buffers={self.buffers!r}, bind_points={self.bind_points!r}, "
            f"bindings={self.bindings!r}, attribs={self.attribs!r})"
        )


class VertexArray(GLResource):
    _kind = "vertex_array"
    _label = "vertex array"
    _deleter = "delete_vertex_array"

    @classmethod
    def new(cls, ctx, desc: VertexArrayDesc) -> "VertexArray":
        cls._require(ctx)
        arr = cls._create(ctx.driver, ctx)
        try:
            desc.apply(ctx.driver, arr._handle, ctx)
        except Exception:
            arr.destroy()
            raise
        # VAO держит свои буферы живыми
        arr._buffers = list(desc.buffers)
        return arr

    @classmethod
    def new_unchecked(cls, driver, desc: VertexArrayDesc) -> "VertexArray":
        """
        VAO без владеющего контекста; ``destroy()`` вызывает сам
        вызывающий код, пока GL‑контекст ещё жив.
        """
        arr = cls._create(driver, None)
        try:
            desc.apply(driver, arr._handle)
        except Exception:
            arr.destroy()
            raise
        arr._buffers = list(desc.buffers)
        return arr

    @classmethod
    def _create(cls, driver, ctx) -> "VertexArray":
        [handle] = driver.create_vertex_arrays(1)
        return cls(driver, handle, ctx)

    # -----------------------------------------------------------------
    def bind(self) -> None:
        self._check()
        self._driver.bind_vertex_array(self._handle)

    def draw_triangles(self, first: int, tri_count: int) -> None:
        self._draw_arrays("GL_TRIANGLES", first * 3, tri_count * 3)

    def draw_points(self, first: int, vertex_count: int) -> None:
        self._draw_arrays("GL_POINTS", first, vertex_count)

    def _draw_arrays(self, mode: str, first: int, vertex_count: int) -> None:
        self.bind()
        self._driver.draw_arrays(mode, first, vertex_count)
