"""
Описание вершинных атрибутов для ``VertexArrayDesc``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class AttribKind(Enum):
    FLOAT1 = (1, "GL_FLOAT")
    FLOAT2 = (2, "GL_FLOAT")
    FLOAT3 = (3, "GL_FLOAT")
    FLOAT4 = (4, "GL_FLOAT")

    @property
    def size(self) -> int:
        return self.value[0]

    @property
    def component_type(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class AttribFormat:
    """Формат одного атрибута."""
    # индекс атрибута
    index: int
    kind: AttribKind
    # смещение в байтах относительно начала вершины
    offset: int = 0

    @classmethod
    def with_offset(cls, index: int, kind: AttribKind, offset: int) -> "AttribFormat":
        return cls(index, kind, offset)

    @classmethod
    def typed_offset(cls, index: int, kind: AttribKind, dtype) -> "AttribFormat":
        """Смещение = размер ``dtype`` (например, после позиции vec3)."""
        return cls(index, kind, np.dtype(dtype).itemsize)

    def apply(self, driver, vao: int) -> None:
        driver.vertex_array_attrib_format(
            vao, self.index, self.kind.size, self.kind.component_type, False, self.offset
        )

    def enable(self, driver, vao: int) -> None:
        driver.enable_vertex_array_attrib(vao, self.index)

    def disable(self, driver, vao: int) -> None:
        driver.disable_vertex_array_attrib(vao, self.index)


Attrib = AttribFormat


@dataclass(frozen=True)
class AttribBinding:
    """Какой точке привязки буфера принадлежит атрибут."""
    attrib_index: int
    buffer_binding_index: int

    def apply(self, driver, vao: int) -> None:
        driver.vertex_array_attrib_binding(vao, self.attrib_index, self.buffer_binding_index)


@dataclass(frozen=True)
class AttribBindPoint:
    """Точка привязки буфера."""
    # индекс точки привязки
    binding_index: int
    # смещение первого элемента, байты
    offset: int
    # расстояние между элементами, байты
    stride: int

    @classmethod
    def typed_stride(cls, binding_index: int, offset: int, dtype) -> "AttribBindPoint":
        return cls(binding_index, offset, np.dtype(dtype).itemsize)

    def apply(self, driver, vao: int, buffer: int) -> None:
        driver.vertex_array_vertex_buffer(vao, self.binding_index, buffer, self.offset, self.stride)
