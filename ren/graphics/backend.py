"""
Abstract interface for graphics drivers.

Every native call made by the ``ren.gl45`` resource layer goes through a
``GraphicsDriver``. Enum arguments are passed as their GL constant *names*
(``"GL_STATIC_DRAW"``, ``"GL_VERTEX_SHADER"`` ...); the concrete driver
resolves them.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Tuple

class GraphicsDriver(ABC):
    """Base interface for graphics drivers."""

    # -----------------------------------------------------------------
    # Context state
    # -----------------------------------------------------------------
    @abstractmethod
    def get_error(self) -> int:
        pass

    @abstractmethod
    def get_version(self) -> Tuple[int, int]:
        pass

    @abstractmethod
    def has_debug_context(self) -> bool:
        pass

    @abstractmethod
    def enable_debug_output(
        self,
        callback: Callable[[int, int, int, int, str], None]
    ) -> None:
        pass

    @abstractmethod
    def pixel_store_unpack_alignment(self, alignment: int) -> None:
        pass

    @abstractmethod
    def clear_color(self, r: float, g: float, b: float, a: float) -> None:
        pass

    @abstractmethod
    def clear_color_buffer(self) -> None:
        pass

    @abstractmethod
    def viewport(self, x: int, y: int, width: int, height: int) -> None:
        pass

    # -----------------------------------------------------------------
    # Buffers
    # -----------------------------------------------------------------
    @abstractmethod
    def create_buffers(self, count: int) -> List[int]:
        pass

    @abstractmethod
    def delete_buffer(self, handle: int) -> None:
        pass

    @abstractmethod
    def named_buffer_data(self, handle: int, data: bytes, usage: str) -> None:
        pass

    @abstractmethod
    def get_named_buffer_sub_data(
        self,
        handle: int,
        offset: int,
        size: int
    ) -> bytes:
        pass

    @abstractmethod
    def get_named_buffer_size(self, handle: int) -> int:
        pass

    # -----------------------------------------------------------------
    # Shader stages / programs
    # -----------------------------------------------------------------
    @abstractmethod
    def create_shader(self, stage: str) -> int:
        pass

    @abstractmethod
    def delete_shader(self, handle: int) -> None:
        pass

    @abstractmethod
    def shader_source(self, handle: int, source: str) -> None:
        pass

    @abstractmethod
    def compile_shader(self, handle: int) -> bool:
        """Compile and return the ``GL_COMPILE_STATUS``."""

    @abstractmethod
    def get_shader_info_log(self, handle: int) -> Optional[str]:
        """``None`` when the stage has no info log."""

    @abstractmethod
    def create_program(self) -> int:
        pass

    @abstractmethod
    def delete_program(self, handle: int) -> None:
        pass

    @abstractmethod
    def attach_shader(self, program: int, shader: int) -> None:
        pass

    @abstractmethod
    def detach_shader(self, program: int, shader: int) -> None:
        pass

    @abstractmethod
    def bind_frag_data_location(self, program: int, color: int, name: str) -> None:
        pass

    @abstractmethod
    def link_program(self, program: int) -> bool:
        """Link and return the ``GL_LINK_STATUS``."""

    @abstractmethod
    def validate_program(self, program: int) -> bool:
        """Validate and return the ``GL_VALIDATE_STATUS``."""

    @abstractmethod
    def get_program_info_log(self, program: int) -> Optional[str]:
        pass

    @abstractmethod
    def use_program(self, program: int) -> None:
        pass

    # -----------------------------------------------------------------
    # Uniforms
    # -----------------------------------------------------------------
    @abstractmethod
    def get_uniform_location(self, program: int, name: bytes) -> int:
        """-1 when ``name`` is not an active uniform."""

    @abstractmethod
    def program_uniform_f(self, program: int, location: int, values: Sequence[float]) -> None:
        pass

    @abstractmethod
    def program_uniform_i(self, program: int, location: int, values: Sequence[int]) -> None:
        pass

    @abstractmethod
    def program_uniform_matrix4f(self, program: int, location: int, values: Sequence[float]) -> None:
        pass

    # -----------------------------------------------------------------
    # Vertex arrays
    # -----------------------------------------------------------------
    @abstractmethod
    def create_vertex_arrays(self, count: int) -> List[int]:
        pass

    @abstractmethod
    def delete_vertex_array(self, handle: int) -> None:
        pass

    @abstractmethod
    def vertex_array_vertex_buffer(
        self,
        vao: int, binding_index: int, buffer: int,
        offset: int, stride: int
    ) -> None:
        pass

    @abstractmethod
    def vertex_array_attrib_binding(
        self,
        vao: int, attrib_index: int, binding_index: int
    ) -> None:
        pass

    @abstractmethod
    def enable_vertex_array_attrib(self, vao: int, index: int) -> None:
        pass

    @abstractmethod
    def disable_vertex_array_attrib(self, vao: int, index: int) -> None:
        pass

    @abstractmethod
    def vertex_array_attrib_format(
        self,
        vao: int, index: int, size: int, component_type: str,
        normalized: bool, relative_offset: int
    ) -> None:
        pass

    @abstractmethod
    def bind_vertex_array(self, vao: int) -> None:
        pass

    @abstractmethod
    def draw_arrays(self, mode: str, first: int, count: int) -> None:
        pass

    # -----------------------------------------------------------------
    # Textures
    # -----------------------------------------------------------------
    @abstractmethod
    def create_textures_2d(self, count: int) -> List[int]:
        pass

    @abstractmethod
    def delete_texture(self, handle: int) -> None:
        pass

    @abstractmethod
    def texture_storage_2d(
        self,
        handle: int, levels: int, internal_format: str,
        width: int, height: int
    ) -> None:
        pass

    @abstractmethod
    def texture_sub_image_2d(
        self,
        handle: int, level: int, x: int, y: int,
        width: int, height: int, pixel_format: str, pixels: bytes
    ) -> None:
        pass

    @abstractmethod
    def texture_parameter_i(self, handle: int, name: str, value) -> None:
        """``value`` is an int or a GL constant name."""

    @abstractmethod
    def bind_texture_unit(self, unit: int, handle: int) -> None:
        pass

def select_driver(name: str = "gl45") -> GraphicsDriver:
    """Select graphics driver by name."""
    name = name.lower()
    if name == "gl45":
        from .gl_backend import GL45Driver
        return GL45Driver()
    else:
        raise ValueError(f"Unknown graphics driver: {name}")
