"""
OpenGL 4.5 driver (direct state access) поверх PyOpenGL.

Должен создаваться только после того, как GL‑контекст стал текущим.
"""

import OpenGL
# Ошибки вычитываются явно (drain_gl_errors), без автопроверки каждого вызова
OpenGL.ERROR_CHECKING = False

import ctypes
import numpy as np
from typing import Callable, List, Optional, Sequence, Tuple
from OpenGL import GL

from ren.graphics.backend import GraphicsDriver


def _enum(name):
    return getattr(GL, name) if isinstance(name, str) else name


def _decode_log(log) -> Optional[str]:
    if not log:
        return None
    if isinstance(log, bytes):
        log = log.decode("utf-8", errors="replace")
    log = log.rstrip("\x00")
    return log or None


class GL45Driver(GraphicsDriver):
    """OpenGL 4.5 core‑profile driver."""

    def __init__(self):
        # ссылка на ctypes‑callback должна жить, пока включён debug output
        self._debug_proc = None

    # -----------------------------------------------------------------
    # Context state
    # -----------------------------------------------------------------
    def get_error(self) -> int:
        err = GL.glGetError()
        return 0 if err == GL.GL_NO_ERROR else int(err)

    def get_version(self) -> Tuple[int, int]:
        major = GL.glGetIntegerv(GL.GL_MAJOR_VERSION)
        minor = GL.glGetIntegerv(GL.GL_MINOR_VERSION)
        return int(major), int(minor)

    def has_debug_context(self) -> bool:
        flags = int(GL.glGetIntegerv(GL.GL_CONTEXT_FLAGS))
        return (flags & GL.GL_CONTEXT_FLAG_DEBUG_BIT) != 0

    def enable_debug_output(self, callback: Callable[[int, int, int, int, str], None]) -> None:
        def _proc(source, msg_type, msg_id, severity, length, message, _user):
            raw = ctypes.string_at(message, length) if length > 0 else b""
            callback(int(source), int(msg_type), int(msg_id), int(severity),
                     raw.decode("utf-8", errors="replace"))

        self._debug_proc = GL.GLDEBUGPROC(_proc)
        GL.glEnable(GL.GL_DEBUG_OUTPUT)
        GL.glEnable(GL.GL_DEBUG_OUTPUT_SYNCHRONOUS)
        GL.glDebugMessageCallback(self._debug_proc, None)
        GL.glDebugMessageControl(
            GL.GL_DONT_CARE, GL.GL_DONT_CARE, GL.GL_DONT_CARE,
            0, None, GL.GL_TRUE,
        )

    def pixel_store_unpack_alignment(self, alignment: int) -> None:
        GL.glPixelStorei(GL.GL_UNPACK_ALIGNMENT, alignment)

    def clear_color(self, r: float, g: float, b: float, a: float) -> None:
        GL.glClearColor(r, g, b, a)

    def clear_color_buffer(self) -> None:
        GL.glClear(GL.GL_COLOR_BUFFER_BIT)

    def viewport(self, x: int, y: int, width: int, height: int) -> None:
        GL.glViewport(x, y, width, height)

    # -----------------------------------------------------------------
    # Buffers
    # -----------------------------------------------------------------
    def create_buffers(self, count: int) -> List[int]:
        handles = np.zeros(count, dtype=np.uint32)
        GL.glCreateBuffers(count, handles)
        return [int(h) for h in handles]

    def delete_buffer(self, handle: int) -> None:
        GL.glDeleteBuffers(1, np.array([handle], dtype=np.uint32))

    def named_buffer_data(self, handle: int, data: bytes, usage: str) -> None:
        arr = np.frombuffer(data, dtype=np.uint8)
        GL.glNamedBufferData(handle, arr.nbytes, arr if arr.nbytes else None, _enum(usage))

    def get_named_buffer_sub_data(self, handle: int, offset: int, size: int) -> bytes:
        out = np.zeros(size, dtype=np.uint8)
        if size:
            GL.glGetNamedBufferSubData(handle, offset, size, out)
        return out.tobytes()

    def get_named_buffer_size(self, handle: int) -> int:
        size = np.zeros(1, dtype=np.int32)
        GL.glGetNamedBufferParameteriv(handle, GL.GL_BUFFER_SIZE, size)
        return int(size[0])

    # -----------------------------------------------------------------
    # Shader stages / programs
    # -----------------------------------------------------------------
    def create_shader(self, stage: str) -> int:
        return int(GL.glCreateShader(_enum(stage)))

    def delete_shader(self, handle: int) -> None:
        GL.glDeleteShader(handle)

    def shader_source(self, handle: int, source: str) -> None:
        GL.glShaderSource(handle, source)

    def compile_shader(self, handle: int) -> bool:
        GL.glCompileShader(handle)
        return GL.glGetShaderiv(handle, GL.GL_COMPILE_STATUS) == GL.GL_TRUE

    def get_shader_info_log(self, handle: int) -> Optional[str]:
        if not GL.glGetShaderiv(handle, GL.GL_INFO_LOG_LENGTH):
            return None
        return _decode_log(GL.glGetShaderInfoLog(handle))

    def create_program(self) -> int:
        return int(GL.glCreateProgram())

    def delete_program(self, handle: int) -> None:
        GL.glDeleteProgram(handle)

    def attach_shader(self, program: int, shader: int) -> None:
        GL.glAttachShader(program, shader)

    def detach_shader(self, program: int, shader: int) -> None:
        GL.glDetachShader(program, shader)

    def bind_frag_data_location(self, program: int, color: int, name: str) -> None:
        GL.glBindFragDataLocation(program, color, name.encode("ascii"))

    def link_program(self, program: int) -> bool:
        GL.glLinkProgram(program)
        return GL.glGetProgramiv(program, GL.GL_LINK_STATUS) == GL.GL_TRUE

    def validate_program(self, program: int) -> bool:
        GL.glValidateProgram(program)
        return GL.glGetProgramiv(program, GL.GL_VALIDATE_STATUS) == GL.GL_TRUE

    def get_program_info_log(self, program: int) -> Optional[str]:
        if not GL.glGetProgramiv(program, GL.GL_INFO_LOG_LENGTH):
            return None
        return _decode_log(GL.glGetProgramInfoLog(program))

    def use_program(self, program: int) -> None:
        GL.glUseProgram(program)

    # -----------------------------------------------------------------
    # Uniforms
    # -----------------------------------------------------------------
    def get_uniform_location(self, program: int, name: bytes) -> int:
        return int(GL.glGetUniformLocation(program, name))

    def program_uniform_f(self, program: int, location: int, values: Sequence[float]) -> None:
        fn = {
            1: GL.glProgramUniform1f,
            2: GL.glProgramUniform2f,
            3: GL.glProgramUniform3f,
            4: GL.glProgramUniform4f,
        }[len(values)]
        fn(program, location, *[float(v) for v in values])

    def program_uniform_i(self, program: int, location: int, values: Sequence[int]) -> None:
        fn = {
            1: GL.glProgramUniform1i,
            2: GL.glProgramUniform2i,
            3: GL.glProgramUniform3i,
            4: GL.glProgramUniform4i,
        }[len(values)]
        fn(program, location, *[int(v) for v in values])

    def program_uniform_matrix4f(self, program: int, location: int, values: Sequence[float]) -> None:
        mat = np.asarray(values, dtype=np.float32).reshape(16)
        GL.glProgramUniformMatrix4fv(program, location, 1, GL.GL_FALSE, mat)

    # -----------------------------------------------------------------
    # Vertex arrays
    # -----------------------------------------------------------------
    def create_vertex_arrays(self, count: int) -> List[int]:
        handles = np.zeros(count, dtype=np.uint32)
        GL.glCreateVertexArrays(count, handles)
        return [int(h) for h in handles]

    def delete_vertex_array(self, handle: int) -> None:
        GL.glDeleteVertexArrays(1, np.array([handle], dtype=np.uint32))

    def vertex_array_vertex_buffer(self, vao: int, binding_index: int, buffer: int,
                                   offset: int, stride: int) -> None:
        GL.glVertexArrayVertexBuffer(vao, binding_index, buffer, offset, stride)

    def vertex_array_attrib_binding(self, vao: int, attrib_index: int, binding_index: int) -> None:
        GL.glVertexArrayAttribBinding(vao, attrib_index, binding_index)

    def enable_vertex_array_attrib(self, vao: int, index: int) -> None:
        GL.glEnableVertexArrayAttrib(vao, index)

    def disable_vertex_array_attrib(self, vao: int, index: int) -> None:
        GL.glDisableVertexArrayAttrib(vao, index)

    def vertex_array_attrib_format(self, vao: int, index: int, size: int, component_type: str,
                                   normalized: bool, relative_offset: int) -> None:
        GL.glVertexArrayAttribFormat(
            vao, index, size, _enum(component_type),
            GL.GL_TRUE if normalized else GL.GL_FALSE,
            relative_offset,
        )

    def bind_vertex_array(self, vao: int) -> None:
        GL.glBindVertexArray(vao)

    def draw_arrays(self, mode: str, first: int, count: int) -> None:
        GL.glDrawArrays(_enum(mode), first, count)

    # -----------------------------------------------------------------
    # Textures
    # -----------------------------------------------------------------
    def create_textures_2d(self, count: int) -> List[int]:
        handles = np.zeros(count, dtype=np.uint32)
        GL.glCreateTextures(GL.GL_TEXTURE_2D, count, handles)
        return [int(h) for h in handles]

    def delete_texture(self, handle: int) -> None:
        GL.glDeleteTextures(1, np.array([handle], dtype=np.uint32))

    def texture_storage_2d(self, handle: int, levels: int, internal_format: str,
                           width: int, height: int) -> None:
        GL.glTextureStorage2D(handle, levels, _enum(internal_format), width, height)

    def texture_sub_image_2d(self, handle: int, level: int, x: int, y: int,
                             width: int, height: int, pixel_format: str, pixels: bytes) -> None:
        GL.glTextureSubImage2D(
            handle, level, x, y, width, height,
            _enum(pixel_format), GL.GL_UNSIGNED_BYTE,
            np.frombuffer(pixels, dtype=np.uint8),
        )

    def texture_parameter_i(self, handle: int, name: str, value) -> None:
        GL.glTextureParameteri(handle, _enum(name), _enum(value))

    def bind_texture_unit(self, unit: int, handle: int) -> None:
        GL.glBindTextureUnit(unit, handle)
