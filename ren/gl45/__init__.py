"""
Безопасные обёртки над объектами OpenGL 4.5 (DSA).

Любой ресурс создаётся через ``RenderingContext`` и освобождается ровно
один раз: явно (``destroy()`` / ``with``) или при закрытии контекста.
"""

from ren.gl45.context import RenderingContext, ResourceArena
from ren.gl45.errors import (
    ContextLostError,
    GLAssertionError,
    GLError,
    ShaderError,
    ShaderStageError,
)
from ren.gl45.handle import GLResource
from ren.gl45.buffer import Buffer, BufferUsage
from ren.gl45.attrib import Attrib, AttribBindPoint, AttribBinding, AttribFormat, AttribKind
from ren.gl45.array import VertexArray, VertexArrayDesc
from ren.gl45.shader import Shader, ShaderStage, ShaderStageKind
from ren.gl45.texture import InternalFormat, PixelFormat, Texture, TextureFilter, TextureWrap
from ren.gl45.uniform import UniformLocation

__all__ = [
    "RenderingContext",
    "ResourceArena",
    "GLResource",
    "GLError",
    "GLAssertionError",
    "ContextLostError",
    "ShaderError",
    "ShaderStageError",
    "Buffer",
    "BufferUsage",
    "Attrib",
    "AttribBindPoint",
    "AttribBinding",
    "AttribFormat",
    "AttribKind",
    "VertexArray",
    "VertexArrayDesc",
    "Shader",
    "ShaderStage",
    "ShaderStageKind",
    "InternalFormat",
    "PixelFormat",
    "Texture",
    "TextureFilter",
    "TextureWrap",
    "UniformLocation",
]
