# ren/__init__.py
"""
ren – безопасная обёртка над OpenGL 4.5 и цикл приложения.

    import ren

    class MyApp(ren.App):
        @classmethod
        def init(cls, ctx):
            return cls()

        def draw(self, ctx, wnd):
            ctx.clear_color_buffer()

    ren.run(MyApp)
"""

__version__ = "0.1.0"

from ren.engine import (
    App,
    AppInitError,
    AppState,
    Runner,
    run,
    run_glfw,
    run_headless_once,
    run_main,
    run_with,
)
from ren.gl45 import (
    Attrib,
    AttribBindPoint,
    AttribBinding,
    AttribFormat,
    AttribKind,
    Buffer,
    BufferUsage,
    ContextLostError,
    GLAssertionError,
    GLError,
    InternalFormat,
    PixelFormat,
    RenderingContext,
    Shader,
    ShaderError,
    ShaderStage,
    ShaderStageError,
    ShaderStageKind,
    Texture,
    TextureFilter,
    TextureWrap,
    UniformLocation,
    VertexArray,
    VertexArrayDesc,
)
from ren.utils import AppOptions, Config, logger
from ren.utils.texture_loader import load_texture

__all__ = [
    "__version__",
    # цикл
    "App",
    "AppInitError",
    "AppState",
    "Runner",
    "run",
    "run_with",
    "run_glfw",
    "run_headless_once",
    "run_main",
    # настройки
    "AppOptions",
    "Config",
    "logger",
    # ресурсы
    "RenderingContext",
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
    "Texture",
    "InternalFormat",
    "PixelFormat",
    "TextureFilter",
    "TextureWrap",
    "UniformLocation",
    "load_texture",
    # ошибки
    "GLError",
    "GLAssertionError",
    "ContextLostError",
    "ShaderError",
    "ShaderStageError",
]
