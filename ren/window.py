"""
Окно + GLFW‑контекст OpenGL. Окно создаётся скрытым.
"""

from typing import Tuple

import glfw

from ren.core.events import EventQueue
from ren.graphics.debug_output import is_debug_output_supported
from ren.utils.config import AppOptions
from ren.utils.logger import logger


class ContextCreationError(RuntimeError):
    """GLFW, окно или GL‑контекст не создаются – продолжать нельзя."""


def _on_glfw_error(code, description):
    if isinstance(description, bytes):
        description = description.decode("utf-8", errors="replace")
    logger.error(f"[Window] glfw error [{code}]: {description}")


class Window:
    """Окно + GLFW‑контекст."""
    def __init__(self, options: AppOptions):
        glfw.set_error_callback(_on_glfw_error)
        if not glfw.init():
            raise ContextCreationError("Failed to initialize GLFW")

        major, minor = options.gl_version
        debug_context = options.gl_debug_output and is_debug_output_supported(options.gl_version)

        glfw.default_window_hints()
        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, major)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, minor)
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, glfw.TRUE)
        glfw.window_hint(glfw.OPENGL_DEBUG_CONTEXT, glfw.TRUE if debug_context else glfw.FALSE)
        glfw.window_hint(glfw.VISIBLE, glfw.FALSE)

        width, height = options.window_size
        self.handle = glfw.create_window(width, height, options.title, None, None)
        if not self.handle:
            glfw.terminate()
            raise ContextCreationError(
                f"Failed to create GLFW window with OpenGL {major}.{minor} context"
            )

        self.title = options.title
        self.events = EventQueue(self.handle)

        self.center()
        glfw.make_context_current(self.handle)
        logger.info(f"[Window] Created {width}x{height} window, OpenGL {major}.{minor}")

    # -----------------------------------------------------------------
    def center(self):
        monitor = glfw.get_primary_monitor()
        if not monitor:
            return
        mode = glfw.get_video_mode(monitor)
        if mode is None:
            return
        mx, my = glfw.get_monitor_pos(monitor)
        w, h = glfw.get_window_size(self.handle)
        glfw.set_window_pos(
            self.handle,
            mx + (mode.size.width - w) // 2,
            my + (mode.size.height - h) // 2,
        )

    @property
    def size(self) -> Tuple[int, int]:
        """Размер framebuffer‑а в пикселях."""
        return glfw.get_framebuffer_size(self.handle)

    def show(self):
        glfw.show_window(self.handle)

    def hide(self):
        glfw.hide_window(self.handle)

    def should_close(self) -> bool:
        return bool(glfw.window_should_close(self.handle))

    def set_should_close(self, value: bool = True):
        glfw.set_window_should_close(self.handle, value)

    def close(self):
        self.set_should_close(True)

    def swap_buffers(self):
        glfw.swap_buffers(self.handle)

    def poll_events(self):
        glfw.poll_events()

    def destroy(self):
        if self.handle is None:
            return
        glfw.destroy_window(self.handle)
        self.handle = None
        glfw.terminate()
