"""
Скрывает GLFW‑callback‑механику: события окна складываются в очередь
вместе с временем получения и забираются раз в кадр через ``flush()``.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import glfw


@dataclass(frozen=True)
class FramebufferSize:
    width: int
    height: int


@dataclass(frozen=True)
class Key:
    key: int
    scancode: int
    action: int
    mods: int


@dataclass(frozen=True)
class MouseButton:
    button: int
    action: int
    mods: int


@dataclass(frozen=True)
class CursorPos:
    x: float
    y: float


@dataclass(frozen=True)
class Scroll:
    dx: float
    dy: float


@dataclass(frozen=True)
class Close:
    pass


def is_escape_press(evt) -> bool:
    return isinstance(evt, Key) and evt.key == glfw.KEY_ESCAPE and evt.action == glfw.PRESS


class EventQueue:
    """Очередь ``(timestamp, event)`` одного окна."""

    def __init__(self, window=None, clock: Optional[Callable[[], float]] = None):
        self.window = window
        self._clock = clock or glfw.get_time
        self._pending = deque()
        self.keys = {}
        if window is not None:
            self._setup_callbacks()

    def _setup_callbacks(self):
        glfw.set_framebuffer_size_callback(self.window, self._framebuffer_size_cb)
        glfw.set_key_callback(self.window, self._key_cb)
        glfw.set_mouse_button_callback(self.window, self._mouse_button_cb)
        glfw.set_cursor_pos_callback(self.window, self._cursor_pos_cb)
        glfw.set_scroll_callback(self.window, self._scroll_cb)
        glfw.set_window_close_callback(self.window, self._close_cb)

    # -----------------------------------------------------------------
    def _framebuffer_size_cb(self, win, width, height):
        self.push(FramebufferSize(width, height))

    def _key_cb(self, win, key, scancode, action, mods):
        self.keys[key] = action != glfw.RELEASE
        self.push(Key(key, scancode, action, mods))

    def _mouse_button_cb(self, win, button, action, mods):
        self.push(MouseButton(button, action, mods))

    def _cursor_pos_cb(self, win, xpos, ypos):
        self.push(CursorPos(xpos, ypos))

    def _scroll_cb(self, win, xoff, yoff):
        self.push(Scroll(xoff, yoff))

    def _close_cb(self, win):
        self.push(Close())

    # -----------------------------------------------------------------
    def push(self, event, timestamp: Optional[float] = None) -> None:
        if timestamp is None:
            timestamp = self._clock()
        self._pending.append((timestamp, event))

    def flush(self) -> List[Tuple[float, object]]:
        """Забрать все накопленные события (в порядке поступления)."""
        events = list(self._pending)
        self._pending.clear()
        return events

    def is_key_pressed(self, key) -> bool:
        return self.keys.get(key, False)

    def __len__(self) -> int:
        return len(self._pending)
