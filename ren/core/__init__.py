"""
События окна.
"""

from ren.core.events import (
    Close,
    CursorPos,
    EventQueue,
    FramebufferSize,
    Key,
    MouseButton,
    Scroll,
    is_escape_press,
)

__all__ = [
    "Close",
    "CursorPos",
    "EventQueue",
    "FramebufferSize",
    "Key",
    "MouseButton",
    "Scroll",
    "is_escape_press",
]
