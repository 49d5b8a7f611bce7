"""
Графический слой – драйвер GL и мост debug‑сообщений.
"""

from ren.graphics.backend import GraphicsDriver, select_driver
from ren.graphics.debug_output import init_debug_output, is_debug_output_supported

__all__ = [
    "GraphicsDriver",
    "select_driver",
    "init_debug_output",
    "is_debug_output_supported",
]
