"""
GL debug output → логгер ``ren``.
"""

from typing import Tuple

from ren.utils.logger import logger

# Значения из glcorearb.h; драйвер передаёт в callback сырые числа
_SOURCES = {
    0x8246: "API",
    0x8247: "Window System",
    0x8248: "Shader Compiler",
    0x8249: "Third Party",
    0x824A: "Application",
    0x824B: "Other",
}

_TYPES = {
    0x824C: "Error",
    0x824D: "Deprecated Behavior",
    0x824E: "Undefined Behavior",
    0x824F: "Portability",
    0x8250: "Performance",
    0x8251: "Other",
    0x8268: "Marker",
    0x8269: "Push Group",
    0x826A: "Pop Group",
}

SEVERITY_HIGH = 0x9146
SEVERITY_MEDIUM = 0x9147
SEVERITY_LOW = 0x9148
SEVERITY_NOTIFICATION = 0x826B

_SEVERITIES = {
    SEVERITY_HIGH: "High",
    SEVERITY_MEDIUM: "Medium",
    SEVERITY_LOW: "Low",
    SEVERITY_NOTIFICATION: "Notification",
}

# (id, severity), которые не выводятся
_IGNORED = {
    # "buffer will use video memory as source"
    (131185, SEVERITY_NOTIFICATION),
}


def is_debug_output_supported(version: Tuple[int, int]) -> bool:
    major, minor = version
    return (major == 4 and minor >= 3) or major > 4


def format_debug_message(source: int, msg_type: int, msg_id: int, severity: int, message: str) -> str:
    return (
        f"Message: {message}\n"
        f"Source: {_SOURCES.get(source, 'Unknown')}\n"
        f"Type: {_TYPES.get(msg_type, 'Unknown')}\n"
        f"ID: {msg_id}\n"
        f"Severity: {_SEVERITIES.get(severity, 'Unknown')}"
    )


def debug_output(source: int, msg_type: int, msg_id: int, severity: int, message: str) -> None:
    """Callback, который драйвер вызывает на каждое debug‑сообщение."""
    if (msg_id, severity) in _IGNORED:
        return

    text = format_debug_message(source, msg_type, msg_id, severity, message)
    if severity == SEVERITY_HIGH:
        logger.error(f"[GL] {text}")
    elif severity == SEVERITY_MEDIUM:
        logger.warning(f"[GL] {text}")
    else:
        logger.info(f"[GL] {text}")


def init_debug_output(driver) -> bool:
    """
    Включить debug output, если контекст создан с debug‑флагом и
    версия GL его поддерживает. Возвращает True при успехе.
    """
    if not driver.has_debug_context():
        return False
    if not is_debug_output_supported(driver.get_version()):
        return False
    driver.enable_debug_output(debug_output)
    return True
