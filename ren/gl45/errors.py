"""
Ошибки слоя ресурсов.

* ``GLError`` и наследники – ожидаемые ошибки (компиляция, линковка),
  возвращаются в точку вызова.
* ``GLAssertionError`` – нарушение контракта вызывающим кодом
  (нулевой id, выход за границы). Не перехватывается внутри ``ren``.
"""


class GLError(Exception):
    """Base class for structured resource errors."""


class GLAssertionError(AssertionError):
    """Programmer misuse: invalid handle id, out-of-bounds access."""


class ContextLostError(GLAssertionError):
    """A handle was used after its owning ``RenderingContext`` was closed."""


class ShaderStageError(GLError):
    """Compiling a shader stage failed."""

    def __init__(self, kind: str, handle: int, stage, log: str):
        self.kind = kind
        self.handle = handle
        self.stage = stage
        self.log = log
        super().__init__(
            f"compiling {stage.label} shader stage [{handle}] failed: {log}"
        )


class ShaderError(GLError):
    """Linking or validating a shader program failed."""

    _VERBS = {"link": "linking", "validation": "validating"}

    def __init__(self, kind: str, handle: int, log: str):
        if kind not in self._VERBS:
            raise ValueError(f"Unknown shader error kind: {kind}")
        self.kind = kind
        self.handle = handle
        self.log = log
        super().__init__(
            f"{self._VERBS[kind]} shader program [{handle}] failed: {log}"
        )
