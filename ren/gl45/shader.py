"""
Шейдерные стадии и программы.

* ``ShaderStage`` – одна скомпилированная стадия (vertex/fragment/...).
* ``Shader``      – слинкованная и провалидированная программа.

Handle создаётся до компиляции/линковки, поэтому при ошибке нативный id
всё равно освобождается (ровно один раз).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, Union

from ren.gl45.errors import GLAssertionError, ShaderError, ShaderStageError
from ren.gl45.handle import GLResource
from ren.gl45.uniform import UniformLocation, get_uniform_location, set_uniform
from ren.utils.logger import logger

_NO_LOG = "[no log]"


class ShaderStageKind(Enum):
    VERTEX = "GL_VERTEX_SHADER"
    FRAGMENT = "GL_FRAGMENT_SHADER"
    GEOMETRY = "GL_GEOMETRY_SHADER"
    COMPUTE = "GL_COMPUTE_SHADER"

    @property
    def label(self) -> str:
        return self.name.lower()


class ShaderStage(GLResource):
    _kind = "shader"
    _label = "shader stage"
    _deleter = "delete_shader"

    def __init__(self, driver, handle: int, kind: ShaderStageKind, context=None):
        self.kind = kind
        super().__init__(driver, handle, context)

    # -----------------------------------------------------------------
    # Фабрики
    # -----------------------------------------------------------------
    @classmethod
    def new(cls, ctx, kind: ShaderStageKind, source: str) -> "ShaderStage":
        cls._require(ctx)
        return cls._create(ctx.driver, ShaderStageKind(kind), source, ctx)

    @classmethod
    def new_vertex(cls, ctx, source: str) -> "ShaderStage":
        return cls.new(ctx, ShaderStageKind.VERTEX, source)

    @classmethod
    def new_fragment(cls, ctx, source: str) -> "ShaderStage":
        return cls.new(ctx, ShaderStageKind.FRAGMENT, source)

    @classmethod
    def new_geometry(cls, ctx, source: str) -> "ShaderStage":
        return cls.new(ctx, ShaderStageKind.GEOMETRY, source)

    @classmethod
    def new_compute(cls, ctx, source: str) -> "ShaderStage":
        return cls.new(ctx, ShaderStageKind.COMPUTE, source)

    @classmethod
    def new_unchecked(cls, driver, kind: ShaderStageKind, source: str) -> "ShaderStage":
        """
        Стадия без владеющего контекста. Вызывающий код отвечает за то,
        что GL‑контекст жив, и сам вызывает ``destroy()``.
        """
        return cls._create(driver, ShaderStageKind(kind), source, None)

    @classmethod
    def _create(cls, driver, kind: ShaderStageKind, source: str, ctx) -> "ShaderStage":
        handle = driver.create_shader(kind.value)
        if not handle:
            raise GLAssertionError(f"failed creating {kind.label} shader stage")
        stage = cls(driver, handle, kind, ctx)
        try:
            stage._compile(source)
        except Exception:
            stage.destroy()
            raise
        return stage

    def _compile(self, source: str) -> None:
        self._driver.shader_source(self._handle, source)
        is_compiled = self._driver.compile_shader(self._handle)
        log = self._driver.get_shader_info_log(self._handle)

        if is_compiled:
            if log:
                logger.warning(
                    f"[Shader] Compiling {self.kind.label} shader stage:\n{log.strip()}"
                )
            return

        raise ShaderStageError("compile", self._handle, self.kind, log or _NO_LOG)

    def __repr__(self) -> str:
        return f"ShaderStage({self._handle}, {self.kind.name})"


class Shader(GLResource):
    """Слинкованная шейдерная программа."""
    _kind = "program"
    _label = "shader program"
    _deleter = "delete_program"

    # -----------------------------------------------------------------
    # Фабрики
    # -----------------------------------------------------------------
    @classmethod
    def new(cls, ctx, stages: Sequence[ShaderStage]) -> "Shader":
        cls._require(ctx)
        # генератор стадий читается один раз
        stages = list(stages)
        for stage in stages:
            if stage.context is not None and stage.context is not ctx:
                raise GLAssertionError(f"{stage!r} belongs to a different rendering context")
        return cls._create(ctx.driver, stages, ctx)

    @classmethod
    def new_unchecked(cls, driver, stages: Sequence[ShaderStage]) -> "Shader":
        """
        Программа без владеющего контекста. Вызывающий код отвечает за то,
        что GL‑контекст жив, и сам вызывает ``destroy()``.
        """
        stages = list(stages)
        return cls._create(driver, stages, None)

    @classmethod
    def _create(cls, driver, stages: Sequence[ShaderStage], ctx) -> "Shader":
        stage_handles = [stage.gl_handle for stage in stages]
        shader = cls(driver, driver.create_program(), ctx)

        # стадии прикреплены только на время линковки
        attached = []
        try:
            for stage_handle in stage_handles:
                shader._attach(stage_handle)
                attached.append(stage_handle)
            shader._init()
        except Exception:
            shader._detach_all(attached)
            shader.destroy()
            raise
        shader._detach_all(attached)
        return shader

    def _attach(self, stage_handle: int) -> None:
        if not stage_handle:
            raise GLAssertionError("attaching invalid shader stage handle")
        self._driver.attach_shader(self._handle, stage_handle)

    def _detach_all(self, stage_handles) -> None:
        for stage_handle in stage_handles:
            self._driver.detach_shader(self._handle, stage_handle)

    def _init(self) -> None:
        self._driver.bind_frag_data_location(self._handle, 0, "fragColor")
        self._link()
        self._validate()

    def _link(self) -> None:
        is_linked = self._driver.link_program(self._handle)
        log = self._check_log("Linking", is_linked)
        if log is not None:
            raise ShaderError("link", self._handle, log)

    def _validate(self) -> None:
        is_validated = self._driver.validate_program(self._handle)
        log = self._check_log("Validating", is_validated)
        if log is not None:
            raise ShaderError("validation", self._handle, log)

    def _check_log(self, op: str, was_success: bool) -> Optional[str]:
        """``None`` при успехе, иначе текст лога для ошибки."""
        log = self._driver.get_program_info_log(self._handle)
        if was_success:
            if log:
                logger.warning(f"[Shader] {op} shader program:\n{log.strip()}")
            return None
        return log or _NO_LOG

    # -----------------------------------------------------------------
    def bind(self) -> None:
        self._check()
        self._driver.use_program(self._handle)

    def uniform_location(self, name: Union[str, bytes]) -> Optional[UniformLocation]:
        self._check()
        return get_uniform_location(self._driver, self._handle, name)

    def set_uniform(self, loc: UniformLocation, value) -> None:
        self._check()
        set_uniform(self._driver, self._handle, loc, value)
