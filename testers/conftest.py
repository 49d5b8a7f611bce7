# -*- coding: utf-8 -*-
"""
conftest.py – мок‑драйвер и окно‑заглушка.

Не требует ни libGL, ни настоящего окна: ``MockDriver`` хранит данные
буферов и текстур в памяти, «компилирует» шейдеры простым разбором
исходника и записывает каждый вызов, а ``FakeWindow`` отдаёт заранее
заданные события по кадрам.
"""

import re
from collections import deque
from typing import Any, Dict, List, Optional, Tuple

import pytest

from ren.core.events import EventQueue
from ren.engine import Runner
from ren.gl45.context import RenderingContext
from ren.graphics.backend import GraphicsDriver
from ren.utils.config import AppOptions

_UNIFORM_RE = re.compile(r"\buniform\s+\w+\s+(\w+)\s*;")


# ----------------------------------------------------------------------
# MockDriver – полностью реализует интерфейс GraphicsDriver.
# ----------------------------------------------------------------------
class MockDriver(GraphicsDriver):
    """
    Минимальная имитация GL‑драйвера.

    * id выделяются с 1; ``next_ids[kind]`` позволяет подсунуть
      конкретные id (в т.ч. 0) для следующих созданий;
    * шейдер не компилируется, если в исходнике нет ``void main`` или
      есть ``syntax error``;
    * ``fail_link`` / ``fail_validate`` ломают соответствующий шаг.
    """

    def __init__(self, version: Tuple[int, int] = (4, 5), debug_context: bool = True) -> None:
        # (method_name, args)
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

        self.version = version
        self.debug_context = debug_context
        self.debug_callback = None

        self._next_id = 1
        self.next_ids: Dict[str, List[int]] = {}

        self.buffers: Dict[int, bytearray] = {}
        self.textures: Dict[int, dict] = {}
        self.shaders: Dict[int, dict] = {}
        self.programs: Dict[int, dict] = {}
        self.vertex_arrays: Dict[int, dict] = {}
        self.deleted: List[Tuple[str, int]] = []

        self.errors = deque()
        self.fail_link = False
        self.fail_validate = False
        self.link_log = "error: linking with uncompiled/unspecialized shader"
        self.validate_log = "error: program pipeline is not valid"
        self.shader_warning: Optional[str] = None

    # -----------------------------------------------------------------
    # Вспомогательное
    # -----------------------------------------------------------------
    def _record(self, name: str, *a) -> None:
        self.calls.append((name, a))

    def _alloc(self, kind: str) -> int:
        forced = self.next_ids.get(kind)
        if forced:
            return forced.pop(0)
        handle = self._next_id
        self._next_id += 1
        return handle

    # -----------------------------------------------------------------
    # Context state -------------------------------------------------------
    # -----------------------------------------------------------------
    def get_error(self) -> int:
        self._record("get_error")
        return self.errors.popleft() if self.errors else 0

    def get_version(self) -> Tuple[int, int]:
        return self.version

    def has_debug_context(self) -> bool:
        return self.debug_context

    def enable_debug_output(self, callback) -> None:
        self._record("enable_debug_output", callback)
        self.debug_callback = callback

    def pixel_store_unpack_alignment(self, alignment: int) -> None:
        self._record("pixel_store_unpack_alignment", alignment)

    def clear_color(self, r, g, b, a) -> None:
        self._record("clear_color", r, g, b, a)

    def clear_color_buffer(self) -> None:
        self._record("clear_color_buffer")

    def viewport(self, x, y, width, height) -> None:
        self._record("viewport", x, y, width, height)

    # -----------------------------------------------------------------
    # Buffers -------------------------------------------------------------
    # -----------------------------------------------------------------
    def create_buffers(self, count: int) -> List[int]:
        handles = [self._alloc("buffer") for _ in range(count)]
        for handle in handles:
            if handle:
                self.buffers[handle] = bytearray()
        self._record("create_buffers", count)
        return handles

    def delete_buffer(self, handle: int) -> None:
        self._record("delete_buffer", handle)
        self.deleted.append(("buffer", handle))
        self.buffers.pop(handle, None)

    def named_buffer_data(self, handle: int, data: bytes, usage: str) -> None:
        self._record("named_buffer_data", handle, data, usage)
        self.buffers[handle] = bytearray(data)

    def get_named_buffer_sub_data(self, handle: int, offset: int, size: int) -> bytes:
        self._record("get_named_buffer_sub_data", handle, offset, size)
        return bytes(self.buffers[handle][offset:offset + size])

    def get_named_buffer_size(self, handle: int) -> int:
        return len(self.buffers[handle])

    # -----------------------------------------------------------------
    # Shader stages -------------------------------------------------------
    # -----------------------------------------------------------------
    def create_shader(self, stage: str) -> int:
        handle = self._alloc("shader")
        self._record("create_shader", stage)
        if handle:
            self.shaders[handle] = {"stage": stage, "source": "", "log": None}
        return handle

    def delete_shader(self, handle: int) -> None:
        self._record("delete_shader", handle)
        self.deleted.append(("shader", handle))
        self.shaders.pop(handle, None)

    def shader_source(self, handle: int, source: str) -> None:
        self._record("shader_source", handle, source)
        self.shaders[handle]["source"] = source

    def compile_shader(self, handle: int) -> bool:
        self._record("compile_shader", handle)
        shader = self.shaders[handle]
        source = shader["source"]
        if "void main" not in source or "syntax error" in source:
            shader["log"] = "0:1(1): error: syntax error, unexpected end of file\n"
            return False
        shader["log"] = self.shader_warning
        return True

    def get_shader_info_log(self, handle: int) -> Optional[str]:
        return self.shaders[handle]["log"]

    # -----------------------------------------------------------------
    # Programs ------------------------------------------------------------
    # -----------------------------------------------------------------
    def create_program(self) -> int:
        handle = self._alloc("program")
        self._record("create_program")
        if handle:
            self.programs[handle] = {
                "attached": [],
                "frag_data": {},
                "uniforms": {},
                "values": {},
                "log": None,
            }
        return handle

    def delete_program(self, handle: int) -> None:
        self._record("delete_program", handle)
        self.deleted.append(("program", handle))
        self.programs.pop(handle, None)

    def attach_shader(self, program: int, shader: int) -> None:
        self._record("attach_shader", program, shader)
        self.programs[program]["attached"].append(shader)

    def detach_shader(self, program: int, shader: int) -> None:
        self._record("detach_shader", program, shader)
        self.programs[program]["attached"].remove(shader)

    def bind_frag_data_location(self, program: int, color: int, name: str) -> None:
        self._record("bind_frag_data_location", program, color, name)
        self.programs[program]["frag_data"][name] = color

    def link_program(self, program: int) -> bool:
        self._record("link_program", program)
        prog = self.programs[program]
        if self.fail_link or not prog["attached"]:
            prog["log"] = self.link_log
            return False

        names = []
        for shader in prog["attached"]:
            for name in _UNIFORM_RE.findall(self.shaders[shader]["source"]):
                if name not in names:
                    names.append(name)
        prog["uniforms"] = {name: loc for loc, name in enumerate(names)}
        prog["log"] = None
        return True

    def validate_program(self, program: int) -> bool:
        self._record("validate_program", program)
        prog = self.programs[program]
        if self.fail_validate:
            prog["log"] = self.validate_log
            return False
        return True

    def get_program_info_log(self, program: int) -> Optional[str]:
        return self.programs[program]["log"]

    def use_program(self, program: int) -> None:
        self._record("use_program", program)

    # -----------------------------------------------------------------
    # Uniforms ------------------------------------------------------------
    # -----------------------------------------------------------------
    def get_uniform_location(self, program: int, name: bytes) -> int:
        self._record("get_uniform_location", program, name)
        return self.programs[program]["uniforms"].get(name.decode("utf-8"), -1)

    def program_uniform_f(self, program: int, location: int, values) -> None:
        self._record("program_uniform_f", program, location, list(values))
        self.programs[program]["values"][location] = ("f", list(values))

    def program_uniform_i(self, program: int, location: int, values) -> None:
        self._record("program_uniform_i", program, location, list(values))
        self.programs[program]["values"][location] = ("i", list(values))

    def program_uniform_matrix4f(self, program: int, location: int, values) -> None:
        self._record("program_uniform_matrix4f", program, location, list(values))
        self.programs[program]["values"][location] = ("mat4", list(values))

    # -----------------------------------------------------------------
    # Vertex arrays -------------------------------------------------------
    # -----------------------------------------------------------------
    def create_vertex_arrays(self, count: int) -> List[int]:
        handles = [self._alloc("vertex_array") for _ in range(count)]
        for handle in handles:
            if handle:
                self.vertex_arrays[handle] = {"enabled": set()}
        self._record("create_vertex_arrays", count)
        return handles

    def delete_vertex_array(self, handle: int) -> None:
        self._record("delete_vertex_array", handle)
        self.deleted.append(("vertex_array", handle))
        self.vertex_arrays.pop(handle, None)

    def vertex_array_vertex_buffer(self, vao, binding_index, buffer, offset, stride) -> None:
        self._record("vertex_array_vertex_buffer", vao, binding_index, buffer, offset, stride)

    def vertex_array_attrib_binding(self, vao, attrib_index, binding_index) -> None:
        self._record("vertex_array_attrib_binding", vao, attrib_index, binding_index)

    def enable_vertex_array_attrib(self, vao, index) -> None:
        self._record("enable_vertex_array_attrib", vao, index)
        self.vertex_arrays[vao]["enabled"].add(index)

    def disable_vertex_array_attrib(self, vao, index) -> None:
        self._record("disable_vertex_array_attrib", vao, index)
        self.vertex_arrays[vao]["enabled"].discard(index)

    def vertex_array_attrib_format(self, vao, index, size, component_type, normalized, relative_offset) -> None:
        self._record(
            "vertex_array_attrib_format", vao, index, size, component_type, normalized, relative_offset
        )

    def bind_vertex_array(self, vao) -> None:
        self._record("bind_vertex_array", vao)

    def draw_arrays(self, mode, first, count) -> None:
        self._record("draw_arrays", mode, first, count)

    # -----------------------------------------------------------------
    # Textures ------------------------------------------------------------
    # -----------------------------------------------------------------
    def create_textures_2d(self, count: int) -> List[int]:
        handles = [self._alloc("texture") for _ in range(count)]
        for handle in handles:
            if handle:
                self.textures[handle] = {"params": {}, "uploads": []}
        self._record("create_textures_2d", count)
        return handles

    def delete_texture(self, handle: int) -> None:
        self._record("delete_texture", handle)
        self.deleted.append(("texture", handle))
        self.textures.pop(handle, None)

    def texture_storage_2d(self, handle, levels, internal_format, width, height) -> None:
        self._record("texture_storage_2d", handle, levels, internal_format, width, height)
        self.textures[handle].update(levels=levels, format=internal_format, size=(width, height))

    def texture_sub_image_2d(self, handle, level, x, y, width, height, pixel_format, pixels) -> None:
        self._record("texture_sub_image_2d", handle, level, x, y, width, height, pixel_format, pixels)
        self.textures[handle]["uploads"].append(((x, y), (width, height), pixel_format, bytes(pixels)))

    def texture_parameter_i(self, handle, name, value) -> None:
        self._record("texture_parameter_i", handle, name, value)
        self.textures[handle]["params"][name] = value

    def bind_texture_unit(self, unit, handle) -> None:
        self._record("bind_texture_unit", unit, handle)

    # -----------------------------------------------------------------
    # Утилиты для тестов --------------------------------------------------
    # -----------------------------------------------------------------
    def called(self, name: str) -> bool:
        """True, если метод `name` был вызван хотя бы один раз."""
        return any(call[0] == name for call in self.calls)

    def count(self, name: str) -> int:
        """Сколько раз был вызван метод `name`."""
        return sum(1 for call in self.calls if call[0] == name)

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def deleted_count(self, kind: str, handle: int) -> int:
        return self.deleted.count((kind, handle))


# ----------------------------------------------------------------------
# Окно‑заглушка: события по кадрам, вызовы пишутся в журнал драйвера
# ----------------------------------------------------------------------
class FakeWindow:
    """
    Минимальная имитация ``ren.window.Window``.

    ``frames`` – список списков событий: i‑й ``poll_events()`` кладёт в
    очередь i‑й список. После последнего кадра сценария окно
    «закрывается» само (``should_close`` → True), без события Close.
    """

    def __init__(self, driver: MockDriver, frames=(), size=(856, 482)):
        self.driver = driver
        self.events = EventQueue(clock=self._clock)
        self._frames = [list(f) for f in frames]
        self._time = 0.0
        self._should_close = False
        self.size = size
        self.visible = False
        self.destroyed = False

    def _clock(self) -> float:
        return self._time

    def poll_events(self):
        self.driver._record("window.poll_events")
        self._time += 1.0 / 60.0
        if self._frames:
            for evt in self._frames.pop(0):
                self.events.push(evt)
        if not self._frames:
            self._should_close = True

    def show(self):
        self.driver._record("window.show")
        self.visible = True

    def should_close(self) -> bool:
        return self._should_close

    def set_should_close(self, value: bool = True):
        self.driver._record("window.set_should_close", value)
        self._should_close = value

    def swap_buffers(self):
        self.driver._record("window.swap_buffers")

    def destroy(self):
        self.driver._record("window.destroy")
        self.destroyed = True


class MockRunner(Runner):
    """``Runner`` с подменёнными окном и драйвером."""

    def __init__(self, window: FakeWindow, driver: MockDriver, options: Optional[AppOptions] = None):
        super().__init__(options or AppOptions(title="test", debug=True, gl_debug_output=False))
        self._fake_window = window
        self._fake_driver = driver

    def _create_window(self):
        return self._fake_window

    def _create_driver(self):
        return self._fake_driver


# ----------------------------------------------------------------------
# PyTest‑fixtures
# ----------------------------------------------------------------------
@pytest.fixture
def driver() -> MockDriver:
    """Чистый MockDriver."""
    return MockDriver()


@pytest.fixture
def ctx(driver) -> RenderingContext:
    """Живой контекст поверх MockDriver; закрывается после теста."""
    context = RenderingContext(driver)
    yield context
    context.close()


@pytest.fixture
def make_runner(driver):
    """Фабрика: ``make_runner(frames, **options)`` → (runner, window)."""
    def _make(frames=(), **options):
        opts = dict(title="test", debug=True, gl_debug_output=False)
        opts.update(options)
        window = FakeWindow(driver, frames)
        return MockRunner(window, driver, AppOptions(**opts)), window
    return _make
