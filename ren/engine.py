# ren/engine.py
# -*- coding: utf-8 -*-
"""
Главный цикл.

* Создаёт скрытое окно, GL‑контекст, драйвер и ``RenderingContext``.
* Вызывает ``init`` пользователя; окно показывается только после
  успешной инициализации.
* Каждый кадр: события → update → draw → swap → (debug) GL‑ошибки.
* Закрытие, обнаруженное во время разбора событий, не прерывает кадр:
  update/draw/swap этого кадра выполняются до выхода.
"""

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Callable, Optional

from ren.core.events import Close, FramebufferSize, is_escape_press
from ren.gl45.context import RenderingContext
from ren.gl45.errors import GLError
from ren.graphics import init_debug_output, select_driver
from ren.utils import AppOptions, drain_gl_errors, logger


class AppInitError(RuntimeError):
    """``init`` пользователя завершился ошибкой; причина в ``__cause__``."""


class AppState(Enum):
    UNINITIALIZED = auto()
    CONTEXT_READY = auto()
    RUNNING = auto()
    CLOSING = auto()
    TERMINATED = auto()


_TRANSITIONS = {
    AppState.UNINITIALIZED: {AppState.CONTEXT_READY},
    AppState.CONTEXT_READY: {AppState.RUNNING, AppState.TERMINATED},
    AppState.RUNNING: {AppState.CLOSING},
    AppState.CLOSING: {AppState.TERMINATED},
    AppState.TERMINATED: set(),
}


class App(ABC):
    """
    Структурированное приложение.

    ``init`` создаёт приложение в живом контексте, ``draw`` обязателен,
    ``update`` и ``on_event`` – по желанию.
    """

    @classmethod
    @abstractmethod
    def init(cls, ctx: RenderingContext) -> "App":
        pass

    def update(self, ctx: RenderingContext, wnd) -> None:
        pass

    @abstractmethod
    def draw(self, ctx: RenderingContext, wnd) -> None:
        pass

    def on_event(self, evt, ctx: RenderingContext, wnd) -> None:
        pass


class Runner:
    """
    Владеет окном и контекстом, ведёт машину состояний
    UNINITIALIZED → CONTEXT_READY → RUNNING → CLOSING → TERMINATED.
    """
    # -----------------------------------------------------------------
    def __init__(self, options: Optional[AppOptions] = None, driver_name: str = "gl45"):
        self.options = options or AppOptions()
        self.driver_name = driver_name
        self.state = AppState.UNINITIALIZED
        self.window = None
        self.ctx: Optional[RenderingContext] = None
        self.frame = 0

    # -----------------------------------------------------------------
    def _create_window(self):
        from ren.window import Window
        return Window(self.options)

    def _create_driver(self):
        return select_driver(self.driver_name)

    def _transition(self, state: AppState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"invalid state transition {self.state.name} -> {state.name}")
        logger.debug(f"[Runner] {self.state.name} -> {state.name}")
        self.state = state

    # -----------------------------------------------------------------
    def setup(self) -> RenderingContext:
        """Окно (скрытое) + контекст. Ошибка окружения закрывает окно и поднимается дальше."""
        self.window = self._create_window()
        try:
            driver = self._create_driver()
            self.ctx = RenderingContext(driver)

            if self.options.gl_debug_output:
                if init_debug_output(driver):
                    logger.info("[Runner] Enabled OpenGL debug output")
                else:
                    logger.warning("[Runner] OpenGL debug output not supported")
        except Exception as exc:
            logger.error(f"[Runner] Context setup failed: {exc}")
            try:
                if self.ctx is not None:
                    self.ctx.close()
            finally:
                self.window.destroy()
            raise

        self._transition(AppState.CONTEXT_READY)
        return self.ctx

    def run_app(self, init: Callable[[RenderingContext], App]) -> None:
        """Структурированный режим."""
        self.setup()
        try:
            try:
                app = init(self.ctx)
            except Exception as exc:
                logger.error(f"[Runner] Application init failed: {exc}")
                raise AppInitError(f"application init failed: {exc}") from exc

            self._start()
            while self.state is AppState.RUNNING:
                if self.window.should_close():
                    self.request_close()
                else:
                    self._frame(app)
        finally:
            self.shutdown()

    def run_raw(self, fn: Callable) -> None:
        """
        «Сырой» режим: ``fn(ctx, window, events)`` каждый кадр, сам разбирает
        события и сам закрывает окно.
        """
        self.setup()
        try:
            self._start()
            while self.state is AppState.RUNNING:
                if self.window.should_close():
                    self.request_close()
                    continue
                self.window.poll_events()
                fn(self.ctx, self.window, self.window.events)
                self._present()
        finally:
            self.shutdown()

    def run_headless(self, fn: Callable[[RenderingContext], object]):
        """Только контекст: окно не показывается, цикла нет."""
        self.setup()
        try:
            return fn(self.ctx)
        finally:
            self.shutdown()

    # -----------------------------------------------------------------
    def _start(self) -> None:
        self.window.show()
        self._transition(AppState.RUNNING)
        logger.info("[Runner] Application started")

    def _frame(self, app: App) -> None:
        self.window.poll_events()
        for _timestamp, evt in self.window.events.flush():
            self._handle_event(evt)
            app.on_event(evt, self.ctx, self.window)

        app.update(self.ctx, self.window)
        app.draw(self.ctx, self.window)
        self._present()

    def _handle_event(self, evt) -> None:
        if isinstance(evt, FramebufferSize):
            self.ctx.set_viewport(0, 0, evt.width, evt.height)
        elif isinstance(evt, Close):
            self.request_close()
        elif self.options.debug and is_escape_press(evt):
            self.request_close()

    def _present(self) -> None:
        self.window.swap_buffers()
        if self.options.debug:
            drain_gl_errors(self.ctx.driver)
        self.frame += 1

    def request_close(self) -> None:
        """Перейти в CLOSING; текущий кадр всё равно будет дорисован."""
        if self.state is not AppState.RUNNING:
            return
        self.window.set_should_close(True)
        self._transition(AppState.CLOSING)
        logger.info("[Runner] Close requested")

    # -----------------------------------------------------------------
    def shutdown(self) -> None:
        """Освободить ресурсы контекста и закрыть окно."""
        if self.state is AppState.TERMINATED:
            return
        if self.state is AppState.RUNNING:
            self._transition(AppState.CLOSING)

        logger.info("[Runner] Shutting down")
        try:
            if self.ctx is not None:
                self.ctx.close()
        finally:
            # окно закрывается, даже если освобождение ресурсов упало
            if self.window is not None:
                self.window.destroy()
            if self.state is not AppState.UNINITIALIZED:
                self._transition(AppState.TERMINATED)


# ---------------------------------------------------------------------
# Точки входа
# ---------------------------------------------------------------------
def _as_init(app) -> Callable[[RenderingContext], App]:
    if isinstance(app, type) and issubclass(app, App):
        return app.init
    if callable(app):
        return app
    raise TypeError(f"expected an App subclass or an init callable, got {app!r}")


def run(app, options: Optional[AppOptions] = None) -> None:
    """
    Запустить приложение. ``app`` – подкласс ``App`` или любая функция
    ``ctx -> App``. Ошибка ``init`` поднимается как ``AppInitError``.
    """
    Runner(options).run_app(_as_init(app))


def run_with(app, options: AppOptions) -> None:
    run(app, options)


def run_glfw(fn: Callable, options: Optional[AppOptions] = None) -> None:
    Runner(options).run_raw(fn)


def run_headless_once(fn: Callable[[RenderingContext], object], options: Optional[AppOptions] = None):
    return Runner(options).run_headless(fn)


def run_main(main: Callable[[], object]) -> int:
    """
    Обёртка верхнего уровня: вывести ошибку и вернуть код выхода.

        sys.exit(run_main(lambda: ren.run(MyApp)))
    """
    try:
        main()
    except (AppInitError, GLError) as exc:
        logger.error(f"error: {exc}")
        return 1
    return 0
