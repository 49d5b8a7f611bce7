#!/usr/bin/env python
# -*- coding: utf-8 -*-
# --------------------------------------------------------------
# «Сырой» цикл: одна функция на кадр, события разбираются вручную.
# Пробел меняет цвет фона, Esc/Q/крестик – выход.
# --------------------------------------------------------------

import random

import glfw

import ren
from ren.core.events import Close, FramebufferSize, Key
from ren.utils import logger

state = {"color": (0.2, 0.3, 0.3, 1.0)}


def frame(ctx, wnd, events):
    for _ts, evt in events.flush():
        if isinstance(evt, Close):
            wnd.set_should_close(True)
        elif isinstance(evt, Key) and evt.action == glfw.PRESS:
            if evt.key in (glfw.KEY_ESCAPE, glfw.KEY_Q):
                wnd.set_should_close(True)
            elif evt.key == glfw.KEY_SPACE:
                state["color"] = (random.random(), random.random(), random.random(), 1.0)
        elif isinstance(evt, FramebufferSize):
            logger.info(f"[Example] Framebuffer resized to {evt.width}x{evt.height}")
            ctx.set_viewport(0, 0, evt.width, evt.height)

    ctx.set_clear_color(state["color"])
    ctx.clear_color_buffer()


if __name__ == "__main__":
    ren.run_glfw(frame, ren.AppOptions(title="ren – raw loop"))
