#!/usr/bin/env python
# -*- coding: utf-8 -*-
# --------------------------------------------------------------
# Структурированное приложение: квадрат с текстурой.
# Esc (в debug‑режиме) или крестик окна – выход.
# --------------------------------------------------------------

import os
import sys
import time

import numpy as np
from PIL import Image, ImageDraw

import ren
from ren import (
    App,
    AppOptions,
    AttribBindPoint,
    AttribBinding,
    AttribFormat,
    AttribKind,
    Buffer,
    BufferUsage,
    Shader,
    ShaderStage,
    VertexArray,
    VertexArrayDesc,
    load_texture,
    logger,
)

TEXTURE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "textures", "logo.png")

VERTEX = np.dtype([("position", np.float32, 2), ("uv", np.float32, 2)])

VS = """#version 450
layout(location = 0) in vec2 position;
layout(location = 1) in vec2 uv;
out vec2 v_uv;
void main() {
    v_uv = uv;
    gl_Position = vec4(position, 0.0, 1.0);
}
"""

FS = """#version 450
in vec2 v_uv;
uniform sampler2D tex;
uniform float pulse;
out vec4 fragColor;
void main() {
    fragColor = texture(tex, v_uv) * vec4(vec3(0.75 + 0.25 * pulse), 1.0);
}
"""


def create_placeholder_texture(path: str, size: int = 256) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    img = Image.new("RGBA", (size, size), (30, 30, 120, 255))
    draw = ImageDraw.Draw(img)
    txt = "ren"
    bbox = draw.textbbox((0, 0), txt)
    draw.text(
        ((size - (bbox[2] - bbox[0])) / 2, (size - (bbox[3] - bbox[1])) / 2),
        txt,
        fill=(255, 200, 50, 255),
    )
    img.save(path, "PNG")
    logger.info(f"[Example] Generated placeholder texture → {path}")


def make_quad() -> np.ndarray:
    # два треугольника
    quad = np.zeros(6, dtype=VERTEX)
    quad["position"] = [(-0.5, -0.5), (0.5, -0.5), (0.5, 0.5),
                        (-0.5, -0.5), (0.5, 0.5), (-0.5, 0.5)]
    quad["uv"] = [(0, 0), (1, 0), (1, 1),
                  (0, 0), (1, 1), (0, 1)]
    return quad


class TexturedQuad(App):
    def __init__(self, shader, vao, texture, pulse_loc):
        self.shader = shader
        self.vao = vao
        self.texture = texture
        self.pulse_loc = pulse_loc
        self.pulse = 0.0
        self.start = time.perf_counter()

    @classmethod
    def init(cls, ctx):
        if not os.path.isfile(TEXTURE_PATH):
            create_placeholder_texture(TEXTURE_PATH)

        shader = Shader.new(ctx, [
            ShaderStage.new_vertex(ctx, VS),
            ShaderStage.new_fragment(ctx, FS),
        ])
        buf = Buffer.with_data(ctx, BufferUsage.STATIC, make_quad())
        desc = (
            VertexArrayDesc()
            .with_buffer(buf)
            .with_bind_point(AttribBindPoint.typed_stride(0, 0, VERTEX))
            .with_binding(AttribBinding(0, 0))
            .with_binding(AttribBinding(1, 0))
            .with_attrib(AttribFormat(0, AttribKind.FLOAT2))
            .with_attrib(AttribFormat.typed_offset(1, AttribKind.FLOAT2, (np.float32, 2)))
        )
        vao = VertexArray.new(ctx, desc)
        texture = load_texture(ctx, TEXTURE_PATH)

        tex_loc = shader.uniform_location("tex")
        if tex_loc is not None:
            shader.set_uniform(tex_loc, 0)

        ctx.set_clear_color((0.1, 0.1, 0.12, 1.0))
        return cls(shader, vao, texture, shader.uniform_location("pulse"))

    def update(self, ctx, wnd):
        self.pulse = 0.5 + 0.5 * np.sin(time.perf_counter() - self.start)

    def draw(self, ctx, wnd):
        ctx.clear_color_buffer()
        self.shader.bind()
        if self.pulse_loc is not None:
            self.shader.set_uniform(self.pulse_loc, float(self.pulse))
        self.texture.bind(0)
        self.vao.draw_triangles(0, 2)


if __name__ == "__main__":
    options = AppOptions(title="ren – textured quad", window_size=(800, 600))
    sys.exit(ren.run_main(lambda: ren.run_with(TexturedQuad, options)))
