# -*- coding: utf-8 -*-
"""
Поиск uniform‑переменных и запись значений.
"""

import numpy as np
import pytest

from ren.gl45 import Shader, ShaderStage, UniformLocation

VS_PLAIN = "#version 450\nvoid main() { gl_Position = vec4(0.0); }\n"
FS_PLAIN = "#version 450\nout vec4 fragColor;\nvoid main() { fragColor = vec4(1.0); }\n"

VS = """#version 450
uniform mat4 mvp;
uniform vec2 offset;
void main() { gl_Position = mvp * vec4(offset, 0.0, 1.0); }
"""
FS = """#version 450
uniform vec4 tint;
uniform int mode;
out vec4 fragColor;
void main() { fragColor = tint * float(mode); }
"""


def _program(ctx, vs, fs):
    return Shader.new(ctx, [ShaderStage.new_vertex(ctx, vs), ShaderStage.new_fragment(ctx, fs)])


def test_missing_uniform_in_program_without_uniforms(ctx):
    shader = _program(ctx, VS_PLAIN, FS_PLAIN)
    assert shader.uniform_location("mvp") is None


def test_missing_and_present_uniforms(ctx):
    shader = _program(ctx, VS, FS)
    assert shader.uniform_location("does_not_exist") is None

    locs = {name: shader.uniform_location(name) for name in ("mvp", "offset", "tint", "mode")}
    assert all(isinstance(loc, UniformLocation) for loc in locs.values())
    assert len({loc.location for loc in locs.values()}) == 4
    assert shader.uniform_location(b"tint") == locs["tint"]


def test_nul_byte_in_name(ctx):
    shader = _program(ctx, VS, FS)
    with pytest.raises(ValueError):
        shader.uniform_location("ti\x00nt")


def test_set_scalars_and_vectors(ctx, driver):
    shader = _program(ctx, VS, FS)
    h = shader.gl_handle
    values = driver.programs[h]["values"]

    mode = shader.uniform_location("mode")
    shader.set_uniform(mode, 3)
    assert values[mode.location] == ("i", [3])

    tint = shader.uniform_location("tint")
    shader.set_uniform(tint, (1.0, 0.5, 0.25, 1))
    assert values[tint.location] == ("f", [1.0, 0.5, 0.25, 1.0])

    offset = shader.uniform_location("offset")
    shader.set_uniform(offset, np.array([2, 3], dtype=np.int32))
    assert values[offset.location] == ("i", [2, 3])
    shader.set_uniform(offset, np.array([0.5, 1.5], dtype=np.float32))
    assert values[offset.location] == ("f", [0.5, 1.5])


def test_set_matrix(ctx, driver):
    shader = _program(ctx, VS, FS)
    mvp = shader.uniform_location("mvp")

    shader.set_uniform(mvp, np.eye(4, dtype=np.float32))
    kind, data = driver.programs[shader.gl_handle]["values"][mvp.location]
    assert kind == "mat4"
    assert data == np.eye(4).ravel().tolist()

    shader.set_uniform(mvp, [float(i) for i in range(16)])
    assert driver.programs[shader.gl_handle]["values"][mvp.location][1][15] == 15.0


def test_unsupported_values(ctx):
    shader = _program(ctx, VS, FS)
    tint = shader.uniform_location("tint")
    with pytest.raises(TypeError):
        shader.set_uniform(tint, "red")
    with pytest.raises(TypeError):
        shader.set_uniform(tint, (1.0, 2.0, 3.0, 4.0, 5.0))
    with pytest.raises(TypeError):
        shader.set_uniform(tint, np.zeros((3, 3)))
