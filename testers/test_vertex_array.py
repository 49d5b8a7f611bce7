# -*- coding: utf-8 -*-
"""
VAO: порядок настройки и вызовы отрисовки.
"""

import numpy as np
import pytest

from ren.gl45 import (
    AttribBindPoint,
    AttribBinding,
    AttribFormat,
    AttribKind,
    Buffer,
    BufferUsage,
    GLAssertionError,
    RenderingContext,
    VertexArray,
    VertexArrayDesc,
)

VERTEX = np.dtype([("position", np.float32, 3), ("color", np.float32, 4)])


def _desc(buf):
    return (
        VertexArrayDesc()
        .with_buffer(buf)
        .with_bind_point(AttribBindPoint.typed_stride(0, 0, VERTEX))
        .with_binding(AttribBinding(0, 0))
        .with_binding(AttribBinding(1, 0))
        .with_attrib(AttribFormat(0, AttribKind.FLOAT3))
        .with_attrib(AttribFormat.typed_offset(1, AttribKind.FLOAT4, (np.float32, 3)))
    )


def test_apply_order(ctx, driver):
    buf = Buffer.with_data(ctx, BufferUsage.STATIC, np.zeros(3, dtype=VERTEX))
    vao = VertexArray.new(ctx, _desc(buf))
    h = vao.gl_handle

    setup = [(name, args) for name, args in driver.calls if name.startswith(("vertex_array", "enable_vertex"))]
    assert setup == [
        ("vertex_array_vertex_buffer", (h, 0, buf.gl_handle, 0, 28)),
        ("vertex_array_attrib_binding", (h, 0, 0)),
        ("vertex_array_attrib_binding", (h, 1, 0)),
        ("enable_vertex_array_attrib", (h, 0)),
        ("vertex_array_attrib_format", (h, 0, 3, "GL_FLOAT", False, 0)),
        ("enable_vertex_array_attrib", (h, 1)),
        ("vertex_array_attrib_format", (h, 1, 4, "GL_FLOAT", False, 12)),
    ]


def test_draw_triangles_and_points(ctx, driver):
    vao = VertexArray.new(ctx, VertexArrayDesc())
    vao.draw_triangles(1, 2)
    vao.draw_points(0, 5)

    draws = [args for name, args in driver.calls if name == "draw_arrays"]
    assert draws == [("GL_TRIANGLES", 3, 6), ("GL_POINTS", 0, 5)]
    assert driver.count("bind_vertex_array") == 2


def test_bind_point_without_buffer_is_rejected(ctx, driver):
    desc = VertexArrayDesc().with_bind_point(AttribBindPoint(0, 0, 12))
    with pytest.raises(GLAssertionError, match="has no buffer"):
        VertexArray.new(ctx, desc)
    assert driver.count("delete_vertex_array") == 1
    assert ctx.live_resources == 0


def test_buffer_from_other_context_is_rejected(driver):
    ctx_a = RenderingContext(driver)
    ctx_b = RenderingContext(driver)
    buf = Buffer.new(ctx_a)
    with pytest.raises(GLAssertionError, match="different rendering context"):
        VertexArray.new(ctx_b, _desc(buf))


def test_closed_buffer_cannot_be_bound(driver):
    ctx = RenderingContext(driver)
    buf = Buffer.new(ctx)
    buf.destroy()
    with pytest.raises(GLAssertionError):
        VertexArray.new(ctx, _desc(buf))


def test_attrib_disable(ctx, driver):
    vao = VertexArray.new(ctx, VertexArrayDesc().with_attrib(AttribFormat(2, AttribKind.FLOAT2)))
    AttribFormat(2, AttribKind.FLOAT2).disable(driver, vao.gl_handle)
    assert driver.vertex_arrays[vao.gl_handle]["enabled"] == set()


def test_typed_helpers():
    assert AttribFormat.typed_offset(1, AttribKind.FLOAT2, np.float64).offset == 8
    assert AttribFormat.with_offset(0, AttribKind.FLOAT1, 16).offset == 16
    assert AttribBindPoint.typed_stride(0, 4, (np.float32, 2)).stride == 8
