"""
2D‑текстура с неизменяемым хранилищем (glTextureStorage2D, один mip‑уровень).
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from ren.gl45.buffer import as_bytes
from ren.gl45.errors import GLAssertionError
from ren.gl45.handle import GLResource

_I32_MAX = 2 ** 31 - 1


class PixelFormat(Enum):
    R = ("GL_RED", 1)
    RG = ("GL_RG", 2)
    RGB = ("GL_RGB", 3)
    RGBA = ("GL_RGBA", 4)

    @property
    def gl_name(self) -> str:
        return self.value[0]

    @property
    def channels(self) -> int:
        return self.value[1]


class InternalFormat(Enum):
    R8 = "GL_R8"
    RG8 = "GL_RG8"
    RGB8 = "GL_RGB8"
    RGBA8 = "GL_RGBA8"


class TextureWrap(Enum):
    REPEAT = "GL_REPEAT"
    CLAMP_TO_EDGE = "GL_CLAMP_TO_EDGE"
    MIRRORED_REPEAT = "GL_MIRRORED_REPEAT"


class TextureFilter(Enum):
    NEAREST = "GL_NEAREST"
    LINEAR = "GL_LINEAR"


DEFAULT_WRAP = TextureWrap.CLAMP_TO_EDGE
DEFAULT_FILTER = TextureFilter.NEAREST


class Texture(GLResource):
    _kind = "texture"
    _label = "texture"
    _deleter = "delete_texture"

    def __init__(self, driver, handle: int, size: Tuple[int, int], context=None):
        self._size = (int(size[0]), int(size[1]))
        super().__init__(driver, handle, context)

    # -----------------------------------------------------------------
    # Фабрики
    # -----------------------------------------------------------------
    @classmethod
    def new(cls, ctx, size: Tuple[int, int], internal_format: InternalFormat) -> "Texture":
        cls._require(ctx)
        return cls._create(ctx.driver, size, internal_format, ctx)

    @classmethod
    def new_unchecked(cls, driver, size: Tuple[int, int], internal_format: InternalFormat) -> "Texture":
        """
        Текстура без владеющего контекста. Вызывающий код отвечает за то,
        что GL‑контекст жив, и сам вызывает ``destroy()``.
        """
        return cls._create(driver, size, internal_format, None)

    @classmethod
    def _create(cls, driver, size, internal_format: InternalFormat, ctx) -> "Texture":
        width, height = size
        if not (0 < width <= _I32_MAX and 0 < height <= _I32_MAX):
            raise GLAssertionError(f"invalid texture size: {size}")

        [handle] = driver.create_textures_2d(1)
        tex = cls(driver, handle, size, ctx)
        try:
            driver.texture_storage_2d(
                tex._handle, 1, InternalFormat(internal_format).value, width, height
            )
            tex.set_wrap(DEFAULT_WRAP)
            tex.set_filter(DEFAULT_FILTER)
            tex._set_parameter("GL_TEXTURE_BASE_LEVEL", 0)
            tex._set_parameter("GL_TEXTURE_MAX_LEVEL", 0)
        except Exception:
            tex.destroy()
            raise
        return tex

    # -----------------------------------------------------------------
    # Загрузка пикселей
    # -----------------------------------------------------------------
    def upload_image_data(self, size: Tuple[int, int], pixel_format: PixelFormat, pixels) -> None:
        self.upload_sub_image_data((0, 0), size, pixel_format, pixels)

    def upload_sub_image_data(
        self,
        origin: Tuple[int, int],
        size: Tuple[int, int],
        pixel_format: PixelFormat,
        pixels,
    ) -> None:
        """
        Загрузить прямоугольник ``size`` в позицию ``origin``.

        Регион обязан целиком лежать внутри текстуры, а все компоненты –
        помещаться в int32; иначе ``GLAssertionError`` (без обрезки).
        """
        self._check()
        x, y = origin
        width, height = size
        pixel_format = PixelFormat(pixel_format)

        for name, value in (("x", x), ("y", y), ("width", width), ("height", height)):
            if not 0 <= value < _I32_MAX:
                raise GLAssertionError(f"{name} = {value} is out of the signed 32-bit range")

        tex_w, tex_h = self._size
        if x + width > tex_w or y + height > tex_h:
            raise GLAssertionError(
                f"sub-image {origin}+{size} is out of bounds of texture size {self._size}"
            )

        raw = as_bytes(pixels)
        expected = width * height * pixel_format.channels
        if len(raw) < expected:
            raise GLAssertionError(
                f"pixel data too small: {len(raw)} bytes, expected at least {expected}"
            )

        self._driver.texture_sub_image_2d(
            self._handle, 0, x, y, width, height, pixel_format.gl_name, raw[:expected]
        )

    # -----------------------------------------------------------------
    # Параметры сэмплинга
    # -----------------------------------------------------------------
    def set_wrap(self, wrap: TextureWrap) -> None:
        self.set_wrap_u(wrap)
        self.set_wrap_v(wrap)

    def set_wrap_u(self, wrap: TextureWrap) -> None:
        self._set_parameter("GL_TEXTURE_WRAP_S", TextureWrap(wrap).value)

    def set_wrap_v(self, wrap: TextureWrap) -> None:
        self._set_parameter("GL_TEXTURE_WRAP_T", TextureWrap(wrap).value)

    def set_filter(self, texture_filter: TextureFilter) -> None:
        value = TextureFilter(texture_filter).value
        self._set_parameter("GL_TEXTURE_MIN_FILTER", value)
        self._set_parameter("GL_TEXTURE_MAG_FILTER", value)

    def _set_parameter(self, name: str, value) -> None:
        self._check()
        self._driver.texture_parameter_i(self._handle, name, value)

    # -----------------------------------------------------------------
    def bind(self, unit: int) -> None:
        self._check()
        self._driver.bind_texture_unit(unit, self._handle)

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    def __repr__(self) -> str:
        return f"Texture({self._handle}, {self._size})"
