"""
Загружает PNG/JPG → ``Texture`` (RGBA8), возвращает готовый ресурс.
"""

from pathlib import Path

import numpy as np
from PIL import Image

from ren.gl45.texture import InternalFormat, PixelFormat, Texture
from ren.utils.logger import logger


def load_texture(ctx, path: str, flip_vertically: bool = True) -> Texture:
    """
    Загружает изображение через Pillow и создаёт текстуру в контексте ``ctx``.
    GL ожидает первую строку снизу, поэтому по‑умолчанию картинка
    переворачивается.
    """
    p = Path(path).expanduser().resolve()
    if not p.is_file():
        raise FileNotFoundError(f"Texture not found: {p}")

    with Image.open(p) as src:
        img = src.convert("RGBA")
    if flip_vertically:
        img = img.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
    w, h = img.size
    img_data = np.asarray(img, dtype=np.uint8)

    tex = Texture.new(ctx, (w, h), InternalFormat.RGBA8)
    tex.upload_image_data((w, h), PixelFormat.RGBA, img_data)

    logger.debug(f"[TextureLoader] Loaded texture {p} ({w}x{h})")
    return tex
