"""
Uniform‑переменные: поиск location и запись значений
(glGetUniformLocation / glProgramUniform*).
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral, Real
from typing import Optional, Union

import numpy as np


@dataclass(frozen=True)
class UniformLocation:
    location: int

    def __repr__(self) -> str:
        return f"UniformLocation({self.location})"


def get_uniform_location(driver, program: int, name: Union[str, bytes]) -> Optional[UniformLocation]:
    """
    ``None``, если ``name`` не активная uniform‑переменная программы
    (например, компилятор выкинул неиспользуемую).
    """
    c_name = name.encode("utf-8") if isinstance(name, str) else bytes(name)
    if b"\x00" in c_name:
        raise ValueError(f"{name!r} contains a nul byte")

    loc = driver.get_uniform_location(program, c_name)
    if loc >= 0:
        return UniformLocation(loc)
    return None


def _is_int(value) -> bool:
    return isinstance(value, Integral)


def set_uniform(driver, program: int, loc: UniformLocation, value) -> None:
    """
    Поддерживаются: float, int, кортежи/списки из 1–4 float или int,
    numpy‑векторы той же длины и матрицы 4x4 (numpy или 16 чисел).
    """
    if isinstance(value, np.ndarray):
        if value.size == 16 and value.ndim in (1, 2):
            driver.program_uniform_matrix4f(program, loc.location, value.astype(np.float32).ravel().tolist())
            return
        if value.ndim != 1 or not 1 <= value.size <= 4:
            raise TypeError(f"unsupported uniform array shape: {value.shape}")
        if np.issubdtype(value.dtype, np.integer):
            driver.program_uniform_i(program, loc.location, [int(v) for v in value])
        else:
            driver.program_uniform_f(program, loc.location, [float(v) for v in value])
        return

    if isinstance(value, (tuple, list)):
        if len(value) == 16:
            driver.program_uniform_matrix4f(program, loc.location, [float(v) for v in value])
            return
        if not 1 <= len(value) <= 4:
            raise TypeError(f"unsupported uniform vector length: {len(value)}")
        if all(_is_int(v) for v in value):
            driver.program_uniform_i(program, loc.location, [int(v) for v in value])
        else:
            driver.program_uniform_f(program, loc.location, [float(v) for v in value])
        return

    if _is_int(value):
        driver.program_uniform_i(program, loc.location, [int(value)])
    elif isinstance(value, Real):
        driver.program_uniform_f(program, loc.location, [float(value)])
    else:
        raise TypeError(f"unsupported uniform value type: {type(value).__name__}")
