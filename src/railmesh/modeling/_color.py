from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

RGBA = Tuple[float, float, float, float]

# Default track blue.
DEFAULT_COLOR: RGBA = (0.0, 0.4, 1.0, 1.0)


def normalize_color(color: Sequence[float] | str) -> RGBA:
    """Return ``color`` as RGBA floats in [0, 1].

    Accepts a named/hex color string, RGB or RGBA floats, or 0-255 integers.
    """

    if isinstance(color, str):
        import pyvista as pv

        try:
            col = pv.Color(color)
        except ValueError as exc:
            raise ValueError(f"Unknown color {color!r}.") from exc
        r, g, b = col.float_rgb
        return (float(r), float(g), float(b), 1.0)

    arr = np.asarray(color, dtype=float).flatten()
    if arr.size not in (3, 4):
        raise ValueError("Color must be RGB or RGBA.")
    if np.any(~np.isfinite(arr)) or arr.min() < 0:
        raise ValueError("Color components must be finite and non-negative.")
    if arr.max() > 1.0:
        arr = arr / 255.0
    alpha = float(arr[3]) if arr.size == 4 else 1.0
    return (float(arr[0]), float(arr[1]), float(arr[2]), alpha)
