"""Mapping between the pixel grid and the complex plane."""

from __future__ import annotations

from typing import Optional

import numpy as np


def lerp(a: float, b: float, t: float) -> float:
    """Linearly interpolate between ``a`` and ``b`` by the fraction ``t``."""

    return a * (1.0 - t) + b * t


def pixel_to_point(
    bounds: tuple[int, int],
    pixel: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
) -> complex:
    """Return the point on the complex plane sampled by ``pixel``.

    ``bounds`` is the ``(width, height)`` of the image and ``pixel`` a
    ``(column, row)`` pair in it. ``upper_left`` and ``lower_right`` are the
    corners of the plane region covered by the image. Pixels outside the
    bounds are extrapolated rather than rejected.
    """

    width, height = bounds
    column, row = pixel
    return complex(
        lerp(upper_left.real, lower_right.real, float(column) / float(width)),
        lerp(upper_left.imag, lower_right.imag, float(row) / float(height)),
    )


def sample_axes(
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    rows: Optional[range] = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Vectorized ``pixel_to_point`` for a whole image or a band of rows.

    Returns the real parts of every column and the imaginary parts of the
    selected rows as float64 arrays. Each element is computed with the same
    operations as :func:`pixel_to_point`, so ``complex(real[x], imag[y])`` is
    bit-identical to the scalar result.
    """

    width, height = bounds
    if rows is None:
        rows = range(height)

    columns = np.arange(width, dtype=np.float64) / np.float64(width)
    row_fractions = np.arange(rows.start, rows.stop, rows.step, dtype=np.float64) / np.float64(height)

    real = lerp(np.float64(upper_left.real), np.float64(lower_right.real), columns)
    imag = lerp(np.float64(upper_left.imag), np.float64(lower_right.imag), row_fractions)
    return real, imag
