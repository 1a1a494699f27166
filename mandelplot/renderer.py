"""Rendering of Mandelbrot intensity buffers."""

from __future__ import annotations

import multiprocessing
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .escape import escape_time, escape_times
from .plane import pixel_to_point, sample_axes

ITERATION_LIMIT = 255
BACKENDS = ("python", "tensorflow")


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of the Mandelbrot set."""

    width: int
    height: int
    upper_left: complex
    lower_right: complex

    @property
    def bounds(self) -> tuple[int, int]:
        return self.width, self.height


@dataclass(frozen=True)
class RenderResult:
    """Container for a rendered intensity buffer."""

    pixels: np.ndarray
    params: RenderParameters
    elapsed: float

    def as_array(self) -> np.ndarray:
        """Return the buffer as a ``(height, width)`` view."""
        return self.pixels.reshape(self.params.height, self.params.width)


def intensity(count: Optional[int]) -> int:
    """Map an escape count to a gray level; members of the set are black."""

    if count is None:
        return 0
    return ITERATION_LIMIT - count


def _new_buffer(bounds: tuple[int, int]) -> np.ndarray:
    return np.zeros(bounds[0] * bounds[1], dtype=np.uint8)


def _check_buffer(pixels, bounds: tuple[int, int]) -> None:
    assert len(pixels) == bounds[0] * bounds[1], (
        f"buffer holds {len(pixels)} pixels, expected {bounds[0]}x{bounds[1]}"
    )


def _render_rows(bounds: tuple[int, int], upper_left: complex, lower_right: complex, start: int, stop: int) -> np.ndarray:
    """Render rows ``start`` up to ``stop`` into a new row-major band."""

    width = bounds[0]
    band = np.zeros((stop - start) * width, dtype=np.uint8)
    for y in range(start, stop):
        offset = (y - start) * width
        for x in range(width):
            point = pixel_to_point(bounds, (x, y), upper_left, lower_right)
            band[offset + x] = intensity(escape_time(point, ITERATION_LIMIT))
    return band


def render(
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    pixels: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Render the rectangle between ``upper_left`` and ``lower_right`` into ``pixels``.

    ``pixels`` must hold exactly ``width * height`` cells; a new buffer is
    allocated when it is omitted. The filled buffer is returned.
    """

    if pixels is None:
        pixels = _new_buffer(bounds)
    _check_buffer(pixels, bounds)

    pixels[:] = _render_rows(bounds, upper_left, lower_right, 0, bounds[1])
    return pixels


def _row_bands(height: int, workers: int) -> list[range]:
    """Split ``height`` rows into at most ``workers`` contiguous bands."""

    workers = max(1, min(workers, height))
    rows_per_band = -(-height // workers)
    return [range(start, min(start + rows_per_band, height)) for start in range(0, height, rows_per_band)]


def render_parallel(
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    pixels: Optional[np.ndarray] = None,
    *,
    workers: Optional[int] = None,
) -> np.ndarray:
    """Render like :func:`render`, computing disjoint row bands in worker processes."""

    if pixels is None:
        pixels = _new_buffer(bounds)
    _check_buffer(pixels, bounds)

    width, height = bounds
    if height == 0 or width == 0:
        return pixels

    bands = _row_bands(height, workers or multiprocessing.cpu_count())
    with ProcessPoolExecutor(max_workers=len(bands)) as executor:
        futures = {
            executor.submit(_render_rows, bounds, upper_left, lower_right, band.start, band.stop): band
            for band in bands
        }
        for future, band in futures.items():
            pixels[band.start * width:band.stop * width] = future.result()

    return pixels


def render_tensor(
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    pixels: Optional[np.ndarray] = None,
    *,
    device: Optional[str] = None,
) -> np.ndarray:
    """Render like :func:`render`, evaluating the whole grid with TensorFlow."""

    if pixels is None:
        pixels = _new_buffer(bounds)
    _check_buffer(pixels, bounds)

    real, imag = sample_axes(bounds, upper_left, lower_right)
    counts = escape_times(real, imag, ITERATION_LIMIT, device=device)
    levels = np.where(counts >= ITERATION_LIMIT, 0, ITERATION_LIMIT - counts)
    pixels[:] = levels.astype(np.uint8).reshape(-1)
    return pixels


def render_frame(
    params: RenderParameters,
    *,
    backend: str = "python",
    workers: Optional[int] = None,
    device: Optional[str] = None,
) -> RenderResult:
    """Render the image described by ``params`` with the selected backend."""

    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend '{backend}'. Valid choices: {', '.join(BACKENDS)}.")

    start = time.perf_counter()
    if backend == "tensorflow":
        pixels = render_tensor(params.bounds, params.upper_left, params.lower_right, device=device)
    elif workers is not None and workers > 1:
        pixels = render_parallel(params.bounds, params.upper_left, params.lower_right, workers=workers)
    else:
        pixels = render(params.bounds, params.upper_left, params.lower_right)

    return RenderResult(pixels=pixels, params=params, elapsed=time.perf_counter() - start)
