"""Public API for grayscale Mandelbrot plotting."""

from . import verbosity  # noqa: F401  (must run before TensorFlow is imported)
from .escape import ESCAPE_RADIUS_SQUARED, escape_time, escape_times
from .parsing import parse_complex, parse_pair, parse_pixels
from .plane import lerp, pixel_to_point, sample_axes
from .renderer import (
    BACKENDS,
    ITERATION_LIMIT,
    RenderParameters,
    RenderResult,
    intensity,
    render,
    render_frame,
    render_parallel,
    render_tensor,
)
from .writer import write_image

__all__ = [
    "BACKENDS",
    "ESCAPE_RADIUS_SQUARED",
    "ITERATION_LIMIT",
    "RenderParameters",
    "RenderResult",
    "escape_time",
    "escape_times",
    "intensity",
    "lerp",
    "parse_complex",
    "parse_pair",
    "parse_pixels",
    "pixel_to_point",
    "render",
    "render_frame",
    "render_parallel",
    "render_tensor",
    "sample_axes",
    "write_image",
]
