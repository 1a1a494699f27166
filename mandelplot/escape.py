"""Escape-time evaluation of points of the Mandelbrot set."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

ESCAPE_RADIUS_SQUARED = 4.0


def escape_time(c: complex, limit: int) -> Optional[int]:
    """Try to decide whether ``c`` is in the Mandelbrot set within ``limit`` iterations.

    Returns the number of iterations ``i`` after which ``z`` first left the
    circle of radius 2 around the origin, or ``None`` when the limit was
    reached without ``c`` being proven outside the set. The bound is checked
    before ``z`` is updated on each iteration.
    """

    z = complex(0.0, 0.0)
    for i in range(limit):
        if z.real * z.real + z.imag * z.imag > ESCAPE_RADIUS_SQUARED:
            return i
        z = z * z + c
    return None


@tf.function
def _escape_step(
    i: tf.Tensor,
    counts: tf.Tensor,
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Check the bound and advance every point that has not escaped yet."""

    escaped = tf.logical_and(active, zr * zr + zi * zi > ESCAPE_RADIUS_SQUARED)
    counts = tf.where(escaped, i, counts)
    active = tf.logical_and(active, tf.logical_not(escaped))

    zr_new = zr * zr - zi * zi + cr
    zi_new = zr * zi + zi * zr + ci
    zr = tf.where(active, zr_new, zr)
    zi = tf.where(active, zi_new, zi)
    return counts, zr, zi, active


@tf.function
def _escape_run(cr: tf.Tensor, ci: tf.Tensor, limit: tf.Tensor) -> tf.Tensor:
    """Iterate the escape test using a TensorFlow while loop."""

    limit = tf.cast(limit, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    zr = tf.zeros_like(cr)
    zi = tf.zeros_like(ci)
    counts = tf.fill(tf.shape(cr), limit)
    active = tf.ones_like(cr, tf.bool)

    def cond(i, counts, zr, zi, active):
        return tf.logical_and(tf.less(i, limit), tf.reduce_any(active))

    def body(i, counts, zr, zi, active):
        counts, zr, zi, active = _escape_step(i, counts, zr, zi, cr, ci, active)
        return i + 1, counts, zr, zi, active

    _, counts, _, _, _ = tf.while_loop(cond, body, (i, counts, zr, zi, active))
    return counts


def escape_times(real: np.ndarray, imag: np.ndarray, limit: int, *, device: Optional[str] = None) -> np.ndarray:
    """Evaluate :func:`escape_time` for a grid of points at once.

    ``real`` holds the real parts of the grid columns and ``imag`` the
    imaginary parts of its rows. The result has shape ``(len(imag), len(real))``;
    points that never escaped hold ``limit``.
    """

    with tf.device(device if device is not None else "/CPU:0"):
        real_tf = tf.convert_to_tensor(np.asarray(real, dtype=np.float64), dtype=tf.float64)
        imag_tf = tf.convert_to_tensor(np.asarray(imag, dtype=np.float64), dtype=tf.float64)
        cr, ci = tf.meshgrid(real_tf, imag_tf)
        counts = _escape_run(cr, ci, tf.constant(limit, dtype=tf.int32))

    return counts.numpy()
