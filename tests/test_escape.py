import numpy as np
import pytest

from mandelplot.escape import escape_time, escape_times
from mandelplot.plane import sample_axes


@pytest.mark.parametrize('limit', [1, 2, 10, 255, 1000])
def test_origin_never_escapes(limit):
    assert escape_time(complex(0.0, 0.0), limit) is None


@pytest.mark.parametrize('c', [complex(-1.0, 0.0), complex(-0.1, 0.1), complex(0.25, 0.0)])
def test_points_in_the_set_never_escape(c):
    assert escape_time(c, 255) is None


def test_diverging_point_escapes_before_the_limit():
    count = escape_time(complex(2.0, 2.0), 255)
    assert count is not None
    assert 0 < count < 255


def test_bound_is_checked_before_update():
    # z starts at 0, so the first check always passes and the point escapes
    # on the second check at the earliest.
    assert escape_time(complex(10.0, 10.0), 255) == 1
    assert escape_time(complex(10.0, 10.0), 2) == 1
    assert escape_time(complex(10.0, 10.0), 1) is None


def test_point_on_the_escape_circle_does_not_escape_immediately():
    # |z|^2 == 4 is not beyond the bound.
    assert escape_time(complex(2.0, 0.0), 255) == 2
    assert escape_time(complex(-2.0, 0.0), 255) is None


def test_zero_limit_never_escapes():
    assert escape_time(complex(10.0, 10.0), 0) is None


def test_escape_times_matches_scalar_evaluation():
    bounds = (24, 16)
    upper_left, lower_right = complex(-2.2, 1.2), complex(0.8, -1.2)
    real, imag = sample_axes(bounds, upper_left, lower_right)

    counts = escape_times(real, imag, 255)

    assert counts.shape == (16, 24)
    for y in range(bounds[1]):
        for x in range(bounds[0]):
            expected = escape_time(complex(real[x], imag[y]), 255)
            assert counts[y, x] == (255 if expected is None else expected)


def test_escape_times_marks_members_with_the_limit():
    counts = escape_times(np.array([0.0, 10.0]), np.array([0.0]), 50)
    assert counts.tolist() == [[50, 1]]
