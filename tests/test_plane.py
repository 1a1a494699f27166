import pytest

from mandelplot.plane import lerp, pixel_to_point, sample_axes


@pytest.mark.parametrize('a, b', [(10.0, 20.0), (-1.5, 0.25), (3.0, -7.0), (0.0, 0.0)])
def test_lerp_endpoints_and_midpoint(a, b):
    assert lerp(a, b, 0.0) == a
    assert lerp(a, b, 1.0) == b
    assert lerp(a, b, 0.5) == (a + b) / 2


def test_pixel_to_point():
    point = pixel_to_point((100, 200), (25, 175), complex(-1.0, 1.0), complex(1.0, -1.0))
    assert point == complex(-0.5, -0.75)


@pytest.mark.parametrize('bounds, upper_left, lower_right', [
    ((1024, 768), complex(-1.20, 0.35), complex(-1.0, 0.20)),
    ((3, 7), complex(0.1, 0.2), complex(0.3, 0.4)),
    ((1, 1), complex(10.0, 10.0), complex(10.0, 10.0)),
])
def test_origin_pixel_maps_to_upper_left(bounds, upper_left, lower_right):
    assert pixel_to_point(bounds, (0, 0), upper_left, lower_right) == upper_left


def test_pixels_outside_the_image_are_extrapolated():
    point = pixel_to_point((10, 10), (20, -10), complex(0.0, 1.0), complex(1.0, 0.0))
    assert point == complex(2.0, 2.0)


def test_sample_axes_matches_scalar_mapping():
    bounds = (13, 9)
    upper_left, lower_right = complex(-2.1, 1.3), complex(0.7, -1.1)
    real, imag = sample_axes(bounds, upper_left, lower_right)

    assert real.shape == (13,)
    assert imag.shape == (9,)
    for y in range(bounds[1]):
        for x in range(bounds[0]):
            assert complex(real[x], imag[y]) == pixel_to_point(bounds, (x, y), upper_left, lower_right)


def test_sample_axes_for_a_band_of_rows():
    bounds = (4, 10)
    upper_left, lower_right = complex(-1.0, 1.0), complex(1.0, -1.0)
    _, imag = sample_axes(bounds, upper_left, lower_right, rows=range(3, 6))

    assert [float(v) for v in imag] == [
        pixel_to_point(bounds, (0, y), upper_left, lower_right).imag for y in range(3, 6)
    ]
