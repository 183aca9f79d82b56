"""Tests for the Sobel edge detector."""

import math

import numpy as np
import pytest

from img2ascii.raster import Raster
from img2ascii.render.sobel import (
    SOBEL_X,
    SOBEL_Y,
    convolve,
    decode_direction,
    encode_direction,
    sobel_edges,
)

from tests.conftest import raster_of


@pytest.mark.parametrize("fill", [0, 1, 77, 200, 255])
def test_constant_raster_has_no_edges(fill):
    edges = sobel_edges(Raster.create(9, 7, fill))
    assert edges.width == 9
    assert edges.height == 7
    assert not edges.pixels.any()


def test_out_of_range_neighbours_use_centre_coordinate():
    r = raster_of([[0, 100, 200]])
    assert convolve(r, SOBEL_X).tolist() == [[400, 800, 400]]
    assert convolve(r, SOBEL_Y).tolist() == [[0, 0, 0]]


def test_vertical_clamping():
    r = raster_of([[0], [100], [200]])
    assert convolve(r, SOBEL_Y).tolist() == [[400], [800], [400]]


def test_single_pixel_raster():
    assert convolve(raster_of([[255]]), SOBEL_X).tolist() == [[0]]
    assert sobel_edges(raster_of([[255]])).pixels.tolist() == [[0]]


def test_empty_raster():
    edges = sobel_edges(Raster.create(0, 0))
    assert edges.size == 0


def test_magnitude_equal_to_threshold_is_not_an_edge():
    r = raster_of([[0, 15, 30]])
    assert sobel_edges(r).pixels.tolist() == [[0, 0, 0]]
    assert sobel_edges(r, threshold=119.0).pixels.tolist() == [[0, 1, 0]]


def test_vertical_step_points_along_x():
    r = Raster.from_array(np.array([[0, 0, 255, 255]] * 4))
    edges = sobel_edges(r)
    assert edges.pixels[:, 1:3].tolist() == [[1, 1]] * 4


def test_horizontal_step_points_along_y():
    r = Raster.from_array(np.array([[0] * 4, [0] * 4, [255] * 4, [255] * 4]))
    edges = sobel_edges(r)
    codes = edges.pixels[1:3, :]
    assert codes.all()
    theta = decode_direction(codes)
    assert np.allclose(theta, math.pi / 2, atol=2 * math.pi / 254)


def test_ramp_marks_every_pixel_as_horizontal_gradient():
    r = Raster.from_array(np.array([[0, 85, 170, 255]] * 4))
    assert sobel_edges(r).pixels.tolist() == [[1, 1, 1, 1]] * 4


def test_edge_map_is_new_raster():
    r = Raster.from_array(np.array([[0, 0, 255, 255]] * 3))
    before = r.pixels.copy()
    edges = sobel_edges(r)
    assert edges is not r
    assert np.array_equal(r.pixels, before)


def test_encode_direction_range():
    theta = np.array([0.0, math.pi, 2 * math.pi - 1e-9])
    assert encode_direction(theta).tolist() == [1, 128, 255]


def test_direction_round_trip_within_one_step():
    theta = np.linspace(0, 2 * math.pi, 50, endpoint=False)
    decoded = decode_direction(encode_direction(theta))
    assert np.all(np.abs(decoded - theta) <= math.pi / 254 + 1e-12)
