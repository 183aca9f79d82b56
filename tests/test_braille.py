"""Tests for Braille packing."""

import numpy as np
import pytest

from img2ascii.raster import Raster
from img2ascii.render.braille import BRAILLE_BASE, DOT_BITS, braille_cell, grid_size, render_braille


def test_single_cell():
    assert render_braille(Raster.create(2, 3, 1)) == "\u283f\n"
    assert render_braille(Raster.create(2, 3, 0)) == "\u2800\n"


@pytest.mark.parametrize("bit", range(6))
def test_dot_weights(bit):
    r = Raster.create(2, 3)
    dx, dy = DOT_BITS[bit]
    r.set(dx, dy, 1)
    assert render_braille(r) == chr(BRAILLE_BASE + (1 << bit)) + "\n"


def test_dot_layout():
    assert DOT_BITS == ((0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2))


def test_one_pixel_raster_has_no_cells():
    assert render_braille(Raster.create(1, 1, 1)) == ""


def test_narrow_raster_emits_only_newlines():
    assert render_braille(Raster.create(1, 3, 1)) == "\n"
    assert render_braille(Raster.create(1, 7, 1)) == "\n\n"


def test_short_raster_emits_nothing():
    assert render_braille(Raster.create(10, 2, 1)) == ""
    assert render_braille(Raster.create(0, 0)) == ""


def test_white_six_by_six_bytes():
    out = render_braille(Raster.create(6, 6, 1)).encode("utf-8")
    assert out == b"\xe2\xa0\xbf\xe2\xa0\xbf\xe2\xa0\xbf\n" * 2


def test_black_six_by_six_bytes():
    out = render_braille(Raster.create(6, 6, 0)).encode("utf-8")
    assert out == b"\xe2\xa0\x80\xe2\xa0\x80\xe2\xa0\x80\n" * 2


@pytest.mark.parametrize(
    "width,height,expected",
    [(2, 3, (1, 1)), (3, 3, (1, 1)), (4, 3, (2, 1)), (5, 5, (2, 1)), (6, 6, (3, 2)), (7, 9, (3, 3)), (1, 1, (0, 0))],
)
def test_grid_size(width, height, expected):
    assert grid_size(width, height) == expected


def test_partial_cells_are_dropped():
    out = render_braille(Raster.create(5, 7, 1))
    lines = out.split("\n")
    assert lines[-1] == ""
    assert lines[:-1] == ["\u283f\u283f", "\u283f\u283f"]


def test_vectorized_output_matches_cell_packing():
    rng = np.random.default_rng(11)
    r = Raster.from_array(rng.integers(0, 2, (9, 8)))
    cells, lines = grid_size(r.width, r.height)
    expected = "".join(
        "".join(braille_cell(r, x, y) for x in range(0, 2 * cells, 2)) + "\n" for y in range(0, 3 * lines, 3)
    )
    assert render_braille(r) == expected


def test_requires_binary_raster():
    with pytest.raises(ValueError):
        render_braille(Raster.create(2, 3, 7))


def test_output_has_no_spaces():
    rng = np.random.default_rng(5)
    out = render_braille(Raster.from_array(rng.integers(0, 2, (12, 12))))
    assert " " not in out
    assert all(BRAILLE_BASE <= ord(c) <= BRAILLE_BASE + 0x3F for c in out if c != "\n")
