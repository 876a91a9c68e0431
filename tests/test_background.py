"""Tests for background estimation and suppression."""

import numpy as np
import pytest
from ascii_motion.background import (
    FALLBACK_COLOR,
    NEUTRAL_BRIGHTNESS,
    BackgroundEstimate,
    border_band,
    estimate_background,
    estimate_brightness,
    estimate_color,
    luminance,
    suppress_background,
)
from ascii_motion.config import GridConfig


def solid(w, h, rgb, alpha=255):
    px = np.empty((h, w, 4), dtype=np.uint8)
    px[..., :3] = rgb
    px[..., 3] = alpha
    return px


class TestLuminance:
    def test_extremes_are_exact(self):
        px = np.stack([solid(1, 1, (255, 255, 255)), solid(1, 1, (0, 0, 0))])
        lum = luminance(px)
        assert lum[0, 0, 0] == 255.0
        assert lum[1, 0, 0] == 0.0

    def test_weights(self):
        assert luminance(solid(1, 1, (255, 0, 0)))[0, 0] == pytest.approx(0.299 * 255)
        assert luminance(solid(1, 1, (0, 255, 0)))[0, 0] == pytest.approx(0.587 * 255)
        assert luminance(solid(1, 1, (0, 0, 255)))[0, 0] == pytest.approx(0.114 * 255)

    def test_alpha_is_ignored(self):
        assert luminance(solid(1, 1, (40, 80, 120), alpha=0))[0, 0] == pytest.approx(
            0.299 * 40 + 0.587 * 80 + 0.114 * 120
        )


class TestEstimateBrightness:
    def test_uniform(self):
        assert estimate_brightness(solid(60, 90, (100, 100, 100)), 6, 9) == pytest.approx(100.0)

    def test_corner_cells_only(self):
        px = solid(60, 90, (255, 255, 255))
        px[20:70, 20:40, :3] = 0  # interior shape never sampled
        assert estimate_brightness(px, 6, 9) == 255.0

    def test_one_dark_corner(self):
        px = solid(12, 18, (255, 255, 255))
        px[0:9, 0:6, :3] = 0
        # three white corner cells, one black
        assert estimate_brightness(px, 6, 9) == pytest.approx(191.25)

    def test_image_smaller_than_a_cell(self):
        assert estimate_brightness(solid(4, 4, (50, 50, 50)), 6, 9) == pytest.approx(50.0)

    def test_empty_image_falls_back(self):
        px = np.zeros((0, 0, 4), dtype=np.uint8)
        assert estimate_brightness(px, 6, 9) == NEUTRAL_BRIGHTNESS == 128.0


class TestEstimateColor:
    @pytest.mark.parametrize(
        "size,expected", [((100, 100), 8), ((400, 300), 15), ((1000, 2000), 50), ((3, 3), 8)]
    )
    def test_border_band(self, size, expected):
        assert border_band(*size) == expected

    def test_border_colour_wins_over_interior(self):
        px = solid(40, 40, (200, 10, 10))
        px[8:32, 8:32, :3] = (0, 0, 255)
        assert estimate_color(px) == (200, 10, 10)

    def test_transparent_pixels_skipped(self):
        px = solid(40, 40, (0, 0, 255))
        px[:, :20] = (0, 255, 0, 0)
        assert estimate_color(px) == (0, 0, 255)

    def test_alpha_128_counts(self):
        px = solid(20, 20, (9, 9, 9), alpha=128)
        assert estimate_color(px) == (9, 9, 9)

    def test_all_transparent_falls_back_to_white(self):
        assert estimate_color(solid(40, 40, (0, 0, 0), alpha=0)) == FALLBACK_COLOR == (255, 255, 255)

    def test_mean_rounds_half_up(self):
        px = solid(40, 40, (10, 0, 0))
        px[1::2, :, 0] = 11
        assert estimate_color(px) == (11, 0, 0)

    def test_small_image_is_all_border(self):
        px = solid(10, 10, (30, 60, 90))
        assert estimate_color(px) == (30, 60, 90)


class TestSuppressBackground:
    def test_threshold_is_strict(self):
        px = np.array(
            [[[255, 255, 255, 255], [255, 255, 205, 255]],
             [[255, 255, 206, 255], [0, 0, 0, 255]]],
            dtype=np.uint8,
        )
        out = suppress_background(px, (255, 255, 255), 50)
        assert out[..., 3].tolist() == [[0, 255], [0, 255]]

    def test_returns_copy(self):
        px = solid(4, 4, (255, 255, 255))
        out = suppress_background(px, (255, 255, 255), 50)
        assert (out[..., 3] == 0).all()
        assert (px[..., 3] == 255).all()
        assert (out[..., :3] == px[..., :3]).all()


class TestEstimateBackground:
    def test_colour_only_when_removing(self):
        px = solid(30, 30, (10, 20, 30))
        plain = estimate_background(px, GridConfig())
        removing = estimate_background(px, GridConfig(remove_background=True))

        assert plain.color is None
        assert isinstance(plain, BackgroundEstimate)
        assert removing.color == (10, 20, 30)
        assert removing.brightness == pytest.approx(plain.brightness)
