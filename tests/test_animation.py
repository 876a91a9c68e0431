"""Tests for the character-scramble animation."""

import random

import numpy as np
import pytest
from ascii_motion.animation import Frame, create_animation, perturb_glyphs
from ascii_motion.config import ConfigError, GridConfig
from ascii_motion.glyphs import ASCII_RAMP, BLANK, ramp_index
from ascii_motion.raster import Raster
from ascii_motion.sampler import AsciiResult, Glyph, sample_grid


class FixedRng:
    """Stand-in rng: always below the shift probability, always the same step."""

    def __init__(self, step, roll=0.0):
        self.step = step
        self.roll = roll

    def random(self):
        return self.roll

    def randint(self, a, b):
        assert (a, b) == (-1, 1)
        return self.step


# --- Fixtures ---


@pytest.fixture
def base():
    rng = np.random.default_rng(3)
    px = rng.integers(0, 256, size=(90, 120, 4), dtype=np.uint8)
    px[..., 3] = 255
    result = sample_grid(Raster(px))
    assert len(result.glyphs) > 50
    return result


@pytest.fixture
def tiny():
    glyphs = (
        Glyph("@", 0, 9, 0.0),
        Glyph(".", 6, 9, 250.0),
        Glyph("o", 0, 18, 60.0),
    )
    return AsciiResult(glyphs=glyphs, grid_cols=2, grid_rows=2, config=GridConfig(), svg="")


def chars(frame):
    return [g.char for g in frame.glyphs]


# --- Tests ---


class TestCreateAnimation:
    def test_default_frame_count(self, base):
        frames = create_animation(base, seed=1)
        assert len(frames) == 8
        assert all(isinstance(f, Frame) for f in frames)

    def test_first_frame_is_the_base(self, base):
        frames = create_animation(base, frame_count=4, seed=1)
        assert frames[0].glyphs == base.glyphs
        assert frames[0].svg == base.svg
        assert (frames[0].width, frames[0].height) == (base.svg_width, base.svg_height)

    def test_positions_and_count_are_stable(self, base):
        expected = [(g.x, g.y) for g in base.glyphs]
        for frame in create_animation(base, frame_count=12, seed=5):
            assert [(g.x, g.y) for g in frame.glyphs] == expected
            assert frame.svg.count("<text ") == len(base.glyphs)
            assert (frame.width, frame.height) == (base.svg_width, base.svg_height)

    def test_characters_move_at_most_one_step(self, base):
        frames = create_animation(base, frame_count=12, rng=random.Random(11))
        for frame in frames[1:]:
            for before, after in zip(base.glyphs, frame.glyphs):
                assert after.char != BLANK
                assert abs(ramp_index(after.char) - ramp_index(before.char)) <= 1
                assert after.brightness == before.brightness

    def test_some_characters_change(self, base):
        frames = create_animation(base, frame_count=8, seed=2)
        changed = sum(
            a.char != b.char for f in frames[1:] for a, b in zip(base.glyphs, f.glyphs)
        )
        assert changed > 0

    def test_seed_is_repeatable(self, base):
        a = create_animation(base, seed=99)
        b = create_animation(base, seed=99)
        assert [f.svg for f in a] == [f.svg for f in b]

    def test_frames_do_not_drift(self, tiny):
        frames = create_animation(tiny, frame_count=5, rng=FixedRng(+1))
        for frame in frames[1:]:
            assert chars(frame) == ["#", ".", "a"]

    def test_shift_clamps_at_dense_end(self, tiny):
        frames = create_animation(tiny, frame_count=2, rng=FixedRng(-1))
        assert chars(frames[1]) == ["@", "`", "*"]

    def test_never_shifts_to_blank(self, tiny):
        frames = create_animation(tiny, frame_count=2, rng=FixedRng(+1))
        assert frames[1].glyphs[1].char == "."
        assert ASCII_RAMP[ramp_index(".") + 1] == BLANK

    def test_no_shift_above_probability(self, tiny):
        frames = create_animation(tiny, frame_count=3, rng=FixedRng(+1, roll=0.15))
        for frame in frames:
            assert frame.glyphs == tiny.glyphs

    def test_style_overrides(self, base):
        frames = create_animation(base, frame_count=3, font_size=12, color="#00ff00", seed=0)
        for frame in frames:
            assert "font-size: 12px; fill: #00ff00;" in frame.svg
        assert frames[0].glyphs == base.glyphs

    def test_style_defaults_follow_base(self, base):
        frames = create_animation(base, frame_count=2, seed=0)
        assert "font-size: 8px; fill: #d4d4d4;" in frames[1].svg

    def test_single_frame(self, base):
        frames = create_animation(base, frame_count=1)
        assert len(frames) == 1
        assert frames[0].glyphs == base.glyphs

    @pytest.mark.parametrize("count", [0, -3])
    def test_bad_frame_count(self, base, count):
        with pytest.raises(ConfigError):
            create_animation(base, frame_count=count)


class TestPerturbGlyphs:
    def test_unknown_characters_untouched(self):
        glyphs = (Glyph("é", 0, 9, 10.0),)
        assert perturb_glyphs(glyphs, ASCII_RAMP, FixedRng(+1)) == glyphs

    def test_custom_ramp(self):
        glyphs = (Glyph("a", 0, 9, 10.0), Glyph("b", 6, 9, 10.0))
        out = perturb_glyphs(glyphs, "abc ", FixedRng(+1))
        assert [g.char for g in out] == ["b", "c"]

    def test_probability_zero(self):
        glyphs = (Glyph("@", 0, 9, 0.0),)
        assert perturb_glyphs(glyphs, ASCII_RAMP, random.Random(0), probability=0.0) == glyphs
