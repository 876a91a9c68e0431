"""Character-scramble animation over a fixed glyph layout."""

import logging
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULT_FRAME_COUNT, require_frame_count
from .glyphs import BLANK, ramp_index
from .sampler import AsciiResult, Glyph
from .svg import render_svg

LOG = logging.getLogger(__name__)

SHIFT_PROBABILITY = 0.15


@dataclass(frozen=True)
class Frame:
    glyphs: Tuple[Glyph, ...]
    width: int
    height: int
    svg: str


def perturb_glyphs(
    glyphs: Sequence[Glyph],
    ramp: str,
    rng,
    probability: float = SHIFT_PROBABILITY,
) -> Tuple[Glyph, ...]:
    """
    Nudge some glyphs one step along the ramp.

    Each glyph independently has `probability` of moving -1, 0 or +1 ramp
    positions. A move that would land on the blank is dropped so a glyph never
    disappears. Positions are untouched.
    """
    last = len(ramp) - 1
    out = []
    for g in glyphs:
        if rng.random() < probability:
            idx = ramp_index(g.char, ramp)
            if idx >= 0:
                shifted = min(max(idx + rng.randint(-1, 1), 0), last)
                ch = ramp[shifted]
                if ch != BLANK:
                    g = replace(g, char=ch)
        out.append(g)
    return tuple(out)


def create_animation(
    base: AsciiResult,
    frame_count: int = DEFAULT_FRAME_COUNT,
    font_size: Optional[float] = None,
    color: Optional[str] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    probability: float = SHIFT_PROBABILITY,
) -> List[Frame]:
    """
    Build frame_count frames from one conversion result.

    Frame 0 carries the base glyphs unchanged. Every later frame is derived
    from the base glyphs, never from the frame before it. font_size and color
    default to the values the base was rendered with.
    """
    require_frame_count(frame_count)
    if rng is None:
        rng = random.Random(seed)

    config = base.config
    font_size = config.font_size if font_size is None else font_size
    color = config.color if color is None else color
    width, height = base.svg_width, base.svg_height

    def frame(glyphs):
        return Frame(glyphs, width, height, render_svg(glyphs, width, height, font_size, color))

    frames = [frame(base.glyphs)]
    for i in range(1, frame_count):
        frames.append(frame(perturb_glyphs(base.glyphs, config.ramp, rng, probability)))
        LOG.debug("Frame %d rendered", i)
    return frames
