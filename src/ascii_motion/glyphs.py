"""
Brightness-to-character mapping.

The ramp runs from the visually densest glyph to a single trailing blank.
With DARK_IS_DENSE the darkest cells (luminance 0) land on '@' and pure white
lands on the blank, which the sampler then drops. ``invert=True`` flips the
lookup so light areas get the dense glyphs, which reads better when light
glyphs are drawn on a dark page.
"""

import math

# 68 characters, densest first, blank last.
ASCII_RAMP = '@#%&$8BWM*oahkbdpqwmZO0QLCJUYXzcvunxrjft/|()1{}[]?-_+~<>i!lI;:,"^`. '

BLANK = " "

DARK_IS_DENSE = True


def brightness_to_index(brightness: float, ramp_length: int = len(ASCII_RAMP), invert: bool = False) -> int:
    """Quantize a 0..255 luminance to a ramp index in [0, ramp_length - 1]."""
    level = min(255.0, max(0.0, float(brightness)))
    # ramp index 0 is the densest glyph, so dark-is-dense indexes by luminance as-is
    if invert == DARK_IS_DENSE:
        level = 255.0 - level
    idx = math.floor(level / 255.0 * (ramp_length - 1))
    return min(max(idx, 0), ramp_length - 1)


def char_for_brightness(brightness: float, ramp: str = ASCII_RAMP, invert: bool = False) -> str:
    return ramp[brightness_to_index(brightness, len(ramp), invert=invert)]


def ramp_index(ch: str, ramp: str = ASCII_RAMP) -> int:
    """Position of ch in the ramp, or -1."""
    if not ch:
        return -1
    return ramp.find(ch)
