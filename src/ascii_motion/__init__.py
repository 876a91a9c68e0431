"""ASCII Motion - Turn images into animated ASCII SVGs."""

__version__ = "0.1.0"

"""
The CLI entry points are exposed as lazy wrappers: importing the command
modules here would make `runpy` warn when one of them is executed with `-m`,
since it would already sit in `sys.modules`. The conversion API itself is safe
to import eagerly.
"""

from .animation import Frame, create_animation
from .background import BackgroundEstimate
from .config import ConfigError, GridConfig
from .glyphs import ASCII_RAMP, char_for_brightness
from .raster import Raster, RasterError, load_raster, open_image
from .sampler import AsciiResult, Glyph, image_to_ascii_svg, sample_grid


def convert_main(*args, **kwargs):
    from .image_to_svg import main as _m

    return _m(*args, **kwargs)


def animate_main(*args, **kwargs):
    from .animate_svg import main as _m

    return _m(*args, **kwargs)


__all__ = [
    "ASCII_RAMP",
    "AsciiResult",
    "BackgroundEstimate",
    "ConfigError",
    "Frame",
    "Glyph",
    "GridConfig",
    "Raster",
    "RasterError",
    "animate_main",
    "char_for_brightness",
    "convert_main",
    "create_animation",
    "image_to_ascii_svg",
    "load_raster",
    "open_image",
    "sample_grid",
]
