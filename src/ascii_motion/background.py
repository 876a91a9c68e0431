"""
Background estimation.

Two estimates are taken from the same buffer. The corner-cell brightness is
what per-pixel coverage is measured against; the border-band colour is only
needed when background pixels are to be knocked out before sampling.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

LOG = logging.getLogger(__name__)

NEUTRAL_BRIGHTNESS = 128.0
FALLBACK_COLOR = (255, 255, 255)

# Rec. 601 weights, scaled to integers so a white pixel is exactly 255.0
_LUMA_WEIGHTS = np.array([299, 587, 114], dtype=np.int64)

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class BackgroundEstimate:
    brightness: float
    color: Optional[RGB] = None


def luminance(pixels: np.ndarray) -> np.ndarray:
    """Per-pixel 0.299R + 0.587G + 0.114B for an (..., 4) RGBA array."""
    rgb = pixels[..., :3].astype(np.int64)
    return (rgb @ _LUMA_WEIGHTS) / 1000.0


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def estimate_brightness(pixels: np.ndarray, cell_width: int, cell_height: int) -> float:
    """Average luminance over the four corner cells, clipped to the image."""
    h, w = pixels.shape[:2]
    corners = (
        (0, 0),
        (w - cell_width, 0),
        (0, h - cell_height),
        (w - cell_width, h - cell_height),
    )

    total = 0.0
    count = 0
    for x0, y0 in corners:
        patch = pixels[max(y0, 0) : min(y0 + cell_height, h), max(x0, 0) : min(x0 + cell_width, w)]
        if patch.size == 0:
            continue
        lum = luminance(patch)
        total += float(lum.sum())
        count += lum.size

    if count == 0:
        LOG.debug("No corner pixels sampled; using neutral brightness")
        return NEUTRAL_BRIGHTNESS
    return total / count


def border_band(width: int, height: int) -> int:
    return max(8, int(min(width, height) * 0.05))


def estimate_color(pixels: np.ndarray) -> RGB:
    """Mean RGB of the opaque pixels in a band around the image edges."""
    h, w = pixels.shape[:2]
    band = border_band(w, h)

    edge = np.ones((h, w), dtype=bool)
    edge[band : h - band, band : w - band] = False
    mask = edge & (pixels[..., 3] >= 128)

    count = int(mask.sum())
    if count == 0:
        LOG.debug("No opaque border pixels; assuming white background")
        return FALLBACK_COLOR

    sums = pixels[mask][:, :3].astype(np.int64).sum(axis=0)
    r, g, b = (_round_half_up(s / count) for s in sums)
    return r, g, b


def suppress_background(pixels: np.ndarray, color: RGB, threshold: float = 50.0) -> np.ndarray:
    """Copy of pixels with alpha zeroed wherever RGB is within threshold of color."""
    out = pixels.copy()
    diff = out[..., :3].astype(np.int64) - np.asarray(color, dtype=np.int64)
    dist = np.sqrt((diff * diff).sum(axis=-1))
    knocked = dist < threshold
    out[..., 3][knocked] = 0
    LOG.debug("Background removal cleared %d of %d pixels", int(knocked.sum()), knocked.size)
    return out


def estimate_background(pixels: np.ndarray, config) -> BackgroundEstimate:
    brightness = estimate_brightness(pixels, config.cell_width, config.cell_height)
    color = estimate_color(pixels) if config.remove_background else None
    LOG.debug("Background estimate: brightness=%.2f color=%s", brightness, color)
    return BackgroundEstimate(brightness=brightness, color=color)
