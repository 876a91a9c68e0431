"""Decoded RGBA rasters and the adapters that acquire them."""

import logging
import os
from dataclasses import dataclass

import numpy as np
from PIL import Image

LOG = logging.getLogger(__name__)


class RasterError(ValueError):
    """Raised when a pixel buffer does not describe a valid RGBA raster."""


# -----------------------------
# Raster
# -----------------------------


@dataclass(frozen=True)
class Raster:
    """Row-major RGBA pixels, shape (height, width, 4), uint8."""

    pixels: np.ndarray

    def __post_init__(self):
        px = self.pixels
        if not isinstance(px, np.ndarray):
            raise RasterError(f"pixels must be a numpy array, got {type(px).__name__}")
        if px.ndim != 3 or px.shape[2] != 4:
            raise RasterError(f"pixels must have shape (height, width, 4), got {px.shape}")
        if px.dtype != np.uint8:
            raise RasterError(f"pixels must be uint8, got {px.dtype}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @classmethod
    def from_bytes(cls, width: int, height: int, data) -> "Raster":
        """Wrap a flat RGBA buffer (4 bytes per pixel, row-major)."""
        if width < 0 or height < 0:
            raise RasterError(f"invalid raster size {width}x{height}")
        buf = np.frombuffer(bytes(data), dtype=np.uint8)
        expected = width * height * 4
        if buf.size != expected:
            raise RasterError(
                f"buffer holds {buf.size} bytes, expected {expected} for {width}x{height} RGBA"
            )
        return cls(buf.reshape(height, width, 4))

    @classmethod
    def from_image(cls, img: Image.Image) -> "Raster":
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return cls(np.asarray(img, dtype=np.uint8))

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self.pixels))

    def resized(self, width: int, height: int) -> "Raster":
        """Resample to width x height (LANCZOS, like the colorizer)."""
        if (width, height) == self.size:
            return self
        img = self.to_image().resize((width, height), resample=Image.Resampling.LANCZOS)
        return Raster.from_image(img)


# -----------------------------
# Acquisition
# -----------------------------


def open_image(path) -> Raster:
    """Decode an image file with Pillow into an RGBA raster."""
    LOG.debug("Opening image %s", path)
    with Image.open(path) as img:
        img.load()
        raster = Raster.from_image(img)
    LOG.debug("Decoded %dx%d raster", raster.width, raster.height)
    return raster


def load_raster(source) -> Raster:
    """Accept a Raster, a PIL image or a filesystem path."""
    if isinstance(source, Raster):
        return source
    if isinstance(source, Image.Image):
        return Raster.from_image(source)
    if isinstance(source, (str, bytes, os.PathLike)):
        return open_image(source)
    raise TypeError(f"cannot load a raster from {type(source).__name__}")
