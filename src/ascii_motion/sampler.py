"""Image to positioned-glyph grid."""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from .background import BackgroundEstimate, estimate_background, luminance, suppress_background
from .config import GridConfig
from .glyphs import BLANK, char_for_brightness
from .raster import Raster, load_raster
from .svg import render_svg

LOG = logging.getLogger(__name__)


# -----------------------------
# Data model
# -----------------------------


@dataclass(frozen=True)
class Cell:
    col: int
    row: int
    x: int
    y: int
    luminance: float
    coverage: float


@dataclass(frozen=True)
class Glyph:
    char: str
    x: int
    y: int  # baseline: bottom edge of the cell
    brightness: float


@dataclass(frozen=True)
class AsciiResult:
    glyphs: Tuple[Glyph, ...]
    grid_cols: int
    grid_rows: int
    config: GridConfig
    svg: str

    @property
    def cell_width(self) -> int:
        return self.config.cell_width

    @property
    def cell_height(self) -> int:
        return self.config.cell_height

    @property
    def svg_width(self) -> int:
        return self.grid_cols * self.cell_width

    @property
    def svg_height(self) -> int:
        return self.grid_rows * self.cell_height

    @property
    def cell_count(self) -> int:
        return self.grid_cols * self.grid_rows


# -----------------------------
# Grid walk
# -----------------------------


def fit_to_columns(raster: Raster, cell_width: int, max_columns: int) -> Raster:
    """Uniformly shrink the raster so it yields at most max_columns cells across."""
    cols = raster.width // cell_width
    if cols <= max_columns:
        return raster
    # floor(dim * max_columns / cols) without float drift
    width = raster.width * max_columns // cols
    height = max(1, raster.height * max_columns // cols)
    LOG.debug("Scaling %dx%d -> %dx%d (%d columns > %d)",
              raster.width, raster.height, width, height, cols, max_columns)
    return raster.resized(width, height)


def grid_shape(width: int, height: int, cell_width: int, cell_height: int) -> Tuple[int, int]:
    return width // cell_width, height // cell_height


def cell_statistics(pixels: np.ndarray, config: GridConfig, bg_brightness: float):
    """
    Per-cell mean luminance and coverage ratio, each shaped (rows, cols).

    A pixel is covered when it is opaque enough (alpha > 128) and its
    luminance differs from the background by more than the delta threshold.
    Pixels beyond the last whole cell on the right and bottom are ignored.
    """
    cw, ch = config.cell_width, config.cell_height
    h, w = pixels.shape[:2]
    cols, rows = grid_shape(w, h, cw, ch)

    block = pixels[: rows * ch, : cols * cw]
    lum = luminance(block)
    covered = (block[..., 3] > 128) & (np.abs(lum - bg_brightness) > config.brightness_delta_threshold)

    per_cell = float(cw * ch)
    lum_mean = lum.reshape(rows, ch, cols, cw).sum(axis=(1, 3)) / per_cell
    coverage = covered.reshape(rows, ch, cols, cw).sum(axis=(1, 3)) / per_cell
    return lum_mean, coverage


def iter_cells(pixels: np.ndarray, config: GridConfig, bg_brightness: float) -> Iterator[Cell]:
    """Yield every whole cell in row-major order."""
    lum_mean, coverage = cell_statistics(pixels, config, bg_brightness)
    rows, cols = coverage.shape
    for row in range(rows):
        for col in range(cols):
            yield Cell(
                col=col,
                row=row,
                x=col * config.cell_width,
                y=row * config.cell_height,
                luminance=float(lum_mean[row, col]),
                coverage=float(coverage[row, col]),
            )


def cell_to_glyph(cell: Cell, config: GridConfig) -> Optional[Glyph]:
    if cell.coverage < config.coverage_threshold:
        return None
    ch = char_for_brightness(cell.luminance, config.ramp, invert=config.invert)
    if ch == BLANK:
        return None
    return Glyph(char=ch, x=cell.x, y=cell.y + config.cell_height, brightness=cell.luminance)


def sample_grid(
    source,
    config: Optional[GridConfig] = None,
    background: Optional[BackgroundEstimate] = None,
) -> AsciiResult:
    """
    Convert an image into positioned glyphs and their SVG rendering.

    Args:
        source: Raster, PIL image or image path
        config: grid options (defaults when omitted)
        background: precomputed estimate; replaces the corner/border sampling

    Returns:
        AsciiResult with glyphs in row-major scan order
    """
    config = config or GridConfig()
    raster = fit_to_columns(load_raster(source), config.cell_width, config.max_columns)
    pixels = raster.pixels

    if background is None:
        background = estimate_background(pixels, config)
    if config.remove_background:
        if background.color is None:
            raise ValueError("remove_background needs a background colour estimate")
        pixels = suppress_background(pixels, background.color, config.background_distance_threshold)

    cols, rows = grid_shape(raster.width, raster.height, config.cell_width, config.cell_height)
    LOG.debug("Grid %dx%d cells of %dx%d px", cols, rows, config.cell_width, config.cell_height)

    glyphs = []
    for cell in iter_cells(pixels, config, background.brightness):
        glyph = cell_to_glyph(cell, config)
        if glyph is not None:
            glyphs.append(glyph)

    LOG.info("Placed %d glyphs in %dx%d grid", len(glyphs), cols, rows)
    svg = render_svg(
        glyphs,
        cols * config.cell_width,
        rows * config.cell_height,
        font_size=config.font_size,
        color=config.color,
    )
    return AsciiResult(glyphs=tuple(glyphs), grid_cols=cols, grid_rows=rows, config=config, svg=svg)


image_to_ascii_svg = sample_grid
