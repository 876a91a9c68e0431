#!/usr/bin/env python3
"""Convert an image into an SVG of positioned ASCII glyphs."""

import argparse
import logging
import os
import sys

from PIL import UnidentifiedImageError

from .config import (
    DEFAULT_CELL_WIDTH,
    DEFAULT_COLOR,
    DEFAULT_COVERAGE_THRESHOLD,
    DEFAULT_FONT_SIZE,
    DEFAULT_MAX_COLUMNS,
    ConfigError,
    GridConfig,
)
from .raster import RasterError, open_image
from .sampler import sample_grid

LOG = logging.getLogger(__name__)


# -----------------------------
# Shared CLI plumbing
# -----------------------------


def add_grid_arguments(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("input", help="Input image path (png, jpg, gif, webp)")
    ap.add_argument(
        "-d",
        "--density",
        type=int,
        default=DEFAULT_CELL_WIDTH,
        help="Cell width in px, smaller = more detail",
    )
    ap.add_argument(
        "--cell-height",
        type=int,
        default=None,
        help="Cell height in px (default: density * 1.5)",
    )
    ap.add_argument(
        "-c", "--color", default=DEFAULT_COLOR, help="Fill color for characters"
    )
    ap.add_argument(
        "-w",
        "--max-width",
        type=int,
        default=DEFAULT_MAX_COLUMNS,
        help="Max columns of ASCII output",
    )
    ap.add_argument(
        "-f", "--font-size", type=float, default=DEFAULT_FONT_SIZE, help="Font size in the SVG"
    )
    ap.add_argument(
        "-t",
        "--threshold",
        type=float,
        default=DEFAULT_COVERAGE_THRESHOLD,
        help="Coverage threshold in [0,1]",
    )
    ap.add_argument(
        "--remove-background",
        action="store_true",
        help="Knock out pixels close to the colour sampled from the image border",
    )
    ap.add_argument(
        "--invert",
        action="store_true",
        help="Map light areas to dense characters (light glyphs on a dark page)",
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING)",
    )


def config_from_args(args) -> GridConfig:
    return GridConfig(
        cell_width=args.density,
        cell_height=args.cell_height,
        max_columns=args.max_width,
        font_size=args.font_size,
        coverage_threshold=args.threshold,
        color=args.color,
        remove_background=args.remove_background,
        invert=args.invert,
    )


def setup_logging(level_name: str) -> None:
    numeric_level = getattr(logging, level_name.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    logging.basicConfig(
        stream=sys.stderr, level=numeric_level, format="%(levelname)s: %(message)s"
    )


def stem(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def convert_file(input_path: str, config: GridConfig):
    """Decode and convert; errors surface as (None, message)."""
    try:
        raster = open_image(input_path)
        return sample_grid(raster, config), None
    except FileNotFoundError:
        return None, f"no such file: {input_path}"
    except UnidentifiedImageError:
        return None, f"not a recognised image: {input_path}"
    except (OSError, RasterError) as e:
        return None, str(e)


# -----------------------------
# CLI
# -----------------------------


def main(argv=None):
    ap = argparse.ArgumentParser(
        prog="ascii-motion convert",
        description="Turn any image into an ASCII SVG",
    )
    add_grid_arguments(ap)
    ap.add_argument(
        "-o", "--output", default=None, help="Output SVG path (default: <input-name>.svg)"
    )
    args = ap.parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = config_from_args(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    input_path = os.path.abspath(args.input)
    output_path = os.path.abspath(args.output or stem(input_path) + ".svg")

    print(f"Converting {os.path.basename(input_path)}...")
    print(
        f"  density: {config.cell_width}px  color: {config.color}  "
        f"max-width: {config.max_columns} cols"
    )

    result, err = convert_file(input_path, config)
    if result is None:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(result.svg)

    print(f"  {len(result.glyphs)} characters in {result.grid_cols}x{result.grid_rows} grid")
    print(f"  Saved to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
