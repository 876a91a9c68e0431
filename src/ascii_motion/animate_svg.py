#!/usr/bin/env python3
"""Write a looping set of scrambled ASCII SVG frames for an image."""

import argparse
import logging
import os
import sys

from .animation import create_animation
from .config import DEFAULT_FRAME_COUNT, ConfigError
from .image_to_svg import add_grid_arguments, config_from_args, convert_file, setup_logging, stem

LOG = logging.getLogger(__name__)


def frame_filename(name: str, index: int) -> str:
    return f"{name}_frame_{index:02d}.svg"


def main(argv=None):
    ap = argparse.ArgumentParser(
        prog="ascii-motion animate",
        description="Render an image as ASCII SVG frames whose characters shimmer in place",
    )
    add_grid_arguments(ap)
    ap.add_argument(
        "-o", "--output-dir", default=".", help="Directory for the frame files"
    )
    ap.add_argument(
        "-n", "--frames", type=int, default=DEFAULT_FRAME_COUNT, help="Number of frames"
    )
    ap.add_argument(
        "--seed", type=int, default=None, help="Seed for repeatable scrambling"
    )
    args = ap.parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = config_from_args(args)
        if args.frames < 1:
            raise ConfigError(f"frame count must be > 0, got {args.frames}")
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    input_path = os.path.abspath(args.input)
    print(f"Animating {os.path.basename(input_path)}...")

    result, err = convert_file(input_path, config)
    if result is None:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    frames = create_animation(result, frame_count=args.frames, seed=args.seed)

    out_dir = os.path.abspath(args.output_dir)
    os.makedirs(out_dir, exist_ok=True)
    name = stem(input_path)
    for i, frame in enumerate(frames):
        path = os.path.join(out_dir, frame_filename(name, i))
        LOG.debug("Writing %s", path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(frame.svg)

    print(f"  {len(result.glyphs)} characters in {result.grid_cols}x{result.grid_rows} grid")
    print(f"  {len(frames)} frames saved to {out_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
