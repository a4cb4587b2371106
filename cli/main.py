"""CLI entry point for hole filling."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import platform
import sys

import numpy as np
from holefill.config import ConfigError, FillConfig
from holefill.fill import DegenerateBoundaryError, fill_image
from holefill.hole import ImageWithHole, boundary_mask
from holefill.io import (
    filled_output_path,
    merge_mask,
    read_grayscale,
    to_u8,
    write_json,
    write_png_u8,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fill masked holes in a grayscale image by weighted interpolation")
    parser.add_argument("image", help="Path to the grayscale source image")
    parser.add_argument("mask", help="Path to the mask image (black marks the hole)")
    parser.add_argument("z", type=float, help="Distance exponent of the weight kernel")
    parser.add_argument("epsilon", type=float, help="Weight kernel stability offset (> 0)")
    parser.add_argument("connectivity", type=int, help="Boundary connectivity: 4 or 8")
    parser.add_argument("--out", default=None, help="Output path (default: <image>_filled.<ext>)")
    parser.add_argument(
        "--json",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Write a metadata JSON file next to the output",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = FillConfig(z=args.z, epsilon=args.epsilon, connectivity=args.connectivity)
    except ConfigError as exc:
        parser.error(str(exc))

    merged = merge_mask(read_grayscale(args.image), read_grayscale(args.mask))
    image = ImageWithHole.from_sentinel(merged)

    try:
        result = fill_image(image, config)
    except DegenerateBoundaryError as exc:
        print(f"Cannot fill hole: {exc}", file=sys.stderr)
        return 1

    if result is None:
        print("No hole pixels found; nothing written.")
        return 0

    out_path = Path(args.out) if args.out else filled_output_path(args.image)
    write_png_u8(out_path, to_u8(result.filled))

    unique_boundary = int(boundary_mask(image, config.connectivity).sum())
    if args.json:
        meta = {
            "image": str(args.image),
            "mask": str(args.mask),
            "output": str(out_path),
            "width": image.shape[1],
            "height": image.shape[0],
            "config": config.to_dict(),
            "hole_pixels": len(result.hole),
            "boundary_points": len(result.boundary),
            "boundary_pixels_unique": unique_boundary,
            "fill_seconds": result.seconds,
            "python_version": platform.python_version(),
            "numpy_version": np.__version__,
        }
        write_json(out_path.with_suffix(".json"), meta)

    print(f"Filled image: {out_path}")
    print(
        f"Hole pixels {len(result.hole)}; "
        f"boundary points {len(result.boundary)} ({unique_boundary} unique, {config.connectivity}-connectivity)"
    )
    print(f"Fill time: {result.seconds:.3f} s ({image.shape[1]}x{image.shape[0]})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
