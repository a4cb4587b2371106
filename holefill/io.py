"""Raster loading, mask merging, and output serialization."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from holefill.config import FILLED_SUFFIX

U8_SCALE = 255.0


def read_grayscale(path: str | Path) -> np.ndarray:
    """Load an image as a float32 grayscale raster in [0, 1]."""

    with Image.open(Path(path)) as image:
        pixels = np.asarray(image.convert("L"), dtype=np.float32)
    return pixels / np.float32(U8_SCALE)


def merge_mask(image: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """Mark pixels where `mask` is zero as missing (-1).

    Only the region covered by both rasters is merged; the rest of `image`
    is copied unchanged.
    """

    if image.ndim != 2 or mask.ndim != 2:
        raise ValueError("image and mask must be 2D arrays")

    merged = image.astype(np.float32, copy=True)
    rows = min(image.shape[0], mask.shape[0])
    cols = min(image.shape[1], mask.shape[1])
    region = merged[:rows, :cols]
    merged[:rows, :cols] = (region + 1.0) * mask[:rows, :cols].astype(np.float32) - 1.0
    return merged


def filled_output_path(image_path: str | Path, suffix: str = FILLED_SUFFIX) -> Path:
    """`dir/photo.png` -> `dir/photo_filled.png`."""

    path = Path(image_path)
    return path.with_name(f"{path.stem}{suffix}{path.suffix}")


def to_u8(raster: np.ndarray) -> np.ndarray:
    return np.round(np.clip(raster, 0.0, 1.0) * U8_SCALE).astype(np.uint8)


def write_png_u8(path: str | Path, raster_u8: np.ndarray) -> None:
    image = Image.fromarray(raster_u8.astype(np.uint8))
    image.save(Path(path))


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    text = json.dumps(payload, indent=2, sort_keys=True)
    Path(path).write_text(text + "\n", encoding="utf-8")
