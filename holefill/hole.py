"""Hole location and boundary extraction."""

from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np
from scipy.ndimage import binary_dilation, generate_binary_structure

from holefill.config import validate_connectivity

logger = logging.getLogger(__name__)

# Axis-aligned neighbours first, then diagonals.
_OFFSET_ORDER = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, -1),
    (-1, -1),
    (1, 1),
    (-1, 1),
)


@dataclass(frozen=True)
class ImageWithHole:
    """Grayscale raster with an explicit missing-pixel mask."""

    values: np.ndarray
    missing: np.ndarray

    def __post_init__(self) -> None:
        if self.values.ndim != 2:
            raise ValueError("values must be a 2D array")
        if self.missing.shape != self.values.shape:
            raise ValueError(
                f"missing mask shape {self.missing.shape} does not match values shape {self.values.shape}"
            )

    @classmethod
    def from_sentinel(cls, raster: np.ndarray) -> "ImageWithHole":
        """Treat strictly negative samples as missing."""

        values = np.asarray(raster)
        return cls(values=values, missing=values < 0)

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    @property
    def hole_count(self) -> int:
        return int(self.missing.sum())


def neighborhood_offsets(connectivity: int) -> np.ndarray:
    """Return (K, 2) neighbour offsets for 4- or 8-connectivity."""

    validate_connectivity(connectivity)
    rank = 1 if connectivity == 4 else 2
    footprint = generate_binary_structure(2, rank)
    offsets = [(dr, dc) for dr, dc in _OFFSET_ORDER if footprint[1 + dr, 1 + dc]]
    return np.array(offsets, dtype=np.int64)


def locate_hole(image: ImageWithHole) -> np.ndarray:
    """Row-major (H, 2) coordinates of every missing pixel."""

    hole = np.argwhere(image.missing).astype(np.int64, copy=False)
    logger.debug("located %d hole pixels in %dx%d raster", len(hole), *image.shape)
    return hole


def find_boundary(image: ImageWithHole, hole: np.ndarray, connectivity: int) -> np.ndarray:
    """Known neighbours of each hole pixel, in hole then offset order.

    A pixel bordering several hole pixels appears once per hole pixel it
    borders. Neighbours outside the raster are skipped.
    """

    offsets = neighborhood_offsets(connectivity)
    if len(hole) == 0:
        return np.empty((0, 2), dtype=np.int64)

    candidates = (hole[:, None, :] + offsets[None, :, :]).reshape(-1, 2)
    rows, cols = image.shape
    inside = (
        (candidates[:, 0] >= 0)
        & (candidates[:, 0] < rows)
        & (candidates[:, 1] >= 0)
        & (candidates[:, 1] < cols)
    )
    candidates = candidates[inside]
    known = ~image.missing[candidates[:, 0], candidates[:, 1]]
    boundary = candidates[known]
    logger.debug(
        "found %d boundary points (%d-connectivity, %d out of range)",
        len(boundary),
        connectivity,
        int((~inside).sum()),
    )
    return boundary


def boundary_mask(image: ImageWithHole, connectivity: int) -> np.ndarray:
    """Deduplicated boundary as a boolean raster."""

    validate_connectivity(connectivity)
    rank = 1 if connectivity == 4 else 2
    grown = binary_dilation(image.missing, structure=generate_binary_structure(2, rank))
    return grown & ~image.missing
