"""Weighted-average hole filling pipeline."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time

import numpy as np

from holefill.config import DEFAULT_CHUNK_SIZE, FillConfig, validate_chunk_size
from holefill.hole import ImageWithHole, find_boundary, locate_hole
from holefill.kernel import WeightKernel

logger = logging.getLogger(__name__)


class DegenerateBoundaryError(ArithmeticError):
    """Raised when a hole pixel receives no usable boundary weight."""


@dataclass(frozen=True)
class FillResult:
    """Outputs from one fill invocation."""

    filled: np.ndarray
    hole: np.ndarray
    boundary: np.ndarray
    seconds: float


def fill_values(
    image: ImageWithHole,
    hole: np.ndarray,
    boundary: np.ndarray,
    kernel: WeightKernel,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> np.ndarray:
    """Copy `image.values` and replace each hole pixel by its weighted boundary average."""

    validate_chunk_size(chunk_size)

    filled = np.array(image.values, dtype=np.float64, copy=True)
    if len(hole) == 0:
        return filled
    if len(boundary) == 0:
        raise DegenerateBoundaryError(
            f"{len(hole)} hole pixels have no known neighbours to interpolate from"
        )

    boundary_values = image.values[boundary[:, 0], boundary[:, 1]].astype(np.float64)

    # Each chunk reads only the input and writes only its own hole cells.
    for start in range(0, len(hole), chunk_size):
        points = hole[start : start + chunk_size]
        weights = kernel.weights(points, boundary)
        denominator = weights.sum(axis=1)
        bad = ~np.isfinite(denominator) | (denominator <= 0.0)
        if np.any(bad):
            row, col = points[int(np.argmax(bad))]
            raise DegenerateBoundaryError(
                f"boundary weight sum for hole pixel ({row}, {col}) is {denominator[bad][0]!r}"
            )
        np.multiply(weights, boundary_values[None, :], out=weights)
        numerator = weights.sum(axis=1)
        filled[points[:, 0], points[:, 1]] = numerator / denominator

    return filled


def fill_image(image: ImageWithHole, config: FillConfig | None = None) -> FillResult | None:
    """Locate the hole, find its boundary, and fill it.

    Returns None when the raster has no missing pixels.
    """

    cfg = config or FillConfig()
    kernel = cfg.kernel()

    start = time.perf_counter()
    hole = locate_hole(image)
    if len(hole) == 0:
        logger.debug("no hole pixels; nothing to fill")
        return None

    boundary = find_boundary(image, hole, cfg.connectivity)
    filled = fill_values(image, hole, boundary, kernel, chunk_size=cfg.chunk_size)
    seconds = time.perf_counter() - start
    logger.debug(
        "filled %d pixels from %d boundary points in %.3f s",
        len(hole),
        len(boundary),
        seconds,
    )
    return FillResult(filled=filled, hole=hole, boundary=boundary, seconds=seconds)


def fill(
    raster: np.ndarray,
    z: float,
    epsilon: float,
    connectivity: int,
) -> np.ndarray | None:
    """Fill the negative-valued pixels of `raster`.

    Raises ConfigError before touching the raster when the parameters are
    invalid. Returns None when there is nothing to fill.
    """

    config = FillConfig(z=z, epsilon=epsilon, connectivity=connectivity)
    result = fill_image(ImageWithHole.from_sentinel(raster), config)
    if result is None:
        return None
    return result.filled.astype(np.asarray(raster).dtype, copy=False)
