"""Inverse-distance weight kernel."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from holefill.config import validate_epsilon


@dataclass(frozen=True)
class WeightKernel:
    """`w(u, v) = 1 / (|u - v| ** z + epsilon)` over (row, col) points.

    A distance term that overflows the float range yields a weight of 0.
    """

    z: float
    epsilon: float

    def __post_init__(self) -> None:
        validate_epsilon(self.epsilon)

    def __call__(self, u: tuple[int, int], v: tuple[int, int]) -> float:
        dr = float(u[0]) - float(v[0])
        dc = float(u[1]) - float(v[1])
        with np.errstate(over="ignore", divide="ignore"):
            term = np.power(np.float64(dr * dr + dc * dc), self.z / 2.0)
        return float(1.0 / (term + self.epsilon))

    def weights(self, points: np.ndarray, boundary: np.ndarray) -> np.ndarray:
        """Weight matrix of shape (len(points), len(boundary)).

        Holds at most two (len(points), len(boundary)) float64 buffers at once.
        """

        p = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        b = np.asarray(boundary, dtype=np.float64).reshape(-1, 2)
        out = p[:, 0:1] - b[None, :, 0]
        np.multiply(out, out, out=out)
        dc = p[:, 1:2] - b[None, :, 1]
        np.multiply(dc, dc, out=dc)
        out += dc
        del dc
        with np.errstate(over="ignore", divide="ignore"):
            np.power(out, self.z / 2.0, out=out)
        out += self.epsilon
        np.reciprocal(out, out=out)
        return out
