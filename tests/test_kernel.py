from __future__ import annotations

import numpy as np
import pytest

from holefill.config import ConfigError
from holefill.kernel import WeightKernel


def test_weight_at_unit_distance() -> None:
    kernel = WeightKernel(z=2.0, epsilon=0.1)

    assert kernel((2, 2), (3, 2)) == pytest.approx(1.0 / 1.1)
    assert kernel((2, 2), (3, 3)) == pytest.approx(1.0 / 2.1)


def test_weight_decreases_with_distance() -> None:
    kernel = WeightKernel(z=3.0, epsilon=0.01)

    near = kernel((0, 0), (0, 1))
    mid = kernel((0, 0), (2, 1))
    far = kernel((0, 0), (5, 5))

    assert near > mid > far > 0.0


def test_weight_ratio_grows_with_z() -> None:
    u, near, far = (10, 10), (10, 11), (13, 14)
    ratios = []
    for z in (0.5, 1.0, 2.0, 4.0, 8.0):
        kernel = WeightKernel(z=z, epsilon=0.01)
        ratios.append(kernel(u, near) / kernel(u, far))

    assert all(b > a for a, b in zip(ratios, ratios[1:]))


def test_vectorised_weights_match_scalar() -> None:
    kernel = WeightKernel(z=2.5, epsilon=0.05)
    points = np.array([[1, 1], [4, 2]], dtype=np.int64)
    boundary = np.array([[0, 1], [1, 0], [5, 2], [3, 3]], dtype=np.int64)

    matrix = kernel.weights(points, boundary)

    assert matrix.shape == (2, 4)
    for i, u in enumerate(points):
        for j, v in enumerate(boundary):
            assert matrix[i, j] == pytest.approx(kernel(tuple(u), tuple(v)))


@pytest.mark.parametrize("epsilon", [0.0, -0.5, float("nan")])
def test_kernel_rejects_non_positive_epsilon(epsilon: float) -> None:
    with pytest.raises(ConfigError):
        WeightKernel(z=2.0, epsilon=epsilon)


@pytest.mark.parametrize("z", [400.0, 1000.0])
def test_overflowing_distance_term_gives_zero_weight(z: float) -> None:
    kernel = WeightKernel(z=z, epsilon=0.01)
    boundary = np.array([[0, 1], [10, 10]], dtype=np.int64)

    matrix = kernel.weights(np.array([[0, 0]]), boundary)

    assert kernel((0, 0), (10, 10)) == 0.0
    assert matrix[0, 1] == 0.0
    assert kernel((0, 0), (0, 1)) == pytest.approx(matrix[0, 0])
    assert matrix[0, 0] == pytest.approx(1.0 / 1.01)
