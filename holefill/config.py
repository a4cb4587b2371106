"""Configuration models for hole filling."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import math
import numbers
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from holefill.kernel import WeightKernel


DEFAULT_Z = 3.0
DEFAULT_EPSILON = 1e-2
DEFAULT_CONNECTIVITY = 8
DEFAULT_CHUNK_SIZE = 1024
FILLED_SUFFIX = "_filled"

CONNECTIVITIES = (4, 8)


class ConfigError(ValueError):
    """Raised when fill parameters are rejected before any work is done."""


def validate_epsilon(epsilon: float) -> None:
    if not math.isfinite(epsilon) or epsilon <= 0.0:
        raise ConfigError(f"epsilon must be a finite value > 0, got {epsilon!r}")


def validate_connectivity(connectivity: int) -> None:
    if connectivity not in CONNECTIVITIES:
        raise ConfigError(f"connectivity must be 4 or 8, got {connectivity!r}")


def validate_chunk_size(chunk_size: int) -> None:
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, numbers.Integral) or chunk_size < 1:
        raise ConfigError(f"chunk_size must be an integer >= 1, got {chunk_size!r}")


@dataclass(frozen=True)
class FillConfig:
    """Parameters for one fill invocation.

    `z` is the distance exponent of the weight kernel, `epsilon` its
    stability offset. `chunk_size` caps how many hole pixels are weighted
    against the boundary at once.
    """

    z: float = DEFAULT_Z
    epsilon: float = DEFAULT_EPSILON
    connectivity: int = DEFAULT_CONNECTIVITY
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        if not math.isfinite(self.z):
            raise ConfigError(f"z must be finite, got {self.z!r}")
        validate_epsilon(self.epsilon)
        validate_connectivity(self.connectivity)
        validate_chunk_size(self.chunk_size)

    def kernel(self) -> WeightKernel:
        from holefill.kernel import WeightKernel

        return WeightKernel(self.z, self.epsilon)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
