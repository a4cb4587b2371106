"""Weighted-average hole filling for grayscale images."""

from .config import ConfigError, FillConfig
from .fill import DegenerateBoundaryError, FillResult, fill, fill_image

__all__ = ["ConfigError", "DegenerateBoundaryError", "FillConfig", "FillResult", "fill", "fill_image"]
