"""
Configuration & Constants
=========================
This module serves as the central registry for the displacement geometry and
the classification ranges used for a run.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (radii, angles, range bounds)
   scattered throughout the model code.
2. Reproducibility: Everything the engine needs is derived from these
   constants, so two runs with the same constants give identical output.

Exports:
    DEFAULT_GEOMETRY (DisplacementGeometry): Radii and angles of the offsets.
    BLUE_RANGES, RED_RANGES: Inclusive key ranges of the two default categories.
    DEFAULT_FALLBACK (str): Category used when no range matches.
    OUTPUT_PRECISION (int): Decimals written for every coordinate.
"""
from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class DisplacementGeometry:
    """
    Closed-form recipe for one displacement set.

    The diagonal offset is D = small_radius * diagonal_scale, applied to both
    x and y. The default scale is sqrt(2), so r = 2 mm gives D = 2.828 mm.
    """
    small_radius: float = 2.0                   # mm
    diagonal_scale: float = math.sqrt(2.0)
    large_radius: float = 6.0                   # mm
    angles_deg: tuple[float, ...] = (-30.0, 90.0, -150.0)
    radial_dz: float = 0.0                      # mm, shared by all radial entries
    suffix_format: str = "_{index}"

    @property
    def diagonal(self) -> float:
        """Diagonal offset D applied to both x and y."""
        return self.small_radius * self.diagonal_scale


DEFAULT_GEOMETRY = DisplacementGeometry()

# Category names double as identifiers for the visualization layer
BLUE = "BLUE"
RED = "RED"

# Inclusive (lo, hi) bounds; checked in declaration order BLUE -> RED
BLUE_RANGES: tuple[tuple[int, int], ...] = ((0, 99),)
RED_RANGES: tuple[tuple[int, int], ...] = ((100, 199),)

DEFAULT_FALLBACK = RED

OUTPUT_PRECISION = 3

# Plot styling
CATEGORY_COLORS: dict[str, str] = {
    BLUE: "tab:blue",
    RED: "tab:red",
}
DERIVED_COLOR = "tab:green"
