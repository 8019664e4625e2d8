"""
Geometric Primitives for labeled point sets.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING
import numpy as np
import math

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Vector:
    """
    An offset in 3D space, in millimeters.
    """
    dx: float
    dy: float
    dz: float = 0.0

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.dx**2 + self.dy**2 + self.dz**2)

    def mirror_y(self) -> Vector:
        """Mirror about the X axis (negate the y-component only)."""
        return Vector(self.dx, -self.dy, self.dz)

    @classmethod
    def polar(cls, radius: float, angle_rad: float, dz: float = 0.0) -> Vector:
        """In-plane vector of length `radius` at `angle_rad` from the X axis."""
        return cls(radius * math.cos(angle_rad), radius * math.sin(angle_rad), dz)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.dx, self.dy, self.dz])


@dataclass(frozen=True)
class LabeledPoint:
    """A point in 3D space carrying its textual label."""
    label: str
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> LabeledPoint:
        # Point + Vector = Point (Translation), label is kept
        if isinstance(other, Vector):
            return LabeledPoint(self.label, self.x + other.dx, self.y + other.dy, self.z + other.dz)
        return NotImplemented

    @property
    def coords(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def relabel(self, suffix: str) -> LabeledPoint:
        """Copy of the point with `suffix` appended to the label."""
        return replace(self, label=self.label + suffix)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])
