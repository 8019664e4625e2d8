"""
Displacement Catalog
====================
Builds the sets of offsets applied to every input point.

Each set is seven entries:

    _1 .. _4   diagonal jitter (+D,+D) (-D,+D) (-D,-D) (+D,-D), dz = 0
    _5 .. _7   radial offsets R*(cos a, sin a) at the configured angles

The RED set is the BLUE set mirrored about the X axis, radial entries only.
Construction is pure, so the same geometry always gives the same floats.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence
import logging
import math

from displacedpoints import config
from displacedpoints.config import DisplacementGeometry
from displacedpoints.model.classification import Category, CategoryTable, ranges_from_bounds
from displacedpoints.model.geometry_primitives import Vector

logger = logging.getLogger(__name__)

# Diagonal quadrant signs, counter-clockwise from up-right
_DIAGONAL_SIGNS: tuple[tuple[int, int], ...] = ((+1, +1), (-1, +1), (-1, -1), (+1, -1))


@dataclass(frozen=True)
class DisplacementEntry:
    suffix: str
    offset: Vector


@dataclass(frozen=True)
class DisplacementSet:
    """Ordered, fixed-length collection of displacement entries."""
    entries: tuple[DisplacementEntry, ...]

    def __post_init__(self) -> None:
        suffixes = [e.suffix for e in self.entries]
        if len(set(suffixes)) != len(suffixes):
            raise ValueError(f"Displacement suffixes must be unique, got {suffixes}")

    def __iter__(self) -> Iterator[DisplacementEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> DisplacementEntry:
        return self.entries[index]

    @property
    def suffixes(self) -> list[str]:
        return [e.suffix for e in self.entries]

    @property
    def offsets(self) -> list[Vector]:
        return [e.offset for e in self.entries]


def diagonal_offsets(geometry: DisplacementGeometry) -> list[Vector]:
    d = geometry.diagonal
    return [Vector(sx * d, sy * d, 0.0) for sx, sy in _DIAGONAL_SIGNS]


def radial_offsets(geometry: DisplacementGeometry, mirror_y: bool = False) -> list[Vector]:
    offsets = [
        Vector.polar(geometry.large_radius, math.radians(angle), geometry.radial_dz)
        for angle in geometry.angles_deg
    ]
    if mirror_y:
        offsets = [v.mirror_y() for v in offsets]
    return offsets


def build_displacement_set(
    geometry: DisplacementGeometry = config.DEFAULT_GEOMETRY,
    mirror_y: bool = False,
) -> DisplacementSet:
    """
    Build one displacement set from the geometric recipe.

    Args:
        geometry: Radii, angles and suffix format.
        mirror_y: Negate the y-component of the radial entries (diagonals are
            symmetric already and stay untouched).

    Returns:
        Diagonal entries followed by radial entries, suffixes numbered from 1.
    """
    offsets = diagonal_offsets(geometry) + radial_offsets(geometry, mirror_y=mirror_y)
    entries = tuple(
        DisplacementEntry(suffix=geometry.suffix_format.format(index=i), offset=offset)
        for i, offset in enumerate(offsets, start=1)
    )
    return DisplacementSet(entries)


def build_default_categories(
    geometry: DisplacementGeometry = config.DEFAULT_GEOMETRY,
    blue_ranges: Sequence[tuple[int, int]] = config.BLUE_RANGES,
    red_ranges: Sequence[tuple[int, int]] = config.RED_RANGES,
    fallback: str = config.DEFAULT_FALLBACK,
) -> CategoryTable:
    """BLUE (checked first, unmirrored) and RED (mirrored), RED as fallback by default."""
    table = CategoryTable(
        categories=(
            Category(config.BLUE, ranges_from_bounds(blue_ranges), build_displacement_set(geometry)),
            Category(config.RED, ranges_from_bounds(red_ranges), build_displacement_set(geometry, mirror_y=True)),
        ),
        fallback=fallback,
    )
    logger.debug(
        f"Category table built: {table.names}, fallback={table.fallback}, "
        f"D={geometry.diagonal:.6f} mm, R={geometry.large_radius:.6f} mm"
    )
    return table
