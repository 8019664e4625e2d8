"""
Displacement Engine
===================
Expands every input point into its optional original plus one derived point
per entry of the displacement set selected by the point's label.

Output order is input order; for each source point the original comes first,
followed by derived points in displacement-set order. Nothing is sorted or
de-duplicated. Coordinates are plain float additions, no rounding.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable, Iterator
import logging

from displacedpoints.model.classification import CategoryTable, ClassificationKey
from displacedpoints.model.geometry_primitives import LabeledPoint

logger = logging.getLogger(__name__)


class PointRole(StrEnum):
    ORIGINAL = "original"
    DERIVED = "derived"


@dataclass(frozen=True)
class TaggedPoint:
    """Emitted point plus the category and role used by the visualization layer."""
    point: LabeledPoint
    category: str
    role: PointRole
    key: ClassificationKey

    @property
    def is_original(self) -> bool:
        return self.role is PointRole.ORIGINAL


@dataclass(frozen=True)
class ExpansionSummary:
    n_original: int
    n_derived: int

    @property
    def total(self) -> int:
        return self.n_original + self.n_derived


def expand_tagged(
    points: Iterable[LabeledPoint],
    table: CategoryTable,
    keep_original: bool = True,
) -> Iterator[TaggedPoint]:
    """
    Stream the expanded point set with category and role tags.

    Args:
        points: Source points, in input order.
        table: Category ranges and their displacement sets.
        keep_original: Emit every source point unchanged before its derived points.

    Yields:
        TaggedPoint for every emitted point.
    """
    for point in points:
        key, category = table.resolve_label(point.label)
        logger.debug(f"{point.label!r}: key={key}, category={category.name}")

        if keep_original:
            yield TaggedPoint(point, category.name, PointRole.ORIGINAL, key)

        for entry in category.displacements:
            derived = (point + entry.offset).relabel(entry.suffix)
            yield TaggedPoint(derived, category.name, PointRole.DERIVED, key)


def expand(
    points: Iterable[LabeledPoint],
    table: CategoryTable,
    keep_original: bool = True,
) -> list[LabeledPoint]:
    """Expanded point set without tags."""
    return [tagged.point for tagged in expand_tagged(points, table, keep_original)]


def summarize(tagged: Iterable[TaggedPoint]) -> ExpansionSummary:
    n_original = 0
    n_derived = 0
    for t in tagged:
        if t.is_original:
            n_original += 1
        else:
            n_derived += 1
    return ExpansionSummary(n_original=n_original, n_derived=n_derived)
