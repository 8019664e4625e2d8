"""
Label Classification & Category Resolution
==========================================
Maps a point label to a category name in two steps:

1. `classify` extracts the classification key: all ASCII digits of the label,
   concatenated in the order they appear, read as one base-10 integer.
2. `CategoryTable.resolve` looks the key up in the ordered category ranges
   (inclusive bounds, first match wins) and falls back to a designated
   category when the label has no digits or no range holds the key.

Neither step raises for any label. Inverted or overlapping ranges are not
rejected; `CategoryTable.validate` reports them on request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, TYPE_CHECKING
import logging
import re

if TYPE_CHECKING:
    from displacedpoints.model.displacements import DisplacementSet

logger = logging.getLogger(__name__)

ClassificationKey = Optional[int]

# Sentinel for labels without any digit
NO_KEY: ClassificationKey = None

_DIGITS = re.compile(r"[0-9]")

# Stays below sys.get_int_max_str_digits() (default 4300)
_CHUNK_DIGITS = 4000


def classify(label: str) -> ClassificationKey:
    """
    Extract the classification key from a label.

    Examples:
        "A1"       -> 1
        "ABC015Z9" -> 159
        "Origin"   -> NO_KEY
    """
    digits = "".join(_DIGITS.findall(label))
    if not digits:
        return NO_KEY

    # int() refuses very long digit strings, so accumulate chunk by chunk
    key = 0
    for start in range(0, len(digits), _CHUNK_DIGITS):
        chunk = digits[start:start + _CHUNK_DIGITS]
        key = key * 10 ** len(chunk) + int(chunk)
    return key


@dataclass(frozen=True)
class Range:
    """Inclusive integer interval. `lo <= hi` is expected but not enforced."""
    lo: int
    hi: int

    def __contains__(self, key: int) -> bool:
        return self.lo <= key <= self.hi

    @property
    def inverted(self) -> bool:
        return self.lo > self.hi

    def overlaps(self, other: Range) -> bool:
        return max(self.lo, other.lo) <= min(self.hi, other.hi)


def ranges_from_bounds(bounds: Iterable[tuple[int, int]]) -> tuple[Range, ...]:
    """Convert (lo, hi) pairs from the configuration into Range objects."""
    return tuple(Range(lo, hi) for lo, hi in bounds)


@dataclass(frozen=True)
class Category:
    """Named partition of the key space with its own displacement set."""
    name: str
    ranges: tuple[Range, ...]
    displacements: DisplacementSet

    def contains(self, key: int) -> bool:
        return any(key in r for r in self.ranges)


@dataclass(frozen=True)
class CategoryTable:
    """
    Ordered category lookup with a named fallback.

    The order of `categories` is the priority order: when the ranges of two
    categories overlap, the one declared first wins.
    """
    categories: tuple[Category, ...]
    fallback: str
    _by_name: dict[str, Category] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_name: dict[str, Category] = {}
        for category in self.categories:
            if category.name in by_name:
                raise ValueError(f"Duplicate category name: {category.name!r}")
            by_name[category.name] = category
        if self.fallback not in by_name:
            raise ValueError(
                f"Fallback category {self.fallback!r} is not one of {list(by_name)}"
            )
        object.__setattr__(self, "_by_name", by_name)

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.categories]

    def get(self, name: str) -> Category:
        return self._by_name[name]

    def resolve(self, key: ClassificationKey) -> str:
        """Return the name of the first category whose ranges hold `key`."""
        if key is NO_KEY:
            return self.fallback
        for category in self.categories:
            if category.contains(key):
                return category.name
        return self.fallback

    def resolve_label(self, label: str) -> tuple[ClassificationKey, Category]:
        key = classify(label)
        return key, self._by_name[self.resolve(key)]

    def validate(self) -> list[str]:
        """
        Report inverted ranges and overlaps between categories.

        Resolution is unaffected; issues are only logged and returned.
        """
        issues: list[str] = []
        for category in self.categories:
            for r in category.ranges:
                if r.inverted:
                    issues.append(f"{category.name}: inverted range [{r.lo}, {r.hi}] matches no key")

        for i, first in enumerate(self.categories):
            for second in self.categories[i + 1:]:
                for a in first.ranges:
                    for b in second.ranges:
                        if not a.inverted and not b.inverted and a.overlaps(b):
                            issues.append(
                                f"{first.name} [{a.lo}, {a.hi}] overlaps {second.name} [{b.lo}, {b.hi}]; "
                                f"{first.name} takes priority"
                            )

        for issue in issues:
            logger.warning(f"Range table: {issue}")
        return issues


def resolve_category(key: ClassificationKey, table: CategoryTable) -> str:
    """Module-level shortcut for `table.resolve(key)`."""
    return table.resolve(key)
