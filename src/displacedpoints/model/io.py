"""
Input/Output Manager (point files)
Reads labeled points from delimited text and writes the expanded set as CSV.

Labels are passed through byte for byte: both files are opened with the
'surrogateescape' error handler, so bytes that are not valid UTF-8 survive
the round trip unchanged.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable

from displacedpoints.config import OUTPUT_PRECISION
from displacedpoints.model.geometry_primitives import LabeledPoint

# Get module logger
logger = logging.getLogger(__name__)

# A comma (with optional surrounding blanks) or a run of whitespace
_FIELD_SEPARATOR = re.compile(r"\s*,\s*|\s+")

_ENCODING_ERRORS = 'surrogateescape'


class PointIO:

    @staticmethod
    def parse_line(line: str) -> LabeledPoint:
        """
        Parse one record: `label X Y Z` or `label,X,Y,Z`.

        Raises:
            ValueError: If there are fewer than 4 fields, one of them is empty
                (e.g. `A1,,1,2`) or a coordinate is not a number.
        """
        fields = _FIELD_SEPARATOR.split(line.strip())
        if len(fields) < 4:
            raise ValueError(f"expected label and 3 coordinates, got {len(fields)} field(s)")
        if not all(fields[:4]):
            raise ValueError("empty field")
        label = fields[0]
        x, y, z = (float(v) for v in fields[1:4])
        return LabeledPoint(label, x, y, z)

    @staticmethod
    def read_points(filepath: str) -> list[LabeledPoint]:
        """
        Read all points from a space- or comma-separated text file.

        Blank lines and '#' comments are ignored. Records that cannot be parsed
        (headers, truncated lines) are skipped with a warning.
        """
        logger.info(f"Reading points from: {filepath}")
        points: list[LabeledPoint] = []
        try:
            with open(filepath, mode='r', encoding='utf-8-sig', errors=_ENCODING_ERRORS) as f:
                for line_no, line in enumerate(f, start=1):
                    stripped = line.strip()
                    if not stripped or stripped.startswith('#'):
                        continue
                    try:
                        points.append(PointIO.parse_line(stripped))
                    except ValueError as e:
                        logger.warning(f"{filepath}:{line_no}: skipping record {stripped!r} ({e})")
        except OSError as e:
            logger.error(f"Cannot read input file '{filepath}': {e}")
            raise

        logger.info(f"Read {len(points)} points.")
        return points

    @staticmethod
    def format_row(point: LabeledPoint, precision: int = OUTPUT_PRECISION) -> list[str]:
        return [point.label] + [f"{c:.{precision}f}" for c in point.coords]

    @staticmethod
    def write_points(points: Iterable[LabeledPoint], filepath: str) -> int:
        """
        Write `label,x,y,z` records with fixed precision, no header.

        Returns:
            Number of records written.
        """
        logger.info(f"Writing points to: {filepath}")
        count = 0
        try:
            with open(filepath, mode='w', encoding='utf-8', errors=_ENCODING_ERRORS, newline='') as f:
                # Plain join: the label is written verbatim, never quoted
                for point in points:
                    f.write(','.join(PointIO.format_row(point)) + '\n')
                    count += 1
        except OSError as e:
            logger.error(f"Cannot open output file '{filepath}': {e}")
            raise

        logger.info(f"Wrote {count} records to: {filepath}")
        return count
