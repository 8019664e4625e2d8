"""
Pipeline Initialization
=======================
Wires the point reader, the displacement engine and the output sinks together.

Why is this file needed?
------------------------
It is the single place where the run configuration (category table) is built
and handed to the engine. The CLI in `__main__` only parses arguments and
turns exceptions into exit codes.
"""
from __future__ import annotations

from typing import Optional
import logging

from displacedpoints.model.classification import CategoryTable
from displacedpoints.model.displacements import build_default_categories
from displacedpoints.model.engine import ExpansionSummary, expand_tagged, summarize
from displacedpoints.model.io import PointIO

logger = logging.getLogger(__name__)


def run(
    input_file: str,
    output_file: str,
    keep_original: bool = True,
    plot_prefix: Optional[str] = None,
    show: bool = False,
    table: Optional[CategoryTable] = None,
) -> ExpansionSummary:
    """
    Read, expand and write one point file.

    `keep_original` only controls the CSV output; the plot always shows the
    original points so their keys can be labeled.

    Returns:
        Counts of original and displaced records written to `output_file`.

    Raises:
        OSError: If the input cannot be read or the output cannot be opened.
    """
    # 1. Build the run configuration
    if table is None:
        table = build_default_categories()
    table.validate()

    # 2. Read points
    points = PointIO.read_points(input_file)
    if not points:
        logger.warning(f"No points read from {input_file}")

    # 3. Expand (originals always tagged, filtered for the file below)
    tagged = list(expand_tagged(points, table, keep_original=True))
    written = [t for t in tagged if keep_original or not t.is_original]

    # 4. Write CSV
    PointIO.write_points((t.point for t in written), output_file)
    summary = summarize(written)

    # 5. Optional plot + scene
    if plot_prefix:
        # Imported lazily so plain CSV runs do not load matplotlib/VTK
        from displacedpoints.view.plot import render
        render(tagged, plot_prefix, title=f"{input_file}: {len(points)} points", show=show)

    return summary


def summary_line(output_file: str, summary: ExpansionSummary, keep_original: bool) -> str:
    text = f"Wrote {output_file} with "
    if keep_original:
        text += f"{summary.n_original} original points and "
    return text + f"{summary.n_derived} displaced points."
