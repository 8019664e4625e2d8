import logging
import sys
from pathlib import Path

import matplotlib
import pytest

# Add src to sys.path so we can import displacedpoints without installing
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

# Headless plotting
matplotlib.use("Agg")

from displacedpoints.model.displacements import build_default_categories  # noqa: E402
from displacedpoints.model.geometry_primitives import LabeledPoint  # noqa: E402


@pytest.fixture
def default_table():
    """Category table built from the shipped constants."""
    return build_default_categories()


@pytest.fixture
def sample_points():
    return [
        LabeledPoint("A1", 100.0, 200.0, 3.0),
        LabeledPoint("P150", -10.0, 5.0, 0.0),
        LabeledPoint("Origin", 0.0, 0.0, 0.0),
    ]


@pytest.fixture
def points_file(tmp_path: Path):
    """Small mixed-delimiter input file."""
    path = tmp_path / "points.txt"
    path.write_text(
        "# label X Y Z\n"
        "A1,100.0,200.0,3.0\n"
        "P150 -10.0 5.0 0.0\n"
        "\n"
        "Origin, 0, 0, 0\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """main() attaches handlers bound to the captured stdout; drop them after each test."""
    yield
    logger = logging.getLogger("displacedpoints")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
