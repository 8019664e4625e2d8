"""
Point Set Visualization
=======================
Renders an expanded point set for visual inspection.

Outputs:
    <prefix>.png  XY scatter: originals colored by category with their
                  classification key as text, displaced points in one color.
    <prefix>.vtp  PyVista/VTK point cloud with the role, category and key of
                  every point, for ParaView or `pyvista.read`.

The model only hands over category names; colors are chosen here.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence
import logging

import matplotlib.pyplot as plt
import numpy as np
import pyvista as pv

from displacedpoints.config import CATEGORY_COLORS, DERIVED_COLOR
from displacedpoints.model.engine import PointRole, TaggedPoint

logger = logging.getLogger(__name__)

# Scene key for labels without digits and for keys beyond int64 (see key_overflow)
MISSING_KEY = -1
_INT64_MAX = np.iinfo(np.int64).max


def category_colors(names: Sequence[str]) -> dict[str, object]:
    """Configured color per known category, colormap entries for the rest."""
    unknown = [n for n in names if n not in CATEGORY_COLORS]
    cmap = plt.get_cmap("gist_rainbow", max(len(unknown), 1))
    colors: dict[str, object] = {name: cmap(i % cmap.N) for i, name in enumerate(unknown)}
    colors.update({n: CATEGORY_COLORS[n] for n in names if n in CATEGORY_COLORS})
    return colors


def _xy(group: Sequence[TaggedPoint]) -> np.ndarray:
    return np.array([[t.point.x, t.point.y] for t in group], dtype=np.float64).reshape(-1, 2)


def plot_points(
    tagged: Iterable[TaggedPoint],
    image_path: str,
    title: Optional[str] = None,
    show: bool = False,
) -> None:
    """Scatter plot of the expanded set in the XY plane, saved to `image_path`."""
    tagged = list(tagged)

    originals: dict[str, list[TaggedPoint]] = defaultdict(list)
    derived: list[TaggedPoint] = []
    for t in tagged:
        if t.role is PointRole.ORIGINAL:
            originals[t.category].append(t)
        else:
            derived.append(t)

    colors = category_colors(list(originals))

    plt.rcParams["figure.constrained_layout.use"] = True
    fig = plt.figure(figsize=(10, 8))
    plt.axis('equal')

    if derived:
        xy = _xy(derived)
        plt.scatter(xy[:, 0], xy[:, 1], s=10, marker='x', color=DERIVED_COLOR, label="Displaced", zorder=2)

    for category, group in originals.items():
        color = colors[category]
        xy = _xy(group)
        plt.scatter(xy[:, 0], xy[:, 1], s=40, marker='o', color=color, label=f"{category} (original)", zorder=3)
        for t in group:
            if t.key is not None:
                plt.text(t.point.x, t.point.y, str(t.key), fontsize=8, color=color, ha='left', va='bottom')

    plt.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
    plt.minorticks_on()
    plt.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

    plt.title(title or f"{len(tagged)} points")
    plt.xlabel("X (mm)")
    plt.ylabel("Y (mm)")
    if tagged:
        plt.legend(loc='best')

    fig.savefig(image_path, dpi=150)
    logger.info(f"Plot saved to: {image_path}")

    if show:
        plt.show()
    plt.close(fig)


def _scene_label(label: str) -> str:
    # Undecodable input bytes arrive as surrogates, which VTK cannot store
    return label.encode('utf-8', 'surrogateescape').decode('utf-8', 'replace')


def build_scene(tagged: Iterable[TaggedPoint]) -> pv.PolyData:
    """
    Point cloud with per-point arrays and the labels as field data.

    Point arrays:
        role          0 original, 1 derived
        category      index into the `categories` field array
        key           classification key, MISSING_KEY when absent or too large
        key_overflow  1 when the key exists but does not fit int64
    """
    tagged = list(tagged)
    if not tagged:
        return pv.PolyData()

    names = list(dict.fromkeys(t.category for t in tagged))
    index = {name: i for i, name in enumerate(names)}
    overflow = [t.key is not None and t.key > _INT64_MAX for t in tagged]

    cloud = pv.PolyData(np.array([t.point.to_array() for t in tagged], dtype=np.float64))
    cloud.point_data["role"] = np.array(
        [0 if t.role is PointRole.ORIGINAL else 1 for t in tagged], dtype=np.int8
    )
    cloud.point_data["category"] = np.array([index[t.category] for t in tagged], dtype=np.int32)
    cloud.point_data["key"] = np.array(
        [MISSING_KEY if t.key is None or big else t.key for t, big in zip(tagged, overflow)],
        dtype=np.int64,
    )
    cloud.point_data["key_overflow"] = np.array(overflow, dtype=np.int8)
    cloud.field_data["categories"] = names
    cloud.field_data["labels"] = [_scene_label(t.point.label) for t in tagged]
    return cloud


def export_scene(tagged: Iterable[TaggedPoint], scene_path: str) -> pv.PolyData:
    cloud = build_scene(tagged)
    cloud.save(scene_path)
    logger.info(f"Scene saved to: {scene_path} ({cloud.n_points} points)")
    return cloud


def render(
    tagged: Iterable[TaggedPoint],
    prefix: str,
    title: Optional[str] = None,
    show: bool = False,
) -> tuple[str, str]:
    """Write `<prefix>.png` and `<prefix>.vtp`; returns both paths."""
    tagged = list(tagged)
    image_path = f"{prefix}.png"
    scene_path = f"{prefix}.vtp"
    plot_points(tagged, image_path, title=title, show=show)
    export_scene(tagged, scene_path)
    return image_path, scene_path
