"""Top-view PNG preview of a network result.

Panels are drawn as their projected quad meshes, colored by group; source
lines are drawn in black, free-end offsets dashed and fixed points as dots.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .model import NetworkResult

logger = logging.getLogger(__name__)


def render_network_plot(result: NetworkResult, path: Union[str, Path], *, title: str = "") -> Path:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from matplotlib.collections import PolyCollection

    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)

    cmap = plt.get_cmap("tab10")
    fig, ax = plt.subplots(figsize=(6, 6))

    for panel_idx, panel_mesh in enumerate(result.meshes):
        mesh = panel_mesh.mesh
        if mesh.face_count == 0:
            continue
        quads = mesh.vertices[mesh.faces][:, :, :2]
        color = cmap(result.panel_group[panel_idx] % cmap.N)
        ax.add_collection(
            PolyCollection(quads, facecolors=[color], edgecolors="white", linewidths=0.3, alpha=0.6)
        )

    for begin, end in result.line_vertex:
        a = result.points[begin]
        b = result.points[end]
        ax.plot([a[0], b[0]], [a[1], b[1]], color="black", linewidth=1.0)

    for offset in result.free_end_lines:
        start, tip = offset.to_segment()
        ax.plot([start[0], tip[0]], [start[1], tip[1]], "k--", linewidth=0.6)

    if result.fixed_points:
        xs = [pt[0] for pt in result.fixed_points]
        ys = [pt[1] for pt in result.fixed_points]
        ax.scatter(xs, ys, s=6, c="red", zorder=3)

    ax.autoscale_view()
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_title(title or f"{len(result.groups)} group(s), {len(result.panels)} panel(s)")
    ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.5)
    fig.tight_layout()
    fig.savefig(output)
    plt.close(fig)
    logger.info("Wrote network preview to %s", output)
    return output


__all__ = ["render_network_plot"]
