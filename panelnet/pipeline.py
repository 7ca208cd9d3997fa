"""Pipeline façade chaining topology, offsets, grouping and meshing."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .config import EngineConfig, resolve_config
from .grouping import group_panels, panel_group_ids
from .meshing import panel_to_mesh
from .model import MeshOptions, NetworkResult, PanelMesh, Segment
from .offsets import build_panels
from .topology import build_topology
from .validate import validate_lines, validate_tolerance, validate_widths
from .widths import normalize_widths

logger = logging.getLogger(__name__)


def _merge_rows(target: Dict[int, List[Segment]], source: Dict[int, List[Segment]]) -> None:
    for row, segments in source.items():
        target.setdefault(row, []).extend(segments)


def run_network(
    lines: Optional[Sequence[Any]],
    tolerance: float,
    width_begin: Optional[Sequence[float]],
    width_end: Optional[Sequence[float]],
    options: MeshOptions = MeshOptions(),
    *,
    workers: int = 1,
    config: Optional[EngineConfig] = None,
) -> NetworkResult:
    """Run every stage on ``lines`` and collect the outputs.

    Input problems raise :class:`~panelnet.validate.NetworkInputError` before
    any stage runs.
    """

    validate_lines(lines)
    validate_tolerance(tolerance)
    seeds_begin = validate_widths(width_begin, "width_begin")
    seeds_end = validate_widths(width_end, "width_end")
    cfg = resolve_config(config)
    opts = options.clamped()

    logger.info("Running network with %d line(s), tolerance=%g", len(lines), tolerance)
    topology = build_topology(lines, tolerance)

    wb = normalize_widths(seeds_begin, topology.line_count)
    we = normalize_widths(seeds_end, topology.line_count)

    panels, offset_lines, free_end_lines = build_panels(topology, wb, we, cfg, workers=workers)
    groups = group_panels(panels, cfg)
    panel_group = panel_group_ids(groups, len(panels))

    order = [idx for group in groups for idx in group]

    def mesh_one(idx: int) -> PanelMesh:
        return panel_to_mesh(panels[idx], opts, cfg)

    if workers > 1 and len(order) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            built = list(pool.map(mesh_one, order))
    else:
        built = [mesh_one(idx) for idx in order]

    meshes: List[Optional[PanelMesh]] = [None] * len(panels)
    u_curves: Dict[int, List[Segment]] = {}
    v_curves: Dict[int, List[Segment]] = {}
    fixed_points: List[np.ndarray] = []
    for idx, panel_mesh in zip(order, built):
        meshes[idx] = panel_mesh
        fixed_points.extend(panel_mesh.fixed_points)
        _merge_rows(u_curves, panel_mesh.u_curves)
        _merge_rows(v_curves, panel_mesh.v_curves)

    logger.info(
        "Meshed %d panel(s) at %dx%d, %d fixed point(s)",
        len(panels),
        opts.n_u,
        opts.n_v,
        len(fixed_points),
    )
    return NetworkResult(
        topology=topology,
        width_begin=wb,
        width_end=we,
        panels=panels,
        offset_lines=offset_lines,
        free_end_lines=free_end_lines,
        groups=groups,
        panel_group=panel_group,
        meshes=[mesh for mesh in meshes if mesh is not None],
        u_curves=u_curves,
        v_curves=v_curves,
        fixed_points=fixed_points,
    )


__all__ = ["run_network"]
