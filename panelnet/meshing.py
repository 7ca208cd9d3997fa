"""Quad mesh filling of panels.

Every panel side becomes a row of ``n_v`` points running from the anchor
vertex along the side's offset.  Free-end sides follow an arc profile (with an
optional alternating deviation) and their points are reported as fixed; sides
at junctions are straight, optionally lifted along Z.  The two rows are then
bridged by ``n_u`` linearly interpolated columns.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .config import EngineConfig, resolve_config
from .model import FREE_END_PROFILES, MeshOptions, Panel, PanelMesh, QuadMesh, Segment, Side
from .vectors import Z_AXIS, norm, unit

logger = logging.getLogger(__name__)

Row = List[np.ndarray]

_HALF_PI = math.pi / 2.0


def _clamp_quarter_turn(angle: float) -> float:
    return max(min(angle, _HALF_PI), -_HALF_PI)


def _frame(x: np.ndarray, y: np.ndarray, vertical: bool) -> Tuple[np.ndarray, np.ndarray, float]:
    x_unit = Z_AXIS.copy() if vertical else unit(x)
    return x_unit, unit(y), norm(y)


def arc_deviation_profile(
    origin: np.ndarray,
    x: np.ndarray,
    y: np.ndarray,
    angle: float,
    n: int,
    max_deviation: float,
    vertical: bool = False,
    straight_epsilon: float = 0.01,
) -> Row:
    """Arc of ``n`` points from ``origin`` along ``y`` bent towards ``x``.

    Odd-indexed points are pushed off the arc by ``max_deviation``, which
    gives the saw-tooth edge.  Below ``straight_epsilon`` the arc degenerates
    to a straight ramp.
    """

    x_unit, y_unit, width = _frame(x, y, vertical)
    row: Row = []
    if abs(angle) < straight_epsilon:
        for i in range(n):
            t = i / (n - 1)
            deviation = (i % 2) * max_deviation
            sweep = angle * t
            row.append(origin + x_unit * (deviation * width * sweep) + y_unit * (width * t))
        return row

    radius = width / math.sin(_clamp_quarter_turn(angle))
    for i in range(n):
        deviation = (i % 2) * max_deviation
        sweep = angle * i / (n - 1)
        along_x = radius * (1.0 - math.cos(sweep)) - deviation * math.cos(sweep)
        along_y = (radius + deviation) * math.sin(sweep)
        row.append(origin + x_unit * along_x + y_unit * along_y)
    return row


def arc_profile(
    origin: np.ndarray,
    x: np.ndarray,
    y: np.ndarray,
    angle: float,
    n: int,
    vertical: bool = False,
    straight_epsilon: float = 0.01,
) -> Row:
    """Plain circular arc of radius ``width / sin(angle)``.

    Unlike :func:`arc_deviation_profile` the angle is not clamped, so sweeps
    past a quarter turn widen the arc.
    """

    x_unit, y_unit, width = _frame(x, y, vertical)
    row: Row = []
    if abs(angle) < straight_epsilon:
        for i in range(n):
            t = i / (n - 1)
            row.append(origin + x_unit * (width * angle * t) + y_unit * (width * t))
        return row

    sine = math.sin(angle)
    for i in range(n):
        sweep = angle * i / (n - 1)
        row.append(
            origin
            + x_unit * (width / sine * (1.0 - math.cos(sweep)))
            + y_unit * (width * math.sin(sweep) / sine)
        )
    return row


def line_profile(
    origin: np.ndarray,
    y: np.ndarray,
    n: int,
    angle: float,
    radius: float,
    vertical: bool = False,
) -> Row:
    """Straight row along ``y``; with ``vertical`` it rises along Z by ``radius``."""

    if not vertical:
        return [origin + y * (i / (n - 1)) for i in range(n)]

    lift = float(np.sign(angle)) * radius
    row: Row = []
    for i in range(n):
        sweep = abs(angle) * i / (n - 1)
        row.append(origin + y * math.sin(sweep) + Z_AXIS * (lift * (1.0 - math.cos(sweep))))
    return row


def points_to_mesh(
    row1: Sequence[np.ndarray], row2: Sequence[np.ndarray], n_u: int
) -> Tuple[QuadMesh, Dict[int, List[Segment]], Dict[int, List[Segment]]]:
    """Bridge two equally long rows with ``n_u`` interpolated columns.

    U curves are the cross edges of each cell keyed by the row they lie on;
    V curves are the along edges keyed by the lower row of the cell.
    """

    if len(row1) != len(row2):
        raise ValueError(f"rows differ in length: {len(row1)} != {len(row2)}")
    n_rows = len(row1)
    vertices = np.empty((n_rows * n_u, 3), dtype=float)
    for iy in range(n_rows):
        start = np.asarray(row1[iy], dtype=float)
        span = np.asarray(row2[iy], dtype=float) - start
        for ix in range(n_u):
            vertices[ix + iy * n_u] = start + span * (ix / (n_u - 1))

    faces: List[Tuple[int, int, int, int]] = []
    u_curves: Dict[int, List[Segment]] = {}
    v_curves: Dict[int, List[Segment]] = {}
    for ix in range(n_u - 1):
        for iy in range(n_rows - 1):
            i0 = ix + iy * n_u
            i1 = (ix + 1) + iy * n_u
            i2 = (ix + 1) + (iy + 1) * n_u
            i3 = ix + (iy + 1) * n_u
            faces.append((i0, i1, i2, i3))
            u_curves.setdefault(iy, []).append((vertices[i0].copy(), vertices[i1].copy()))
            v_curves.setdefault(iy, []).append((vertices[i1].copy(), vertices[i2].copy()))
            u_curves.setdefault(iy + 1, []).append((vertices[i2].copy(), vertices[i3].copy()))
            v_curves.setdefault(iy, []).append((vertices[i3].copy(), vertices[i0].copy()))

    mesh = QuadMesh(vertices=vertices, faces=np.array(faces, dtype=int).reshape(-1, 4))
    return mesh, u_curves, v_curves


def _side_row(
    side: Side,
    opposite: Side,
    options: MeshOptions,
    config: EngineConfig,
) -> Row:
    if not side.is_free_end:
        return line_profile(
            side.point, side.direction, options.n_v, options.angle, side.width, options.vertical
        )
    towards = opposite.point - side.point
    if options.free_end_profile == "arc":
        return arc_profile(
            side.point,
            towards,
            side.direction,
            options.angle,
            options.n_v,
            options.vertical,
            config.straight_angle_epsilon,
        )
    return arc_deviation_profile(
        side.point,
        towards,
        side.direction,
        options.angle,
        options.n_v,
        options.deviation,
        options.vertical,
        config.straight_angle_epsilon,
    )


def panel_to_mesh(
    panel: Panel,
    options: MeshOptions = MeshOptions(),
    config: Optional[EngineConfig] = None,
) -> PanelMesh:
    """Fill ``panel`` with an ``n_u`` x ``n_v`` quad grid."""

    cfg = resolve_config(config)
    opts = options.clamped()
    if (opts.n_u, opts.n_v) != (options.n_u, options.n_v):
        logger.debug(
            "Clamped subdivisions from (%s, %s) to (%d, %d)",
            options.n_u,
            options.n_v,
            opts.n_u,
            opts.n_v,
        )
    if opts.free_end_profile not in FREE_END_PROFILES:
        raise ValueError(
            f"unknown free end profile {opts.free_end_profile!r}, expected one of {FREE_END_PROFILES}"
        )

    fixed: List[np.ndarray] = []
    row1 = _side_row(panel.side1, panel.side2, opts, cfg)
    if panel.side1.is_free_end:
        fixed.extend(pt.copy() for pt in row1)
    row2 = _side_row(panel.side2, panel.side1, opts, cfg)
    if panel.side2.is_free_end:
        fixed.extend(pt.copy() for pt in row2)

    mesh, u_curves, v_curves = points_to_mesh(row1, row2, opts.n_u)
    return PanelMesh(mesh=mesh, u_curves=u_curves, v_curves=v_curves, fixed_points=fixed)


__all__ = [
    "arc_deviation_profile",
    "arc_profile",
    "line_profile",
    "points_to_mesh",
    "panel_to_mesh",
]
