"""Offset and miter computation for every line endpoint.

Each line yields four offsets, one per (endpoint, side sign) combination.  An
endpoint whose vertex has no other incident line is a free end and is offset
straight along the line's perpendicular.  At a junction the offset bisects the
line's perpendicular and the perpendicular of the neighbor with the extremal
signed angle (smallest for side sign +1, largest for -1).
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import EngineConfig, resolve_config
from .logging_utils import apply_debug_logging
from .model import OffsetLine, Panel, Side, Topology, VertexId
from .vectors import perpendicular, signed_angle
from .widths import normalize_widths

logger = logging.getLogger(__name__)

# Larger than any signed angle, so the first neighbor always wins the first comparison.
_ANGLE_SENTINEL = 10.0

# (at_end, side_sign) per offset; panel 2i uses the first pair, 2i+1 the second.
_PANEL_LAYOUT: Tuple[Tuple[bool, int], ...] = ((True, 1), (False, -1), (False, 1), (True, -1))

EdgeOffsets = Tuple[OffsetLine, OffsetLine, OffsetLine, OffsetLine]


def width_at_vertex(
    topology: Topology,
    vertex: VertexId,
    neighbor: VertexId,
    width_begin: Sequence[float],
    width_end: Sequence[float],
) -> float:
    """Width of the line ``vertex``-``neighbor`` measured at ``vertex``.

    The first line running from ``vertex`` to ``neighbor`` contributes its
    begin width, the first running the other way its end width.  Without a
    match the first begin width is returned.
    """

    for idx, (begin, end) in enumerate(topology.line_vertex):
        if begin == vertex and end == neighbor:
            return float(width_begin[idx])
        if begin == neighbor and end == vertex:
            return float(width_end[idx])
    return float(width_begin[0])


def line_perp(
    topology: Topology,
    line_index: int,
    at_end: bool,
    side_sign: int,
    width_begin: Sequence[float],
    width_end: Sequence[float],
    config: Optional[EngineConfig] = None,
) -> OffsetLine:
    """Offset of ``line_index`` at one endpoint on the side picked by ``side_sign``."""

    cfg = resolve_config(config)
    sign = 1.0 if side_sign > 0 else -1.0
    begin, end = topology.line_vertex[line_index]
    if at_end:
        anchor, other = end, begin
        width = float(width_end[line_index])
    else:
        anchor, other = begin, end
        width = float(width_begin[line_index])

    points = topology.points
    origin = points[anchor]
    perp = perpendicular(origin - points[other], sign)

    partner: Optional[VertexId] = None
    partner_perp: Optional[np.ndarray] = None
    partner_width = width

    if topology.degree(anchor) > 1:
        is_free_end = False
        angle = _ANGLE_SENTINEL * sign
        for neighbor in topology.vertex_vertex[anchor]:
            if neighbor == other:
                continue
            candidate = perpendicular(points[neighbor] - origin, sign)
            candidate_angle = signed_angle(candidate, perp)
            if sign > 0:
                better = candidate_angle < angle
            else:
                better = candidate_angle > angle
            if better:
                angle = candidate_angle
                partner = neighbor
                partner_perp = candidate
                partner_width = width_at_vertex(topology, anchor, neighbor, width_begin, width_end)
        if partner_perp is None:
            # Only parallel copies of this line meet here. Offset straight rather than
            # against a zero partner perpendicular at the sentinel angle.
            logger.debug(
                "Line %d: junction %d has no distinct neighbor, offsetting straight",
                line_index,
                anchor,
            )
            angle = 0.0
            partner_perp = perp
    else:
        is_free_end = True
        angle = 0.0
        partner_perp = perp

    effective = (width + partner_width) / 2.0
    denom = 2.0 * math.cos(angle / 2.0) ** 2
    scale = effective / denom if denom > 0.0 else math.inf
    bisector = perp + partner_perp

    guarded = scale > cfg.miter_guard
    if guarded:
        logger.debug(
            "Line %d: miter scale %.4g at vertex %d exceeds guard %.4g (angle=%.6f)",
            line_index,
            scale,
            anchor,
            cfg.miter_guard,
            angle,
        )
        vector = -effective * bisector
    else:
        vector = -scale * bisector

    return OffsetLine(
        vertex=anchor,
        start=origin.copy(),
        vector=vector,
        is_free_end=is_free_end,
        width=effective,
        angle=angle,
        scale=scale,
        partner=partner,
        guarded=guarded,
    )


def _edge_offsets(
    topology: Topology,
    line_index: int,
    width_begin: Sequence[float],
    width_end: Sequence[float],
    config: EngineConfig,
) -> EdgeOffsets:
    a, b, c, d = (
        line_perp(topology, line_index, at_end, sign, width_begin, width_end, config)
        for at_end, sign in _PANEL_LAYOUT
    )
    return a, b, c, d


def build_panels(
    topology: Topology,
    width_begin: Sequence[float],
    width_end: Sequence[float],
    config: Optional[EngineConfig] = None,
    workers: int = 1,
) -> Tuple[List[Panel], List[Tuple[OffsetLine, OffsetLine]], List[OffsetLine]]:
    """Build both panels of every line.

    Returns ``(panels, offset_lines, free_end_lines)`` where
    ``offset_lines[p]`` holds the two offsets bounding panel ``p``.
    """

    cfg = resolve_config(config)
    count = topology.line_count
    wb = normalize_widths(width_begin, count)
    we = normalize_widths(width_end, count)

    def compute(idx: int) -> EdgeOffsets:
        return _edge_offsets(topology, idx, wb, we, cfg)

    if workers > 1 and count > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            per_line = list(pool.map(compute, range(count)))
    else:
        per_line = [compute(idx) for idx in range(count)]

    panels: List[Panel] = []
    offset_lines: List[Tuple[OffsetLine, OffsetLine]] = []
    free_end_lines: List[OffsetLine] = []
    for idx, offsets in enumerate(per_line):
        free_end_lines.extend(off for off in offsets if off.is_free_end)
        first, second, third, fourth = offsets
        panels.append(Panel(Side.from_offset(first), Side.from_offset(second), idx))
        offset_lines.append((first, second))
        panels.append(Panel(Side.from_offset(third), Side.from_offset(fourth), idx))
        offset_lines.append((third, fourth))

    guarded = sum(1 for off_pair in offset_lines for off in off_pair if off.guarded)
    if guarded:
        logger.warning("%d offset(s) fell back to the unscaled bisector", guarded)
    logger.info(
        "Built %d panel(s) from %d line(s), %d free end(s)",
        len(panels),
        count,
        len(free_end_lines),
    )
    return panels, offset_lines, free_end_lines


__all__ = ["width_at_vertex", "line_perp", "build_panels"]


apply_debug_logging(globals(), logger=logger)
