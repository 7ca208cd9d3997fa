"""Line topology: weld line endpoints and record adjacency.

Endpoints are welded in input order (begin then end of every line).  An
endpoint reuses an existing vertex when their distance is strictly below the
tolerance; when several vertices qualify the most recently created one wins.
Candidate lookup goes through a KD-tree over the raw endpoints, but the
decision itself is the exact ``distance < tolerance`` test, so the result is
the same as scanning every accumulated vertex.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial import cKDTree

from .model import LinePair, Topology, VertexId
from .validate import validate_lines, validate_tolerance

logger = logging.getLogger(__name__)

# Inflates the KD-tree radius so the exact strict test sees every candidate.
_RADIUS_SLACK = 1e-9


def _weld(raw: np.ndarray, tolerance: float) -> Tuple[List[np.ndarray], List[VertexId]]:
    tree = cKDTree(raw)
    radius = tolerance * (1.0 + _RADIUS_SLACK)

    points: List[np.ndarray] = []
    welded: List[VertexId] = []
    created_by: Dict[int, VertexId] = {}

    for k in range(raw.shape[0]):
        target = raw[k]
        match: Optional[VertexId] = None
        for j in tree.query_ball_point(target, r=radius):
            vertex = created_by.get(j)
            if vertex is None or j >= k:
                continue
            if float(np.linalg.norm(points[vertex] - target)) < tolerance:
                if match is None or vertex > match:
                    match = vertex
        if match is None:
            match = len(points)
            points.append(target.copy())
            created_by[k] = match
        welded.append(match)
    return points, welded


def build_topology(lines: Sequence[Any], tolerance: float) -> Topology:
    """Weld ``lines`` into a shared vertex set and build adjacency maps."""

    raw_lines = validate_lines(lines)
    tol = validate_tolerance(tolerance)

    raw = np.array([pt for line in raw_lines for pt in line], dtype=float)
    points, welded = _weld(raw, tol)

    line_vertex: List[LinePair] = [
        (welded[2 * idx], welded[2 * idx + 1]) for idx in range(len(raw_lines))
    ]

    vertex_vertex: Dict[VertexId, List[VertexId]] = {vid: [] for vid in range(len(points))}
    vertex_line: Dict[VertexId, List[int]] = {vid: [] for vid in range(len(points))}
    for idx, (begin, end) in enumerate(line_vertex):
        vertex_vertex[end].append(begin)
        vertex_vertex[begin].append(end)
        vertex_line[begin].append(idx)
        vertex_line[end].append(idx)
        if begin == end:
            logger.warning("Line %d collapses to vertex %d within tolerance %g", idx, begin, tol)

    logger.info(
        "Welded %d endpoint(s) of %d line(s) into %d vertices",
        raw.shape[0],
        len(raw_lines),
        len(points),
    )
    return Topology(
        points=points,
        line_vertex=line_vertex,
        vertex_vertex=vertex_vertex,
        vertex_line=vertex_line,
    )


__all__ = ["build_topology"]
