"""JSON reading and writing of networks and results."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

import numpy as np

from .model import FREE_END_PROFILES, MeshOptions, NetworkResult, OffsetLine, Segment
from .validate import NetworkInputError

PathLike = Union[str, Path]

_REQUIRED_KEYS = ("lines", "tolerance", "width_begin", "width_end")


@dataclass
class NetworkDocument:
    """Inputs of one run as read from a JSON document."""

    lines: List[Any]
    tolerance: float
    width_begin: List[float]
    width_end: List[float]
    options: MeshOptions = field(default_factory=MeshOptions)


def parse_network(data: Mapping[str, Any]) -> NetworkDocument:
    if not isinstance(data, Mapping):
        raise NetworkInputError("network document must be a JSON object")
    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise NetworkInputError(f"network document is missing keys: {', '.join(missing)}")

    vertical = data.get("vertical", False)
    if not isinstance(vertical, bool):
        raise NetworkInputError(f"vertical must be true or false, got {vertical!r}")
    profile = str(data.get("free_end_profile", "deviation"))
    if profile not in FREE_END_PROFILES:
        raise NetworkInputError(
            f"free_end_profile must be one of {', '.join(FREE_END_PROFILES)}, got {profile!r}"
        )
    try:
        options = MeshOptions(
            n_u=int(data.get("n_u", 2)),
            n_v=int(data.get("n_v", 2)),
            angle=float(data.get("angle", 0.0)),
            deviation=float(data.get("deviation", 0.0)),
            vertical=vertical,
            free_end_profile=profile,
        )
        tolerance = float(data["tolerance"])
    except (TypeError, ValueError) as exc:
        raise NetworkInputError(f"invalid numeric option: {exc}") from exc

    return NetworkDocument(
        lines=list(data["lines"] or []),
        tolerance=tolerance,
        width_begin=list(data["width_begin"] or []),
        width_end=list(data["width_end"] or []),
        options=options,
    )


def load_network(path: PathLike) -> NetworkDocument:
    with Path(path).open("r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise NetworkInputError(f"{path}: invalid JSON ({exc})") from exc
    return parse_network(data)


def _point(value: np.ndarray) -> List[float]:
    return [float(c) for c in value]


def _segment(segment: Segment) -> List[List[float]]:
    return [_point(segment[0]), _point(segment[1])]


def _offset(offset: OffsetLine) -> Dict[str, Any]:
    start, end = _segment(offset.to_segment())
    return {
        "vertex": offset.vertex,
        "start": start,
        "end": end,
        "is_free_end": offset.is_free_end,
        "width": offset.width,
        "angle": offset.angle,
        "scale": offset.scale,
        "partner": offset.partner,
        "guarded": offset.guarded,
    }


def _rows(rows: Mapping[int, List[Segment]]) -> Dict[str, List[List[List[float]]]]:
    return {str(row): [_segment(seg) for seg in rows[row]] for row in sorted(rows)}


def result_to_dict(result: NetworkResult) -> Dict[str, Any]:
    """Plain-JSON view of every pipeline output."""

    return {
        "points": [_point(pt) for pt in result.points],
        "line_vertex": [list(pair) for pair in result.line_vertex],
        "vertex_vertex": {str(k): list(v) for k, v in result.vertex_vertex.items()},
        "vertex_line": {str(k): list(v) for k, v in result.vertex_line.items()},
        "offset_lines": [[_offset(a), _offset(b)] for a, b in result.offset_lines],
        "free_end_lines": [_offset(off) for off in result.free_end_lines],
        "panels": [
            {
                "ids": panel.to_list(),
                "sides": [_segment(side.to_segment()) for side in panel.sides],
            }
            for panel in result.panels
        ],
        "panel_group": list(result.panel_group),
        "groups": [list(group) for group in result.groups],
        "group_lines": result.group_lines,
        "meshes": [
            {
                "vertices": pm.mesh.vertices.tolist(),
                "faces": pm.mesh.faces.tolist(),
            }
            for pm in result.meshes
        ],
        "u_curves": _rows(result.u_curves),
        "v_curves": _rows(result.v_curves),
        "fixed_points": [_point(pt) for pt in result.fixed_points],
        "summary": result.summary(),
    }


def dump_result(result: NetworkResult, path: PathLike) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(result_to_dict(result), indent=2), encoding="utf-8")
    return output


__all__ = [
    "NetworkDocument",
    "parse_network",
    "load_network",
    "result_to_dict",
    "dump_result",
]
