"""Core data structures for the line-network pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

VertexId = int
LinePair = Tuple[VertexId, VertexId]
Segment = Tuple[np.ndarray, np.ndarray]

FREE_END_PROFILES = ("deviation", "arc")


@dataclass
class Topology:
    """Welded vertex set with line and vertex adjacency."""

    points: List[np.ndarray]
    line_vertex: List[LinePair]
    vertex_vertex: Dict[VertexId, List[VertexId]]
    vertex_line: Dict[VertexId, List[int]]

    def degree(self, vertex: VertexId) -> int:
        return len(self.vertex_vertex.get(vertex, []))

    def is_free_vertex(self, vertex: VertexId) -> bool:
        return self.degree(vertex) == 1

    @property
    def line_count(self) -> int:
        return len(self.line_vertex)


@dataclass
class OffsetLine:
    """Offset computed at one endpoint of a line for one side sign."""

    vertex: VertexId
    start: np.ndarray
    vector: np.ndarray
    is_free_end: bool
    width: float
    angle: float
    scale: float
    partner: Optional[VertexId] = None
    guarded: bool = False

    @property
    def end(self) -> np.ndarray:
        return self.start + self.vector

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.vector))

    def to_segment(self) -> Segment:
        return (self.start.copy(), self.end)


@dataclass
class Side:
    """One lateral boundary of a panel, anchored at a welded vertex."""

    vertex: VertexId
    point: np.ndarray
    direction: np.ndarray
    is_free_end: bool
    width: float

    @classmethod
    def from_offset(cls, offset: OffsetLine) -> "Side":
        return cls(
            vertex=offset.vertex,
            point=offset.start.copy(),
            direction=offset.vector.copy(),
            is_free_end=offset.is_free_end,
            width=offset.width,
        )

    def to_segment(self) -> Segment:
        return (self.point.copy(), self.point + self.direction)


@dataclass
class Panel:
    """One of the two offset strips generated for a source line."""

    side1: Side
    side2: Side
    line_index: int

    @property
    def sides(self) -> Tuple[Side, Side]:
        return (self.side1, self.side2)

    def to_list(self) -> List[int]:
        return [self.side1.vertex, self.side2.vertex, self.line_index]


@dataclass
class QuadMesh:
    """Quad-only mesh stored as vertex and face index arrays."""

    vertices: np.ndarray
    faces: np.ndarray

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def face_count(self) -> int:
        return int(self.faces.shape[0])

    def face_normals(self) -> np.ndarray:
        """Unit normals from the cross product of each quad's diagonals."""

        if self.face_count == 0:
            return np.zeros((0, 3))
        v = self.vertices
        f = self.faces
        diag_a = v[f[:, 2]] - v[f[:, 0]]
        diag_b = v[f[:, 3]] - v[f[:, 1]]
        normals = np.cross(diag_a, diag_b)
        lengths = np.linalg.norm(normals, axis=1)
        lengths[lengths <= 1e-12] = 1.0
        return normals / lengths[:, None]


@dataclass
class PanelMesh:
    mesh: QuadMesh
    u_curves: Dict[int, List[Segment]]
    v_curves: Dict[int, List[Segment]]
    fixed_points: List[np.ndarray] = field(default_factory=list)


@dataclass
class MeshOptions:
    """Per-run knobs of the mesh filler."""

    n_u: int = 2
    n_v: int = 2
    angle: float = 0.0
    deviation: float = 0.0
    vertical: bool = False
    free_end_profile: str = "deviation"

    def clamped(self) -> "MeshOptions":
        """Return a copy with subdivision counts raised to at least 2."""

        return MeshOptions(
            n_u=max(int(self.n_u), 2),
            n_v=max(int(self.n_v), 2),
            angle=float(self.angle),
            deviation=float(self.deviation),
            vertical=bool(self.vertical),
            free_end_profile=self.free_end_profile,
        )


@dataclass
class NetworkResult:
    """Everything the pipeline hands to downstream consumers."""

    topology: Topology
    width_begin: List[float]
    width_end: List[float]
    panels: List[Panel]
    offset_lines: List[Tuple[OffsetLine, OffsetLine]]
    free_end_lines: List[OffsetLine]
    groups: List[List[int]]
    panel_group: List[int]
    meshes: List[PanelMesh]
    u_curves: Dict[int, List[Segment]]
    v_curves: Dict[int, List[Segment]]
    fixed_points: List[np.ndarray]

    @property
    def points(self) -> List[np.ndarray]:
        return self.topology.points

    @property
    def line_vertex(self) -> List[LinePair]:
        return self.topology.line_vertex

    @property
    def vertex_vertex(self) -> Dict[VertexId, List[VertexId]]:
        return self.topology.vertex_vertex

    @property
    def vertex_line(self) -> Dict[VertexId, List[int]]:
        return self.topology.vertex_line

    @property
    def group_lines(self) -> List[List[int]]:
        return [[self.panels[idx].line_index for idx in group] for group in self.groups]

    def group_meshes(self) -> List[List[PanelMesh]]:
        return [[self.meshes[idx] for idx in group] for group in self.groups]

    def summary(self) -> Dict[str, int]:
        return {
            "vertices": len(self.topology.points),
            "lines": self.topology.line_count,
            "panels": len(self.panels),
            "groups": len(self.groups),
            "free_ends": len(self.free_end_lines),
            "fixed_points": len(self.fixed_points),
            "faces": sum(m.mesh.face_count for m in self.meshes),
        }


__all__ = [
    "VertexId",
    "LinePair",
    "Segment",
    "FREE_END_PROFILES",
    "Topology",
    "OffsetLine",
    "Side",
    "Panel",
    "QuadMesh",
    "PanelMesh",
    "MeshOptions",
    "NetworkResult",
]
