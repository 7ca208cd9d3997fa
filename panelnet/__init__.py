from .config import EngineConfig, get_engine_config, set_engine_config
from .validate import NetworkInputError
from .model import (
    Topology,
    OffsetLine,
    Side,
    Panel,
    QuadMesh,
    PanelMesh,
    MeshOptions,
    NetworkResult,
)
from .vectors import signed_angle
from .topology import build_topology
from .widths import normalize_widths
from .offsets import line_perp, width_at_vertex, build_panels
from .grouping import touch, group_panels, panel_group_ids
from .meshing import (
    arc_deviation_profile,
    arc_profile,
    line_profile,
    points_to_mesh,
    panel_to_mesh,
)
from .pipeline import run_network
from .io import NetworkDocument, parse_network, load_network, result_to_dict, dump_result

__all__ = [
    'EngineConfig',
    'get_engine_config',
    'set_engine_config',
    'NetworkInputError',
    'Topology',
    'OffsetLine',
    'Side',
    'Panel',
    'QuadMesh',
    'PanelMesh',
    'MeshOptions',
    'NetworkResult',
    'signed_angle',
    'build_topology',
    'normalize_widths',
    'line_perp',
    'width_at_vertex',
    'build_panels',
    'touch',
    'group_panels',
    'panel_group_ids',
    'arc_deviation_profile',
    'arc_profile',
    'line_profile',
    'points_to_mesh',
    'panel_to_mesh',
    'run_network',
    'NetworkDocument',
    'parse_network',
    'load_network',
    'result_to_dict',
    'dump_result',
]
