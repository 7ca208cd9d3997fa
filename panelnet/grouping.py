"""Partition panels into groups of touching panels.

Two panels touch when a side of one and a side of the other are anchored at
the same vertex and carry (almost) the same offset vector.  Sharing a vertex
alone is not enough: at a sharp three-way junction the panels on either side
of an arm point in different directions and end up in different groups.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from .config import EngineConfig, resolve_config
from .logging_utils import apply_debug_logging
from .model import Panel

logger = logging.getLogger(__name__)


def touch(first: Panel, second: Panel, tolerance: float = 1e-3) -> bool:
    for mine in first.sides:
        for theirs in second.sides:
            if mine.vertex != theirs.vertex:
                continue
            if float(np.linalg.norm(theirs.direction - mine.direction)) < tolerance:
                return True
    return False


def group_panels(panels: Sequence[Panel], config: Optional[EngineConfig] = None) -> List[List[int]]:
    """Group panel indices into maximal touching sets.

    The first pending panel seeds a group; every pending panel touching any
    member is absorbed, pass after pass, until a pass absorbs nothing.  Each
    pass appends its matches latest pending index first.  A pass removes at
    least one pending panel or ends the group, so the loop runs at most
    ``len(panels)`` absorbing passes in total.
    """

    tolerance = resolve_config(config).touch_tolerance
    pending = list(range(len(panels)))
    groups: List[List[int]] = []

    while pending:
        group = [pending.pop(0)]
        while True:
            absorbed = [
                idx
                for idx in pending
                if any(touch(panels[member], panels[idx], tolerance) for member in group)
            ]
            if not absorbed:
                break
            taken = set(absorbed)
            group.extend(reversed(absorbed))
            pending = [idx for idx in pending if idx not in taken]
        groups.append(group)

    logger.info("Grouped %d panel(s) into %d group(s)", len(panels), len(groups))
    return groups


def panel_group_ids(groups: Sequence[Sequence[int]], count: int) -> List[int]:
    """Map every panel index to the index of its group."""

    ids = [-1] * count
    for group_id, group in enumerate(groups):
        for idx in group:
            if ids[idx] != -1:
                raise ValueError(f"panel {idx} appears in groups {ids[idx]} and {group_id}")
            ids[idx] = group_id
    missing = [idx for idx, gid in enumerate(ids) if gid == -1]
    if missing:
        raise ValueError(f"panels {missing} are not assigned to any group")
    return ids


__all__ = ["touch", "group_panels", "panel_group_ids"]


apply_debug_logging(globals(), logger=logger)
