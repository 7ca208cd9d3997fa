"""
Shared line networks for the engine tests.
"""
import math

import pytest

from panelnet import EngineConfig, get_engine_config, set_engine_config

SQRT3 = math.sqrt(3.0)


@pytest.fixture
def collinear_lines():
    """Three unit lines A-B, B-C, C-D along X."""
    return [
        ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0)),
        ((1.0, 0.0, 0.0), (2.0, 0.0, 0.0)),
        ((2.0, 0.0, 0.0), (3.0, 0.0, 0.0)),
    ]


@pytest.fixture
def star_lines():
    """Three unit arms leaving the origin 120 degrees apart.

    Arm 0 points along +Y, arm 1 to the lower left, arm 2 to the lower right.
    Welded vertex ids are: origin 0, arm tips 1, 2, 3.
    """
    origin = (0.0, 0.0, 0.0)
    return [
        (origin, (0.0, 1.0, 0.0)),
        (origin, (-SQRT3 / 2, -0.5, 0.0)),
        (origin, (SQRT3 / 2, -0.5, 0.0)),
    ]


@pytest.fixture
def square_lines():
    """Closed counterclockwise unit square."""
    corners = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)]
    return [(corners[i], corners[(i + 1) % 4]) for i in range(4)]


def _sharp_turn_lines(epsilon):
    b = (1.0, 0.0, 0.0)
    c = (1.0 - math.cos(epsilon), math.sin(epsilon), 0.0)
    return [((0.0, 0.0, 0.0), b), (b, c)]


@pytest.fixture
def sharp_turn():
    """Factory: A-B along X, then B-C folding back by ``pi - epsilon``."""
    return _sharp_turn_lines


@pytest.fixture
def restore_engine_config():
    saved = get_engine_config()
    yield
    set_engine_config(saved)


@pytest.fixture
def tight_guard_config():
    return EngineConfig(miter_guard=1.5)
