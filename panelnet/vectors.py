"""Small 3-D vector helpers shared by the offset and mesh stages.

Vectors are plain ``numpy`` arrays of shape ``(3,)``.  Every helper returns a
fresh array and never mutates its arguments.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

Vector = np.ndarray

Z_AXIS = np.array([0.0, 0.0, 1.0])

_EPS = 1e-12


def as_point(coords: Sequence[float]) -> Vector:
    """Return ``coords`` as a float 3-vector, padding 2-D input with ``z=0``."""

    values = [float(c) for c in coords]
    if len(values) == 2:
        values.append(0.0)
    return np.array(values, dtype=float)


def norm(vec: Vector) -> float:
    return float(np.linalg.norm(vec))


def unit(vec: Vector) -> Vector:
    """Return ``vec`` scaled to unit length; zero vectors stay zero."""

    length = norm(vec)
    if length <= _EPS:
        return np.zeros(3)
    return np.asarray(vec, dtype=float) / length


def perpendicular(direction: Vector, side_sign: float) -> Vector:
    """Unit vector ``direction x (side_sign * Z)``."""

    return unit(np.cross(direction, side_sign * Z_AXIS))


def signed_angle(v1: Vector, v2: Vector) -> float:
    """Signed angle from ``v1`` to ``v2`` measured around +Z.

    The unsigned angle is taken from the dot product; when the Z component of
    ``v1 x v2`` is negative the angle is reflected to ``2*pi - angle``.  The
    result is wrapped to ``(-pi, pi]`` and finally reduced with ``fmod(., pi)``
    so a straight reversal reads as ``0``.
    """

    a = unit(v1)
    b = unit(v2)
    unsigned = math.acos(max(min(float(np.dot(a, b)), 1.0), -1.0))
    sine = math.asin(max(min(float(np.cross(a, b)[2]), 1.0), -1.0))

    if sine >= 0:
        angle = unsigned
    else:
        angle = 2.0 * math.pi - unsigned
    if angle > math.pi:
        angle -= 2.0 * math.pi
    return math.fmod(angle, math.pi)


__all__ = [
    "Vector",
    "Z_AXIS",
    "as_point",
    "norm",
    "unit",
    "perpendicular",
    "signed_angle",
]
