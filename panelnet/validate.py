import math
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from .vectors import as_point

RawLine = Tuple[np.ndarray, np.ndarray]


class NetworkInputError(ValueError):
    pass


def _coerce_point(value: Any, line_index: int, role: str) -> np.ndarray:
    if not isinstance(value, (list, tuple, np.ndarray)) or len(value) not in (2, 3):
        raise NetworkInputError(f'[line {line_index}] {role} point must have 2 or 3 coordinates')
    try:
        point = as_point(value)
    except (TypeError, ValueError) as exc:
        raise NetworkInputError(f'[line {line_index}] {role} point is not numeric: {value!r}') from exc
    if not np.all(np.isfinite(point)):
        raise NetworkInputError(f'[line {line_index}] {role} point has non-finite coordinates')
    return point


def validate_lines(lines: Optional[Sequence[Any]]) -> List[RawLine]:
    if lines is None:
        raise NetworkInputError('line list is missing')
    if len(lines) < 1:
        raise NetworkInputError('there must be at least one line')
    out: List[RawLine] = []
    for idx, line in enumerate(lines):
        if not isinstance(line, (list, tuple, np.ndarray)) or len(line) != 2:
            raise NetworkInputError(f'[line {idx}] expected a pair of endpoints')
        out.append((_coerce_point(line[0], idx, 'begin'), _coerce_point(line[1], idx, 'end')))
    return out


def validate_tolerance(tolerance: Any) -> float:
    try:
        value = float(tolerance)
    except (TypeError, ValueError) as exc:
        raise NetworkInputError(f'tolerance must be a number, got {tolerance!r}') from exc
    if not math.isfinite(value) or value <= 0.0:
        raise NetworkInputError(f'tolerance must be positive and finite, got {value}')
    return value


def validate_widths(widths: Optional[Sequence[Any]], name: str) -> List[float]:
    if widths is None:
        raise NetworkInputError(f'{name} is missing')
    if len(widths) == 0:
        raise NetworkInputError(f'{name} needs at least one seed value')
    try:
        values = [float(w) for w in widths]
    except (TypeError, ValueError) as exc:
        raise NetworkInputError(f'{name} must contain numbers') from exc
    if not all(math.isfinite(w) for w in values):
        raise NetworkInputError(f'{name} must contain finite numbers')
    return values
