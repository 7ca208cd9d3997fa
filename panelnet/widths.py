from typing import List, Sequence

from .validate import NetworkInputError


def normalize_widths(widths: Sequence[float], count: int) -> List[float]:
    """Pad ``widths`` to ``count`` entries by repeating its last value.

    Lists that are already long enough come back unchanged, extra entries
    included.
    """

    values = [float(w) for w in widths]
    if not values:
        raise NetworkInputError('width list needs at least one seed value')
    if len(values) < count:
        values.extend([values[-1]] * (count - len(values)))
    return values
