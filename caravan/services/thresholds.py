import math
from collections.abc import Iterable
from collections.abc import Sequence

Thresholds = tuple[int, int, int, int]

FALLBACK_THRESHOLDS: Thresholds = (1, 2, 3, 4)
QUANTILES = (0.25, 0.50, 0.75, 0.90)


def quantile(sorted_values: Sequence[int], q: float) -> float:
    """Return the q-quantile of ascending values using linear interpolation.

    Position is `(n - 1) * q`, interpolated between the neighbouring order
    statistics.
    """

    if not sorted_values:
        raise ValueError("quantile of empty sequence")

    position = (len(sorted_values) - 1) * q
    base = math.floor(position)
    rest = position - base
    if base + 1 >= len(sorted_values):
        return float(sorted_values[base])
    lower = sorted_values[base]
    upper = sorted_values[base + 1]
    return lower + rest * (upper - lower)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def build_thresholds(counts: Iterable[int]) -> Thresholds:
    """Derive four strictly increasing cut points from non-zero daily counts."""

    non_zero = sorted(count for count in counts if count > 0)
    if not non_zero:
        return FALLBACK_THRESHOLDS

    thresholds: list[int] = []
    for q in QUANTILES:
        value = _round_half_up(quantile(non_zero, q))
        floor = thresholds[-1] + 1 if thresholds else 1
        thresholds.append(max(value, floor))

    # The busiest day always lands in the top tier when ordering allows it.
    busiest = non_zero[-1]
    if thresholds[2] >= busiest and busiest - 1 > thresholds[1]:
        thresholds[2] = busiest - 1
        thresholds[3] = max(thresholds[3], thresholds[2] + 1)

    return (thresholds[0], thresholds[1], thresholds[2], thresholds[3])


def level_for(count: int, thresholds: Thresholds) -> int:
    """Map daily contribution count to an intensity level in range 0..4."""

    if count <= 0:
        return 0
    if count <= thresholds[0]:
        return 1
    if count <= thresholds[1]:
        return 2
    if count <= thresholds[2]:
        return 3
    return 4
