import pytest

from caravan.services.thresholds import FALLBACK_THRESHOLDS
from caravan.services.thresholds import build_thresholds
from caravan.services.thresholds import level_for
from caravan.services.thresholds import quantile


def test_quantile_interpolates_between_order_statistics() -> None:
    values = [1, 2, 5, 10, 10, 10]

    assert quantile(values, 0.25) == pytest.approx(2.75)
    assert quantile(values, 0.50) == pytest.approx(7.5)
    assert quantile(values, 0.0) == 1
    assert quantile(values, 1.0) == 10


def test_quantile_rejects_empty_input() -> None:
    with pytest.raises(ValueError):
        quantile([], 0.5)


@pytest.mark.parametrize("counts", [[], [0], [0, 0, 0, 0, 0, 0, 0]])
def test_build_thresholds_falls_back_without_activity(counts: list[int]) -> None:
    assert build_thresholds(counts) == FALLBACK_THRESHOLDS == (1, 2, 3, 4)


def test_build_thresholds_single_value_yields_consecutive_integers() -> None:
    assert build_thresholds([0, 7, 0]) == (7, 8, 9, 10)


def test_build_thresholds_from_spread_distribution() -> None:
    counts = list(range(1, 101))

    assert build_thresholds(counts) == (26, 51, 75, 90)


@pytest.mark.parametrize(
    "counts",
    [
        [1],
        [1, 1, 1, 1],
        [1, 1, 1, 1, 100],
        [3, 3, 4],
        [2, 50, 50, 50, 50],
        [1, 2, 5, 10, 10, 10],
        [0, 0, 40, 1, 1, 2, 3, 7, 19],
        list(range(0, 365, 3)),
    ],
)
def test_build_thresholds_strictly_increasing_and_positive(counts: list[int]) -> None:
    t0, t1, t2, t3 = build_thresholds(counts)

    assert 1 <= t0 < t1 < t2 < t3


def test_build_thresholds_puts_busiest_day_in_top_tier() -> None:
    thresholds = build_thresholds([0, 1, 2, 5, 10, 10, 10])

    assert thresholds == (3, 8, 9, 11)
    assert level_for(10, thresholds) == 4


def test_level_for_zero_and_negative_counts_is_zero() -> None:
    assert level_for(0, (1, 2, 3, 4)) == 0
    assert level_for(-3, (5, 6, 7, 8)) == 0


def test_level_for_boundaries() -> None:
    thresholds = (2, 5, 9, 12)

    assert [level_for(count, thresholds) for count in (1, 2, 3, 5, 6, 9, 10, 500)] == [
        1,
        1,
        2,
        2,
        3,
        3,
        4,
        4,
    ]


@pytest.mark.parametrize("thresholds", [(1, 2, 3, 4), (3, 8, 9, 11), (10, 20, 30, 40)])
def test_level_for_is_total_and_monotonic(thresholds: tuple[int, int, int, int]) -> None:
    levels = [level_for(count, thresholds) for count in range(0, 200)]

    assert all(0 <= level <= 4 for level in levels)
    assert levels == sorted(levels)
