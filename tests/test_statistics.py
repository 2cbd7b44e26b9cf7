from __future__ import annotations

import math

import pytest

from core.errors import PreconditionError
from features import hedge_ratio, log_returns, rolling_zscore, spread_standard


def test_log_returns_are_one_shorter():
    r = log_returns([1.0, math.e, math.e])
    assert r == pytest.approx([1.0, 0.0])


def test_log_returns_of_short_series():
    assert log_returns([]) == []
    assert log_returns([100.0]) == []


def test_log_returns_reject_non_positive_prices():
    with pytest.raises(PreconditionError):
        log_returns([1.0, 0.0, 2.0])


def test_hedge_ratio_recovers_slope():
    b = [1.0, 2.0, 3.0, 4.0, 5.0]
    a = [2.0 * x + 1.0 for x in b]
    assert hedge_ratio(a, b) == pytest.approx(2.0)
    assert spread_standard(a, b) == pytest.approx([1.0] * 5)


@pytest.mark.parametrize(
    "a, b",
    [
        ([1.0, 2.0], [1.0]),
        ([1.0], [1.0]),
        ([1.0, 2.0, 3.0], [4.0, 4.0, 4.0]),
    ],
)
def test_hedge_ratio_preconditions(a, b):
    with pytest.raises(PreconditionError):
        hedge_ratio(a, b)


def test_rolling_zscore_uses_population_std():
    assert rolling_zscore([1.0, 2.0, 3.0, 4.0], 2) == pytest.approx([0.0, 1.0, 1.0, 1.0])


def test_rolling_zscore_fills_warmup_and_flat_windows_with_zero():
    z = rolling_zscore([5.0, 5.0, 5.0, 5.0, 6.0], 3)
    assert len(z) == 5
    assert z[:4] == [0.0, 0.0, 0.0, 0.0]
    assert z[4] > 0


def test_rolling_zscore_window_too_small():
    with pytest.raises(PreconditionError):
        rolling_zscore([1.0, 2.0, 3.0], 1)
