from __future__ import annotations

import pytest

from core.costs import Transition, classify_transition, trade_costs
from core.errors import PreconditionError


def test_classify_transition():
    assert classify_transition(0.0, 1.0) is Transition.OPEN
    assert classify_transition(-1.0, 0.0) is Transition.CLOSE
    assert classify_transition(1.0, -1.0) is Transition.REVERSAL
    assert classify_transition(1.0, 1.0) is Transition.NONE
    assert classify_transition(0.0, 0.0) is Transition.NONE


def test_open_charges_at_current_index():
    assert trade_costs([0.0, 0.0, 1.0, 1.0], 0.001) == [0.0, 0.0, -0.001, 0.0]


def test_close_charges_at_previous_index():
    assert trade_costs([1.0, 1.0, 0.0, 0.0], 0.001) == [0.0, -0.001, 0.0, 0.0]


def test_reversal_charges_both_sides():
    """Open then immediate sign flip: cost before and after the reversal."""
    assert trade_costs([0.0, 1.0, -1.0], 0.002) == [0.0, -0.002, -0.002]


def test_costs_overwrite_instead_of_accumulating():
    # open at 1 and close claiming index 1 again -> single charge
    assert trade_costs([0.0, 1.0, 0.0], 0.001) == [0.0, -0.001, 0.0]


def test_flat_signal_has_no_costs():
    assert trade_costs([0.0] * 5, 0.01) == [0.0] * 5


def test_empty_signal():
    assert trade_costs([], 0.001) == []


def test_negative_cost_rate_rejected():
    with pytest.raises(PreconditionError):
        trade_costs([0.0, 1.0], -0.001)
