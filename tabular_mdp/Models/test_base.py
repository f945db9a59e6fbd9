"""Tests for the default behaviour of the TabularModel interface."""

import numpy as np
import pytest

from .base import TabularModel
from .errors import IndexOutOfRangeError


class RingModel(TabularModel):
    """Generated model: action 0 stays, action 1 moves to the next state."""

    def __init__(self, n: int):
        self.n = n

    @property
    def state_count(self):
        return self.n

    @property
    def action_count(self):
        return 2

    @property
    def discount_factor(self):
        return 0.5

    def reward(self, s1, a, s2):
        return float(s2)

    def transition_probability(self, s1, a, s2):
        target = s1 if a == 0 else (s1 + 1) % self.n
        return 1.0 if s2 == target else 0.0


def test_interface_is_abstract():
    with pytest.raises(TypeError):
        TabularModel()


def test_partial_implementation_is_abstract():
    class NoRewards(TabularModel):
        state_count = 1
        action_count = 1
        discount_factor = 0.0

        def transition_probability(self, s1, a, s2):
            return 1.0

    with pytest.raises(TypeError):
        NoRewards()


def test_index_ranges():
    model = RingModel(4)
    assert list(model.states()) == [0, 1, 2, 3]
    assert list(model.actions()) == [0, 1]


def test_transition_row():
    model = RingModel(3)
    assert np.array_equal(model.transition_row(2, 1), [1.0, 0.0, 0.0])
    assert np.array_equal(model.transition_row(1, 0), [0.0, 1.0, 0.0])


def test_expected_reward():
    model = RingModel(3)
    assert model.expected_reward(2, 1) == 0.0
    assert model.expected_reward(1, 1) == 2.0


def test_check_indices():
    model = RingModel(3)
    model.check_indices(2, 1, 0)
    with pytest.raises(IndexOutOfRangeError):
        model.check_indices(3, 0, 0)
    with pytest.raises(IndexOutOfRangeError):
        model.check_indices(0, 2, 0)
    with pytest.raises(IndexOutOfRangeError):
        model.transition_row(0, -1)
