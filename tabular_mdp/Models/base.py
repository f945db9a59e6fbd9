"""Abstract interface for finite tabular Markov Decision Processes."""

from abc import ABC, abstractmethod
import operator

import numpy as np

from .errors import IndexOutOfRangeError


class TabularModel(ABC):
    """
    Read-only capability interface of a finite MDP with integer-indexed
    states 0..state_count-1 and actions 0..action_count-1.

    Subclasses must implement:
    - state_count, action_count, discount_factor (properties)
    - reward(s1, a, s2): immediate reward for s1 --a--> s2
    - transition_probability(s1, a, s2): P(s2 | s1, a)

    Solvers and simulators should only rely on these members, so that dense,
    sparse or generated models can be swapped without touching them.
    """

    @property
    @abstractmethod
    def state_count(self) -> int:
        """Number of states."""

    @property
    @abstractmethod
    def action_count(self) -> int:
        """Number of actions."""

    @property
    @abstractmethod
    def discount_factor(self) -> float:
        """Discount factor gamma, as supplied at construction."""

    @abstractmethod
    def reward(self, s1: int, a: int, s2: int) -> float:
        """Immediate reward for taking action a in s1 and landing in s2."""

    @abstractmethod
    def transition_probability(self, s1: int, a: int, s2: int) -> float:
        """Probability of landing in s2 after taking action a in s1."""

    def states(self) -> range:
        return range(self.state_count)

    def actions(self) -> range:
        return range(self.action_count)

    def check_indices(self, s1: int, a: int, s2: int = 0):
        """Raise IndexOutOfRangeError unless (s1, a, s2) lies inside the model."""
        for name, idx, bound in (
            ("state", s1, self.state_count),
            ("action", a, self.action_count),
            ("next state", s2, self.state_count),
        ):
            try:
                i = operator.index(idx)
            except TypeError:
                raise IndexOutOfRangeError(name, idx, bound) from None
            if i < 0 or i >= bound:
                raise IndexOutOfRangeError(name, idx, bound)

    def transition_row(self, s1: int, a: int) -> np.ndarray:
        """Distribution over next states for (s1, a)."""
        self.check_indices(s1, a)
        return np.array(
            [self.transition_probability(s1, a, s2) for s2 in self.states()],
            dtype=float,
        )

    def expected_reward(self, s1: int, a: int) -> float:
        """sum_s2 P(s2 | s1, a) * R(s1, a, s2)."""
        self.check_indices(s1, a)
        total = 0.0
        for s2 in self.states():
            p = self.transition_probability(s1, a, s2)
            if p > 0.0:
                total += p * self.reward(s1, a, s2)
        return total
