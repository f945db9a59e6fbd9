"""Dense, validated, write-once tabular MDP."""

from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple
import math
import numbers
import warnings

import numpy as np

from .base import TabularModel
from .errors import (
    MDPValidationError,
    InvalidCountError,
    DimensionMismatchError,
    InvalidProbabilityError,
    DistributionNotNormalizedError,
)
from .mdp import MDP
from .tolerance import Tolerance, DEFAULT_TOLERANCE

Table = Sequence[Sequence[Sequence[float]]]


def _check_count(name: str, value) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        raise InvalidCountError(name, value)
    if value < 1:
        raise InvalidCountError(name, value)
    return int(value)


def _length(obj, table: str, dimension: str, expected: int, index: Tuple[int, ...]) -> int:
    try:
        n = len(obj)
    except TypeError:
        raise DimensionMismatchError(table, dimension, expected, None, index) from None
    if n != expected:
        raise DimensionMismatchError(table, dimension, expected, n, index)
    return n


def _check_shape(table: Table, name: str, n_states: int, n_actions: int, on_row=None):
    """
    Walk a nested [s1][a][s2] table state-major and check every level's size.
    on_row(s1, a, row) is called for each (s1, a) right after its size check.
    """
    _length(table, name, "state", n_states, ())
    for s1 in range(n_states):
        per_action = table[s1]
        _length(per_action, name, "action", n_actions, (s1,))
        for a in range(n_actions):
            row = per_action[a]
            _length(row, name, "next_state", n_states, (s1, a))
            if on_row is not None:
                on_row(s1, a, row)


def _is_real(x) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, (bool, np.bool_))


def _frozen_copy(table: Table, name: str, shape: Tuple[int, int, int]) -> np.ndarray:
    try:
        arr = np.array(table, dtype=np.float64, copy=True)
    except (TypeError, ValueError) as e:
        raise MDPValidationError(f"{name} contains non-numeric entries: {e}") from e
    if arr.shape != shape:
        raise MDPValidationError(f"{name} has shape {arr.shape}, expected {shape}")
    arr.setflags(write=False)
    return arr


class TabularMDP(TabularModel):
    """
    Finite MDP stored as dense [s1][a][s2] transition and reward tables.

    All structural and numerical checks happen once in the constructor:
      - both tables have shape (state_count, action_count, state_count)
      - every transition entry is a finite, non-negative number
      - for every (s1, a) the row over s2 sums to 1 within `tolerance.ulps`
        float32 ULPs, accumulated sequentially in single precision

    The first violation found raises an MDPValidationError subclass and no
    model is created. The tables are copied into read-only arrays, so later
    changes to the caller's lists do not affect the model, and queries are
    plain lookups.

    Parameters
    ----------
    state_count : int
        Number of states, >= 1.
    action_count : int
        Number of actions, >= 1.
    transitions : nested sequence or ndarray
        transitions[s1][a][s2] = P(s2 | s1, a).
    reward : nested sequence or ndarray
        reward[s1][a][s2] = R(s1, a, s2). Unconstrained.
    discount_factor : float
        Stored as given. Values outside [0, 1] emit a UserWarning.
    tolerance : Tolerance, optional
        Normalization tolerance, defaults to 4 ULPs.
    """

    def __init__(
        self,
        state_count: int,
        action_count: int,
        transitions: Table,
        reward: Table,
        discount_factor: float,
        tolerance: Optional[Tolerance] = None,
    ):
        n_states = _check_count("state_count", state_count)
        n_actions = _check_count("action_count", action_count)
        tolerance = DEFAULT_TOLERANCE if tolerance is None else tolerance

        def check_distribution(s1, a, row):
            for s2, p in enumerate(row):
                if not _is_real(p) or not math.isfinite(p) or p < 0:
                    raise InvalidProbabilityError(s1, a, s2, p)
            total = tolerance.row_sum(row)
            if not tolerance.is_normalized(total):
                raise DistributionNotNormalizedError(s1, a, float(total), tolerance.ulps)

        _check_shape(transitions, "transitions", n_states, n_actions, check_distribution)

        def check_rewards(s1, a, row):
            for s2, r in enumerate(row):
                if not _is_real(r):
                    raise MDPValidationError(
                        f"reward[{s1}][{a}][{s2}] = {r!r} is not a real number"
                    )

        _check_shape(reward, "reward", n_states, n_actions, check_rewards)

        discount_factor = float(discount_factor)
        if not 0.0 <= discount_factor <= 1.0:
            warnings.warn(
                f"discount_factor {discount_factor!r} is outside [0, 1]; "
                f"stored as given",
                UserWarning,
                stacklevel=2,
            )

        self._state_count = n_states
        self._action_count = n_actions
        self._transitions = _frozen_copy(transitions, "transitions", self.shape)
        self._reward = _frozen_copy(reward, "reward", self.shape)
        self._discount_factor = discount_factor
        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ------------------------------------------------------------------
    # Interface
    # ------------------------------------------------------------------

    @property
    def state_count(self) -> int:
        return self._state_count

    @property
    def action_count(self) -> int:
        return self._action_count

    @property
    def discount_factor(self) -> float:
        return self._discount_factor

    def reward(self, s1: int, a: int, s2: int) -> float:
        self.check_indices(s1, a, s2)
        return float(self._reward[s1, a, s2])

    def transition_probability(self, s1: int, a: int, s2: int) -> float:
        self.check_indices(s1, a, s2)
        return float(self._transitions[s1, a, s2])

    # ------------------------------------------------------------------
    # Array views
    # ------------------------------------------------------------------

    @property
    def shape(self) -> Tuple[int, int, int]:
        return (self._state_count, self._action_count, self._state_count)

    @property
    def transitions(self) -> np.ndarray:
        """Read-only (S, A, S) array, [s1, a, s2] = P(s2 | s1, a)."""
        return self._transitions

    @property
    def rewards(self) -> np.ndarray:
        """Read-only (S, A, S) array, [s1, a, s2] = R(s1, a, s2)."""
        return self._reward

    def transition_row(self, s1: int, a: int) -> np.ndarray:
        self.check_indices(s1, a)
        return self._transitions[s1, a, :]

    def transition_matrix(self, a: int) -> np.ndarray:
        """
        Returns T_a as an S x S matrix where [i, j] = P(s_j | s_i, a).
        """
        self.check_indices(0, a)
        return self._transitions[:, a, :]

    def reward_matrix(self, a: int) -> np.ndarray:
        """Returns R_a as an S x S matrix where [i, j] = R(s_i, a, s_j)."""
        self.check_indices(0, a)
        return self._reward[:, a, :]

    def expected_rewards(self) -> np.ndarray:
        """S x A matrix of sum_s2 P(s2 | s1, a) * R(s1, a, s2)."""
        # 0 * inf rewards on unreachable successors must not poison the sum
        with np.errstate(invalid="ignore"):
            weighted = np.where(self._transitions > 0.0, self._transitions * self._reward, 0.0)
        return weighted.sum(axis=2)

    def expected_reward(self, s1: int, a: int) -> float:
        self.check_indices(s1, a)
        return float(self.expected_rewards()[s1, a])

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def to_mdp(self) -> MDP:
        """Dictionary MDP over integer states/actions, listing nonzero successors."""
        states = list(self.states())
        actions = {s: list(self.actions()) for s in states}
        P = {}
        for s in states:
            for a in actions[s]:
                P[(s, a)] = {s2: float(p) for s2, p in enumerate(self._transitions[s, a]) if p > 0.0}
        return MDP(states, actions, P)

    @classmethod
    def from_mdp(
        cls,
        mdp: MDP,
        reward_fn: Optional[Callable[[Hashable, Hashable, Hashable], float]] = None,
        discount_factor: float = 1.0,
        tolerance: Optional[Tolerance] = None,
    ) -> "TabularMDP":
        """
        Build a TabularMDP from a dictionary MDP.

        States are indexed in mdp.states order and actions in the order they
        are first seen while scanning mdp.actions. Every state must enable
        every action. reward_fn(s, a, s') defaults to 0.
        """
        state_idx: Dict[Hashable, int] = {s: i for i, s in enumerate(mdp.states)}
        action_list: List[Hashable] = []
        for s in mdp.states:
            for a in mdp.actions.get(s, []):
                if a not in action_list:
                    action_list.append(a)

        n = len(mdp.states)
        transitions = []
        reward = []
        for s in mdp.states:
            enabled = set(mdp.actions.get(s, []))
            missing = [a for a in action_list if a not in enabled]
            if missing:
                raise MDPValidationError(
                    f"state {s!r} does not enable actions {missing!r}; "
                    f"a tabular MDP needs every action in every state"
                )
            t_s, r_s = [], []
            for a in action_list:
                row = [0.0] * n
                for s2, p in mdp.P.get((s, a), {}).items():
                    if s2 not in state_idx:
                        raise MDPValidationError(
                            f"P[({s!r}, {a!r})] leads to unknown state {s2!r}"
                        )
                    row[state_idx[s2]] = p
                t_s.append(row)
                if reward_fn is None:
                    r_s.append([0.0] * n)
                else:
                    r_s.append([reward_fn(s, a, s2) for s2 in mdp.states])
            transitions.append(t_s)
            reward.append(r_s)

        return cls(n, len(action_list), transitions, reward, discount_factor, tolerance)

    # ------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, TabularMDP):
            return NotImplemented
        return (
            self._state_count == other._state_count
            and self._action_count == other._action_count
            and self._discount_factor == other._discount_factor
            and np.array_equal(self._transitions, other._transitions)
            and np.array_equal(self._reward, other._reward, equal_nan=True)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"TabularMDP(states={self._state_count}, actions={self._action_count}, "
            f"discount_factor={self._discount_factor!r})"
        )
