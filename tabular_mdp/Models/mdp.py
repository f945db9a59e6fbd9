"""Markov Decision Process over hashable states and actions."""

from dataclasses import dataclass
from typing import Dict, Tuple, List, Hashable, Optional

from .tolerance import Tolerance, DEFAULT_TOLERANCE

State = Hashable
Action = Hashable


@dataclass
class MDP:
    """
    Markov Decision Process with dictionary-encoded dynamics.

    states: list of all states
    actions: mapping from state -> list of enabled actions
    P: mapping (s, a) -> {s' -> P(s' | s, a)}

    Missing successors have probability zero. Use TabularMDP.from_mdp to get
    a validated, integer-indexed model.
    """
    states: List[State]
    actions: Dict[State, List[Action]]
    P: Dict[Tuple[State, Action], Dict[State, float]]

    def enabled_pairs(self) -> List[Tuple[State, Action]]:
        """All (s, a) with a enabled in s, in state order."""
        return [(s, a) for s in self.states for a in self.actions.get(s, [])]


def mdp_check_distributions(
    mdp: MDP,
    tolerance: Optional[Tolerance] = None,
) -> List[Tuple[State, Action]]:
    """
    Return the enabled (s, a) pairs whose successor distribution does not sum
    to one (single-precision ULP comparison, successors in state order).
    """
    tolerance = DEFAULT_TOLERANCE if tolerance is None else tolerance
    bad = []
    for s, a in mdp.enabled_pairs():
        dist = mdp.P.get((s, a), {})
        row = [dist.get(s2, 0.0) for s2 in mdp.states]
        if not tolerance.is_normalized(tolerance.row_sum(row)):
            bad.append((s, a))
    return bad
