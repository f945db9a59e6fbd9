"""Exceptions raised when building or querying tabular MDPs."""

from typing import Optional, Tuple


class MDPValidationError(ValueError):
    """Base class for every construction-time validation failure."""


class InvalidCountError(MDPValidationError):
    """A declared state or action count is not a positive integer."""

    def __init__(self, name: str, value):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be a positive integer, got {value!r}")


class DimensionMismatchError(MDPValidationError):
    """
    A nested table does not have the declared size along one dimension.

    table     : "transitions" or "reward"
    dimension : "state", "action" or "next_state"
    expected  : declared size
    actual    : observed size (None when the entry is not a sequence at all)
    index     : prefix of indices locating the offending slice, () for the outer table
    """

    def __init__(
        self,
        table: str,
        dimension: str,
        expected: int,
        actual: Optional[int],
        index: Tuple[int, ...] = (),
    ):
        self.table = table
        self.dimension = dimension
        self.expected = expected
        self.actual = actual
        self.index = index

        where = f"{table}{''.join(f'[{i}]' for i in index)}"
        if actual is None:
            msg = (f"{where} must be a sequence of {expected} entries "
                   f"along the {dimension} dimension")
        else:
            msg = (f"{where} has size {actual} along the {dimension} dimension, "
                   f"expected {expected}")
        super().__init__(msg)


class InvalidProbabilityError(MDPValidationError):
    """A transition entry is negative, non-finite or not a number."""

    def __init__(self, state: int, action: int, next_state: int, value):
        self.state = state
        self.action = action
        self.next_state = next_state
        self.value = value
        super().__init__(
            f"transitions[{state}][{action}][{next_state}] = {value!r} "
            f"is not a finite non-negative probability"
        )


class DistributionNotNormalizedError(MDPValidationError):
    """The distribution over next states for (state, action) does not sum to 1."""

    def __init__(self, state: int, action: int, total: float, ulps: int):
        self.state = state
        self.action = action
        self.total = total
        self.ulps = ulps
        super().__init__(
            f"transitions[{state}][{action}] sums to {total!r}, "
            f"not 1 within {ulps} ULPs (single precision)"
        )


class IndexOutOfRangeError(IndexError):
    """A query used a state or action index outside the declared range."""

    def __init__(self, name: str, index, bound: int):
        self.name = name
        self.index = index
        self.bound = bound
        super().__init__(f"{name} index {index!r} out of range [0, {bound})")
