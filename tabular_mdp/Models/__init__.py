"""Models for finite tabular Markov Decision Processes."""

from .base import TabularModel
from .tabular import TabularMDP
from .mdp import MDP, mdp_check_distributions
from .tolerance import Tolerance, DEFAULT_TOLERANCE, approx_eq_ulps, ulps_distance
from .errors import (
    MDPValidationError,
    InvalidCountError,
    DimensionMismatchError,
    InvalidProbabilityError,
    DistributionNotNormalizedError,
    IndexOutOfRangeError,
)

__all__ = [
    'TabularModel', 'TabularMDP',
    'MDP', 'mdp_check_distributions',
    'Tolerance', 'DEFAULT_TOLERANCE', 'approx_eq_ulps', 'ulps_distance',
    'MDPValidationError', 'InvalidCountError', 'DimensionMismatchError',
    'InvalidProbabilityError', 'DistributionNotNormalizedError', 'IndexOutOfRangeError',
]
