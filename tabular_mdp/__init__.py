"""
Tabular MDP Library

Validated, immutable finite Markov Decision Processes for solvers and
simulators that only need point queries on rewards and transitions.

Modules:
- Models: Model interface (TabularModel), dense validated implementation
  (TabularMDP), dictionary MDP bridge, tolerance helpers and errors
"""

from . import Models
from .Models import TabularModel, TabularMDP

__all__ = ['Models', 'TabularModel', 'TabularMDP']
__version__ = '0.1.0'
