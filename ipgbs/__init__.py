"""
ipgbs: truncated Gröbner bases for integer programs.

Pipeline:
  1. Validate and normalize the integer program (constraints/)
  2. Build the initial lattice generators under a monomial order (algebra/)
  3. Complete them with a Buchberger or signature-based algorithm (algorithms/)
  4. Return the basis in 4ti2 form, or use it to optimize solutions (runners/)
"""

from ipgbs.algorithms.config import GBConfig, initialize_parameters
from ipgbs.algorithms.driver import run
from ipgbs.constraints.instance import IPInstance, InputValidationError
from ipgbs.runners.groebner import groebner_basis
from ipgbs.runners.optimize import optimize_with

__all__ = [
    "GBConfig",
    "IPInstance",
    "InputValidationError",
    "groebner_basis",
    "initialize_parameters",
    "optimize_with",
    "run",
]
