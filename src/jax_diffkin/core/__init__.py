"""Core data structures for jax_diffkin.

This module provides the abstract Jacobian model and the tagged result type
returned by the JIT-able numerics.
"""

from .jacobian_model import JacobianModel
from .result import Result, Status

__all__ = ["JacobianModel", "Result", "Status"]
