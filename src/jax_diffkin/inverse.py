"""Generalized inverses of the manipulator Jacobian.

This module selects and computes the generalized inverse of a Jacobian
matrix from its shape. All three strategies are built on a single square
inversion primitive which reports singular matrices through the
returned ``Result`` instead of producing silent garbage. All functions are
pure and JIT-able; shape dispatch happens at trace time.
"""

from typing import Tuple

import jax
import jax.numpy as jnp
import jax.scipy.linalg

from .core.result import Result
from .errors import InvalidArgumentError

Array = jax.Array

# Damping factor for the square (DOF == 6) case.
DAMPING = 1e-4

# Pivots below PIVOT_TOLERANCE * n * eps * max pivot count as zero.
PIVOT_TOLERANCE = 10.0

OVERDETERMINED = "overdetermined"
UNDERDETERMINED = "underdetermined"
DAMPED = "damped"


def invert(matrix: Array) -> Result:
    """
    Invert a square matrix using LU factorization with partial pivoting.

    Args:
        matrix: (n, n) matrix

    Returns:
        Result holding the (n, n) inverse. The status is SINGULAR_MATRIX
        when a pivot of U is negligible next to the largest pivot (the
        matrix is rank deficient to working precision) or the inverse is
        not finite.
    """
    matrix = jnp.asarray(matrix, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise InvalidArgumentError(f"Expected a square matrix, got shape {matrix.shape}")

    lu, piv = jax.scipy.linalg.lu_factor(matrix)
    identity = jnp.eye(matrix.shape[0], dtype=lu.dtype)
    inverse = jax.scipy.linalg.lu_solve((lu, piv), identity)

    pivots = jnp.abs(jnp.diagonal(lu))
    # Round-off leaves tiny nonzero pivots on rank deficient matrices.
    tolerance = PIVOT_TOLERANCE * matrix.shape[0] * jnp.finfo(lu.dtype).eps * jnp.max(pivots)
    negligible_pivot = jnp.any(pivots <= tolerance)
    singular = negligible_pivot | ~jnp.all(jnp.isfinite(inverse))
    return Result.from_checks(inverse, singular, jnp.zeros((), dtype=bool))


def pseudo_inverse_overdetermined(jacobian: Array) -> Result:
    """
    Moore-Penrose pseudo-inverse for a wide Jacobian (more joints than rows).

    J_plus = J.T @ inv(J @ J.T)

    Args:
        jacobian: (rows, cols) matrix with rows < cols

    Returns:
        Result holding the (cols, rows) pseudo-inverse
    """
    jacobian = jnp.asarray(jacobian, dtype=float)
    jt = jacobian.T
    inner = invert(jacobian @ jt)
    return inner.replace(value=jt @ inner.value)


def pseudo_inverse_underdetermined(jacobian: Array) -> Result:
    """
    Moore-Penrose pseudo-inverse for a tall Jacobian (fewer joints than rows).

    J_plus = inv(J.T @ J) @ J.T

    Args:
        jacobian: (rows, cols) matrix with rows > cols

    Returns:
        Result holding the (cols, rows) pseudo-inverse
    """
    jacobian = jnp.asarray(jacobian, dtype=float)
    jt = jacobian.T
    inner = invert(jt @ jacobian)
    return inner.replace(value=inner.value @ jt)


def damped_least_squares(jacobian: Array, damping: float = DAMPING) -> Result:
    """
    Damped least squares (Tikhonov regularized) inverse.

    J_plus = J.T @ inv(J @ J.T + damping**2 * I)

    The damping keeps the inverse bounded close to singular configurations
    at the cost of a small error everywhere else.

    Args:
        jacobian: (rows, cols) matrix
        damping: Regularization factor lambda

    Returns:
        Result holding the (cols, rows) damped inverse
    """
    jacobian = jnp.asarray(jacobian, dtype=float)
    jt = jacobian.T
    jjt = jacobian @ jt
    jjt = jjt + (damping * damping) * jnp.eye(jjt.shape[0], dtype=jjt.dtype)
    inner = invert(jjt)
    return inner.replace(value=jt @ inner.value)


def select_strategy(shape: Tuple[int, ...]) -> str:
    """Name the generalized inverse strategy used for a Jacobian of ``shape``."""
    if len(shape) != 2:
        raise InvalidArgumentError(f"Expected a 2D Jacobian, got shape {tuple(shape)}")
    rows, cols = shape
    if rows < cols:
        return OVERDETERMINED
    if rows > cols:
        return UNDERDETERMINED
    return DAMPED


def generalized_inverse(jacobian: Array) -> Result:
    """
    Compute the generalized inverse of a Jacobian, choosing the method by shape.

    - rows < cols: pseudo_inverse_overdetermined
    - rows > cols: pseudo_inverse_underdetermined
    - rows == cols: damped_least_squares with DAMPING

    Nothing is cached; the inverse is recomputed from ``jacobian`` on every call.

    Args:
        jacobian: (6, dof) Jacobian matrix

    Returns:
        Result holding the (dof, 6) generalized inverse
    """
    jacobian = jnp.asarray(jacobian, dtype=float)
    strategy = select_strategy(jacobian.shape)
    if strategy == OVERDETERMINED:
        return pseudo_inverse_overdetermined(jacobian)
    if strategy == UNDERDETERMINED:
        return pseudo_inverse_underdetermined(jacobian)
    return damped_least_squares(jacobian)
