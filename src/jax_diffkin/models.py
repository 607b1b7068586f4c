"""Concrete Jacobian models.

These variants differ only in how they fill the Jacobian; all conversions
are inherited from ``JacobianModel``.
"""

from typing import Callable

import jax
import jax.numpy as jnp

from .core.jacobian_model import JacobianModel
from .errors import InvalidArgumentError

Array = jax.Array


class ArrayJacobianModel(JacobianModel):
    """Model whose Jacobian is computed elsewhere and pushed in each time step."""

    def update(self, matrix: Array) -> Array:
        """Replace the Jacobian with ``matrix`` of shape (6, dof)."""
        return self._set_jacobian(matrix)


class AutodiffJacobianModel(JacobianModel):
    """Model that differentiates a caller-supplied pose function with JAX.

    Args:
        twist_fn: Maps joint angles of shape (dof,) to a 6D twist
                  [vx, vy, vz, wx, wy, wz] of the end effector. Must be
                  written with jax.numpy so it can be differentiated.
        dof: Number of actuated joints.
    """

    def __init__(self, twist_fn: Callable[[Array], Array], dof: int):
        super().__init__(dof)
        self._jacobian_fn = jax.jit(jax.jacrev(twist_fn))

    def update(self, q: Array) -> Array:
        """Recompute the Jacobian at joint angles ``q`` (radians)."""
        q = jnp.asarray(q, dtype=float)
        if q.shape != (self.dof,):
            raise InvalidArgumentError(
                f"Joint angles must have shape ({self.dof},), got {q.shape}"
            )
        return self._set_jacobian(self._jacobian_fn(q))
