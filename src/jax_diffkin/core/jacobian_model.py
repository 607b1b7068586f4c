"""Abstract Jacobian model shared by every robot structure.

A concrete robot only knows how to fill its 6 x dof Jacobian for the current
configuration. Everything done with the filled matrix (velocity conversion,
generalized inverse, dynamics terms) lives here and is shared.
"""

from abc import ABC, abstractmethod
import logging

import jax
import jax.numpy as jnp

from .. import dynamics, velocity
from ..errors import InvalidArgumentError, SingularityError
from ..inverse import select_strategy
from .result import Result

Array = jax.Array

logger = logging.getLogger(__name__)


class JacobianModel(ABC):
    """Holds a 6 x dof Jacobian and exposes kinematic conversions on it.

    Rows 0-2 of the Jacobian are the translation component, rows 3-5 the
    rotation component (radians per joint unit). Subclasses implement
    ``update`` to recompute the matrix and store it with ``_set_jacobian``.

    Joint velocities passed to ``cartesian_velocity_from_joint`` and returned
    by ``joint_velocity_from_cartesian`` are in degrees. The dynamics terms
    take joint velocities in radians.
    """

    def __init__(self, dof: int):
        if isinstance(dof, bool) or not isinstance(dof, int) or dof < 1:
            raise InvalidArgumentError(f"dof must be a positive integer, got {dof}")
        self._dof = dof
        self._jacobian = jnp.zeros((velocity.CARTESIAN_DIM, self._dof))

    @property
    def dof(self) -> int:
        return self._dof

    @property
    def jacobian(self) -> Array:
        """The current (6, dof) Jacobian. JAX arrays are immutable, so this is read-only."""
        return self._jacobian

    def get_jacobian(self) -> Array:
        return self._jacobian

    @abstractmethod
    def update(self, *args, **kwargs) -> Array:
        """Recompute the Jacobian for the current configuration and return it."""

    def _set_jacobian(self, matrix: Array) -> Array:
        matrix = jnp.asarray(matrix, dtype=float)
        expected = (velocity.CARTESIAN_DIM, self._dof)
        if matrix.shape != expected:
            raise InvalidArgumentError(
                f"Jacobian must have shape {expected}, got {matrix.shape}"
            )
        self._jacobian = matrix
        logger.debug("%s jacobian updated", type(self).__name__)
        return matrix

    def solve_joint_velocity(self, cartesian_velocity: Array) -> Result:
        """Joint velocity in degrees for a Cartesian velocity, as a tagged Result.

        Numerical failure is reported through ``Result.status`` only.
        """
        logger.debug(
            "Inverting %s jacobian with the %s strategy",
            self._jacobian.shape,
            select_strategy(self._jacobian.shape),
        )
        return velocity.joint_velocity_from_cartesian(self._jacobian, cartesian_velocity)

    def joint_velocity_from_cartesian(self, cartesian_velocity: Array) -> Array:
        """Use the Jacobian to get the joint velocity from a Cartesian velocity.

        Args:
            cartesian_velocity: (6,) XYZ translation and UVW rotation velocity
                                of the end effector. Rotation is in radians.

        Returns:
            (dof,) joint velocity in degrees.

        Raises:
            SingularityError: the result is not finite (SingularMatrixError
                              when the inverse could not be formed at all).
            InvalidArgumentError: ``cartesian_velocity`` does not have 6 entries.
        """
        result = self.solve_joint_velocity(cartesian_velocity)
        try:
            return result.unwrap()
        except SingularityError as e:
            logger.warning("%s: %s", type(self).__name__, e)
            raise

    def cartesian_velocity_from_joint(self, joint_velocity: Array) -> Array:
        """Use the Jacobian to convert joint velocity to Cartesian velocity.

        Args:
            joint_velocity: (dof,) joint velocity in degrees.

        Returns:
            (6,) XYZ translation and UVW rotation velocity. Rotation is in radians.
        """
        return velocity.cartesian_velocity_from_joint(self._jacobian, joint_velocity)

    def time_derivative(self, joint_velocities: Array) -> Array:
        """(6, dof) time-derivative-like term for joint velocities in radians."""
        return dynamics.time_derivative(self._jacobian, joint_velocities)

    def coriolis_term(self, joint_velocities: Array) -> Array:
        """(dof,) Coriolis term for joint velocities in radians."""
        return dynamics.coriolis_term(self._jacobian, joint_velocities)

    def __repr__(self) -> str:
        lines = ["Jacobian:"]
        for row in jax.device_get(self._jacobian).tolist():
            lines.append("[" + ", ".join(f"{x:.3f}" for x in row) + "]")
        return "\n".join(lines) + "\n"
