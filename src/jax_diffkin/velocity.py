"""Joint-space <-> Cartesian-space velocity conversion.

Joint velocities crossing this module's boundary are in degrees, in both
directions. Internally every joint quantity is carried in radians, and the
Cartesian angular components are always radians.
"""

import jax
import jax.numpy as jnp

from .core.result import Result
from .errors import InvalidArgumentError
from .inverse import generalized_inverse

Array = jax.Array

CARTESIAN_DIM = 6


def _check_jacobian(jacobian: Array) -> Array:
    jacobian = jnp.asarray(jacobian, dtype=float)
    if jacobian.ndim != 2 or jacobian.shape[0] != CARTESIAN_DIM:
        raise InvalidArgumentError(
            f"Jacobian must have shape ({CARTESIAN_DIM}, dof), got {jacobian.shape}"
        )
    return jacobian


def joint_velocity_from_cartesian(jacobian: Array, cartesian_velocity: Array) -> Result:
    """Convert an end-effector velocity to joint velocities.

    Applies the generalized inverse of the Jacobian to the Cartesian vector.
    The result is all-or-nothing: a single NaN or Inf component marks the
    whole vector as failed.

    Args:
        jacobian: (6, dof) Jacobian matrix
        cartesian_velocity: (6,) vector [vx, vy, vz, wx, wy, wz], angular part in radians

    Returns:
        Result holding the (dof,) joint velocity in degrees
    """
    jacobian = _check_jacobian(jacobian)
    cartesian_velocity = jnp.asarray(cartesian_velocity, dtype=jacobian.dtype)
    if cartesian_velocity.shape != (CARTESIAN_DIM,):
        raise InvalidArgumentError(
            f"Cartesian velocity must have shape ({CARTESIAN_DIM},), "
            f"got {cartesian_velocity.shape}"
        )

    inverse = generalized_inverse(jacobian)
    joint_velocity = inverse.value @ cartesian_velocity
    non_finite = ~jnp.all(jnp.isfinite(joint_velocity))
    return Result.from_checks(jnp.degrees(joint_velocity), ~inverse.ok, non_finite)


def cartesian_velocity_from_joint(jacobian: Array, joint_velocity: Array) -> Array:
    """Convert joint velocities to an end-effector velocity.

    Args:
        jacobian: (6, dof) Jacobian matrix
        joint_velocity: (dof,) joint velocity in degrees

    Returns:
        (6,) Cartesian velocity [vx, vy, vz, wx, wy, wz], angular part in radians
    """
    jacobian = _check_jacobian(jacobian)
    joint_velocity = jnp.asarray(joint_velocity, dtype=jacobian.dtype)
    dof = jacobian.shape[1]
    if joint_velocity.shape != (dof,):
        raise InvalidArgumentError(
            f"Joint velocity must have shape ({dof},), got {joint_velocity.shape}"
        )
    return jacobian @ jnp.radians(joint_velocity)
