"""Second-order terms computed directly from the Jacobian.

Joint velocities here are radians (qdot in classical notation).
"""

import jax
import jax.numpy as jnp

from .errors import InvalidArgumentError

Array = jax.Array


def _check_joint_velocities(jacobian: Array, joint_velocities: Array):
    jacobian = jnp.asarray(jacobian, dtype=float)
    joint_velocities = jnp.asarray(joint_velocities, dtype=jacobian.dtype)
    dof = jacobian.shape[-1]
    if joint_velocities.shape != (dof,):
        raise InvalidArgumentError(
            f"joint_velocities must be the same length as the number of joints "
            f"({dof}), got shape {joint_velocities.shape}"
        )
    return jacobian, joint_velocities


def time_derivative(jacobian: Array, joint_velocities: Array) -> Array:
    """
    Time-derivative-like term of the Jacobian.

    Row i of the result is filled with sum_k J[i, k] * qdot[k] in every
    column. This is not dJ/dt: it does not differentiate individual entries
    of J and does not depend on the column index.

    Args:
        jacobian: (6, dof) Jacobian matrix
        joint_velocities: (dof,) joint velocities in radians

    Returns:
        (6, dof) array
    """
    jacobian, joint_velocities = _check_joint_velocities(jacobian, joint_velocities)
    row_sums = jacobian @ joint_velocities
    return jnp.broadcast_to(row_sums[:, None], jacobian.shape)


def coriolis_term(jacobian: Array, joint_velocities: Array) -> Array:
    """
    Coriolis contribution per joint, approximated from the Jacobian.

    coriolis[i] = sum_{j,k} -0.5 * J[k, i] * J[k, j] * (qdot[i] + qdot[j] - qdot[k])

    with k running over the first min(dof, 6) rows of J.

    Args:
        jacobian: (6, dof) Jacobian matrix
        joint_velocities: (dof,) joint velocities in radians

    Returns:
        (dof,) Coriolis term
    """
    jacobian, qdot = _check_joint_velocities(jacobian, joint_velocities)
    rows = jacobian[:qdot.shape[0]]
    num_rows = rows.shape[0]

    # v[k, i, j] = J[k, i] * J[k, j]
    v = jnp.einsum('ki,kj->kij', rows, rows)
    velocity_sum = qdot[None, :, None] + qdot[None, None, :] - qdot[:num_rows, None, None]
    return -0.5 * jnp.sum(v * velocity_sum, axis=(0, 2))
