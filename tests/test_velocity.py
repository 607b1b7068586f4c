"""Tests for joint <-> Cartesian velocity conversion."""

import jax
import jax.numpy as jnp
import jax.random as jrandom
import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jax_diffkin import InvalidArgumentError, SingularityError, SingularMatrixError, Status
from jax_diffkin.velocity import cartesian_velocity_from_joint, joint_velocity_from_cartesian


def test_identity_jacobian_scenario():
    """Identity Jacobian maps 1 rad/s Cartesian to ~57.2958 deg/s on joint 0."""
    result = joint_velocity_from_cartesian(jnp.eye(6), jnp.array([1.0, 0, 0, 0, 0, 0]))
    assert int(result.status) == Status.OK
    expected = jnp.array([57.2958, 0.0, 0.0, 0.0, 0.0, 0.0])
    np.testing.assert_allclose(result.value, expected, rtol=1e-5, atol=1e-5)


def test_rank_deficient_scenario():
    """A 6x3 Jacobian that is zero except row 0 cannot be inverted."""
    jacobian = jnp.zeros((6, 3)).at[0].set(jnp.array([1.0, 0.0, 0.0]))
    result = joint_velocity_from_cartesian(jacobian, jnp.array([1.0, 0, 0, 0, 0, 0]))
    assert not bool(result.ok)
    with pytest.raises(SingularityError):
        result.unwrap()
    with pytest.raises(SingularMatrixError):
        result.unwrap()


def test_non_finite_result_is_rejected():
    """NaN in the Cartesian input makes the whole result fail."""
    cartesian = jnp.array([1.0, jnp.nan, 0, 0, 0, 0])
    result = joint_velocity_from_cartesian(jnp.eye(6), cartesian)
    assert int(result.status) == Status.NON_FINITE
    with pytest.raises(SingularityError, match="Singularity"):
        result.unwrap()


def test_degrees_to_radians_conversion():
    """Joint degrees are converted with exactly pi / 180."""
    degrees = jnp.array([90.0, -45.0, 30.0, 0.0, 180.0, 1.0])
    cartesian = cartesian_velocity_from_joint(jnp.eye(6), degrees)
    np.testing.assert_allclose(cartesian, degrees * jnp.pi / 180.0, rtol=1e-15, atol=0)


def test_cartesian_output_has_six_components():
    """Forward velocity is a Cartesian 6-vector regardless of DOF."""
    for dof in (2, 6, 7):
        jacobian = jnp.ones((6, dof))
        assert cartesian_velocity_from_joint(jacobian, jnp.zeros(dof)).shape == (6,)


def test_cartesian_velocity_known_values():
    """J @ radians(qdot) for a hand computed example."""
    jacobian = jnp.zeros((6, 2)).at[0, 0].set(2.0).at[1, 1].set(3.0).at[5].set(1.0)
    cartesian = cartesian_velocity_from_joint(jacobian, jnp.array([180.0, 90.0]))
    expected = jnp.array([2 * jnp.pi, 1.5 * jnp.pi, 0.0, 0.0, 0.0, 1.5 * jnp.pi])
    np.testing.assert_allclose(cartesian, expected, rtol=1e-12, atol=1e-12)


@given(st.integers(min_value=0, max_value=100))
@settings(deadline=None, max_examples=20)
def test_square_velocity_roundtrip(seed):
    """Cartesian -> joint -> Cartesian round-trips for a well conditioned 6x6 J."""
    key_j, key_v = jrandom.split(jrandom.PRNGKey(seed))
    jacobian = jrandom.normal(key_j, (6, 6)) + 5.0 * jnp.eye(6)
    cartesian = jrandom.uniform(key_v, (6,), minval=-1.0, maxval=1.0)

    joint = joint_velocity_from_cartesian(jacobian, cartesian).unwrap()
    back = cartesian_velocity_from_joint(jacobian, joint)
    np.testing.assert_allclose(back, cartesian, rtol=1e-6, atol=1e-6)


def test_redundant_arm_reaches_cartesian_velocity():
    """A 7 DOF arm realizes any Cartesian velocity through the pseudo-inverse."""
    jacobian = jrandom.normal(jrandom.PRNGKey(7), (6, 7))
    cartesian = jnp.array([0.1, -0.2, 0.3, 0.01, 0.02, -0.03])
    joint = joint_velocity_from_cartesian(jacobian, cartesian).unwrap()
    assert joint.shape == (7,)
    np.testing.assert_allclose(
        cartesian_velocity_from_joint(jacobian, joint), cartesian, rtol=1e-9, atol=1e-9)


def test_wrong_cartesian_length():
    with pytest.raises(InvalidArgumentError, match="Cartesian velocity"):
        joint_velocity_from_cartesian(jnp.eye(6), jnp.zeros(5))


def test_wrong_joint_length():
    with pytest.raises(InvalidArgumentError, match="Joint velocity"):
        cartesian_velocity_from_joint(jnp.eye(6), jnp.zeros(5))


def test_wrong_jacobian_rows():
    with pytest.raises(InvalidArgumentError, match="Jacobian"):
        cartesian_velocity_from_joint(jnp.eye(5), jnp.zeros(5))


def test_velocity_jit_compatibility():
    """Both conversions compile under jax.jit."""
    jacobian = jrandom.normal(jrandom.PRNGKey(2), (6, 6)) + 5.0 * jnp.eye(6)
    cartesian = jnp.array([0.5, 0.0, -0.5, 0.1, 0.0, 0.2])

    result = jax.jit(joint_velocity_from_cartesian)(jacobian, cartesian)
    joint = result.unwrap()
    back = jax.jit(cartesian_velocity_from_joint)(jacobian, joint)
    np.testing.assert_allclose(back, cartesian, rtol=1e-6, atol=1e-6)
