"""Exception hierarchy for jax_diffkin.

Numerical failures near a kinematic singularity and caller mistakes on
vector shapes are reported through distinct exception types so that a
controller can pick a recovery strategy for the former and treat the latter
as a bug.
"""


class DiffKinError(Exception):
    """Base class for all jax_diffkin errors."""


class SingularityError(DiffKinError):
    """Inverse kinematics produced a non-finite joint velocity.

    The arm is at or near a configuration where the Jacobian loses rank.
    """


class SingularMatrixError(SingularityError):
    """A matrix handed to the inversion primitive is exactly singular."""


class InvalidArgumentError(DiffKinError, ValueError):
    """A vector or matrix argument has the wrong shape."""
