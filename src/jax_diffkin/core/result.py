"""Tagged success/failure result for JIT-compiled numerics.

Raising from inside a traced computation is not possible, so the pure
functions of this library return a ``Result`` carrying both the computed
value and a status code. ``Result.unwrap`` converts a failed status into the
matching exception once the values are concrete.
"""

import enum

import jax
import jax.numpy as jnp
from flax import struct

from ..errors import SingularityError, SingularMatrixError

Array = jax.Array


class Status(enum.IntEnum):
    """Outcome codes stored in ``Result.status``."""
    OK = 0
    SINGULAR_MATRIX = 1
    NON_FINITE = 2


@struct.dataclass
class Result:
    """Immutable PyTree pairing a computed array with its outcome.

    Attributes:
        value: The computed quantity. Holds meaningless (possibly non-finite)
               data whenever ``status`` is not ``Status.OK``.
        status: int32 scalar array holding a ``Status`` code.
    """
    value: Array
    status: Array

    @classmethod
    def from_checks(cls, value: Array, singular: Array, non_finite: Array) -> "Result":
        """Build a result, giving a singular matrix precedence over NaN/Inf."""
        status = jnp.where(
            singular,
            int(Status.SINGULAR_MATRIX),
            jnp.where(non_finite, int(Status.NON_FINITE), int(Status.OK)),
        ).astype(jnp.int32)
        return cls(value=value, status=status)

    @property
    def ok(self) -> Array:
        return self.status == int(Status.OK)

    def unwrap(self) -> Array:
        """Return ``value`` or raise the exception matching ``status``.

        Must be called on concrete values, i.e. outside of ``jax.jit``.

        Raises:
            SingularMatrixError: an exactly singular matrix was inverted.
            SingularityError: the result contains NaN or Inf.
        """
        status = Status(int(self.status))
        if status == Status.SINGULAR_MATRIX:
            raise SingularMatrixError("Matrix is singular and cannot be inverted")
        if status == Status.NON_FINITE:
            raise SingularityError("Bad inverse Jacobian. Singularity?")
        return self.value
