"""
JAX DiffKin: differential kinematics of serial robot arms.

Given a manipulator Jacobian, this library converts between joint-space and
Cartesian-space velocities through a shape-selected generalized inverse and
computes second-order terms used by motion controllers. All numerics are
pure, JIT-compilable JAX functions.
"""

import jax
jax.config.update("jax_enable_x64", True)

from . import core
from . import dynamics
from . import inverse
from . import velocity
from .core import JacobianModel, Result, Status
from .errors import (
    DiffKinError,
    InvalidArgumentError,
    SingularityError,
    SingularMatrixError,
)
from .models import ArrayJacobianModel, AutodiffJacobianModel

__version__ = "0.1.0"
__all__ = [
    "core",
    "dynamics",
    "inverse",
    "velocity",
    "JacobianModel",
    "ArrayJacobianModel",
    "AutodiffJacobianModel",
    "Result",
    "Status",
    "DiffKinError",
    "InvalidArgumentError",
    "SingularityError",
    "SingularMatrixError",
]
