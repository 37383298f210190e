"""Functional PH-curve algebra: quaternions, Bernstein forms, the quartic."""

__all__ = (  # noqa: RUF022
    # Quaternions
    "QUAT_I",
    "QUAT_J",
    "qmul",
    "qconj",
    "sandwich",
    "quaternion_basis",
    "cross_basis",
    # Bernstein form
    "bernstein_basis",
    "integrate_bernstein",
    "hodograph_derivative",
    # Quartic
    "ROOT_IMAG_TOL",
    "helical_quartic",
    "real_roots",
    # Frames
    "euler_rodrigues_matrix",
    "unit_tangent",
    "principal_normal",
    "binormal",
    "catmull_rom_basis",
)

from ._src.catmull_rom import catmull_rom_basis
from ._src.curve import binormal, principal_normal, unit_tangent
from ._src.frame import euler_rodrigues_matrix
from ._src.phlib import (
    QUAT_I,
    QUAT_J,
    ROOT_IMAG_TOL,
    bernstein_basis,
    cross_basis,
    helical_quartic,
    hodograph_derivative,
    integrate_bernstein,
    qconj,
    qmul,
    quaternion_basis,
    real_roots,
    sandwich,
)
