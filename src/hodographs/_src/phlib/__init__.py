"""Algebra behind PH quintic curves."""

__all__ = (
    # Bernstein form
    "bernstein_basis",
    "hodograph_derivative",
    "integrate_bernstein",
    # Quaternions
    "QUAT_I",
    "QUAT_J",
    "cross_basis",
    "qconj",
    "qmul",
    "quaternion_basis",
    "sandwich",
    # Quartic
    "ROOT_IMAG_TOL",
    "helical_quartic",
    "real_roots",
)

from .bernstein import bernstein_basis, hodograph_derivative, integrate_bernstein
from .quartic import ROOT_IMAG_TOL, helical_quartic, real_roots
from .quaternion import (
    QUAT_I,
    QUAT_J,
    cross_basis,
    qconj,
    qmul,
    quaternion_basis,
    sandwich,
)
