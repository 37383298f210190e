"""The quartic equation behind helical PH quintic Hermite interpolation."""

__all__ = (
    "ROOT_IMAG_TOL",
    "helical_quartic",
    "real_roots",
)

from typing import Final

import numpy as np
import numpy.typing as npt
from numpy.polynomial import Polynomial

ROOT_IMAG_TOL: Final = 1e-9
"""Relative size of the imaginary part below which a root counts as real."""

# Half-angle substitution, cos = (1 - t^2) / (1 + t^2) and sin = 2t / (1 + t^2),
# each multiplied through by (1 + t^2).
_COS: Final = Polynomial([1.0, 0.0, -1.0])
_SIN: Final = Polynomial([0.0, 2.0])
_ONE: Final = Polynomial([1.0, 0.0, 1.0])


def helical_quartic(
    h: npt.ArrayLike,
    d0: npt.ArrayLike,
    d2: npt.ArrayLike,
    u: npt.ArrayLike,
    v: npt.ArrayLike,
    /,
) -> Polynomial:
    r"""Return the quartic in $t = \tan(\phi / 2)$ for the helical PH quintic.

    With $n(\phi) = u\cos\phi + v\sin\phi$ and $w = d_0 \times d_2$, the
    helical solution requires

    $$
    \left(w\cdot h + 5\, w\cdot n\right)^2
        = \big((h \times d_2)\cdot n\big) \big((d_0 \times h)\cdot n\big),
    $$

    which is $16^2 k_0^2 k_2^2 = (16 k_0 k_2)^2$ written in terms of the
    boundary data. Substituting the half-angle tangent and multiplying by
    $(1 + t^2)^2$ gives a quartic in $t$. All coefficients are float64.

    Parameters
    ----------
    h
        $120 (p_f - p_i) - 15 (d_0 + d_2)$.
    d0, d2
        The start and end tangents.
    u, v
        The output of `cross_basis`.

    Examples
    --------
    >>> import numpy as np
    >>> q = helical_quartic(np.zeros(3), [1.0, 0, 0], [0, 1.0, 0],
    ...                     [1.0, 0, 0], [0, 1.0, 0])
    >>> q.degree()
    0

    """
    h, d0, d2, u, v = (np.asarray(x, dtype=np.float64) for x in (h, d0, d2, u, v))
    w = np.cross(d0, d2)

    def project(vec: np.ndarray) -> Polynomial:
        return float(vec @ u) * _COS + float(vec @ v) * _SIN

    lhs = float(w @ h) * _ONE + 5 * project(w)
    return (lhs**2 - project(np.cross(h, d2)) * project(np.cross(d0, h))).trim()


def real_roots(poly: Polynomial, /, *, tol: float = ROOT_IMAG_TOL) -> np.ndarray:
    """Return the real roots of ``poly`` in ascending order.

    Roots whose imaginary part is below ``tol`` relative to their modulus (or
    to 1 for small roots) count as real.

    Examples
    --------
    >>> from numpy.polynomial import Polynomial
    >>> print(real_roots(Polynomial([-1.0, 0.0, 0.0, 0.0, 1.0])).round(6))
    [-1.  1.]

    """
    if poly.degree() < 1:
        return np.empty(0)
    roots = poly.roots()
    keep = np.abs(roots.imag) <= tol * np.maximum(1.0, np.abs(roots))
    return np.sort(roots[keep].real)
