"""Quaternion algebra used to build PH curves.

Quaternions are arrays of shape ``(..., 4)`` in scalar-first order
``(w, x, y, z)``. Everything here runs on the host in float64: these functions
only appear at construction time, where single precision is not enough to
separate the roots of the helical quartic.

"""

__all__ = (
    "QUAT_I",
    "QUAT_J",
    "cross_basis",
    "qconj",
    "qmul",
    "quaternion_basis",
    "sandwich",
)

from typing import Final

import numpy as np
import numpy.typing as npt

from hodographs._src.errors import DegenerateBoundaryError

QUAT_I: Final = np.array([0.0, 1.0, 0.0, 0.0])
QUAT_J: Final = np.array([0.0, 0.0, 1.0, 0.0])

# Below this value of the first direction cosine the basis is built from the
# opposite direction, keeping clear of the pole at -x.
_FLIP_COSINE: Final = -0.5


def qmul(p: npt.ArrayLike, q: npt.ArrayLike, /) -> np.ndarray:
    """Return the Hamilton product ``p q``.

    Examples
    --------
    >>> import numpy as np
    >>> i = np.array([0.0, 1.0, 0.0, 0.0])
    >>> j = np.array([0.0, 0.0, 1.0, 0.0])
    >>> print(qmul(i, j))
    [0. 0. 0. 1.]

    """
    p0, p1, p2, p3 = np.moveaxis(np.asarray(p, dtype=float), -1, 0)
    q0, q1, q2, q3 = np.moveaxis(np.asarray(q, dtype=float), -1, 0)
    return np.stack(
        [
            p0 * q0 - p1 * q1 - p2 * q2 - p3 * q3,
            p0 * q1 + p1 * q0 + p2 * q3 - p3 * q2,
            p0 * q2 - p1 * q3 + p2 * q0 + p3 * q1,
            p0 * q3 + p1 * q2 - p2 * q1 + p3 * q0,
        ],
        axis=-1,
    )


def qconj(q: npt.ArrayLike, /) -> np.ndarray:
    """Return the conjugate quaternion."""
    return np.asarray(q, dtype=float) * np.array([1.0, -1.0, -1.0, -1.0])


def sandwich(a: npt.ArrayLike, b: npt.ArrayLike, /) -> np.ndarray:
    r"""Return the vector part of $a\,\mathbf{i}\,\bar{b}$.

    For ``a == b`` this is the image of the x-axis under the scaled rotation
    represented by ``a``, which has length $|a|^2$. Mixed products
    $a\,\mathbf{i}\,\bar{b} + b\,\mathbf{i}\,\bar{a}$ equal twice this value,
    which is how they enter the PH hodograph.

    Examples
    --------
    >>> import numpy as np
    >>> a = np.array([1.0, 0.0, 0.0, 1.0])  # 90 degrees about z, scaled by 2
    >>> print(sandwich(a, a))
    [0. 2. 0.]

    """
    return qmul(qmul(a, QUAT_I), qconj(b))[..., 1:]


def quaternion_basis(d: npt.ArrayLike, /) -> tuple[np.ndarray, np.ndarray]:
    r"""Return generators ``(x, y)`` of the quaternion square roots of ``d``.

    Every quaternion $A(\phi) = x \cos\phi + y \sin\phi$ satisfies
    $A\,\mathbf{i}\,\bar{A} = d$, magnitude included, and these are all the
    solutions. With $(\lambda, \mu, \nu) = d / |d|$,

    $$
    x = \sqrt{\tfrac{1}{2}(1 + \lambda)|d|}
        \left(0, 1, \frac{\mu}{1 + \lambda}, \frac{\nu}{1 + \lambda}\right),
    \qquad y = x\,\mathbf{i}.
    $$

    For $\lambda < -1/2$ the roots of $-d$ are right-multiplied by
    $\mathbf{j}$ instead, which maps them onto roots of $d$ without dividing by
    a small $1 + \lambda$.

    Raises
    ------
    DegenerateBoundaryError
        If ``d`` has zero or non-finite length.

    Examples
    --------
    >>> x, y = quaternion_basis([1.0, 0.0, 0.0])
    >>> print(x)
    [0. 1. 0. 0.]
    >>> print(y)
    [-1.  0.  0.  0.]

    """
    d = np.asarray(d, dtype=float)
    norm = np.linalg.norm(d)
    if not np.isfinite(norm) or norm == 0:
        msg = f"cannot take the quaternion root of the tangent {d}"
        raise DegenerateBoundaryError(msg)

    lam, mu, nu = d / norm
    if lam < _FLIP_COSINE:
        x, _ = quaternion_basis(-d)
        x = qmul(x, QUAT_J)
    else:
        scale = np.sqrt(0.5 * (1 + lam) * norm)
        x = scale * np.array([0.0, 1.0, mu / (1 + lam), nu / (1 + lam)])
    return x, qmul(x, QUAT_I)


def cross_basis(
    d0: npt.ArrayLike, d2: npt.ArrayLike, /
) -> tuple[np.ndarray, np.ndarray]:
    r"""Return the vectors ``(u, v)`` spanning the mixed hodograph term.

    If $a_0 = x_0 e^{\mathbf{i}\phi_0}$ and $a_2 = x_2 e^{\mathbf{i}\phi_2}$
    are square roots of ``d0`` and ``d2`` (see `quaternion_basis`), then

    $$
    a_0\,\mathbf{i}\,\bar{a}_2 + a_2\,\mathbf{i}\,\bar{a}_0
        = u \cos\phi + v \sin\phi , \qquad \phi = \phi_2 - \phi_0 ,
    $$

    with $u = 2\,\mathrm{vec}(x_0 \mathbf{i} \bar{x}_2)$ and
    $v = 2\,\mathrm{vec}(x_0 \bar{x}_2)$. Both scale with
    $\sqrt{|d_0||d_2|}$.

    """
    x0, _ = quaternion_basis(d0)
    x2, _ = quaternion_basis(d2)
    u = 2 * sandwich(x0, x2)
    v = 2 * qmul(x0, qconj(x2))[1:]
    return u, v
