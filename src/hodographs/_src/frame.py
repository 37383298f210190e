"""Euler-Rodrigues (rotation-minimizing) frames of PH segments."""

__all__ = ["EulerRodriguesFrame", "euler_rodrigues_matrix"]

import functools as ft

import equinox as eqx
import jax
import jax.numpy as jnp
import numpy as np

from .curve import Frame, resample as resample_curve
from .custom_types import LikeSz0, Sz0, Sz3, Sz4, Sz33
from .hermite import HermiteQuintic
from .phlib import bernstein_basis
from .segment import HelicalPHQuinticSplineSegment


@ft.partial(jax.jit)
def euler_rodrigues_matrix(a: Sz4, /) -> Sz33:
    r"""Return the rotation matrix of the (unnormalized) quaternion ``a``.

    Column $k$ is $a\,\mathbf{e}_k\,\bar{a} / |a|^2$. Dividing by $|a|^2$
    makes the columns orthonormal directly, without any re-orthogonalization.

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> R = euler_rodrigues_matrix(jnp.array([2.0, 0.0, 0.0, 2.0]))
    >>> print(R.round(6) + 0.0)
    [[ 0. -1.  0.]
     [ 1.  0.  0.]
     [ 0.  0.  1.]]

    """
    w, x, y, z = a
    matrix = jnp.array(
        [
            [w**2 + x**2 - y**2 - z**2, 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), w**2 - x**2 + y**2 - z**2, 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), w**2 - x**2 - y**2 + z**2],
        ]
    )
    return matrix / jnp.sum(a**2)


class EulerRodriguesFrame(eqx.Module):
    r"""The Euler-Rodrigues frame along a helical PH quintic.

    The quaternion polynomial

    $$
    a(u) = a_0 (1-u)^2 + a_1\, 2u(1-u) + a_2 u^2,
    \qquad a_1 = c_0 a_0 + c_2 a_2 ,
    $$

    maps the coordinate axes onto an orthonormal frame whose first axis is the
    unit tangent. The frame varies smoothly through inflections and straight
    stretches, where a Frenet frame would flip or be undefined.

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> from hodographs import EulerRodriguesFrame, HelicalPHQuinticSplineSegment

    >>> seg = HelicalPHQuinticSplineSegment.from_endpoints(
    ...     jnp.zeros(3), jnp.ones(3), jnp.array([1.0, 0, 1]), jnp.array([0.0, 1, 1]))
    >>> erf = EulerRodriguesFrame.from_segment(seg)
    >>> axes = erf.axes(0.3)
    >>> bool(jnp.allclose(axes.T @ axes, jnp.eye(3), atol=1e-6))
    True

    """

    segment: HelicalPHQuinticSplineSegment
    hermite: HermiteQuintic

    @classmethod
    def from_segment(
        cls, segment: HelicalPHQuinticSplineSegment, /
    ) -> "EulerRodriguesFrame":
        """Pair ``segment`` with its closed-form quintic."""
        return cls(segment=segment, hermite=segment.hermite)

    # -------------------------------------------

    @ft.partial(jnp.vectorize, signature="()->(4)", excluded=(0,))
    @ft.partial(jax.jit)
    def preimage(self, u: Sz0, /) -> Sz4:
        """Return the (unnormalized) quaternion polynomial ``a(u)``."""
        seg = self.segment
        control = jnp.stack([seg.a0, seg.c0 * seg.a0 + seg.c2 * seg.a2, seg.a2])
        return bernstein_basis(2, u) @ control

    @ft.partial(jnp.vectorize, signature="()->(3,3)", excluded=(0,))
    @ft.partial(jax.jit)
    def axes(self, u: Sz0, /) -> Sz33:
        """Return the frame axes at ``u`` as the columns of a rotation matrix."""
        return euler_rodrigues_matrix(self.preimage(u))

    @ft.partial(jnp.vectorize, signature="()->(4)", excluded=(0,))
    @ft.partial(jax.jit)
    def quaternion(self, u: Sz0, /) -> Sz4:
        """Return the frame orientation at ``u`` as a unit quaternion."""
        a = self.preimage(u)
        return a / jnp.linalg.vector_norm(a)

    def frame(self, u: LikeSz0, /) -> Frame:
        """Return the position and axes at ``u``."""
        tangent, normal, binormal = jnp.moveaxis(self.axes(u), -1, 0)
        return Frame(self.position(u), tangent, normal, binormal)

    # -------------------------------------------

    def position(self, u: LikeSz0, /) -> Sz3:
        """Return the position at ``u``."""
        return self.hermite.position(u)

    def velocity(self, u: LikeSz0, /) -> Sz3:
        """Return the hodograph at ``u``."""
        return self.hermite.velocity(u)

    def acceleration(self, u: LikeSz0, /) -> Sz3:
        """Return the second derivative at ``u``."""
        return self.hermite.acceleration(u)

    def speed(self, u: LikeSz0, /) -> Sz0:
        """Return the parametric speed at ``u``, used for resampling."""
        return self.hermite.speed(u)

    def resample(self, u_start: float, u_stop: float, ds: float, /) -> np.ndarray:
        """Return parameters spaced about ``ds`` apart in arc length."""
        return resample_curve(self, u_start, u_stop, ds)
