"""Uniform cubic Catmull-Rom splines."""

__all__ = ["CATMULL_ROM_TENSION", "CatmullRom3", "catmull_rom_basis"]

import functools as ft
from typing import Final

import equinox as eqx
import jax
import jax.numpy as jnp
import numpy as np
from jaxtyping import Array, ArrayLike, Real

from .curve import Frame, frenet_frame, resample as resample_curve, segment_locate
from .custom_types import LikeSz0, Sz0, Sz3, SzN3

CATMULL_ROM_TENSION: Final = 0.5
"""Tangent scale; 0.5 is the classic Catmull-Rom spline."""


def catmull_rom_basis(tension: float = CATMULL_ROM_TENSION) -> Real[Array, "4 4"]:
    r"""Return the basis matrix $B$ with rows per point and columns per power.

    A segment with control window $(p_0, p_1, p_2, p_3)$ has the monomial
    coefficients $W^T B$, where $W$ stacks the window as rows. With
    $\tau$ = ``tension`` the segment joins $p_1$ to $p_2$ with end tangents
    $\tau (p_2 - p_0)$ and $\tau (p_3 - p_1)$.

    Examples
    --------
    >>> print(catmull_rom_basis())
    [[ 0.  -0.5  1.  -0.5]
     [ 1.   0.  -2.5  1.5]
     [ 0.   0.5  2.  -1.5]
     [ 0.   0.  -0.5  0.5]]

    """
    t = tension
    return jnp.array(
        [
            [0.0, -t, 2 * t, -t],
            [1.0, 0.0, t - 3, 2 - t],
            [0.0, t, 3 - 2 * t, t - 2],
            [0.0, 0.0, -t, t],
        ]
    )


class CatmullRom3(eqx.Module):
    """Uniform cubic Catmull-Rom spline through 3D points.

    ``N`` points give ``N - 3`` segments, running from ``pts[1]`` to
    ``pts[N - 2]``. The global parameter ``u`` in [0, 1] is spread evenly over
    the segments. Parameters outside [0, 1] extrapolate the first or last
    segment.

    Parameters
    ----------
    pts
        The points, shape ``(N, 3)``.
    tension
        See `catmull_rom_basis`.

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> from hodographs import CatmullRom3

    >>> pts = jnp.array([[6.0, 12, 1], [0, 8, 2], [3, 4, 7], [6, 0, 4],
    ...                  [8, 4, 5], [12, 2, 6], [11, 10, 7], [11, 19, 8]])
    >>> spline = CatmullRom3(pts)
    >>> spline.num_segments
    5
    >>> print(spline.position(0.0))
    [0. 8. 2.]
    >>> bool(jnp.allclose(spline.position(1.0), pts[-2]))
    True

    """

    pts: SzN3
    coefs: Real[Array, "S 3 4"]

    def __init__(
        self, pts: Real[ArrayLike, "N 3"], /, *, tension: float = CATMULL_ROM_TENSION
    ) -> None:
        pts = jnp.asarray(pts, dtype=float)
        if pts.ndim != 2 or pts.shape[-1] != 3:
            msg = f"pts must have shape (N, 3), got {pts.shape}"
            raise ValueError(msg)

        num_segments = max(pts.shape[0] - 3, 0)
        windows = pts[jnp.arange(num_segments)[:, None] + jnp.arange(4)]
        self.pts = pts
        self.coefs = jnp.einsum("sip,ij->spj", windows, catmull_rom_basis(tension))

    @property
    def num_segments(self) -> int:
        """Number of cubic segments."""
        return self.coefs.shape[0]

    # =====================================================

    @ft.partial(jnp.vectorize, signature="()->(3)", excluded=(0,))
    @ft.partial(jax.jit)
    def position(self, u: Sz0, /) -> Sz3:
        """Return the position at ``u``."""
        t, i = segment_locate(u, self.num_segments)
        return self.coefs[i] @ jnp.stack([jnp.ones_like(t), t, t**2, t**3])

    @ft.partial(jnp.vectorize, signature="()->(3)", excluded=(0,))
    @ft.partial(jax.jit)
    def velocity(self, u: Sz0, /) -> Sz3:
        """Return ``d position / du`` (the local derivative times the segment count)."""
        t, i = segment_locate(u, self.num_segments)
        zero = jnp.zeros_like(t)
        local = self.coefs[i] @ jnp.stack([zero, jnp.ones_like(t), 2 * t, 3 * t**2])
        return local * self.num_segments

    @ft.partial(jnp.vectorize, signature="()->(3)", excluded=(0,))
    @ft.partial(jax.jit)
    def acceleration(self, u: Sz0, /) -> Sz3:
        """Return the second derivative with respect to the global ``u``."""
        t, i = segment_locate(u, self.num_segments)
        zero = jnp.zeros_like(t)
        local = self.coefs[i] @ jnp.stack([zero, zero, 2 * jnp.ones_like(t), 6 * t])
        return local * self.num_segments**2

    @ft.partial(jnp.vectorize, signature="()->()", excluded=(0,))
    @ft.partial(jax.jit)
    def speed(self, u: Sz0, /) -> Sz0:
        """Return the parametric speed at ``u``."""
        return jnp.linalg.vector_norm(self.velocity(u))

    def frame(self, u: LikeSz0, /) -> Frame:
        """Return the Frenet frame at ``u``.

        Unlike the Euler-Rodrigues frame of a PH curve, this frame flips at
        inflections and is undefined on straight stretches.

        """
        return frenet_frame(self, u)

    def resample(self, u_start: float, u_stop: float, ds: float, /) -> np.ndarray:
        """Return parameters spaced about ``ds`` apart in arc length."""
        return resample_curve(self, u_start, u_stop, ds)

    def __call__(self, u: LikeSz0, /) -> Sz3:
        return self.position(u)
