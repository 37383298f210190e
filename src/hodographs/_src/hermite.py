"""Closed-form quintic evaluator of a PH segment."""

__all__ = ["ENERGY_SAMPLES", "HermiteQuintic"]

import functools as ft
from typing import Final

import equinox as eqx
import jax
import jax.numpy as jnp
import numpy as np
import numpy.typing as npt

from .custom_types import LikeSz0, Sz0, Sz3, Sz5, Sz53
from .phlib import bernstein_basis, hodograph_derivative, integrate_bernstein
from .phlib.quaternion import sandwich

ENERGY_SAMPLES: Final = 1000
"""Number of left Riemann samples in the bending-energy sum."""


class HermiteQuintic(eqx.Module):
    r"""Quintic PH curve in Bernstein form.

    The hodograph $\vec{r}'(u) = \sum_k \vec{w}_k B^4_k(u)$ and the parametric
    speed $\sigma(u) = \sum_k \sigma_k B^4_k(u)$ are both quartic polynomials,
    with $|\vec{r}'(u)| = \sigma(u)$. The position is the exact antiderivative
    of the hodograph, so no numerical integration is involved.

    Instances come from `HermiteQuintic.from_quaternions`, normally by way of
    `HelicalPHQuinticSplineSegment`.

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> from hodographs import HelicalPHQuinticSplineSegment

    >>> seg = HelicalPHQuinticSplineSegment.from_endpoints(
    ...     jnp.zeros(3), jnp.ones(3), jnp.array([1.0, 0, 1]), jnp.array([0.0, 1, 1]))
    >>> quintic = seg.hermite
    >>> bool(jnp.allclose(quintic.position(1.0), jnp.ones(3), atol=1e-4))
    True
    >>> bool(jnp.all(quintic.speed(jnp.linspace(0, 1, 11)) > 0))
    True

    """

    pi: Sz3
    """Start point."""

    weights: Sz5
    """Bernstein coefficients of the speed polynomial."""

    weighted_tangents: Sz53
    """Bernstein coefficients of the hodograph."""

    @classmethod
    def from_quaternions(
        cls,
        pi: npt.ArrayLike,
        a0: npt.ArrayLike,
        a1: npt.ArrayLike,
        a2: npt.ArrayLike,
    ) -> "HermiteQuintic":
        r"""Build the quintic with preimage $A(u) = \sum_k A_k B^2_k(u)$.

        The hodograph is $A(u)\,\mathbf{i}\,\bar{A}(u)$ and the speed is
        $|A(u)|^2$. Expanding the products of quadratic Bernstein polynomials
        gives the quartic coefficients directly.

        """
        a0, a1, a2 = (np.asarray(a, dtype=np.float64) for a in (a0, a1, a2))
        weighted_tangents = np.stack(
            [
                sandwich(a0, a0),
                sandwich(a0, a1),
                (2 * sandwich(a1, a1) + sandwich(a0, a2)) / 3,
                sandwich(a1, a2),
                sandwich(a2, a2),
            ]
        )
        weights = np.array(
            [a0 @ a0, a0 @ a1, (2 * (a1 @ a1) + a0 @ a2) / 3, a1 @ a2, a2 @ a2]
        )
        return cls(
            pi=jnp.asarray(pi, dtype=float),
            weights=jnp.asarray(weights),
            weighted_tangents=jnp.asarray(weighted_tangents),
        )

    # =====================================================

    @ft.partial(jnp.vectorize, signature="()->(3)", excluded=(0,))
    @ft.partial(jax.jit)
    def position(self, u: Sz0, /) -> Sz3:
        r"""Return $\vec{r}(u) = \vec{p}_i + \int_0^u \vec{r}'$."""
        control = integrate_bernstein(self.weighted_tangents)
        return self.pi + bernstein_basis(5, u) @ control

    @ft.partial(jnp.vectorize, signature="()->(3)", excluded=(0,))
    @ft.partial(jax.jit)
    def velocity(self, u: Sz0, /) -> Sz3:
        r"""Return the hodograph $\vec{r}'(u)$."""
        return bernstein_basis(4, u) @ self.weighted_tangents

    @ft.partial(jnp.vectorize, signature="()->(3)", excluded=(0,))
    @ft.partial(jax.jit)
    def acceleration(self, u: Sz0, /) -> Sz3:
        r"""Return $\vec{r}''(u)$."""
        return bernstein_basis(3, u) @ hodograph_derivative(self.weighted_tangents)

    @ft.partial(jnp.vectorize, signature="()->()", excluded=(0,))
    @ft.partial(jax.jit)
    def speed(self, u: Sz0, /) -> Sz0:
        r"""Return the parametric speed $\sigma(u) = |\vec{r}'(u)|$.

        This is a polynomial, not a square root: it is the defining property of
        a PH curve.

        """
        return bernstein_basis(4, u) @ self.weights

    @ft.partial(jnp.vectorize, signature="()->(3)", excluded=(0,))
    @ft.partial(jax.jit)
    def tangent(self, u: Sz0, /) -> Sz3:
        """Return the unit tangent."""
        return self.velocity(u) / self.speed(u)

    @ft.partial(jnp.vectorize, signature="()->()", excluded=(0,))
    @ft.partial(jax.jit)
    def curvature_squared(self, u: Sz0, /) -> Sz0:
        r"""Return $\kappa^2 = |\vec{r}' \times \vec{r}''|^2 / \sigma^6$.

        The squared form needs no square root of the speed, which keeps it well
        behaved where the speed is small.

        """
        cross = jnp.cross(self.velocity(u), self.acceleration(u))
        return jnp.sum(cross**2) / self.speed(u) ** 6

    @eqx.filter_jit
    def elastic_bending_energy(self, *, num: int = ENERGY_SAMPLES) -> Sz0:
        r"""Return $\int_0^1 \kappa^2 \sigma \, du$ by a left Riemann sum.

        $$
        E \approx \frac{1}{N}\sum_{i=0}^{N-1} \kappa^2(u_i)\,\sigma(u_i),
        \qquad u_i = i / N
        $$

        with $N$ = ``num`` (1000 by default).

        """
        u = jnp.arange(num) / num
        return jnp.sum(self.curvature_squared(u) * self.speed(u)) / num

    def min_speed(self, *, num: int = ENERGY_SAMPLES + 1) -> Sz0:
        """Return the smallest speed over ``num`` evenly spaced ``u`` in [0, 1]."""
        return jnp.min(self.speed(jnp.linspace(0, 1, num)))

    def __call__(self, u: LikeSz0, /) -> Sz3:
        """Return the position at ``u``."""
        return self.position(u)
