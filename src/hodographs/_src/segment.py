"""Helical PH quintic Hermite segments."""

__all__ = [
    "CURVATURE_SHIFT",
    "DEFAULT_PHASE",
    "HelicalPHQuinticSplineSegment",
    "helical_candidates",
]

import logging
from typing import Final

import equinox as eqx
import jax.numpy as jnp
import numpy as np
import numpy.typing as npt

from .curve import resample as resample_curve
from .custom_types import LikeSz0, LikeSz3, Sz0, Sz3, Sz4
from .errors import NonPositiveSpeedError, NoValidCurveError
from .hermite import ENERGY_SAMPLES, HermiteQuintic
from .phlib import cross_basis, helical_quartic, quaternion_basis, real_roots

logger = logging.getLogger(__name__)

DEFAULT_PHASE: Final = 0.57
"""Roll angle (radians) of the start quaternion.

Rotating both end quaternions by the same angle about the tangent leaves the
curve unchanged and only rolls its Euler-Rodrigues frame, so any value gives
the same geometry.
"""

CURVATURE_SHIFT: Final = 0.75
"""Offset between the stored ``c`` and the solved ``k`` parameters."""


def _as_vec3(x: npt.ArrayLike, name: str, /) -> np.ndarray:
    arr = np.asarray(x, dtype=np.float64)
    if arr.shape != (3,):
        msg = f"{name} must have shape (3,), got {arr.shape}"
        raise ValueError(msg)
    return arr


class HelicalPHQuinticSplineSegment(eqx.Module):
    r"""A helical Pythagorean-hodograph quintic Hermite segment.

    The hodograph is $A(u)\,\mathbf{i}\,\bar{A}(u)$ with the quadratic
    quaternion polynomial

    $$
    A(u) = a_0 (1-u)^2 + (c_0 a_0 + c_2 a_2)\, 2u(1-u) + a_2 u^2 .
    $$

    The middle coefficient is a real combination of the end quaternions, which
    makes the curve helical. The segment interpolates ``pi``, ``pf`` and the
    tangents ``di``, ``df`` (direction and magnitude).

    Use `HelicalPHQuinticSplineSegment.from_endpoints` to build one.

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> from hodographs import HelicalPHQuinticSplineSegment

    >>> pi, pf = jnp.zeros(3), jnp.ones(3)
    >>> di, df = jnp.array([1.0, 0, 1]), jnp.array([0.0, 1, 1])
    >>> seg = HelicalPHQuinticSplineSegment.from_endpoints(pi, pf, di, df)

    >>> bool(jnp.allclose(seg.position(0.0), pi, atol=1e-4))
    True
    >>> bool(jnp.allclose(seg.position(1.0), pf, atol=1e-4))
    True
    >>> bool(jnp.allclose(seg.velocity(1.0), df, atol=1e-4))
    True

    """

    pi: Sz3
    pf: Sz3
    a0: Sz4
    a2: Sz4
    c0: Sz0
    """Shifted curvature parameter, ``k0 - 0.75``."""
    c2: Sz0
    """Shifted curvature parameter, ``k2 - 0.75``."""
    phase0: Sz0
    """Roll angle of ``a0`` in its family of quaternion roots."""
    phase2: Sz0
    """Roll angle of ``a2``; ``phase2 - phase0`` is the solved half-angle."""
    hermite: HermiteQuintic
    """The derived closed-form quintic."""

    @classmethod
    def from_endpoints(
        cls,
        pi: LikeSz3,
        pf: LikeSz3,
        di: LikeSz3,
        df: LikeSz3,
        /,
        *,
        phase: float = DEFAULT_PHASE,
    ) -> "HelicalPHQuinticSplineSegment":
        """Build the minimum bending-energy helical PH quintic.

        Parameters
        ----------
        pi, pf
            Start and end points.
        di, df
            Start and end tangents. Both direction and magnitude are
            interpolated.
        phase
            Roll angle of the start quaternion. It only affects the frame.

        Raises
        ------
        DegenerateBoundaryError
            If ``di`` or ``df`` has zero length.
        NoValidCurveError
            If the boundary data admits no helical PH quintic.
        NonPositiveSpeedError
            If every candidate has a vanishing speed on [0, 1].

        """
        candidates = helical_candidates(pi, pf, di, df, phase=phase)

        moving = [c for c in candidates if float(c.hermite.min_speed()) > 0]
        if not moving:
            msg = "every helical candidate stalls (zero speed) inside [0, 1]"
            raise NonPositiveSpeedError(msg)

        energies = [float(c.hermite.elastic_bending_energy()) for c in moving]
        finite = [i for i, e in enumerate(energies) if np.isfinite(e)]
        if not finite:
            msg = "no helical candidate has a finite bending energy"
            raise NoValidCurveError(msg)

        # min() keeps the first of equal energies: roots ascending, then branch.
        best = min(finite, key=energies.__getitem__)
        logger.debug(
            "candidate energies %s, selected #%d", np.round(energies, 6), best
        )
        return moving[best]

    @classmethod
    def _from_quaternions(
        cls,
        pi: np.ndarray,
        pf: np.ndarray,
        a0: np.ndarray,
        a2: np.ndarray,
        c0: float,
        c2: float,
        phase0: float,
        phase2: float,
    ) -> "HelicalPHQuinticSplineSegment":
        hermite = HermiteQuintic.from_quaternions(pi, a0, c0 * a0 + c2 * a2, a2)
        return cls(
            pi=jnp.asarray(pi, dtype=float),
            pf=jnp.asarray(pf, dtype=float),
            a0=jnp.asarray(a0, dtype=float),
            a2=jnp.asarray(a2, dtype=float),
            c0=jnp.asarray(c0, dtype=float),
            c2=jnp.asarray(c2, dtype=float),
            phase0=jnp.asarray(phase0, dtype=float),
            phase2=jnp.asarray(phase2, dtype=float),
            hermite=hermite,
        )

    # =====================================================

    @property
    def a1(self) -> Sz4:
        """The middle control quaternion, ``c0 a0 + c2 a2``."""
        return self.c0 * self.a0 + self.c2 * self.a2

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
        """Return the parametric speed at ``u``."""
        return self.hermite.speed(u)

    def tangent(self, u: LikeSz0, /) -> Sz3:
        """Return the unit tangent at ``u``."""
        return self.hermite.tangent(u)

    def curvature_squared(self, u: LikeSz0, /) -> Sz0:
        """Return the squared curvature at ``u``."""
        return self.hermite.curvature_squared(u)

    def elastic_bending_energy(self, *, num: int = ENERGY_SAMPLES) -> Sz0:
        """Return the bending energy of the segment."""
        return self.hermite.elastic_bending_energy(num=num)

    def resample(self, u_start: float, u_stop: float, ds: float, /) -> np.ndarray:
        """Return parameters spaced about ``ds`` apart in arc length."""
        return resample_curve(self, u_start, u_stop, ds)

    def __call__(self, u: LikeSz0, /) -> Sz3:
        return self.position(u)


def helical_candidates(
    pi: LikeSz3,
    pf: LikeSz3,
    di: LikeSz3,
    df: LikeSz3,
    /,
    *,
    phase: float = DEFAULT_PHASE,
) -> list[HelicalPHQuinticSplineSegment]:
    r"""Return every helical PH quintic interpolating the Hermite data.

    Each real root $t$ of `helical_quartic` fixes the angle
    $\phi = 2\arctan t$ between the end quaternions. It is kept when

    $$
    k_0^2 = \frac{(h \times d_f)\cdot n}{16\,(d_i \times d_f)\cdot n} > 0,
    \qquad
    k_2^2 = \frac{(d_i \times h)\cdot n}{16\,(d_i \times d_f)\cdot n} > 0,
    $$

    and yields two sign branches for $(k_0, k_2)$, chosen so that
    $16 k_0 k_2 = (d_i \times d_f)\cdot h / (d_i \times d_f)\cdot n + 5$ holds.

    Candidates are listed roots first (ascending $t$), sign branch second.

    Raises
    ------
    DegenerateBoundaryError
        If ``di`` or ``df`` has zero length.
    NoValidCurveError
        If no root survives.

    """
    pi, pf = _as_vec3(pi, "pi"), _as_vec3(pf, "pf")
    di, df = _as_vec3(di, "di"), _as_vec3(df, "df")
    x0, y0 = quaternion_basis(di)
    x2, y2 = quaternion_basis(df)

    h = 120 * (pf - pi) - 15 * (di + df)
    u, v = cross_basis(di, df)
    w = np.cross(di, df)
    h_df = np.cross(h, df)
    di_h = np.cross(di, h)

    roots = real_roots(helical_quartic(h, di, df, u, v))
    logger.debug("helical quartic has %d real root(s): %s", len(roots), roots)

    a0 = x0 * np.cos(phase) + y0 * np.sin(phase)
    candidates = []
    for t in roots:
        cos, sin = (1 - t**2) / (1 + t**2), 2 * t / (1 + t**2)
        n = u * cos + v * sin
        den = w @ n
        with np.errstate(divide="ignore", invalid="ignore"):
            k0_sq = (h_df @ n) / (16 * den)
            k2_sq = (di_h @ n) / (16 * den)
            x = (w @ h) / den + 5
        if not (np.isfinite(k0_sq) and np.isfinite(k2_sq)) or k0_sq <= 0 or k2_sq <= 0:
            logger.debug("rejected root t=%g (k0^2=%g, k2^2=%g)", t, k0_sq, k2_sq)
            continue

        k0, k2 = np.sqrt(k0_sq), np.sqrt(k2_sq)
        branches = ((k0, k2), (-k0, -k2)) if x > 0 else ((-k0, k2), (k0, -k2))

        phase2 = phase + 2 * np.arctan(t)
        a2 = x2 * np.cos(phase2) + y2 * np.sin(phase2)
        for k0_b, k2_b in branches:
            candidates.append(
                HelicalPHQuinticSplineSegment._from_quaternions(  # noqa: SLF001
                    pi,
                    pf,
                    a0,
                    a2,
                    k0_b - CURVATURE_SHIFT,
                    k2_b - CURVATURE_SHIFT,
                    phase,
                    phase2,
                )
            )

    if not candidates:
        msg = f"no helical PH quintic joins {pi} to {pf} with tangents {di}, {df}"
        raise NoValidCurveError(msg)
    return candidates
