"""Splines of helical PH quintic segments."""

__all__ = ["ControlPoint", "PHSpline"]

import functools as ft
import logging
from collections.abc import Sequence
from typing import NamedTuple

import equinox as eqx
import jax
import jax.numpy as jnp
import jax.tree_util as jtu
import numpy as np
from jaxtyping import Array, ArrayLike, Real

from .catmull_rom import CATMULL_ROM_TENSION
from .curve import Frame, resample as resample_curve, segment_locate
from .custom_types import LikeSz0, Sz0, Sz3, Sz4, Sz33
from .frame import EulerRodriguesFrame
from .segment import DEFAULT_PHASE, HelicalPHQuinticSplineSegment

logger = logging.getLogger(__name__)


class ControlPoint(NamedTuple):
    """A point together with the tangent (direction and magnitude) there."""

    position: Real[ArrayLike, "3"]
    tangent: Real[ArrayLike, "3"]


class PHSpline(eqx.Module):
    """A G1 chain of helical PH quintic segments.

    The segments are stored as one `HelicalPHQuinticSplineSegment` whose array
    leaves carry a leading segment axis. As with `CatmullRom3`, the global
    parameter ``u`` in [0, 1] is spread evenly over the segments.

    Consecutive segments share their joint quaternion, so the
    Euler-Rodrigues frame is continuous across joints.

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> from hodographs import ControlPoint, PHSpline

    >>> spline = PHSpline.from_control_points([
    ...     ControlPoint([0.0, 0, 0], [1.0, 0, 1]),
    ...     ControlPoint([1.0, 1, 1], [0.0, 1, 1]),
    ...     ControlPoint([2.0, 2, 2], [1.0, 1, 0]),
    ... ])
    >>> spline.num_segments
    2
    >>> bool(jnp.allclose(spline.position(0.5), jnp.ones(3), atol=1e-4))
    True

    """

    segments: HelicalPHQuinticSplineSegment

    @classmethod
    def from_segments(
        cls, segments: Sequence[HelicalPHQuinticSplineSegment], /
    ) -> "PHSpline":
        """Stack individual segments."""
        if not segments:
            msg = "a PH spline needs at least one segment"
            raise ValueError(msg)
        stacked = jtu.tree_map(lambda *xs: jnp.stack(xs), *segments)
        return cls(segments=stacked)

    @classmethod
    def from_control_points(
        cls, control_points: Sequence[ControlPoint], /, *, phase: float = DEFAULT_PHASE
    ) -> "PHSpline":
        """Join consecutive control points with helical PH quintics.

        Each segment starts with the roll phase its predecessor ended with.

        Raises
        ------
        ValueError
            If there are fewer than 2 control points.
        HodographError
            If a segment cannot be built, see
            `HelicalPHQuinticSplineSegment.from_endpoints`.

        """
        if len(control_points) < 2:
            msg = f"need at least 2 control points, got {len(control_points)}"
            raise ValueError(msg)

        segments = []
        for start, stop in zip(control_points[:-1], control_points[1:], strict=True):
            seg = HelicalPHQuinticSplineSegment.from_endpoints(
                start.position, stop.position, start.tangent, stop.tangent, phase=phase
            )
            segments.append(seg)
            phase = float(seg.phase2)

        logger.debug("built PH spline with %d segment(s)", len(segments))
        return cls.from_segments(segments)

    @classmethod
    def from_points(
        cls,
        points: Real[ArrayLike, "N 3"],
        /,
        *,
        tension: float = CATMULL_ROM_TENSION,
        phase: float = DEFAULT_PHASE,
    ) -> "PHSpline":
        r"""Build the PH counterpart of `CatmullRom3` through ``points``.

        ``N`` points give ``N - 3`` segments from ``points[1]`` to
        ``points[N - 2]``, with the Catmull-Rom tangents
        $\tau (p_{k+1} - p_{k-1})$ at the knots.

        Examples
        --------
        >>> import jax.numpy as jnp
        >>> from hodographs import PHSpline

        >>> pts = [[-1.0, 1, -1], [0, 0, 0], [1, 1, 1], [0, 2, 2]]
        >>> spline = PHSpline.from_points(pts)
        >>> spline.num_segments
        1
        >>> bool(jnp.allclose(spline.position(1.0), jnp.ones(3), atol=1e-4))
        True

        """
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[-1] != 3:
            msg = f"points must have shape (N, 3), got {points.shape}"
            raise ValueError(msg)
        if len(points) < 4:
            msg = f"need at least 4 points, got {len(points)}"
            raise ValueError(msg)

        tangents = tension * (points[2:] - points[:-2])
        control_points = [
            ControlPoint(p, d) for p, d in zip(points[1:-1], tangents, strict=True)
        ]
        return cls.from_control_points(control_points, phase=phase)

    # =====================================================

    @property
    def num_segments(self) -> int:
        """Number of segments."""
        return self.segments.pi.shape[0]

    def segment(self, index: int | Array, /) -> HelicalPHQuinticSplineSegment:
        """Return segment ``index``."""
        return jtu.tree_map(lambda x: x[index], self.segments)

    def _local(self, u: Sz0) -> tuple[Sz0, HelicalPHQuinticSplineSegment]:
        t, i = segment_locate(u, self.num_segments)
        return t, self.segment(i)

    @ft.partial(jnp.vectorize, signature="()->(3)", excluded=(0,))
    @ft.partial(jax.jit)
    def position(self, u: Sz0, /) -> Sz3:
        """Return the position at ``u``."""
        t, seg = self._local(u)
        return seg.position(t)

    @ft.partial(jnp.vectorize, signature="()->(3)", excluded=(0,))
    @ft.partial(jax.jit)
    def velocity(self, u: Sz0, /) -> Sz3:
        """Return the derivative with respect to the global ``u``."""
        t, seg = self._local(u)
        return seg.velocity(t) * self.num_segments

    @ft.partial(jnp.vectorize, signature="()->(3)", excluded=(0,))
    @ft.partial(jax.jit)
    def acceleration(self, u: Sz0, /) -> Sz3:
        """Return the second derivative with respect to the global ``u``."""
        t, seg = self._local(u)
        return seg.acceleration(t) * self.num_segments**2

    @ft.partial(jnp.vectorize, signature="()->()", excluded=(0,))
    @ft.partial(jax.jit)
    def speed(self, u: Sz0, /) -> Sz0:
        """Return the parametric speed at ``u``."""
        t, seg = self._local(u)
        return seg.speed(t) * self.num_segments

    @ft.partial(jnp.vectorize, signature="()->(3,3)", excluded=(0,))
    @ft.partial(jax.jit)
    def axes(self, u: Sz0, /) -> Sz33:
        """Return the Euler-Rodrigues axes at ``u`` as matrix columns."""
        t, seg = self._local(u)
        return EulerRodriguesFrame.from_segment(seg).axes(t)

    @ft.partial(jnp.vectorize, signature="()->(4)", excluded=(0,))
    @ft.partial(jax.jit)
    def quaternion(self, u: Sz0, /) -> Sz4:
        """Return the frame orientation at ``u`` as a unit quaternion."""
        t, seg = self._local(u)
        return EulerRodriguesFrame.from_segment(seg).quaternion(t)

    def frame(self, u: LikeSz0, /) -> Frame:
        """Return the position and Euler-Rodrigues axes at ``u``."""
        tangent, normal, binormal = jnp.moveaxis(self.axes(u), -1, 0)
        return Frame(self.position(u), tangent, normal, binormal)

    def resample(self, u_start: float, u_stop: float, ds: float, /) -> np.ndarray:
        """Return parameters spaced about ``ds`` apart in arc length."""
        return resample_curve(self, u_start, u_stop, ds)

    def elastic_bending_energy(self) -> Sz0:
        """Return the summed bending energy of all segments."""
        return jnp.sum(jax.vmap(lambda s: s.elastic_bending_energy())(self.segments))

    def __call__(self, u: LikeSz0, /) -> Sz3:
        return self.position(u)
