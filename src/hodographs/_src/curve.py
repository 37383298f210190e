"""Curve capabilities, Frenet frames and arc-length resampling."""

__all__ = [
    "Curve",
    "Frame",
    "FramedCurve",
    "Resampler",
    "binormal",
    "frenet_frame",
    "principal_normal",
    "resample",
    "segment_locate",
    "unit_tangent",
]

import functools as ft
import logging
from collections.abc import Iterator
from typing import NamedTuple, Protocol, runtime_checkable

import jax
import jax.numpy as jnp
import numpy as np
from jaxtyping import Array

from .custom_types import LikeSz0, Sz0, Sz3
from .errors import NonPositiveSpeedError

logger = logging.getLogger(__name__)


class Frame(NamedTuple):
    """An oriented point on a curve.

    The axes form a right-handed orthonormal triad. For PH curves ``normal``
    and ``binormal`` are the rotation-minimizing axes, not the Frenet ones.
    """

    position: Sz3
    tangent: Sz3
    normal: Sz3
    binormal: Sz3


@runtime_checkable
class Curve(Protocol):
    """A parametric curve in 3D.

    Examples
    --------
    >>> from hodographs import CatmullRom3
    >>> isinstance(CatmullRom3([[0, 0, 0], [1, 0, 0], [2, 1, 0], [3, 1, 1]]), Curve)
    True

    """

    def position(self, u: LikeSz0, /) -> Sz3: ...
    def velocity(self, u: LikeSz0, /) -> Sz3: ...
    def acceleration(self, u: LikeSz0, /) -> Sz3: ...
    def speed(self, u: LikeSz0, /) -> Sz0: ...


@runtime_checkable
class FramedCurve(Curve, Protocol):
    """A curve carrying an orthonormal frame at each parameter."""

    def frame(self, u: LikeSz0, /) -> Frame: ...


def segment_locate(u: Sz0, num_segments: int, /) -> tuple[Sz0, Array]:
    """Map a global ``u`` in [0, 1] to a local parameter and segment index.

    The index is clamped to ``[0, num_segments - 1]``, so ``u = 1`` is the end
    of the last segment and parameters outside [0, 1] extrapolate.

    Examples
    --------
    >>> t, i = segment_locate(1.0, 4)
    >>> print(float(t), int(i))
    1.0 3

    """
    if num_segments == 0:
        msg = "cannot evaluate a spline with no segments"
        raise ValueError(msg)
    x = u * num_segments
    index = jnp.clip(jnp.floor(x), 0, num_segments - 1)
    return x - index, index.astype(int)


# =============================================================================
# Frenet frame


def _normalize(vec: Sz3, /) -> Sz3:
    return vec / jnp.linalg.vector_norm(vec, axis=-1, keepdims=True)


@ft.partial(jax.jit)
def unit_tangent(curve: Curve, u: LikeSz0, /) -> Sz3:
    r"""Return $\hat{T} = \vec{r}' / |\vec{r}'|$.

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> from hodographs import CatmullRom3
    >>> line = CatmullRom3(jnp.array([[0.0, 0, 0], [1, 0, 0], [2, 0, 0], [3, 0, 0]]))
    >>> print(unit_tangent(line, 0.5))
    [1. 0. 0.]

    """
    return _normalize(curve.velocity(u))


@ft.partial(jax.jit)
def principal_normal(curve: Curve, u: LikeSz0, /) -> Sz3:
    r"""Return the principal unit normal $\hat{N}$.

    This is the acceleration with its tangential part removed,

    $$
    \hat{N} = \frac{\vec{r}'' - (\vec{r}''\cdot\hat{T})\hat{T}}
                   {|\vec{r}'' - (\vec{r}''\cdot\hat{T})\hat{T}|} .
    $$

    It is undefined (NaN) where the curvature vanishes and flips sign through
    inflections.

    """
    tangent = unit_tangent(curve, u)
    acc = curve.acceleration(u)
    return _normalize(acc - jnp.sum(acc * tangent, axis=-1, keepdims=True) * tangent)


@ft.partial(jax.jit)
def binormal(curve: Curve, u: LikeSz0, /) -> Sz3:
    r"""Return $\hat{B} = \hat{T} \times \hat{N}$."""
    return jnp.cross(unit_tangent(curve, u), principal_normal(curve, u))


@ft.partial(jax.jit)
def frenet_frame(curve: Curve, u: LikeSz0, /) -> Frame:
    """Return the Frenet frame of ``curve`` at ``u``."""
    tangent = unit_tangent(curve, u)
    normal = principal_normal(curve, u)
    return Frame(curve.position(u), tangent, normal, jnp.cross(tangent, normal))


# =============================================================================
# Resampling


class Resampler(Iterator[float]):
    r"""Iterate over parameters spaced roughly ``ds`` apart in arc length.

    Starting from ``u_start``, each step advances the parameter by
    $\Delta u = ds / \sigma(u)$, a first-order arc-length step. Iteration
    stops before the first parameter at or beyond ``u_stop``, so every value
    is below ``u_stop``.

    Parameters
    ----------
    curve
        Anything with a ``speed(u)`` method.
    u_start, u_stop
        The parameter interval.
    ds
        The arc-length step. Must be positive.

    Raises
    ------
    ValueError
        If ``ds`` is not positive.
    NonPositiveSpeedError
        (while iterating) If the speed at a sample is not positive and finite.

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> from hodographs import CatmullRom3
    >>> line = CatmullRom3(jnp.array([[0.0, 0, 0], [1, 0, 0], [2, 0, 0], [3, 0, 0]]))

    The middle segment has length 1, so steps of 0.25 give four samples.

    >>> print([round(u, 6) for u in Resampler(line, 0.0, 1.0, 0.25)])
    [0.0, 0.25, 0.5, 0.75]

    """

    def __init__(self, curve: Curve, u_start: float, u_stop: float, ds: float) -> None:
        if not ds > 0:
            msg = f"ds must be positive, got {ds}"
            raise ValueError(msg)
        self.curve = curve
        self.u_stop = float(u_stop)
        self.ds = float(ds)
        self._u = float(u_start)

    def __iter__(self) -> "Resampler":
        return self

    def __next__(self) -> float:
        u = self._u
        if u >= self.u_stop:
            raise StopIteration

        speed = float(self.curve.speed(u))
        if not (np.isfinite(speed) and speed > 0):
            msg = f"speed {speed} at u={u} does not allow an arc-length step"
            raise NonPositiveSpeedError(msg)

        self._u = u + self.ds / speed
        if self._u <= u:
            msg = f"step ds / speed = {self.ds / speed} is lost in rounding at u={u}"
            raise NonPositiveSpeedError(msg)
        return u


def resample(curve: Curve, u_start: float, u_stop: float, ds: float) -> np.ndarray:
    """Return the `Resampler` parameters as an array.

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> from hodographs import CatmullRom3
    >>> line = CatmullRom3(jnp.array([[0.0, 0, 0], [2, 0, 0], [4, 0, 0], [6, 0, 0]]))
    >>> print(resample(line, 0.0, 1.0, 0.5).round(6))
    [0.   0.25 0.5  0.75]

    """
    samples = np.fromiter(Resampler(curve, u_start, u_stop, ds), dtype=np.float64)
    logger.debug(
        "resampled [%g, %g) with ds=%g into %d samples", u_start, u_stop, ds, len(samples)
    )
    return samples
