"""Plotting helpers for 3D curves."""

__all__ = ["plot_curve", "plot_frames"]

import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d.axes3d import Axes3D

from .curve import Curve, FramedCurve
from .custom_types import SzN


def _axes3d(ax: Axes3D | None) -> Axes3D:
    if ax is None:
        fig = plt.figure(dpi=150, figsize=(8, 8))
        ax = fig.add_subplot(projection="3d")
    return ax


def plot_curve(
    curve: Curve,
    u: SzN,
    /,
    *,
    ax: Axes3D | None = None,
    label: str | None = r"$\vec{r}(u)$",
    c: str = "black",
    ls: str = "-",
    lw: float = 1.0,
) -> Axes3D:
    r"""Plot ``curve`` evaluated at ``u`` as a line.

    Parameters
    ----------
    curve
        The curve to draw.
    u
        The parameter values at which to evaluate the curve.
    ax
        3D axes to draw on. If `None` (default), a new figure is created.
    label, c, ls, lw
        Passed on to `Axes3D.plot`.

    Returns
    -------
    mpl_toolkits.mplot3d.axes3d.Axes3D
        The axes containing the plot.

    Examples
    --------
    .. plot::
       :include-source:

       import jax.numpy as jnp
       import matplotlib.pyplot as plt
       from hodographs import PHSpline, plot_curve

       pts = [[-1, 1, -1], [0, 0, 0], [1, 1, 1], [0, 2, 2]]
       spline = PHSpline.from_points(pts)
       ax = plot_curve(spline, jnp.linspace(0, 1, 400))
       ax.scatter(*jnp.array(pts).T, c="red")
       plt.show()

    """
    ax = _axes3d(ax)
    ax.plot(*np.asarray(curve.position(u)).T, c=c, ls=ls, lw=lw, label=label)
    return ax


def plot_frames(
    curve: FramedCurve,
    u: SzN,
    /,
    *,
    ax: Axes3D | None = None,
    length: float = 0.5,
    colors: tuple[str, str, str] = ("red", "green", "blue"),
) -> Axes3D:
    """Draw the frame axes of ``curve`` at ``u`` as arrows.

    Tangent, normal and binormal use ``colors`` in that order, and each arrow
    is ``length`` long.

    Returns
    -------
    mpl_toolkits.mplot3d.axes3d.Axes3D
        The axes containing the plot.

    """
    ax = _axes3d(ax)
    frame = curve.frame(u)
    origin = np.asarray(frame.position)
    axes = (frame.tangent, frame.normal, frame.binormal)
    for axis, color in zip(axes, colors, strict=True):
        ax.quiver(*origin.T, *np.asarray(axis).T, length=length, color=color)
    return ax
