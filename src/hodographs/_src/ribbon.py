"""Triangle-strip ribbons swept along framed curves."""

__all__ = ["RibbonMesh", "ribbon", "strip_indices"]

from typing import NamedTuple

import jax.numpy as jnp
import numpy as np

from .curve import FramedCurve, resample


class RibbonMesh(NamedTuple):
    """Vertex data of a double-sided triangle strip.

    Vertices come in pairs, one pair per sample: the left edge then the right
    edge of the ribbon.
    """

    positions: np.ndarray
    """Vertex positions, shape ``(2 n, 3)``."""
    normals: np.ndarray
    """Vertex normals, shape ``(2 n, 3)``; both vertices of a pair share one."""
    uvs: np.ndarray
    """Texture coordinates, shape ``(2 n, 2)``."""
    indices: np.ndarray
    """Triangle-strip indices, shape ``(4 n - 1,)``."""


def strip_indices(num_vertices: int, /) -> np.ndarray:
    """Return strip indices that run forward and then back.

    Walking back over the same vertices emits every triangle a second time
    with the opposite winding, so the strip is visible from both sides.

    Examples
    --------
    >>> print(strip_indices(4))
    [0 1 2 3 2 1 0]

    """
    forward = np.arange(num_vertices, dtype=np.uint32)
    return np.concatenate([forward, forward[::-1][1:]])


def ribbon(
    curve: FramedCurve,
    u_start: float,
    u_stop: float,
    ds: float,
    width: float,
) -> RibbonMesh:
    """Sweep a flat ribbon of ``width`` along ``curve``.

    The curve is resampled every ``ds`` of arc length. At each sample the two
    edge vertices sit at ``position -/+ (width / 2) * binormal`` and share the
    frame ``normal`` as their vertex normal.

    Examples
    --------
    >>> import numpy as np
    >>> from hodographs import CatmullRom3, ribbon

    >>> t = np.arange(8.0)
    >>> helix = CatmullRom3(np.stack([np.cos(t), np.sin(t), t / 4], axis=-1))
    >>> mesh = ribbon(helix, 0.0, 1.0, 0.5, width=0.2)
    >>> n = len(mesh.positions) // 2
    >>> mesh.normals.shape == (2 * n, 3), mesh.indices.shape == (4 * n - 1,)
    (True, True)
    >>> print(mesh.uvs[:4])
    [[0. 0.]
     [1. 0.]
     [0. 1.]
     [1. 1.]]

    """
    us = jnp.asarray(resample(curve, u_start, u_stop, ds))
    frame = curve.frame(us)
    offset = (width / 2) * np.asarray(frame.binormal)
    position = np.asarray(frame.position)

    positions = np.stack([position - offset, position + offset], axis=1).reshape(-1, 3)
    normals = np.repeat(np.asarray(frame.normal), 2, axis=0)

    i = np.arange(len(positions))
    uvs = np.stack([i % 2, (i // 2) % 2], axis=-1).astype(np.float64)

    return RibbonMesh(positions, normals, uvs, strip_indices(len(positions)))
