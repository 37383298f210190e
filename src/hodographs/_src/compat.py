"""Interoperability with other spline libraries."""

__all__ = ("interpax_PPoly_from_CatmullRom3",)

import interpax
import jax.numpy as jnp

from .catmull_rom import CatmullRom3


def interpax_PPoly_from_CatmullRom3(spline: CatmullRom3, /) -> interpax.PPoly:
    """Convert a `CatmullRom3` to an `interpax.PPoly` over the global ``u``.

    The breakpoints are ``linspace(0, 1, S + 1)`` for ``S`` segments. The local
    parameter of segment ``s`` is ``S (u - x_s)``, so the monomial coefficient
    of power ``p`` is scaled by ``S**p``. The result extrapolates outside
    [0, 1] just as the spline does.

    Examples
    --------
    >>> import numpy as np
    >>> import jax.numpy as jnp
    >>> from hodographs import CatmullRom3

    >>> t = np.arange(8.0)
    >>> spline = CatmullRom3(np.stack([np.cos(t), np.sin(t), t / 4], axis=-1))
    >>> ppoly = interpax_PPoly_from_CatmullRom3(spline)

    >>> u = jnp.linspace(0, 1, 23)
    >>> bool(jnp.allclose(ppoly(u), spline.position(u)))
    True

    """
    num = spline.num_segments
    scale = num ** jnp.arange(4.0)
    # interpax orders coefficients from the highest power down.
    c = jnp.moveaxis(spline.coefs * scale, -1, 0)[::-1]
    return interpax.PPoly(c=c, x=jnp.linspace(0, 1, num + 1))
