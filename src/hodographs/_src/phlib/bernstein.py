"""Bernstein-form polynomial evaluation."""

__all__ = (
    "bernstein_basis",
    "hodograph_derivative",
    "integrate_bernstein",
)

import functools as ft
import math

import jax
import jax.numpy as jnp
from jaxtyping import Array, Real

from hodographs._src.custom_types import Sz0


@ft.partial(jax.jit, static_argnums=(0,))
def bernstein_basis(n: int, u: Sz0, /) -> Real[Array, "{n}+1"]:
    r"""Return the degree-``n`` Bernstein basis evaluated at ``u``.

    $$
    B^n_k(u) = \binom{n}{k} u^k (1 - u)^{n - k}, \qquad k = 0, \dots, n
    $$

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> print(bernstein_basis(2, jnp.array(0.5)))
    [0.25 0.5  0.25]

    """
    k = jnp.arange(n + 1)
    binom = jnp.array([math.comb(n, i) for i in range(n + 1)], dtype=float)
    u = jnp.asarray(u, dtype=float)
    return binom * u**k * (1 - u) ** (n - k)


def integrate_bernstein(coefs: Real[Array, "K ..."], /) -> Real[Array, "K+1 ..."]:
    r"""Return the Bernstein coefficients of $\int_0^u \sum_k c_k B^{K-1}_k$.

    The antiderivative of a degree $K - 1$ polynomial in Bernstein form has
    coefficients $P_0 = 0$, $P_j = \frac{1}{K}\sum_{k<j} c_k$.

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> print(integrate_bernstein(jnp.array([1.0, 1.0])))  # int_0^u 1 = u
    [0.  0.5 1. ]

    """
    degree = coefs.shape[0]
    zero = jnp.zeros_like(coefs[:1])
    return jnp.concatenate([zero, jnp.cumsum(coefs, axis=0) / degree], axis=0)


def hodograph_derivative(coefs: Real[Array, "K ..."], /) -> Real[Array, "K-1 ..."]:
    """Return the Bernstein coefficients of the derivative polynomial."""
    degree = coefs.shape[0] - 1
    return degree * jnp.diff(coefs, axis=0)
