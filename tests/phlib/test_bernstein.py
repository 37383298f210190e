"""Test the Bernstein-form helpers in `hodographs.phlib`."""

import jax.numpy as jnp
import pytest

import hodographs.phlib as phlib


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5])
@pytest.mark.parametrize("u", [0.0, 0.1, 0.5, 0.9, 1.0])
def test_partition_of_unity(n: int, u: float) -> None:
    basis = phlib.bernstein_basis(n, u)
    assert basis.shape == (n + 1,)
    assert jnp.isclose(jnp.sum(basis), 1.0)
    assert jnp.all(basis >= 0)


def test_endpoint_interpolation():
    assert jnp.allclose(phlib.bernstein_basis(4, 0.0), jnp.array([1.0, 0, 0, 0, 0]))
    assert jnp.allclose(phlib.bernstein_basis(4, 1.0), jnp.array([0.0, 0, 0, 0, 1]))


def test_integrate_then_differentiate():
    coefs = jnp.array([[1.0, 2.0, 3.0], [0.0, -1.0, 4.0], [2.0, 2.0, 2.0]])
    got = phlib.hodograph_derivative(phlib.integrate_bernstein(coefs))
    assert jnp.allclose(got, coefs)


def test_integral_of_quadratic():
    r"""$\int_0^1 u^2 = 1/3$; $u^2$ has Bernstein coefficients (0, 0, 1)."""
    control = phlib.integrate_bernstein(jnp.array([0.0, 0.0, 1.0]))
    assert jnp.allclose(control, jnp.array([0.0, 0.0, 0.0, 1.0 / 3]))
    got = phlib.bernstein_basis(3, 0.5) @ control
    assert jnp.isclose(got, 0.5**3 / 3)
