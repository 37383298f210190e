"""Test the Euler-Rodrigues frame of a helical PH quintic."""

import jax.numpy as jnp
import pytest

import hodographs as hdg
import hodographs.phlib as phlib


@pytest.fixture(scope="module")
def erf() -> hdg.EulerRodriguesFrame:
    seg = hdg.HelicalPHQuinticSplineSegment.from_endpoints(
        jnp.zeros(3), jnp.ones(3), jnp.array([1.0, 0, 1]), jnp.array([0.0, 1, 1])
    )
    return hdg.EulerRodriguesFrame.from_segment(seg)


@pytest.fixture(scope="module")
def u() -> jnp.ndarray:
    return jnp.linspace(0, 1, 33)


def test_axes_are_orthonormal(erf: hdg.EulerRodriguesFrame, u: jnp.ndarray) -> None:
    axes = erf.axes(u)
    assert axes.shape == (len(u), 3, 3)
    gram = jnp.einsum("nij,nik->njk", axes, axes)
    assert jnp.allclose(gram, jnp.eye(3), atol=1e-12)
    assert jnp.allclose(jnp.linalg.det(axes), 1.0)


def test_first_axis_is_tangent(erf: hdg.EulerRodriguesFrame, u: jnp.ndarray) -> None:
    frame = erf.frame(u)
    assert jnp.allclose(frame.tangent, erf.hermite.tangent(u), atol=1e-12)
    assert jnp.allclose(frame.position, erf.position(u))


def test_frame_is_right_handed(erf: hdg.EulerRodriguesFrame, u: jnp.ndarray) -> None:
    frame = erf.frame(u)
    assert jnp.allclose(jnp.cross(frame.tangent, frame.normal), frame.binormal)


def test_frame_is_continuous(erf: hdg.EulerRodriguesFrame) -> None:
    u = jnp.linspace(0, 1, 1001)
    jumps = jnp.abs(jnp.diff(erf.axes(u), axis=0))
    assert jnp.max(jumps) < 0.05


def test_quaternion(erf: hdg.EulerRodriguesFrame, u: jnp.ndarray) -> None:
    q = erf.quaternion(u)
    assert jnp.allclose(jnp.linalg.vector_norm(q, axis=-1), 1.0)
    got = jnp.stack([phlib.euler_rodrigues_matrix(qi) for qi in q])
    assert jnp.allclose(got, erf.axes(u))


def test_preimage_ends(erf: hdg.EulerRodriguesFrame) -> None:
    assert jnp.allclose(erf.preimage(0.0), erf.segment.a0)
    assert jnp.allclose(erf.preimage(1.0), erf.segment.a2)


def test_delegates_to_quintic(erf: hdg.EulerRodriguesFrame, u: jnp.ndarray) -> None:
    assert jnp.allclose(erf.velocity(u), erf.segment.velocity(u))
    assert jnp.allclose(erf.acceleration(u), erf.segment.acceleration(u))
    assert jnp.allclose(erf.speed(u), erf.segment.speed(u))


def test_is_framed_curve(erf: hdg.EulerRodriguesFrame) -> None:
    assert isinstance(erf, hdg.FramedCurve)
    assert isinstance(erf, hdg.Curve)


def test_euler_rodrigues_matrix_scale_invariant() -> None:
    q = jnp.array([0.3, -1.2, 0.5, 2.0])
    assert jnp.allclose(
        phlib.euler_rodrigues_matrix(q), phlib.euler_rodrigues_matrix(3 * q)
    )


def test_orthonormal_through_near_inflection() -> None:
    """The frame stays orthonormal and smooth where the curvature nearly vanishes."""
    seg = hdg.HelicalPHQuinticSplineSegment.from_endpoints(
        jnp.zeros(3),
        jnp.array([3.0, 1.0, 0.01]),
        jnp.array([1.0, 0.5, 0.0]),
        jnp.array([1.0, 0.5, 0.001]),
    )
    erf = hdg.EulerRodriguesFrame.from_segment(seg)

    u = jnp.linspace(0, 1, 2001)
    kappa2 = seg.curvature_squared(u)
    flattest = u[jnp.argmin(kappa2)]
    assert float(jnp.min(kappa2)) < 1e-2
    assert 0.4 < float(flattest) < 0.6

    near = jnp.clip(flattest + jnp.linspace(-0.01, 0.01, 41), 0, 1)
    axes = erf.axes(near)
    gram = jnp.einsum("nij,nik->njk", axes, axes)
    assert jnp.allclose(gram, jnp.eye(3), atol=1e-12)
    assert jnp.allclose(axes[..., 0], seg.tangent(near), atol=1e-10)
    assert jnp.max(jnp.abs(jnp.diff(axes, axis=0))) < 0.05
