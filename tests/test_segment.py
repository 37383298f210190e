"""Test `HelicalPHQuinticSplineSegment` construction and evaluation."""

import jax.numpy as jnp
import numpy as np
import pytest

import hodographs as hdg
import hodographs.phlib as phlib

PI, PF = np.zeros(3), np.ones(3)
DI, DF = np.array([1.0, 0.0, 1.0]), np.array([0.0, 1.0, 1.0])


@pytest.fixture(scope="module")
def segment() -> hdg.HelicalPHQuinticSplineSegment:
    return hdg.HelicalPHQuinticSplineSegment.from_endpoints(PI, PF, DI, DF)


@pytest.fixture(scope="module")
def u() -> jnp.ndarray:
    return jnp.linspace(0, 1, 65)


##############################################################################
# Hermite interpolation


def test_interpolates_endpoints(segment: hdg.HelicalPHQuinticSplineSegment) -> None:
    assert jnp.allclose(segment.position(0.0), PI, atol=1e-8)
    assert jnp.allclose(segment.position(1.0), PF, atol=1e-6)


def test_interpolates_tangents(segment: hdg.HelicalPHQuinticSplineSegment) -> None:
    """Both direction and magnitude of the end tangents are reproduced."""
    assert jnp.allclose(segment.velocity(0.0), DI, atol=1e-8)
    assert jnp.allclose(segment.velocity(1.0), DF, atol=1e-8)


def test_end_quaternions_are_tangent_roots(
    segment: hdg.HelicalPHQuinticSplineSegment,
) -> None:
    a0, a2 = np.asarray(segment.a0), np.asarray(segment.a2)
    assert np.allclose(phlib.sandwich(a0, a0), DI)
    assert np.allclose(phlib.sandwich(a2, a2), DF)


def test_call_is_position(
    segment: hdg.HelicalPHQuinticSplineSegment, u: jnp.ndarray
) -> None:
    assert jnp.array_equal(segment(u), segment.position(u))
    assert segment.position(u).shape == (len(u), 3)


##############################################################################
# Pythagorean hodograph


def test_speed_is_hodograph_norm(
    segment: hdg.HelicalPHQuinticSplineSegment, u: jnp.ndarray
) -> None:
    """The polynomial speed equals the norm of the hodograph."""
    got = jnp.linalg.vector_norm(segment.velocity(u), axis=-1)
    assert jnp.allclose(got, segment.speed(u), rtol=1e-10)
    assert jnp.all(segment.speed(u) > 0)


def test_tangent_is_unit(
    segment: hdg.HelicalPHQuinticSplineSegment, u: jnp.ndarray
) -> None:
    assert jnp.allclose(jnp.linalg.vector_norm(segment.tangent(u), axis=-1), 1.0)


def test_position_integrates_velocity(
    segment: hdg.HelicalPHQuinticSplineSegment,
) -> None:
    """Simpson's rule on the hodograph reproduces the chord."""
    u = jnp.linspace(0, 1, 201)
    vel = segment.velocity(u)
    w = jnp.ones(201).at[1:-1:2].set(4).at[2:-1:2].set(2) / (3 * 200)
    assert jnp.allclose(w @ vel, PF - PI, atol=1e-8)


def test_acceleration_is_velocity_derivative(
    segment: hdg.HelicalPHQuinticSplineSegment,
) -> None:
    h = 1e-6
    fd = (segment.velocity(0.4 + h) - segment.velocity(0.4 - h)) / (2 * h)
    assert jnp.allclose(segment.acceleration(0.4), fd, atol=1e-6)


def test_middle_quaternion(segment: hdg.HelicalPHQuinticSplineSegment) -> None:
    assert jnp.allclose(segment.a1, segment.c0 * segment.a0 + segment.c2 * segment.a2)


##############################################################################
# Candidate selection


def test_selects_minimum_energy(segment: hdg.HelicalPHQuinticSplineSegment) -> None:
    candidates = hdg.helical_candidates(PI, PF, DI, DF)
    assert len(candidates) >= 1
    assert len(candidates) % 2 == 0  # two sign branches per root

    energies = [
        float(c.elastic_bending_energy())
        for c in candidates
        if float(c.hermite.min_speed()) > 0
    ]
    assert float(segment.elastic_bending_energy()) == pytest.approx(min(energies))


def test_equal_energies_keep_first_candidate(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ties go to the earliest candidate: roots ascending, then branch."""
    candidates = hdg.helical_candidates(PI, PF, DI, DF)
    first = next(c for c in candidates if float(c.hermite.min_speed()) > 0)

    monkeypatch.setattr(
        hdg.HermiteQuintic, "elastic_bending_energy", lambda self: jnp.asarray(1.0)
    )
    seg = hdg.HelicalPHQuinticSplineSegment.from_endpoints(PI, PF, DI, DF)
    assert jnp.array_equal(seg.a1, first.a1)
    assert float(seg.c0) == float(first.c0)
    assert float(seg.c2) == float(first.c2)


def test_candidates_interpolate() -> None:
    for c in hdg.helical_candidates(PI, PF, DI, DF):
        assert jnp.allclose(c.position(1.0), PF, atol=1e-6)
        assert jnp.allclose(c.velocity(1.0), DF, atol=1e-8)


def test_phase_only_rolls_frame() -> None:
    """The roll phase leaves the curve unchanged."""
    u = jnp.linspace(0, 1, 17)
    ref = hdg.HelicalPHQuinticSplineSegment.from_endpoints(PI, PF, DI, DF, phase=0.0)
    alt = hdg.HelicalPHQuinticSplineSegment.from_endpoints(PI, PF, DI, DF, phase=1.3)
    assert jnp.allclose(ref.position(u), alt.position(u), atol=1e-8)
    assert float(alt.phase0) == 1.3
    assert float(alt.phase2 - alt.phase0) == pytest.approx(
        float(ref.phase2 - ref.phase0)
    )


def test_energy_is_positive(segment: hdg.HelicalPHQuinticSplineSegment) -> None:
    energy = float(segment.elastic_bending_energy())
    assert np.isfinite(energy)
    assert energy > 0


##############################################################################
# Errors


@pytest.mark.parametrize(
    ("di", "df"), [([0.0, 0, 0], [0.0, 1, 1]), ([1.0, 0, 1], [0.0, 0, 0])]
)
def test_zero_tangent_raises(di: list[float], df: list[float]) -> None:
    with pytest.raises(hdg.DegenerateBoundaryError):
        hdg.HelicalPHQuinticSplineSegment.from_endpoints(PI, PF, di, df)


def test_straight_line_has_no_helical_solution() -> None:
    d = np.ones(3)
    with pytest.raises(hdg.NoValidCurveError):
        hdg.HelicalPHQuinticSplineSegment.from_endpoints(PI, PF, d, d)


def test_stalling_candidates_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(hdg.HermiteQuintic, "min_speed", lambda self: jnp.asarray(0.0))
    with pytest.raises(hdg.NonPositiveSpeedError, match="zero speed"):
        hdg.HelicalPHQuinticSplineSegment.from_endpoints(PI, PF, DI, DF)


def test_infinite_energies_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        hdg.HermiteQuintic, "elastic_bending_energy", lambda self: jnp.asarray(jnp.inf)
    )
    with pytest.raises(hdg.NoValidCurveError, match="finite bending energy"):
        hdg.HelicalPHQuinticSplineSegment.from_endpoints(PI, PF, DI, DF)


def test_bad_shape_raises() -> None:
    with pytest.raises(ValueError, match="shape"):
        hdg.HelicalPHQuinticSplineSegment.from_endpoints(PI, PF, [1.0, 0], DF)
