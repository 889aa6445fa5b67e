"""Tests for angle reduction, unit conversion, and the Kepler solver."""

from __future__ import annotations

import math

import pytest

from lunar_ephemeris.angle_utils import deg2rad, fixangle, kepler_solve, rad2deg
from lunar_ephemeris.errors import EphemerisComputationError


@pytest.mark.parametrize(
    ('angle', 'expected'),
    [
        (0.0, 0.0),
        (359.5, 359.5),
        (360.0, 0.0),
        (725.0, 5.0),
        (-90.0, 270.0),
        (-720.0, 0.0),
    ],
)
def test_fixangle_reduces_to_circle(angle: float, expected: float) -> None:
    """fixangle maps any angle into [0, 360)."""
    assert fixangle(angle) == pytest.approx(expected)


def test_fixangle_never_returns_full_circle() -> None:
    """A tiny negative angle that rounds up to 360 wraps to 0."""
    assert fixangle(-1e-15) == 0.0
    assert 0.0 <= fixangle(-1e-12) < 360.0


def test_degree_radian_conversion() -> None:
    """deg2rad and rad2deg are inverse standard conversions."""
    assert deg2rad(180.0) == pytest.approx(math.pi)
    assert rad2deg(math.pi / 2) == pytest.approx(90.0)
    assert rad2deg(deg2rad(123.456)) == pytest.approx(123.456)


def test_kepler_circular_orbit_returns_mean_anomaly() -> None:
    """With zero eccentricity E equals M."""
    assert kepler_solve(57.0, 0.0) == pytest.approx(math.radians(57.0))


@pytest.mark.parametrize('mean_anomaly', [0.0, 10.0, 90.0, 179.0, 270.0, 359.0])
@pytest.mark.parametrize('eccentricity', [0.016718, 0.0549, 0.3])
def test_kepler_solution_satisfies_equation(mean_anomaly: float, eccentricity: float) -> None:
    """Returned eccentric anomaly solves E - e*sin(E) = M within tolerance."""
    e = kepler_solve(mean_anomaly, eccentricity)
    m = math.radians(mean_anomaly)
    assert abs(e - eccentricity * math.sin(e) - m) < 1e-6


def test_kepler_raises_when_iterations_exhausted() -> None:
    """An iteration cap too small to converge is a computation fault."""
    with pytest.raises(EphemerisComputationError, match='did not converge'):
        kepler_solve(90.0, 0.5, max_iterations=1)
