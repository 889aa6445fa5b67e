"""Angle reduction, degree/radian conversion, and the Kepler equation solver."""

from __future__ import annotations

import logging
import math

from lunar_ephemeris.config import DEFAULT_KEPLER_MAX_ITERATIONS, DEFAULT_KEPLER_TOLERANCE
from lunar_ephemeris.constants import DEGREES_PER_CIRCLE, HALF_CIRCLE_DEGREES
from lunar_ephemeris.errors import EphemerisComputationError

logger = logging.getLogger(__name__)


def fixangle(a: float) -> float:
    """Reduce an angle in degrees to the range [0, 360)."""
    r = a - DEGREES_PER_CIRCLE * math.floor(a / DEGREES_PER_CIRCLE)
    # Tiny negative inputs round up to exactly 360.0.
    return 0.0 if r >= DEGREES_PER_CIRCLE else r


def deg2rad(d: float) -> float:
    return (d * math.pi) / HALF_CIRCLE_DEGREES


def rad2deg(r: float) -> float:
    return (r * HALF_CIRCLE_DEGREES) / math.pi


def kepler_solve(
    mean_anomaly_deg: float,
    eccentricity: float,
    *,
    tolerance: float = DEFAULT_KEPLER_TOLERANCE,
    max_iterations: int = DEFAULT_KEPLER_MAX_ITERATIONS,
) -> float:
    """Solve Kepler's equation E - e*sin(E) = M by Newton iteration.

    Each pass measures the residual of the current estimate and applies one
    Newton correction; the corrected value is returned once the measured
    residual is within tolerance.

    Parameters:
        mean_anomaly_deg: Mean anomaly M in degrees.
        eccentricity: Orbit eccentricity e (0 <= e < 1).
        tolerance: Convergence threshold on |E - e*sin(E) - M|, radians.
        max_iterations: Newton corrections allowed before giving up.

    Returns:
        Eccentric anomaly E in radians.

    Raises:
        EphemerisComputationError: If the residual does not drop below
            tolerance within max_iterations corrections.
    """
    m = deg2rad(mean_anomaly_deg)
    e = m
    for iteration in range(1, max_iterations + 1):
        delta = e - eccentricity * math.sin(e) - m
        e -= delta / (1.0 - eccentricity * math.cos(e))
        if abs(delta) <= tolerance:
            logger.debug('Kepler solve converged after %d iteration(s)', iteration)
            return e
    logger.error(
        'Kepler solve did not converge: M=%r deg, e=%r, %d iterations',
        mean_anomaly_deg,
        eccentricity,
        max_iterations,
    )
    raise EphemerisComputationError(
        f'Kepler equation did not converge within {max_iterations} iterations '
        f'(mean anomaly {mean_anomaly_deg!r} deg, eccentricity {eccentricity!r})'
    )
