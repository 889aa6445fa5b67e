"""Sun and Moon positions, lunar phase, distances, and angular sizes.

Low-order periodic-term theory referred to the 1980.0 element epoch: the
Sun's longitude comes from a Kepler solve on Earth's orbit, the Moon's from
its mean longitude plus evection, annual equation, equation of the centre,
and variation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from lunar_ephemeris.angle_utils import deg2rad, fixangle, kepler_solve, rad2deg
from lunar_ephemeris.config import (
    DEFAULT_CONSTANTS,
    DEFAULT_OPTIONS,
    EvaluationOptions,
    OrbitalConstants,
)
from lunar_ephemeris.constants import DEGREES_PER_CIRCLE, TROPICAL_YEAR_DAYS

logger = logging.getLogger(__name__)

# Moon's mean motion in longitude and the perigee's advance, degrees/day
MOON_MEAN_MOTION = 13.1763966
MOON_PERIGEE_MOTION = 0.1114041

# Amplitudes of the lunar periodic terms, degrees
EVECTION = 1.2739
ANNUAL_EQUATION = 0.1858
CORRECTION_A3 = 0.37
EQUATION_OF_CENTRE = 6.2886
CORRECTION_A4 = 0.214
VARIATION = 0.6583


@dataclass(frozen=True)
class PositionSolution:
    """Output of solve_position for one Julian Date.

    Attributes:
        sun_longitude_deg: Sun's geocentric ecliptic longitude.
        moon_longitude_deg: Moon's true longitude (not reduced to [0, 360)).
        phase: Fraction of the synodic cycle since new moon, [0, 1).
        illuminated_fraction: Illuminated fraction of the disk, [0, 1].
        age_days: Days since new moon.
        distance_km: Earth-Moon distance.
        angular_diameter_deg: Moon's angular diameter.
        sun_distance_km: Earth-Sun distance.
        sun_angular_diameter_deg: Sun's angular diameter.
    """

    sun_longitude_deg: float
    moon_longitude_deg: float
    phase: float
    illuminated_fraction: float
    age_days: float
    distance_km: float
    angular_diameter_deg: float
    sun_distance_km: float
    sun_angular_diameter_deg: float


def solve_position(
    jd: float,
    constants: OrbitalConstants = DEFAULT_CONSTANTS,
    options: EvaluationOptions = DEFAULT_OPTIONS,
) -> PositionSolution:
    """Compute the Sun's and Moon's positions and the lunar phase at jd.

    Parameters:
        jd: Julian Date.
        constants: Orbital elements.
        options: Solver options (Kepler tolerance and iteration cap).

    Returns:
        PositionSolution for jd.

    Raises:
        EphemerisComputationError: If the Kepler solve does not converge.
    """
    c = constants
    day = jd - c.epoch_jd

    # Sun
    n = fixangle((DEGREES_PER_CIRCLE / TROPICAL_YEAR_DAYS) * day)  # mean anomaly
    m = fixangle(n + c.sun_elong_epoch - c.sun_elong_perigee)  # perigee coordinates
    ec = kepler_solve(
        m,
        c.earth_eccentricity,
        tolerance=options.kepler_tolerance,
        max_iterations=options.kepler_max_iterations,
    )
    ec = math.sqrt((1 + c.earth_eccentricity) / (1 - c.earth_eccentricity)) * math.tan(ec / 2)
    ec = 2 * rad2deg(math.atan(ec))  # true anomaly
    lambda_sun = fixangle(ec + c.sun_elong_perigee)

    f = (1 + c.earth_eccentricity * math.cos(deg2rad(ec))) / (
        1 - c.earth_eccentricity * c.earth_eccentricity
    )
    sun_dist = c.sun_semi_major_axis_km / f
    sun_ang = f * c.sun_angular_size_deg

    # Moon
    ml = fixangle(MOON_MEAN_MOTION * day + c.moon_mean_longitude_epoch)
    mm = fixangle(ml - MOON_PERIGEE_MOTION * day - c.moon_mean_perigee_epoch)
    ev = EVECTION * math.sin(deg2rad(2 * (ml - lambda_sun) - mm))
    ae = ANNUAL_EQUATION * math.sin(deg2rad(m))
    a3 = CORRECTION_A3 * math.sin(deg2rad(m))
    mm_p = mm + ev - ae - a3  # corrected anomaly
    mec = EQUATION_OF_CENTRE * math.sin(deg2rad(mm_p))
    a4 = CORRECTION_A4 * math.sin(deg2rad(2 * mm_p))
    l_p = ml + ev + mec - ae + a4  # corrected longitude
    v = VARIATION * math.sin(deg2rad(2 * (l_p - lambda_sun)))
    l_pp = l_p + v  # true longitude

    moon_age = l_pp - lambda_sun
    illuminated = (1 - math.cos(deg2rad(moon_age))) / 2

    a = c.moon_semi_major_axis_km
    e = c.moon_eccentricity
    moon_dist = (a * (1 - e * e)) / (1 + e * math.cos(deg2rad(mm_p + mec)))
    moon_ang = c.moon_angular_size_deg / (moon_dist / a)

    phase = fixangle(moon_age) / DEGREES_PER_CIRCLE
    logger.debug(
        'JD %.6f: sun lon %.6f, moon lon %.6f, phase %.6f', jd, lambda_sun, l_pp, phase
    )
    return PositionSolution(
        sun_longitude_deg=lambda_sun,
        moon_longitude_deg=l_pp,
        phase=phase,
        illuminated_fraction=illuminated,
        age_days=c.synodic_month * phase,
        distance_km=moon_dist,
        angular_diameter_deg=moon_ang,
        sun_distance_km=sun_dist,
        sun_angular_diameter_deg=sun_ang,
    )
