"""Lunar ephemeris for one instant: phase, illumination, distances, quarter phases."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from lunar_ephemeris.config import (
    DEFAULT_CONSTANTS,
    DEFAULT_OPTIONS,
    EvaluationOptions,
    OrbitalConstants,
)
from lunar_ephemeris.constants import PHASE_NAMES
from lunar_ephemeris.phase_hunt import phase_hunt
from lunar_ephemeris.position import solve_position
from lunar_ephemeris.time_utils import Instant, julian_date, unix_seconds

logger = logging.getLogger(__name__)


def phase_name(phase: float) -> str:
    """Return the English name of a lunar phase.

    The cycle is split into eighths offset by half a bucket, so each exact
    quarter phase sits in the middle of its bucket.

    Parameters:
        phase: Fraction of the synodic cycle since new moon, in [0, 1).

    Returns:
        One of 'New Moon', 'Waxing Crescent', 'First Quarter', 'Waxing Gibbous',
        'Full Moon', 'Waning Gibbous', 'Third Quarter', 'Waning Crescent'.

    Raises:
        ValueError: If phase is outside [0, 1).
    """
    if not 0.0 <= phase < 1.0:
        raise ValueError(f'phase must be in [0, 1), got {phase!r}')
    return PHASE_NAMES[math.floor((phase + 0.0625) * 8)]


@dataclass(frozen=True)
class EphemerisResult:
    """Lunar ephemeris bound to one instant.

    Timestamps in quarters are Unix seconds, ordered: new moon, first quarter,
    full moon, last quarter of the lunation containing the instant, then the
    same four of the next lunation.
    """

    instant: Instant
    unix_time: float
    julian_date: float
    phase: float
    illuminated_fraction: float
    age_days: float
    distance_km: float
    angular_diameter_deg: float
    sun_distance_km: float
    sun_angular_diameter_deg: float
    quarters: tuple[float, ...]

    @property
    def new_moon(self) -> float:
        return self.quarters[0]

    @property
    def first_quarter(self) -> float:
        return self.quarters[1]

    @property
    def full_moon(self) -> float:
        return self.quarters[2]

    @property
    def last_quarter(self) -> float:
        return self.quarters[3]

    @property
    def next_new_moon(self) -> float:
        return self.quarters[4]

    @property
    def next_first_quarter(self) -> float:
        return self.quarters[5]

    @property
    def next_full_moon(self) -> float:
        return self.quarters[6]

    @property
    def next_last_quarter(self) -> float:
        return self.quarters[7]

    def phase_name(self) -> str:
        """English name of this result's phase."""
        return phase_name(self.phase)


def evaluate(
    instant: Instant,
    constants: OrbitalConstants = DEFAULT_CONSTANTS,
    options: EvaluationOptions = DEFAULT_OPTIONS,
) -> EphemerisResult:
    """Compute the lunar ephemeris at instant.

    Parameters:
        instant: Aware or naive datetime (naive is process-local time), or
            Unix seconds.
        constants: Orbital elements.
        options: Solver options.

    Returns:
        EphemerisResult for instant.

    Raises:
        TypeError: If instant has an unsupported type.
        EphemerisComputationError: If an iterative step exceeds its bound.
    """
    unix_time = unix_seconds(instant)
    jd = julian_date(unix_time)
    position = solve_position(jd, constants, options)
    quarters = phase_hunt(unix_time, constants, options)
    logger.debug('Evaluated JD %.6f: phase %.6f', jd, position.phase)
    return EphemerisResult(
        instant=instant,
        unix_time=unix_time,
        julian_date=jd,
        phase=position.phase,
        illuminated_fraction=position.illuminated_fraction,
        age_days=position.age_days,
        distance_km=position.distance_km,
        angular_diameter_deg=position.angular_diameter_deg,
        sun_distance_km=position.sun_distance_km,
        sun_angular_diameter_deg=position.sun_angular_diameter_deg,
        quarters=quarters,
    )
