"""Configuration: orbital elements and solver options passed into every evaluation.

Nothing here is read from the environment. Callers derive variants with
``dataclasses.replace`` (e.g. an alternative epoch or a tighter Kepler tolerance).
"""

from __future__ import annotations

from dataclasses import dataclass

SEED_CALENDARS = ('utc', 'local')

DEFAULT_KEPLER_TOLERANCE = 1e-6
DEFAULT_KEPLER_MAX_ITERATIONS = 100
# A calendar seed lands a few lunations before the instant; drift of the
# 12.3685 lunations/year scale over millennia is undone by stepping back
# (in jumps) before the forward search starts.
DEFAULT_BRACKET_MAX_ITERATIONS = 24


def validate_seed_calendar(seed_calendar: str) -> str:
    """Return seed_calendar unchanged if it names a known calendar.

    Raises:
        ValueError: If seed_calendar is not one of SEED_CALENDARS.
    """
    if seed_calendar not in SEED_CALENDARS:
        raise ValueError(
            f'Invalid seed_calendar {seed_calendar!r}; '
            f'expected one of {", ".join(SEED_CALENDARS)}'
        )
    return seed_calendar


@dataclass(frozen=True)
class OrbitalConstants:
    """Orbital elements of the Sun's apparent orbit and the Moon's orbit.

    Attributes:
        synodic_month: New moon to new moon, days.
        epoch_jd: Julian Date of the element epoch (1980 January 0.0).
        sun_elong_epoch: Ecliptic longitude of the Sun at epoch, degrees.
        sun_elong_perigee: Ecliptic longitude of the Sun at perigee, degrees.
        earth_eccentricity: Eccentricity of Earth's orbit.
        sun_semi_major_axis_km: Semi-major axis of Earth's orbit, km.
        sun_angular_size_deg: Sun's angular size at semi-major axis distance, degrees.
        moon_mean_longitude_epoch: Moon's mean longitude at epoch, degrees.
        moon_mean_perigee_epoch: Mean longitude of the Moon's perigee at epoch, degrees.
        moon_eccentricity: Eccentricity of the Moon's orbit.
        moon_angular_size_deg: Moon's angular size at semi-major axis distance, degrees.
        moon_semi_major_axis_km: Semi-major axis of the Moon's orbit, km.
    """

    synodic_month: float = 29.53058868
    epoch_jd: float = 2444238.5
    sun_elong_epoch: float = 278.833540
    sun_elong_perigee: float = 282.596403
    earth_eccentricity: float = 0.016718
    sun_semi_major_axis_km: float = 1.495985e8
    sun_angular_size_deg: float = 0.533128
    moon_mean_longitude_epoch: float = 64.975464
    moon_mean_perigee_epoch: float = 349.383063
    moon_eccentricity: float = 0.054900
    moon_angular_size_deg: float = 0.5181
    moon_semi_major_axis_km: float = 384401.0


@dataclass(frozen=True)
class EvaluationOptions:
    """Solver options.

    Attributes:
        seed_calendar: Calendar used to read the year/month that seeds the
            new-moon search: 'utc' or 'local' (process time zone, like a
            platform date object).
        kepler_tolerance: Convergence threshold on the Kepler residual, radians.
        kepler_max_iterations: Newton corrections allowed before giving up.
        bracket_max_iterations: Lunations the new-moon search may advance.
    """

    seed_calendar: str = 'utc'
    kepler_tolerance: float = DEFAULT_KEPLER_TOLERANCE
    kepler_max_iterations: int = DEFAULT_KEPLER_MAX_ITERATIONS
    bracket_max_iterations: int = DEFAULT_BRACKET_MAX_ITERATIONS

    def __post_init__(self) -> None:
        validate_seed_calendar(self.seed_calendar)
        if not self.kepler_tolerance > 0.0:
            raise ValueError(f'kepler_tolerance must be positive, got {self.kepler_tolerance!r}')
        if self.kepler_max_iterations < 1:
            raise ValueError(
                f'kepler_max_iterations must be at least 1, got {self.kepler_max_iterations!r}'
            )
        if self.bracket_max_iterations < 1:
            raise ValueError(
                f'bracket_max_iterations must be at least 1, got {self.bracket_max_iterations!r}'
            )


DEFAULT_CONSTANTS = OrbitalConstants()
DEFAULT_OPTIONS = EvaluationOptions()
