"""Quarter-phase search: bracket an instant between new moons, then refine.

Mean lunations are indexed by k, counted from the new moon of 1900 January;
k + 0.25, k + 0.5 and k + 0.75 are the first quarter, full moon and last
quarter of lunation k.
"""

from __future__ import annotations

import logging
import math

from lunar_ephemeris.angle_utils import deg2rad
from lunar_ephemeris.config import (
    DEFAULT_CONSTANTS,
    DEFAULT_OPTIONS,
    EvaluationOptions,
    OrbitalConstants,
)
from lunar_ephemeris.constants import (
    DAYS_PER_JULIAN_CENTURY,
    JD_1900,
    LUNATIONS_PER_CENTURY,
    LUNATIONS_PER_YEAR,
    PHASE_HUNT_LOOKBACK_DAYS,
    QUARTER_OFFSETS,
    SECONDS_PER_DAY,
    TRUE_PHASE_THRESHOLD_DAYS,
)
from lunar_ephemeris.errors import EphemerisComputationError
from lunar_ephemeris.time_utils import julian_date, seed_year_month, unix_from_julian

logger = logging.getLogger(__name__)

# Mean new moon of lunation 0 (1900 January 0.5 base)
_NEW_MOON_1900 = 2415020.75933

_PHASE_TOLERANCE = 0.01


def _mean_polynomial(k: float, t: float, synodic_month: float) -> float:
    t2 = t * t
    t3 = t2 * t
    return (
        _NEW_MOON_1900
        + synodic_month * k
        + 0.0001178 * t2
        - 0.000000155 * t3
        + 0.00033 * math.sin(deg2rad(166.56 + 132.87 * t - 0.009173 * t2))
    )


def mean_phase(
    sdate: float, k: float, constants: OrbitalConstants = DEFAULT_CONSTANTS
) -> float:
    """Julian Date of the mean new moon of lunation k.

    Parameters:
        sdate: Julian Date near the lunation; sets the time base in Julian
            centuries from 1900 January 0.5.
        k: Lunation index, K = (year - 1900) * 12.3685 with fractional year.
        constants: Orbital elements (synodic month).

    Returns:
        Julian Date.
    """
    t = (sdate - JD_1900) / DAYS_PER_JULIAN_CENTURY
    return _mean_polynomial(k, t, constants.synodic_month)


def true_phase(
    k: float, phase: float, constants: OrbitalConstants = DEFAULT_CONSTANTS
) -> float:
    """Julian Date of a quarter phase of lunation k, with periodic corrections.

    Parameters:
        k: Lunation index.
        phase: 0.0 (new), 0.25 (first quarter), 0.5 (full), or 0.75 (last quarter).
        constants: Orbital elements (synodic month).

    Returns:
        Julian Date.

    Raises:
        ValueError: If phase is not one of the four quarter offsets.
    """
    k += phase
    t = k / LUNATIONS_PER_CENTURY
    t2 = t * t
    t3 = t2 * t
    pt = _mean_polynomial(k, t, constants.synodic_month)

    m = 359.2242 + 29.10535608 * k - 0.0000333 * t2 - 0.00000347 * t3  # Sun's mean anomaly
    mprime = 306.0253 + 385.81691806 * k + 0.0107306 * t2 + 0.00001236 * t3  # Moon's mean anomaly
    f = 21.2964 + 390.67050646 * k - 0.0016528 * t2 - 0.00000239 * t3  # argument of latitude

    def s(x: float) -> float:
        return math.sin(deg2rad(x))

    def c(x: float) -> float:
        return math.cos(deg2rad(x))

    if phase < _PHASE_TOLERANCE or abs(phase - 0.5) < _PHASE_TOLERANCE:
        # New and full moon
        pt += (
            (0.1734 - 0.000393 * t) * s(m)
            + 0.0021 * s(2 * m)
            - 0.4068 * s(mprime)
            + 0.0161 * s(2 * mprime)
            - 0.0004 * s(3 * mprime)
            + 0.0104 * s(2 * f)
            - 0.0051 * s(m + mprime)
            - 0.0074 * s(m - mprime)
            + 0.0004 * s(2 * f + m)
            - 0.0004 * s(2 * f - m)
            - 0.0006 * s(2 * f + mprime)
            + 0.0010 * s(2 * f - mprime)
            + 0.0005 * s(m + 2 * mprime)
        )
    elif abs(phase - 0.25) < _PHASE_TOLERANCE or abs(phase - 0.75) < _PHASE_TOLERANCE:
        pt += (
            (0.1721 - 0.0004 * t) * s(m)
            + 0.0021 * s(2 * m)
            - 0.6280 * s(mprime)
            + 0.0089 * s(2 * mprime)
            - 0.0004 * s(3 * mprime)
            + 0.0079 * s(2 * f)
            - 0.0119 * s(m + mprime)
            - 0.0047 * s(m - mprime)
            + 0.0003 * s(2 * f + m)
            - 0.0004 * s(2 * f - m)
            - 0.0006 * s(2 * f + mprime)
            + 0.0021 * s(2 * f - mprime)
            + 0.0003 * s(m + 2 * mprime)
            + 0.0004 * s(m - 2 * mprime)
            - 0.0003 * s(2 * m + mprime)
        )
        if phase < 0.5:
            pt += 0.0028 - 0.0004 * c(m) + 0.0003 * c(mprime)
        else:
            pt += -0.0028 + 0.0004 * c(m) - 0.0003 * c(mprime)
    else:
        raise ValueError(f'phase must be one of 0, 0.25, 0.5, 0.75; got {phase!r}')
    return pt


def _seed_lunation(unix_time: float, options: EvaluationOptions) -> int:
    """Lunation index from the calendar month PHASE_HUNT_LOOKBACK_DAYS before unix_time.

    The month enters zero-based with one more month subtracted, i.e.
    (month - 2) / 12 for a 1-based month: the fractional year points at the
    start of the month before the lookback date. Over millennia the
    12.3685 lunations/year scale drifts, so the seed is not guaranteed to
    precede the instant.
    """
    year, month = seed_year_month(
        unix_time - SECONDS_PER_DAY * PHASE_HUNT_LOOKBACK_DAYS, options.seed_calendar
    )
    return math.floor((year + (month - 2) / 12 - 1900) * LUNATIONS_PER_YEAR)


def _bracket_error(sdate: float, options: EvaluationOptions) -> EphemerisComputationError:
    logger.error(
        'New-moon search for JD %.6f not bracketed after %d iterations',
        sdate,
        options.bracket_max_iterations,
    )
    return EphemerisComputationError(
        f'Could not bracket JD {sdate!r} between new moons within '
        f'{options.bracket_max_iterations} lunations'
    )


def phase_hunt(
    unix_time: float,
    constants: OrbitalConstants = DEFAULT_CONSTANTS,
    options: EvaluationOptions = DEFAULT_OPTIONS,
) -> tuple[float, ...]:
    """Find the quarter phases of the lunation containing unix_time and the next one.

    The calendar seed normally lands a few lunations early. If it does not
    (far from 1900 the lunation scale drifts), k1 is first stepped back in
    whole-lunation jumps until its mean new moon is at least
    TRUE_PHASE_THRESHOLD_DAYS before the instant; mean_phase is linear in k
    for a fixed time base, so one jump suffices. The forward search then
    advances one lunation per pass, the mean new-moon date growing by one
    synodic month each time, until the instant is bracketed. Both loops are
    capped by options.bracket_max_iterations.

    Parameters:
        unix_time: Unix seconds.
        constants: Orbital elements.
        options: Seed calendar and search bound.

    Returns:
        Eight Unix times: new moon, first quarter, full moon, last quarter of
        the bracketing lunation, then the same four of the following one.

    Raises:
        EphemerisComputationError: If the instant is not bracketed within
            options.bracket_max_iterations lunations.
    """
    sdate = julian_date(unix_time)
    adate = sdate - PHASE_HUNT_LOOKBACK_DAYS
    k1 = _seed_lunation(unix_time, options)
    nt1 = mean_phase(adate, k1, constants)

    for _ in range(options.bracket_max_iterations):
        excess = nt1 - (sdate - TRUE_PHASE_THRESHOLD_DAYS)
        if excess < 0:
            break
        step = math.floor(excess / constants.synodic_month) + 1
        logger.debug('Seed lunation %d is late for JD %.6f; stepping back %d', k1, sdate, step)
        k1 -= step
        nt1 = mean_phase(adate, k1, constants)
    else:
        raise _bracket_error(sdate, options)
    adate = nt1

    for iteration in range(1, options.bracket_max_iterations + 1):
        adate += constants.synodic_month
        k2 = k1 + 1
        nt2 = mean_phase(adate, k2, constants)
        if abs(nt2 - sdate) < TRUE_PHASE_THRESHOLD_DAYS:
            nt2 = true_phase(k2, 0.0, constants)
        if nt1 <= sdate < nt2:
            logger.debug(
                'JD %.6f bracketed by lunations %d..%d after %d iteration(s)',
                sdate,
                k1,
                k2,
                iteration,
            )
            break
        nt1 = nt2
        k1 = k2
    else:
        raise _bracket_error(sdate, options)

    return tuple(
        unix_from_julian(true_phase(k, p, constants))
        for k in (k1, k2)
        for p in QUARTER_OFFSETS
    )
