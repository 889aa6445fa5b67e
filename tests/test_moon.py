"""Tests for evaluate(), EphemerisResult accessors, and phase names."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from lunar_ephemeris import EphemerisComputationError, EvaluationOptions, evaluate, phase_name
from lunar_ephemeris.constants import PHASE_NAMES
from lunar_ephemeris.time_utils import datetime_from_unix, julian_date

CEST = timezone(timedelta(hours=2))


def test_full_moon_scenario() -> None:
    """2018-10-25 04:52 CEST is fully lit and named Full Moon."""
    m = evaluate(datetime(2018, 10, 25, 4, 52, tzinfo=CEST))
    assert round(m.illuminated_fraction) == 1
    assert m.phase_name() == 'Full Moon'


def test_new_moon_scenario() -> None:
    """2018-10-09 20:01 CEST is named New Moon."""
    m = evaluate(datetime(2018, 10, 9, 20, 1, tzinfo=CEST))
    assert m.phase_name() == 'New Moon'


def test_first_quarter_scenario() -> None:
    """2018-10-17 01:14 CEST is named First Quarter."""
    m = evaluate(datetime(2018, 10, 17, 1, 14, tzinfo=CEST))
    assert m.phase_name() == 'First Quarter'


def test_new_moon_timestamp_scenario() -> None:
    """The lunation containing 2018-10-17 began 2018-10-09 05:47:50.457 CEST."""
    m = evaluate(datetime(2018, 10, 17, 1, 14, tzinfo=CEST))
    expected = datetime(2018, 10, 9, 5, 47, 50, 457000, tzinfo=CEST).timestamp()
    assert -0.001 < m.new_moon - expected < 0.002
    civil = datetime_from_unix(m.new_moon, CEST)
    assert civil.strftime('%Y-%m-%d %H:%M:%S') == '2018-10-09 05:47:50'


def test_result_keeps_instant_and_julian_date() -> None:
    """The result carries the original instant and its Julian Date."""
    when = datetime(2018, 10, 17, 1, 14, tzinfo=CEST)
    m = evaluate(when)
    assert m.instant is when
    assert m.unix_time == 1539731640.0
    assert m.julian_date == julian_date(1539731640.0)


def test_named_quarter_accessors() -> None:
    """Each named accessor maps to its slot in quarters."""
    m = evaluate(1539731640.0)
    assert (
        m.new_moon,
        m.first_quarter,
        m.full_moon,
        m.last_quarter,
        m.next_new_moon,
        m.next_first_quarter,
        m.next_full_moon,
        m.next_last_quarter,
    ) == m.quarters
    assert m.next_first_quarter > m.next_new_moon


def test_evaluate_is_idempotent() -> None:
    """Evaluating the same instant twice gives identical results."""
    when = datetime(2018, 10, 25, 4, 52, tzinfo=CEST)
    assert evaluate(when) == evaluate(when)


def test_result_is_immutable() -> None:
    """Results cannot be modified after construction."""
    m = evaluate(0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        m.phase = 0.5  # type: ignore[misc]


def test_numeric_and_datetime_instants_agree() -> None:
    """Unix seconds and the equivalent datetime evaluate identically."""
    when = datetime(2018, 10, 16, 23, 14, tzinfo=timezone.utc)
    by_dt = evaluate(when)
    by_num = evaluate(1539731640)
    assert by_dt.quarters == by_num.quarters
    assert by_dt.phase == by_num.phase


def test_naive_datetime_is_local_time() -> None:
    """A naive datetime evaluates as the equivalent local timestamp."""
    naive = datetime(2018, 10, 9, 20, 1)
    assert evaluate(naive).quarters == evaluate(naive.timestamp()).quarters


def test_evaluate_rejects_strings() -> None:
    """Unsupported instant types raise TypeError."""
    with pytest.raises(TypeError):
        evaluate('2018-10-17')  # type: ignore[arg-type]


def test_evaluate_surfaces_search_fault() -> None:
    """An exhausted new-moon search propagates out of evaluate."""
    with pytest.raises(EphemerisComputationError):
        evaluate(1539731640.0, options=EvaluationOptions(bracket_max_iterations=1))


_SAMPLE_INSTANTS = [
    datetime(1900, 1, 1, tzinfo=timezone.utc) + timedelta(days=7.37 * i) for i in range(0, 10000, 97)
]


@pytest.mark.parametrize('when', _SAMPLE_INSTANTS, ids=lambda d: d.strftime('%Y-%m-%d'))
def test_invariants_hold(when: datetime) -> None:
    """Ranges, ordering and new-moon bracketing hold across two centuries."""
    m = evaluate(when)
    assert 0.0 <= m.phase < 1.0
    assert 0.0 <= m.illuminated_fraction <= 1.0
    assert all(a < b for a, b in zip(m.quarters, m.quarters[1:]))
    assert julian_date(m.new_moon) <= m.julian_date < julian_date(m.next_new_moon)
    assert m.phase_name() in PHASE_NAMES


_FAR_INSTANTS = [
    datetime(y, 1 + y % 12, 1 + y % 28, 6 * (y % 4), tzinfo=timezone.utc)
    for y in range(1, 10000, 53)
] + [
    datetime(1, 1, 1, tzinfo=timezone.utc),
    datetime(1582, 10, 15, tzinfo=timezone.utc),
    datetime(5000, 6, 15, 12, tzinfo=timezone.utc),
    datetime(9001, 12, 16, tzinfo=timezone.utc),
    datetime(9998, 7, 3, tzinfo=timezone.utc),
    datetime(9999, 12, 31, 23, 59, tzinfo=timezone.utc),
]


@pytest.mark.parametrize('when', _FAR_INSTANTS, ids=lambda d: d.strftime('%Y-%m-%d'))
def test_invariants_hold_far_from_epoch(when: datetime) -> None:
    """Every datetime from year 1 to 9999 is bracketed by its new moons."""
    m = evaluate(when)
    assert 0.0 <= m.phase < 1.0
    assert all(a < b for a, b in zip(m.quarters, m.quarters[1:]))
    assert julian_date(m.new_moon) <= m.julian_date < julian_date(m.next_new_moon)


@pytest.mark.parametrize('unix_time', [-1e11, 1e12, 3e12])
def test_invariants_hold_for_large_unix_times(unix_time: float) -> None:
    """Unix times far outside the datetime range still evaluate."""
    m = evaluate(unix_time)
    assert 0.0 <= m.illuminated_fraction <= 1.0
    assert all(a < b for a, b in zip(m.quarters, m.quarters[1:]))
    assert julian_date(m.new_moon) <= m.julian_date < julian_date(m.next_new_moon)


@pytest.mark.parametrize(
    ('phase', 'expected'),
    [
        (0.0, 'New Moon'),
        (0.05, 'New Moon'),
        (0.1, 'Waxing Crescent'),
        (0.25, 'First Quarter'),
        (0.4, 'Waxing Gibbous'),
        (0.5, 'Full Moon'),
        (0.6, 'Waning Gibbous'),
        (0.75, 'Third Quarter'),
        (0.85, 'Waning Crescent'),
        (0.95, 'New Moon'),
    ],
)
def test_phase_name_buckets(phase: float, expected: str) -> None:
    """Eighth-of-cycle buckets centred on the quarter phases."""
    assert phase_name(phase) == expected


@pytest.mark.parametrize('phase', [-0.01, 1.0, 1.5])
def test_phase_name_rejects_out_of_range(phase: float) -> None:
    """Phases outside [0, 1) have no name."""
    with pytest.raises(ValueError, match='phase must be in'):
        phase_name(phase)
