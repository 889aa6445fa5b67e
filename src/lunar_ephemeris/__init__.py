"""Approximate lunar ephemeris: phase, illumination, distances, quarter phases.

A pure formula evaluator built on classical low-order periodic-term theory:
``evaluate(instant)`` returns an immutable ``EphemerisResult`` holding the
Moon's phase, illuminated fraction, age, distance and angular size, the Sun's
distance and angular size, and the surrounding eight quarter-phase times.
Calendar conversions use rms-julian.
"""

from lunar_ephemeris.config import (
    DEFAULT_CONSTANTS,
    DEFAULT_OPTIONS,
    EvaluationOptions,
    OrbitalConstants,
)
from lunar_ephemeris.errors import EphemerisComputationError
from lunar_ephemeris.moon import EphemerisResult, evaluate, phase_name

__all__: list[str] = [
    'DEFAULT_CONSTANTS',
    'DEFAULT_OPTIONS',
    'EphemerisComputationError',
    'EphemerisResult',
    'EvaluationOptions',
    'OrbitalConstants',
    'evaluate',
    'phase_name',
]
