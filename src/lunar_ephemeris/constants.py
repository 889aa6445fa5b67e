"""Fixed constants: time scales, Julian Date reference points, phase labels."""

# Time: seconds per unit
SECONDS_PER_DAY = 86400.0

# Angle: degrees per circle
DEGREES_PER_CIRCLE = 360.0
HALF_CIRCLE_DEGREES = 180.0

# Julian Date of the Unix epoch (1970-01-01T00:00:00Z)
UNIX_EPOCH_JD = 2440587.5

# Day number of 2000-01-01 counted from the Unix epoch (rms-julian day 0)
J2000_UNIX_DAY = 10957

# Julian Date of 1900 January 0.5, base of the mean-phase polynomial
JD_1900 = 2415020.0
DAYS_PER_JULIAN_CENTURY = 36525.0

# Synodic months per year and per Julian century (new-moon index scale)
LUNATIONS_PER_YEAR = 12.3685
LUNATIONS_PER_CENTURY = 1236.85

# Length of the tropical year used for the Sun's mean motion
TROPICAL_YEAR_DAYS = 365.2422

# Days before the instant used to seed the new-moon search
PHASE_HUNT_LOOKBACK_DAYS = 45.0

# Mean new moons closer than this to the instant get the full correction
TRUE_PHASE_THRESHOLD_DAYS = 0.75

# Quarter offsets within one lunation, in synodic-cycle fractions
QUARTER_OFFSETS = (0.0, 0.25, 0.5, 0.75)

# Phase names by eighth of the synodic cycle; index 8 wraps to New Moon
PHASE_NAMES = (
    'New Moon',
    'Waxing Crescent',
    'First Quarter',
    'Waxing Gibbous',
    'Full Moon',
    'Waning Gibbous',
    'Third Quarter',
    'Waning Crescent',
    'New Moon',
)
