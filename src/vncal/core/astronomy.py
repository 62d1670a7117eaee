# src/vncal/core/astronomy.py
from __future__ import annotations

import math

from .config import DAYS_PER_JULIAN_CENTURY, J2000_JD

DR = math.pi / 180.0
TWO_PI = 2.0 * math.pi

# 12 principal-term sectors (30 deg) and 24 solar terms (15 deg)
SECTORS_PER_PI = 6
TERMS_PER_PI = 12


def angdiff180(deg: float) -> float:
    """Map angle to (-180, 180]."""
    x = (deg + 180.0) % 360.0 - 180.0
    return 180.0 if x == -180.0 else x


def norm_2pi(rad: float) -> float:
    """
    Reduce radians into [0, 2pi): strip whole turns by truncation,
    then lift a negative remainder by one turn.
    """
    x = rad - TWO_PI * int(rad / TWO_PI)
    if x < 0:
        x += TWO_PI
    return x


def sun_longitude(jd: float) -> float:
    """
    Apparent ecliptic longitude of the sun (radians, [0, 2pi)) at instant jd (UT).

    Low-precision series (Meeus, "Astronomical Algorithms", ch. 25),
    good to about 0.01 deg.
    """
    t = (jd - J2000_JD) / DAYS_PER_JULIAN_CENTURY
    t2 = t * t

    # mean anomaly / mean longitude, degrees
    m = 357.52910 + 35999.05030 * t - 0.0001559 * t2 - 0.00000048 * t * t2
    l0 = 280.46645 + 36000.76983 * t + 0.0003032 * t2

    dl = (1.914600 - 0.004817 * t - 0.000014 * t2) * math.sin(DR * m)
    dl = dl + (0.019993 - 0.000101 * t) * math.sin(DR * 2 * m) + 0.000290 * math.sin(DR * 3 * m)

    lon = (l0 + dl) * DR
    return norm_2pi(lon)


def sun_longitude_deg(jd: float) -> float:
    return sun_longitude(jd) / DR


def solar_term_sector(longitude: float) -> int:
    """
    Principal-term sector 0..11 of a longitude in radians.
    Sector 0 starts at the vernal equinox; 9 starts at the winter solstice.
    """
    return math.floor(longitude / math.pi * SECTORS_PER_PI)


def solar_term_index(longitude: float) -> int:
    """15-deg solar term 0..23 of a longitude in radians (0 = vernal equinox)."""
    return math.floor(longitude / math.pi * TERMS_PER_PI)
