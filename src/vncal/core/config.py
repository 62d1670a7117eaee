# src/vncal/core/config.py
from __future__ import annotations

import math
import os
from dataclasses import dataclass

# k = 0 new moon (1900-01-01 13:51 UT)
NEW_MOON_EPOCH_JD: float = 2415021.076998695
SYNODIC_MONTH_DAYS: float = 29.530588853

# first Gregorian day (1582-10-15) as a Julian day number
GREGORIAN_CUTOVER_JDN: int = 2299161
GREGORIAN_CUTOVER_DATE: tuple[int, int, int] = (15, 10, 1582)

J2000_JD: float = 2451545.0
DAYS_PER_JULIAN_CENTURY: float = 36525.0

# Vietnam (Asia/Ho_Chi_Minh) civil time
DEFAULT_UTC_OFFSET_HOURS: float = 7.0

UTC_OFFSET_ENV = "VNCAL_UTC_OFFSET"


@dataclass(frozen=True)
class LuniSolarConfig:
    """
    Lunisolar conversion settings shared by the features / API layers.

    The core functions take the UTC offset explicitly; this only supplies
    the default when a caller leaves it out.
    """
    utc_offset_hours: float = DEFAULT_UTC_OFFSET_HOURS

    # number of (year, utc_offset) lunar-year tables kept in memory
    cache_size: int = 64

    # a lunar year spanning more than this many days carries a leap month
    leap_year_span_days: float = 365.0


def default_utc_offset() -> float:
    """
    Offset used when none is given: $VNCAL_UTC_OFFSET, else UTC+7.
    """
    v = os.environ.get(UTC_OFFSET_ENV, "").strip()
    if not v:
        return DEFAULT_UTC_OFFSET_HOURS
    try:
        off = float(v)
    except ValueError as e:
        raise ValueError(f"{UTC_OFFSET_ENV} must be a number of hours (got {v!r})") from e
    if not math.isfinite(off):
        raise ValueError(f"{UTC_OFFSET_ENV} must be finite (got {v!r})")
    return off
