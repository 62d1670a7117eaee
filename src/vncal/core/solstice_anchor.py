# src/vncal/core/solstice_anchor.py
from __future__ import annotations

import math
from dataclasses import dataclass

from .astronomy import sun_longitude
from .julian import CivilDate, civil_to_local_jd, local_from_jd, local_to_jd
from .newmoon import lunation_index, new_moon

# winter solstice: sun longitude 270 deg
WINTER_SOLSTICE_RAD = 3.0 * math.pi / 2.0


@dataclass(frozen=True)
class SolsticeAnchor:
    """
    Month-11 anchor of a solar year: the lunar month holding the winter solstice.

    k:
      lunation index of the new moon starting that month
    start:
      local date of that new moon (first day of month 11)
    """
    year: int
    k: int
    new_moon_jd: float
    start: CivilDate
    start_jd: float


def find_month11_anchor(year: int, utc_offset: float) -> SolsticeAnchor:
    """
    Locate the new moon starting lunar month 11 for the given solar year.

    Start from the last new moon before local Dec 31 of `year`. If the sun
    has already passed the solstice at local midnight of that new moon's day,
    the solstice fell in the preceding lunation, so step back one.
    """
    dec31 = local_to_jd(31, 12, year, utc_offset)
    k = lunation_index(dec31)
    jd = new_moon(k)

    start = local_from_jd(jd, utc_offset)
    lon = sun_longitude(civil_to_local_jd(start, utc_offset))
    if lon > WINTER_SOLSTICE_RAD:
        k -= 1
        jd = new_moon(k)
        start = local_from_jd(jd, utc_offset)

    return SolsticeAnchor(
        year=year,
        k=k,
        new_moon_jd=jd,
        start=start,
        start_jd=civil_to_local_jd(start, utc_offset),
    )


def lunar_month11(year: int, utc_offset: float) -> CivilDate:
    """Local start date of lunar month 11 (the winter-solstice month) of `year`."""
    return find_month11_anchor(year, utc_offset).start


def lunar_year_window(year: int, utc_offset: float) -> tuple[SolsticeAnchor, SolsticeAnchor]:
    """
    Anchors bounding the lunar year table of `year`:
    month 11 of year-1 (start) and month 11 of year (end).
    """
    return find_month11_anchor(year - 1, utc_offset), find_month11_anchor(year, utc_offset)
