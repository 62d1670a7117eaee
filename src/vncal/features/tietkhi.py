# src/vncal/features/tietkhi.py
from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from vncal.core.astronomy import solar_term_index, sun_longitude
from vncal.core.config import LuniSolarConfig
from vncal.core.julian import local_to_jd
from vncal.features.config import TermInfo, term_info_from_n


def solar_term_for_day(day: int, month: int, year: int, utc_offset: float) -> TermInfo:
    """
    Tiết khí in effect for a local day: the 15-deg term the sun is in at the
    end of the day (next local midnight).
    """
    jd_end = local_to_jd(day, month, year, utc_offset) + 1.0
    return term_info_from_n(solar_term_index(sun_longitude(jd_end)))


def term_changes_between(
    start: date,
    end: date,
    *,
    utc_offset: Optional[float] = None,
) -> List[tuple[date, TermInfo]]:
    """
    Days in [start, end) on which a new solar term begins (the term at the
    end of the day differs from the one at the start of it).
    """
    if not (start < end):
        raise ValueError("start must be < end")
    if utc_offset is None:
        utc_offset = LuniSolarConfig().utc_offset_hours

    out: List[tuple[date, TermInfo]] = []
    d = start
    prev = solar_term_index(sun_longitude(local_to_jd(d.day, d.month, d.year, utc_offset)))
    while d < end:
        info = solar_term_for_day(d.day, d.month, d.year, utc_offset)
        if info.n != prev:
            out.append((d, info))
        prev = info.n
        d += timedelta(days=1)
    return out
