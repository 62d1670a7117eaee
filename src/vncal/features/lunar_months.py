# src/vncal/features/lunar_months.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence

from vncal.core.julian import CivilDate
from vncal.core.lunisolar import LunarYearEntry, lunar_year_cached
from vncal.features.canchi import format_canchi, month_canchi
from vncal.features.config import lunar_month_display_name


@dataclass(frozen=True)
class FeatureLunarMonth:
    pos: int
    month_no: int
    is_leap: bool
    lunar_year: int
    month_name: str
    canchi: str
    start: CivilDate
    length_days: int

    @property
    def label(self) -> str:
        return self.month_name


def enrich_lunar_year(year: int, utc_offset: float) -> List[FeatureLunarMonth]:
    """
    Lunar year table of `year` with display names, Can-Chi and month lengths.
    The last table entry (next month 11) has no known length and is left out.
    """
    table = lunar_year_cached(year, float(utc_offset))
    return enrich_entries(year, table)


def enrich_entries(year: int, table: Sequence[LunarYearEntry]) -> List[FeatureLunarMonth]:
    out: List[FeatureLunarMonth] = []
    for pos, (e, nxt) in enumerate(zip(table, table[1:])):
        lunar_year = year - 1 if e.ordinal in (11, 0) else year
        out.append(
            FeatureLunarMonth(
                pos=pos,
                month_no=e.month_no,
                is_leap=e.is_leap,
                lunar_year=lunar_year,
                month_name=lunar_month_display_name(e.month_no, e.is_leap),
                canchi=format_canchi(month_canchi(lunar_year, e.month_no)),
                start=e.start,
                length_days=int(round(nxt.start_jd - e.start_jd)),
            )
        )
    return out
