# src/vncal/core/lunisolar.py
from __future__ import annotations

import os
import sys

from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from .config import LuniSolarConfig
from .errors import UnrepresentableLunarDate
from .julian import CivilDate, civil_to_local_jd, local_from_jd, local_to_jd
from .leap_month import assign_month_numbers, decide_leap_month
from .newmoon import lunation_index, new_moon
from .solstice_anchor import lunar_year_window


# ============================================================
# env helpers
# ============================================================

def _env_truthy(name: str) -> bool:
    v = os.environ.get(name, "")
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _debug_enabled() -> bool:
    return _env_truthy("VNCAL_DEBUG_LUNISOLAR")


def _debug_print(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


# ============================================================
# Public types
# ============================================================

@dataclass(frozen=True)
class LunarYearEntry:
    """
    One lunar month of a lunar year table.

    ordinal: 0..11 where 0 is the 12th month (tháng Chạp)
    start_jd: JD (UT) of local midnight of the first day
    """
    start: CivilDate
    ordinal: int
    is_leap: bool
    k: int
    start_jd: float

    @property
    def month_no(self) -> int:
        return 12 if self.ordinal == 0 else self.ordinal

    def __iter__(self) -> Iterator:
        return iter((self.start.day, self.start.month, self.start.year, self.ordinal, self.is_leap))


@dataclass(frozen=True)
class LunarDate:
    """
    Âm lịch date. month is the ordinal 0..11 (0 = 12th month), like LunarYearEntry.
    Unpacks as (day, month, year, is_leap).
    """
    day: int
    month: int
    year: int
    is_leap: bool

    @property
    def month_no(self) -> int:
        return 12 if self.month == 0 else self.month

    def __iter__(self) -> Iterator:
        return iter((self.day, self.month, self.year, self.is_leap))


LunarYearTable = Tuple[LunarYearEntry, ...]
YearTableFn = Callable[[int, float], LunarYearTable]


# ============================================================
# Lunar year table
# ============================================================

def _debug_dump_table(year: int, utc_offset: float, table: Sequence[LunarYearEntry], leap_pos: Optional[int]) -> None:
    if not _debug_enabled():
        return
    _debug_print(
        f"[VNCAL_DEBUG_LUNISOLAR] year={year} utc_offset={utc_offset} "
        f"span_count={len(table)} leap_pos={leap_pos}"
    )
    for i, e in enumerate(table):
        leap = " LEAP" if e.is_leap else ""
        _debug_print(
            f"  pos={i:02d} k={e.k} start={e.start.isoformat()} "
            f"start_jd={e.start_jd:.6f} ordinal={e.ordinal:02d}{leap}"
        )


def build_lunar_year(year: int, utc_offset: float) -> LunarYearTable:
    """
    Month table running from month 11 of year-1 to month 11 of year (both included).

    13 entries, or 14 when the two anchors are more than 365 days apart and
    one leap month is inserted.
    """
    cfg = LuniSolarConfig()
    a, b = lunar_year_window(year, utc_offset)

    # a.start is already a new-moon day, so round instead of truncating
    k0 = lunation_index(a.start_jd, nearest=True)

    span_days = b.start_jd - a.start_jd
    expect_leap = span_days > cfg.leap_year_span_days
    span_count = 14 if expect_leap else 13

    starts: List[Tuple[int, CivilDate]] = [(a.k, a.start)]
    for i in range(1, span_count - 1):
        starts.append((k0 + i, local_from_jd(new_moon(k0 + i), utc_offset)))
    starts.append((b.k, b.start))

    start_jds = [civil_to_local_jd(d, utc_offset) for _, d in starts]

    dec = decide_leap_month(start_jds, expect_leap=expect_leap)
    labels = assign_month_numbers(span_count, leap_pos=dec.leap_pos)

    table = tuple(
        LunarYearEntry(
            start=d,
            ordinal=lab.ordinal,
            is_leap=lab.is_leap,
            k=k,
            start_jd=jd,
        )
        for (k, d), jd, lab in zip(starts, start_jds, labels)
    )

    _debug_dump_table(year, utc_offset, table, dec.leap_pos)
    return table


@lru_cache(maxsize=LuniSolarConfig().cache_size)
def lunar_year_cached(year: int, utc_offset: float) -> LunarYearTable:
    """build_lunar_year memoized per (year, utc_offset)."""
    return build_lunar_year(year, utc_offset)


def leap_month_of_year(table: Sequence[LunarYearEntry]) -> Optional[LunarYearEntry]:
    for e in table:
        if e.is_leap:
            return e
    return None


# ============================================================
# Solar -> lunar
# ============================================================

def _solar_to_lunar(
    day: int,
    month: int,
    year: int,
    utc_offset: float,
    year_table: YearTableFn,
) -> LunarDate:
    table_year = year
    table = year_table(year, utc_offset)

    target = local_to_jd(day, month, year, utc_offset)

    # on/after this year's month 11 -> next year's table
    if target >= table[-1].start_jd:
        table_year = year + 1
        table = year_table(table_year, utc_offset)

    i = len(table) - 1
    while i > 0 and target < table[i].start_jd:
        i -= 1

    m = table[i]
    lunar_day = int(target - m.start_jd) + 1

    # months 11 and 12 at the head of the table still belong to the previous lunar year
    lunar_year = table_year - 1 if m.ordinal in (11, 0) else table_year

    return LunarDate(day=lunar_day, month=m.ordinal, year=lunar_year, is_leap=m.is_leap)


def solar_to_lunar(day: int, month: int, year: int, utc_offset: float) -> LunarDate:
    """
    Dương lịch -> âm lịch for the local date (day, month, year) at utc_offset.
    """
    return _solar_to_lunar(day, month, year, utc_offset, build_lunar_year)


# ============================================================
# Lunar -> solar
# ============================================================

def _table_year_for(ordinal: int, lunar_year: int) -> int:
    return lunar_year + 1 if ordinal in (11, 0) else lunar_year


def _find_month(
    month: int,
    lunar_year: int,
    is_leap: bool,
    utc_offset: float,
    year_table: YearTableFn,
    *,
    day: int = 1,
) -> Tuple[LunarYearTable, int]:
    ordinal = 0 if month == 12 else month
    table = year_table(_table_year_for(ordinal, lunar_year), utc_offset)
    for i, e in enumerate(table):
        if e.ordinal == ordinal and e.is_leap == bool(is_leap):
            return table, i
    raise UnrepresentableLunarDate(day, month, lunar_year, bool(is_leap))


def _lunar_to_solar(
    day: int,
    month: int,
    lunar_year: int,
    is_leap: bool,
    utc_offset: float,
    year_table: YearTableFn,
) -> CivilDate:
    table, i = _find_month(month, lunar_year, is_leap, utc_offset, year_table, day=day)
    return local_from_jd(table[i].start_jd + (day - 1), utc_offset)


def lunar_to_solar(day: int, month: int, lunar_year: int, is_leap: bool, utc_offset: float) -> CivilDate:
    """
    Âm lịch -> dương lịch. month is 1..12 (0 is accepted for the 12th month).

    Raises UnrepresentableLunarDate when the lunar year has no such month,
    e.g. a leap month in a year without one.
    """
    return _lunar_to_solar(day, month, lunar_year, is_leap, utc_offset, build_lunar_year)


def lunar_month_length(month: int, lunar_year: int, is_leap: bool, utc_offset: float) -> int:
    """Number of days (29 or 30) in the given lunar month."""
    table, i = _find_month(month, lunar_year, is_leap, utc_offset, lunar_year_cached)
    return int(round(table[i + 1].start_jd - table[i].start_jd))


# ============================================================
# stdlib date adapters
# ============================================================

def gregorian_to_lunar(d: date, utc_offset: Optional[float] = None) -> LunarDate:
    """
    datetime.date -> LunarDate, reusing memoized year tables.
    Dates before the 1582-10-15 cutover raise ValueError.
    """
    if utc_offset is None:
        utc_offset = LuniSolarConfig().utc_offset_hours
    c = CivilDate.from_date(d)
    return _solar_to_lunar(c.day, c.month, c.year, float(utc_offset), lunar_year_cached)


def lunar_to_gregorian(
    day: int,
    month: int,
    lunar_year: int,
    is_leap: bool = False,
    utc_offset: Optional[float] = None,
) -> date:
    if utc_offset is None:
        utc_offset = LuniSolarConfig().utc_offset_hours
    c = _lunar_to_solar(day, month, lunar_year, is_leap, float(utc_offset), lunar_year_cached)
    return c.to_date()


def gregorian_to_lunar_between(
    start: date,
    end: date,
    *,
    utc_offset: Optional[float] = None,
) -> List[Tuple[date, LunarDate]]:
    """
    Convert every day of [start, end); one table build per lunar year touched.
    """
    if not (start < end):
        return []

    out: List[Tuple[date, LunarDate]] = []
    d = start
    while d < end:
        out.append((d, gregorian_to_lunar(d, utc_offset)))
        d += timedelta(days=1)
    return out
