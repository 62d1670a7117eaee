# src/vncal/features/canchi.py
from __future__ import annotations

from dataclasses import dataclass

from vncal.core.canchi import SexagesimalName, stem_branch
from vncal.core.julian import julian_day_number
from vncal.core.lunisolar import LunarDate

# cycle offsets lining index 0 up with the historical Giáp Tý positions
YEAR_BIAS = 57
MONTH_BIAS = 14
DAY_BIAS = 50


def year_canchi(lunar_year: int) -> SexagesimalName:
    """Can-Chi of a lunar year, e.g. 2000 -> Canh Thìn."""
    return stem_branch(int(lunar_year) + YEAR_BIAS)


def month_canchi(lunar_year: int, month: int) -> SexagesimalName:
    """
    Can-Chi of a lunar month. month is 1..12; ordinal 0 (12th month) is accepted.
    A leap month shares the name of the month it repeats.
    """
    m = 12 if int(month) == 0 else int(month)
    if not (1 <= m <= 12):
        raise ValueError(f"lunar month out of range: {month}")
    return stem_branch(int(lunar_year) * 12 + m + MONTH_BIAS)


def day_canchi(day: int, month: int, year: int) -> SexagesimalName:
    """Can-Chi of a solar (civil) day, from its Julian day number."""
    return stem_branch(julian_day_number(day, month, year) + DAY_BIAS)


def format_canchi(name: SexagesimalName) -> str:
    return f"{name.stem} {name.branch}"


@dataclass(frozen=True)
class CanChiInfo:
    year: str
    month: str
    day: str


def canchi_for(lunar: LunarDate, day: int, month: int, year: int) -> CanChiInfo:
    """
    Year / month / day names for a solar date and its lunar equivalent.
    """
    return CanChiInfo(
        year=format_canchi(year_canchi(lunar.year)),
        month=format_canchi(month_canchi(lunar.year, lunar.month)),
        day=format_canchi(day_canchi(day, month, year)),
    )
