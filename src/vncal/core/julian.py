# src/vncal/core/julian.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterator

from .config import GREGORIAN_CUTOVER_DATE, GREGORIAN_CUTOVER_JDN

GREGORIAN_CUTOVER = date(GREGORIAN_CUTOVER_DATE[2], GREGORIAN_CUTOVER_DATE[1], GREGORIAN_CUTOVER_DATE[0])


def _trunc(x: float) -> int:
    """Integer part, rounded toward zero (not floor)."""
    return int(x)


@dataclass(frozen=True)
class CivilDate:
    """
    A day of the proleptic Julian (before 1582-10-15) / Gregorian calendar.

    Unpacks like the (day, month, year) triple it replaces.
    """
    day: int
    month: int
    year: int

    def __iter__(self) -> Iterator[int]:
        return iter((self.day, self.month, self.year))

    def is_gregorian(self) -> bool:
        return _is_gregorian(self.day, self.month, self.year)

    def to_date(self) -> date:
        """
        stdlib date. date is proleptic Gregorian, so Julian-calendar days
        (before 1582-10-15) are refused.
        """
        if not self.is_gregorian():
            raise ValueError(f"{self.isoformat()} is a Julian-calendar date")
        return date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, d: date) -> "CivilDate":
        if d < GREGORIAN_CUTOVER:
            raise ValueError(f"{d.isoformat()} is before the Gregorian cutover (1582-10-15)")
        return cls(day=d.day, month=d.month, year=d.year)

    def isoformat(self) -> str:
        sign = "-" if self.year < 0 else ""
        return f"{sign}{abs(self.year):04d}-{self.month:02d}-{self.day:02d}"


def _is_gregorian(day: int, month: int, year: int) -> bool:
    return (
        year > 1582
        or (year == 1582 and month > 10)
        or (year == 1582 and month == 10 and day > 14)
    )


def universal_to_jd(day: int, month: int, year: int) -> float:
    """
    Julian Day at 00:00 UT of the given date (x.5 convention).

    Dates on/after 1582-10-15 use the Gregorian formula, earlier ones the
    Julian formula. Every sub-term truncates toward zero.
    """
    if _is_gregorian(day, month, year):
        return (
            367 * year
            - _trunc(7 * (year + _trunc((month + 9) / 12)) / 4)
            - _trunc(3 * (_trunc((year + _trunc((month - 9) / 7)) / 100) + 1) / 4)
            + _trunc(275 * month / 9)
            + day
            + 1721028.5
        )
    return (
        367 * year
        - _trunc(7 * (year + 5001 + _trunc((month - 9) / 7)) / 4)
        + _trunc(275 * month / 9)
        + day
        + 1729776.5
    )


def universal_from_jd(jd: float) -> CivilDate:
    """
    Civil date (UT) containing the instant jd.
    """
    z = _trunc(jd + 0.5)
    f = jd + 0.5 - z
    if z < GREGORIAN_CUTOVER_JDN:
        a = z
    else:
        alpha = _trunc((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - _trunc(alpha / 4)
    b = a + 1524
    c = _trunc((b - 122.1) / 365.25)
    d = _trunc(365.25 * c)
    e = _trunc((b - d) / 30.6001)
    day = _trunc(b - d - _trunc(30.6001 * e) + f)
    month = e - 1 if e < 14 else e - 13
    year = c - 4715 if month < 3 else c - 4716
    return CivilDate(day=day, month=month, year=year)


def local_to_jd(day: int, month: int, year: int, utc_offset: float) -> float:
    """JD (UT) of local midnight starting the given local date."""
    return universal_to_jd(day, month, year) - utc_offset / 24.0


def local_from_jd(jd: float, utc_offset: float) -> CivilDate:
    """Local civil date containing the instant jd."""
    return universal_from_jd(jd + utc_offset / 24.0)


def civil_to_local_jd(d: CivilDate, utc_offset: float) -> float:
    return local_to_jd(d.day, d.month, d.year, utc_offset)


def julian_day_number(day: int, month: int, year: int) -> int:
    """Integer Julian day number (the JD at noon UT of the date)."""
    return _trunc(universal_to_jd(day, month, year) + 0.5)
