# src/vncal/api/public.py
from __future__ import annotations

import logging
import math
import time
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from vncal.core.config import default_utc_offset
from vncal.core.errors import UnrepresentableLunarDate
from vncal.core.julian import CivilDate
from vncal.core.lunisolar import LunarDate, gregorian_to_lunar, lunar_month_length, lunar_to_gregorian
from vncal.features.canchi import canchi_for
from vncal.features.config import lunar_month_display_name
from vncal.features.lunar_months import enrich_lunar_year
from vncal.features.tietkhi import solar_term_for_day

router = APIRouter(prefix="/api/v1", tags=["public"])

log = logging.getLogger("vncal.api.public")

# UTC-12 .. UTC+14 covers every civil offset in use
MIN_UTC_OFFSET = -12.0
MAX_UTC_OFFSET = 14.0


# ============================================================
# Response Models
# ============================================================
class LunarDateModel(BaseModel):
    year: int
    month: int = Field(description="1..12")
    day: int
    is_leap: bool = Field(default=False, description="true for a leap month (tháng nhuận)")
    month_name: str
    month_length: int = Field(description="29 or 30")


class CanChiModel(BaseModel):
    year: str
    month: str
    day: str


class SolarTermModel(BaseModel):
    n: int
    deg: int
    kind: str
    name: str


class DayResponse(BaseModel):
    date: date
    utc_offset: float
    lunar: LunarDateModel
    canchi: CanChiModel
    solar_term: SolarTermModel


class RangeResponse(BaseModel):
    start: date
    end: date
    utc_offset: float
    days: List[DayResponse]


class SolarDateResponse(BaseModel):
    date: date
    utc_offset: float
    lunar: LunarDateModel


class LunarMonthModel(BaseModel):
    pos: int
    month: int
    is_leap: bool
    lunar_year: int
    month_name: str
    canchi: str
    start: date
    length_days: int


class LunarYearResponse(BaseModel):
    year: int
    utc_offset: float
    leap_month: Optional[int] = Field(default=None, description="month number of the leap month, if any")
    months: List[LunarMonthModel]


# ============================================================
# Helpers: parsing & offset
# ============================================================
def _parse_iso_date(s: str) -> date:
    try:
        return date.fromisoformat(s)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid date format: {s} (expected YYYY-MM-DD)") from e


def _parse_date_any(x: str | date) -> date:
    if isinstance(x, date):
        return x
    return _parse_iso_date(str(x))


def _resolve_utc_offset(utc_offset: Optional[float]) -> float:
    if utc_offset is None:
        try:
            return default_utc_offset()
        except ValueError as e:
            raise HTTPException(status_code=500, detail=str(e)) from e
    off = float(utc_offset)
    if not math.isfinite(off) or not (MIN_UTC_OFFSET <= off <= MAX_UTC_OFFSET):
        raise HTTPException(
            status_code=422,
            detail=f"utc_offset must be within [{MIN_UTC_OFFSET}, {MAX_UTC_OFFSET}] hours (got {utc_offset})",
        )
    return off


# ============================================================
# Core feature calcs
# ============================================================
def _lunar_model(l: LunarDate, utc_offset: float) -> LunarDateModel:
    return LunarDateModel(
        year=int(l.year),
        month=int(l.month_no),
        day=int(l.day),
        is_leap=bool(l.is_leap),
        month_name=lunar_month_display_name(l.month_no, l.is_leap),
        month_length=lunar_month_length(l.month_no, l.year, l.is_leap, utc_offset),
    )


def _day_response(d: date, utc_offset: float) -> DayResponse:
    try:
        l = gregorian_to_lunar(d, utc_offset)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    cc = canchi_for(l, d.day, d.month, d.year)
    term = solar_term_for_day(d.day, d.month, d.year, utc_offset)
    return DayResponse(
        date=d,
        utc_offset=utc_offset,
        lunar=_lunar_model(l, utc_offset),
        canchi=CanChiModel(year=cc.year, month=cc.month, day=cc.day),
        solar_term=SolarTermModel(n=term.n, deg=term.deg, kind=term.kind, name=term.name),
    )


def _range_length(start: date, end: date, limit_days: int) -> int:
    if end < start:
        raise ValueError("end must be >= start")
    n = (end - start).days + 1
    if n > limit_days:
        raise ValueError(f"range too large: {n} days (limit_days={limit_days})")
    return n


def _days(start: date, end: date, utc_offset: float) -> List[DayResponse]:
    out: List[DayResponse] = []
    cur = start
    while cur <= end:
        out.append(_day_response(cur, utc_offset))
        cur += timedelta(days=1)
    return out


# =========================================================
# Public JSON API (function-style, HTTP-ready)
# =========================================================
def get_calendar_day(date_: str | date, *, utc_offset: Optional[float] = None) -> dict:
    d = _parse_date_any(date_)
    off = _resolve_utc_offset(utc_offset)
    return _day_response(d, off).model_dump(mode="json")


def get_calendar_range(
    start: str | date,
    end: str | date,
    *,
    utc_offset: Optional[float] = None,
    limit_days: int = 370,
) -> dict:
    s = _parse_date_any(start)
    e = _parse_date_any(end)
    _range_length(s, e, limit_days)

    off = _resolve_utc_offset(utc_offset)
    return RangeResponse(start=s, end=e, utc_offset=off, days=_days(s, e, off)).model_dump(mode="json")


def get_solar_date(
    year: int,
    month: int,
    day: int,
    *,
    is_leap: bool = False,
    utc_offset: Optional[float] = None,
) -> dict:
    if not (1 <= int(month) <= 12):
        raise ValueError(f"lunar month out of range: {month}")
    if not (1 <= int(day) <= 30):
        raise ValueError(f"lunar day out of range: {day}")

    off = _resolve_utc_offset(utc_offset)
    length = lunar_month_length(int(month), int(year), bool(is_leap), off)
    if int(day) > length:
        raise ValueError(f"lunar day {day} exceeds the {length}-day month {month}/{year}")
    d = lunar_to_gregorian(int(day), int(month), int(year), bool(is_leap), off)
    l = gregorian_to_lunar(d, off)
    return SolarDateResponse(date=d, utc_offset=off, lunar=_lunar_model(l, off)).model_dump(mode="json")


def get_lunar_year(year: int, *, utc_offset: Optional[float] = None) -> dict:
    off = _resolve_utc_offset(utc_offset)
    months = enrich_lunar_year(int(year), off)

    leap_month: Optional[int] = None
    out: List[LunarMonthModel] = []
    for m in months:
        if m.is_leap:
            leap_month = m.month_no
        out.append(
            LunarMonthModel(
                pos=m.pos,
                month=m.month_no,
                is_leap=m.is_leap,
                lunar_year=m.lunar_year,
                month_name=m.month_name,
                canchi=m.canchi,
                start=_civil_to_date(m.start),
                length_days=m.length_days,
            )
        )
    return LunarYearResponse(year=int(year), utc_offset=off, leap_month=leap_month, months=out).model_dump(mode="json")


def _civil_to_date(c: CivilDate) -> date:
    try:
        return c.to_date()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"date not representable: {c.isoformat()}") from e


# ============================================================
# Endpoints
# ============================================================
@router.get("/day", response_model=DayResponse)
def get_day(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
    utc_offset: Optional[float] = Query(None, description="hours east of UTC (default +7)"),
    timing: bool = Query(False, description="log timings"),
) -> DayResponse:
    d = _parse_iso_date(date_str)
    off = _resolve_utc_offset(utc_offset)

    t0 = time.perf_counter()
    res = _day_response(d, off)
    t1 = time.perf_counter()

    if timing:
        log.warning("timing /day date=%s utc_offset=%s total=%.3fs", d, off, t1 - t0)
    return res


@router.get("/range", response_model=RangeResponse)
def get_range(
    start_str: str = Query(..., alias="start", description="YYYY-MM-DD"),
    end_str: str = Query(..., alias="end", description="YYYY-MM-DD"),
    utc_offset: Optional[float] = Query(None, description="hours east of UTC (default +7)"),
    limit_days: int = Query(370, ge=1, le=2000, description="maximum number of days"),
    timing: bool = Query(False, description="log timings"),
) -> RangeResponse:
    start = _parse_iso_date(start_str)
    end = _parse_iso_date(end_str)
    try:
        days_count = _range_length(start, end, limit_days)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    off = _resolve_utc_offset(utc_offset)

    t0 = time.perf_counter()
    days = _days(start, end, off)
    t1 = time.perf_counter()

    if timing:
        log.warning(
            "timing /range start=%s end=%s utc_offset=%s days=%d total=%.3fs",
            start, end, off, days_count, t1 - t0,
        )

    return RangeResponse(start=start, end=end, utc_offset=off, days=days)


@router.get("/lunar-to-solar", response_model=SolarDateResponse)
def get_lunar_to_solar(
    year: int = Query(..., description="lunar year"),
    month: int = Query(..., ge=1, le=12, description="lunar month 1..12"),
    day: int = Query(..., ge=1, le=30, description="lunar day 1..30"),
    leap: bool = Query(False, description="leap month (tháng nhuận)"),
    utc_offset: Optional[float] = Query(None, description="hours east of UTC (default +7)"),
) -> Dict[str, Any]:
    try:
        return get_solar_date(year, month, day, is_leap=leap, utc_offset=utc_offset)
    except UnrepresentableLunarDate as e:
        log.info("unrepresentable lunar date: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.get("/lunar-year", response_model=LunarYearResponse)
def get_lunar_year_endpoint(
    year: int = Query(..., ge=1584, le=9998, description="solar year whose month-11 closes the table"),
    utc_offset: Optional[float] = Query(None, description="hours east of UTC (default +7)"),
) -> Dict[str, Any]:
    return get_lunar_year(year, utc_offset=utc_offset)
