from __future__ import annotations

from datetime import date

import pytest

from vncal.core.errors import UnrepresentableLunarDate
from vncal.core.julian import CivilDate, universal_from_jd, universal_to_jd
from vncal.core.lunisolar import (
    LunarDate,
    build_lunar_year,
    gregorian_to_lunar,
    gregorian_to_lunar_between,
    leap_month_of_year,
    lunar_month_length,
    lunar_to_gregorian,
    lunar_to_solar,
    solar_to_lunar,
)
from vncal.core.solstice_anchor import find_month11_anchor, lunar_month11, lunar_year_window

VN = 7.0


def test_month11_of_1999():
    assert lunar_month11(1999, VN) == CivilDate(8, 12, 1999)
    a = find_month11_anchor(1999, VN)
    assert a.k == 1236
    assert a.start_jd == universal_to_jd(8, 12, 1999) - VN / 24.0


def test_year_window_is_consecutive_anchors():
    a, b = lunar_year_window(2000, VN)
    assert a.start == CivilDate(8, 12, 1999)
    assert b.year == 2000
    assert 354 <= b.start_jd - a.start_jd <= 385


@pytest.mark.parametrize("utc_offset", [0.0, 7.0, 8.0, -5.0])
@pytest.mark.parametrize("years", [range(1583, 1900), range(1900, 2101)])
def test_year_table_invariants(years, utc_offset):
    for year in years:
        table = build_lunar_year(year, utc_offset)
        assert len(table) in (13, 14)

        leaps = [i for i, e in enumerate(table) if e.is_leap]
        assert len(leaps) == (1 if len(table) == 14 else 0)
        if leaps:
            i = leaps[0]
            assert table[i].ordinal == table[i - 1].ordinal

        assert all(a.start_jd < b.start_jd for a, b in zip(table, table[1:]))
        assert table[0].ordinal == 11
        assert table[-1].ordinal == 11


@pytest.mark.parametrize(
    "year, month_no",
    [(2012, 4), (2014, 9), (2017, 6), (2020, 4), (2023, 2), (2025, 6)],
)
def test_leap_months(year, month_no):
    table = build_lunar_year(year, VN)
    assert len(table) == 14
    leap = leap_month_of_year(table)
    assert leap is not None
    assert leap.month_no == month_no


@pytest.mark.parametrize("year", [2000, 2021, 2022, 2024])
def test_years_without_leap_month(year):
    table = build_lunar_year(year, VN)
    assert len(table) == 13
    assert leap_month_of_year(table) is None


def test_year_table_unpacks_as_tuples():
    d, m, y, ordinal, is_leap = build_lunar_year(2000, VN)[0]
    assert (d, m, y, ordinal, is_leap) == (8, 12, 1999, 11, False)


def test_solar_to_lunar_reference_dates():
    assert solar_to_lunar(5, 2, 2000, VN) == LunarDate(1, 1, 2000, False)
    assert solar_to_lunar(1, 1, 2000, VN) == LunarDate(25, 11, 1999, False)
    # 12th month (ordinal 0) still belongs to the previous lunar year
    assert solar_to_lunar(7, 1, 2000, VN) == LunarDate(1, 0, 1999, False)
    assert solar_to_lunar(7, 1, 2000, VN).month_no == 12


def test_solar_to_lunar_after_month11_uses_next_table():
    assert solar_to_lunar(31, 12, 2000, VN).month in (11, 0)
    assert solar_to_lunar(31, 12, 2000, VN).year == 2000


def test_leap_month_dates():
    # 2020: leap 4th month started 2020-05-23
    l = solar_to_lunar(23, 5, 2020, VN)
    assert l == LunarDate(1, 4, 2020, True)
    assert lunar_to_solar(1, 4, 2020, True, VN) == CivilDate(23, 5, 2020)
    assert lunar_to_solar(1, 4, 2020, False, VN) == CivilDate(23, 4, 2020)
    assert lunar_month_length(4, 2020, True, VN) in (29, 30)


@pytest.mark.parametrize(
    "year, tet",
    [
        (2000, CivilDate(5, 2, 2000)),
        (2020, CivilDate(25, 1, 2020)),
        (2021, CivilDate(12, 2, 2021)),
        (2023, CivilDate(22, 1, 2023)),
        (2024, CivilDate(10, 2, 2024)),
        (2025, CivilDate(29, 1, 2025)),
    ],
)
def test_tet(year, tet):
    assert lunar_to_solar(1, 1, year, False, VN) == tet


def test_utc_offset_moves_tet():
    # the new moon fell close to midnight: Hanoi and Beijing disagree
    assert lunar_to_solar(1, 1, 2007, False, 7.0) == CivilDate(17, 2, 2007)
    assert lunar_to_solar(1, 1, 2007, False, 8.0) == CivilDate(18, 2, 2007)
    assert lunar_to_solar(1, 1, 1985, False, 7.0) == CivilDate(21, 1, 1985)
    assert lunar_to_solar(1, 1, 1985, False, 8.0) == CivilDate(20, 2, 1985)


@pytest.mark.parametrize("utc_offset", [0.0, 7.0, 8.0, -5.0])
@pytest.mark.parametrize("first, last", [(1583, 1899), (1900, 2100)])
def test_round_trip_solar_lunar_solar(first, last, utc_offset):
    jd = universal_to_jd(1, 1, first)
    end = universal_to_jd(31, 12, last)
    while jd <= end:
        c = universal_from_jd(jd)
        l = solar_to_lunar(c.day, c.month, c.year, utc_offset)
        assert 1 <= l.day <= 30
        assert lunar_to_solar(l.day, l.month_no, l.year, l.is_leap, utc_offset) == c
        jd += 29.0


def test_round_trip_century_year_spring():
    # 1900 and 2100 are not leap years; March..August sits right after the skipped day
    for y in (1700, 1800, 1900, 2100):
        for m in range(3, 9):
            for d in (1, 7, 20):
                l = solar_to_lunar(d, m, y, VN)
                assert lunar_to_solar(l.day, l.month_no, l.year, l.is_leap, VN) == CivilDate(d, m, y)


def test_pre_1900_month11_anchor():
    # the estimate for Dec 31 lies before the 1900 epoch, so it must floor, not truncate
    table = build_lunar_year(1587, 0.0)
    assert table[-1].ordinal == 11
    a = find_month11_anchor(1587, 0.0)
    assert a.start.month in (11, 12) and a.start.year == 1587
    assert a.start_jd <= universal_to_jd(23, 12, 1587)


def test_twelfth_month_accepts_0_or_12():
    assert lunar_to_solar(1, 0, 1999, False, VN) == lunar_to_solar(1, 12, 1999, False, VN) == CivilDate(7, 1, 2000)


def test_missing_leap_month_is_an_error():
    with pytest.raises(UnrepresentableLunarDate) as ei:
        lunar_to_solar(1, 4, 2021, True, VN)
    err = ei.value
    assert (err.day, err.month, err.lunar_year, err.is_leap) == (1, 4, 2021, True)
    assert isinstance(err, ValueError)


def test_lunar_month_length():
    assert lunar_month_length(11, 1999, False, VN) == 30
    assert lunar_month_length(12, 1999, False, VN) == 29
    for m in range(1, 13):
        assert lunar_month_length(m, 2024, False, VN) in (29, 30)
    with pytest.raises(UnrepresentableLunarDate):
        lunar_month_length(4, 2021, True, VN)


def test_stdlib_date_adapters():
    assert gregorian_to_lunar(date(2000, 2, 5), VN) == LunarDate(1, 1, 2000, False)
    assert gregorian_to_lunar(date(2024, 2, 10)) == LunarDate(1, 1, 2024, False)
    assert lunar_to_gregorian(1, 1, 2024) == date(2024, 2, 10)
    with pytest.raises(ValueError):
        gregorian_to_lunar(date(1500, 1, 1))


def test_gregorian_to_lunar_between():
    got = gregorian_to_lunar_between(date(2000, 2, 3), date(2000, 2, 6), utc_offset=VN)
    assert [d for d, _ in got] == [date(2000, 2, 3), date(2000, 2, 4), date(2000, 2, 5)]
    assert got[-1][1] == LunarDate(1, 1, 2000, False)
    assert got[0][1].month == 0
    assert gregorian_to_lunar_between(date(2000, 2, 6), date(2000, 2, 6)) == []


def test_debug_dump(monkeypatch, capsys):
    monkeypatch.setenv("VNCAL_DEBUG_LUNISOLAR", "1")
    build_lunar_year(2020, VN)
    err = capsys.readouterr().err
    assert "[VNCAL_DEBUG_LUNISOLAR] year=2020" in err
    assert "LEAP" in err
