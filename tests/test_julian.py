from __future__ import annotations

from datetime import date

import pytest

from vncal.core.julian import (
    CivilDate,
    julian_day_number,
    local_from_jd,
    local_to_jd,
    universal_from_jd,
    universal_to_jd,
)


def test_j2000_midnight():
    assert universal_to_jd(1, 1, 2000) == 2451544.5
    assert universal_from_jd(2451544.5) == CivilDate(1, 1, 2000)
    assert julian_day_number(1, 1, 2000) == 2451545


def test_gregorian_cutover_is_one_day_apart():
    assert universal_to_jd(4, 10, 1582) == 2299159.5
    assert universal_to_jd(15, 10, 1582) == 2299160.5
    assert universal_from_jd(2299159.5) == CivilDate(4, 10, 1582)
    assert universal_from_jd(2299160.5) == CivilDate(15, 10, 1582)


@pytest.mark.parametrize(
    "d, m, y, jd",
    [
        (1, 1, 1, 1721423.5),
        (1, 3, 1000, 2086367.5),
        (1, 3, 2000, 2451604.5),
    ],
)
def test_known_julian_days(d, m, y, jd):
    assert universal_to_jd(d, m, y) == jd


def test_civil_round_trip_julian_and_gregorian_eras():
    for y in list(range(1, 1582, 37)) + list(range(1583, 2400, 11)):
        for m in range(1, 13):
            for d in (1, 15, 28):
                jd = universal_to_jd(d, m, y)
                assert tuple(universal_from_jd(jd)) == (d, m, y)


def test_local_midnight_shifts_by_offset():
    jd = local_to_jd(1, 1, 2000, 7)
    assert jd == pytest.approx(2451544.2083333335, abs=1e-9)
    # 17:00 UT on Dec 31 is already Jan 1 in UTC+7
    assert universal_from_jd(jd) == CivilDate(31, 12, 1999)
    assert local_from_jd(jd, 7) == CivilDate(1, 1, 2000)


def test_civil_date_unpacks_and_converts():
    c = CivilDate(5, 2, 2000)
    d, m, y = c
    assert (d, m, y) == (5, 2, 2000)
    assert c.to_date() == date(2000, 2, 5)
    assert CivilDate.from_date(date(2000, 2, 5)) == c
    assert c.isoformat() == "2000-02-05"


def test_julian_era_dates_do_not_map_to_stdlib_date():
    assert not CivilDate(4, 10, 1582).is_gregorian()
    with pytest.raises(ValueError):
        CivilDate(4, 10, 1582).to_date()
    with pytest.raises(ValueError):
        CivilDate.from_date(date(1582, 10, 4))


@pytest.mark.parametrize(
    "d, m, y, jd",
    [
        (28, 2, 1900, 2415078.5),
        (1, 3, 1900, 2415079.5),
        (31, 8, 1900, 2415262.5),
        (1, 3, 2100, 2488128.5),
    ],
)
def test_common_century_years_after_february(d, m, y, jd):
    assert universal_to_jd(d, m, y) == jd
    assert universal_from_jd(jd) == CivilDate(d, m, y)


def test_every_day_round_trips_around_1900():
    jd = universal_to_jd(1, 1, 1899)
    end = universal_to_jd(31, 12, 1901)
    prev = None
    while jd <= end:
        c = universal_from_jd(jd)
        assert universal_to_jd(c.day, c.month, c.year) == jd
        assert c != prev
        prev = c
        jd += 1.0
