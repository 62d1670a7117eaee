from __future__ import annotations

from vncal.core.julian import local_to_jd
from vncal.core.leap_month import assign_month_numbers, decide_leap_month, month_start_sectors
from vncal.core.lunisolar import build_lunar_year


def test_month_numbers_without_leap():
    labels = assign_month_numbers(13, leap_pos=None)
    assert [x.ordinal for x in labels] == [11, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11]
    assert not any(x.is_leap for x in labels)


def test_month_numbers_with_leap():
    labels = assign_month_numbers(14, leap_pos=6)
    assert [x.ordinal for x in labels] == [11, 0, 1, 2, 3, 4, 4, 5, 6, 7, 8, 9, 10, 11]
    assert [i for i, x in enumerate(labels) if x.is_leap] == [6]


def test_month_numbers_empty():
    assert assign_month_numbers(0, leap_pos=None) == []


def test_no_scan_when_no_leap_expected():
    jds = [e.start_jd for e in build_lunar_year(2021, 7.0)]
    dec = decide_leap_month(jds, expect_leap=False)
    assert dec.leap_pos is None
    assert dec.sectors == []


def test_leap_month_has_no_principal_term():
    table = build_lunar_year(2020, 7.0)
    jds = [e.start_jd for e in table]
    dec = decide_leap_month(jds, expect_leap=True)

    assert dec.leap_pos is not None
    assert dec.sectors[dec.leap_pos] == dec.sectors[dec.leap_pos + 1]
    # earlier months each see the sector change
    assert all(dec.sectors[i] != dec.sectors[i + 1] for i in range(dec.leap_pos))
    assert table[dec.leap_pos].is_leap


def test_month_start_sectors_winter_solstice_month():
    # month 11 of 1999 started 1999-12-08, before the solstice (sector 8)
    assert month_start_sectors([local_to_jd(8, 12, 1999, 7.0)]) == [8]
