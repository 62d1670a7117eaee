from __future__ import annotations

import pytest

from vncal.core.canchi import BRANCHES, STEMS, SexagesimalName, stem_branch
from vncal.core.lunisolar import LunarDate
from vncal.features.canchi import canchi_for, day_canchi, format_canchi, month_canchi, year_canchi


def test_stem_branch_cycle():
    assert len(STEMS) == 10 and len(BRANCHES) == 12
    assert stem_branch(0) == SexagesimalName("Quý", "Hợi")
    assert stem_branch(61) == stem_branch(1)
    # negative indices wrap like positive ones
    assert stem_branch(-1) == stem_branch(59)
    assert str(stem_branch(1)) == "Giáp Tý"


@pytest.mark.parametrize(
    "year, name",
    [(1984, "Giáp Tý"), (2000, "Canh Thìn"), (2024, "Giáp Thìn"), (2025, "Ất Tỵ")],
)
def test_year_canchi(year, name):
    assert format_canchi(year_canchi(year)) == name


def test_month_canchi():
    assert format_canchi(month_canchi(2000, 1)) == "Mậu Dần"
    assert month_canchi(1999, 0) == month_canchi(1999, 12)
    with pytest.raises(ValueError):
        month_canchi(2000, 13)


def test_day_canchi():
    assert format_canchi(day_canchi(1, 1, 2000)) == "Mậu Ngọ"
    assert format_canchi(day_canchi(5, 2, 2000)) == "Quý Tỵ"
    # one step per day
    a = day_canchi(1, 1, 2000)
    b = day_canchi(2, 1, 2000)
    assert STEMS.index(b.stem) == (STEMS.index(a.stem) + 1) % 10
    assert BRANCHES.index(b.branch) == (BRANCHES.index(a.branch) + 1) % 12


def test_canchi_for_lunar_new_year():
    info = canchi_for(LunarDate(1, 1, 2000, False), 5, 2, 2000)
    assert info.year == "Canh Thìn"
    assert info.month == "Mậu Dần"
    assert info.day == "Quý Tỵ"


def test_canchi_for_twelfth_month_uses_lunar_year():
    info = canchi_for(LunarDate(1, 0, 1999, False), 7, 1, 2000)
    assert info.year == "Kỷ Mão"
    assert info.month == format_canchi(month_canchi(1999, 12))
