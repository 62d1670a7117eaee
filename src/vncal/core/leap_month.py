# src/vncal/core/leap_month.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .astronomy import solar_term_sector, sun_longitude

# ============================
# Data models
# ============================

# ordinal of the month-11 anchor at position 0
ANCHOR_ORDINAL = 11


@dataclass(frozen=True)
class MonthLabel:
    ordinal: int               # 0..11, 0 is the 12th month
    is_leap: bool              # True if this position is the leap month


@dataclass(frozen=True)
class LeapDecision:
    """
      - leap_pos: 0-based position within the 14 month starts (None if no leap month)
      - sectors: principal-term sector (0..11) of the sun at each month start
    """
    leap_pos: Optional[int]
    sectors: List[int]


# ============================
# Sector scan
# ============================

def month_start_sectors(start_jds: Sequence[float]) -> List[int]:
    """
    Sector (30 deg solar-term slice) of the sun at local midnight of each month start.
    """
    return [solar_term_sector(sun_longitude(jd)) for jd in start_jds]


def decide_leap_month(start_jds: Sequence[float], *, expect_leap: bool) -> LeapDecision:
    """
    Pick the leap month of a lunar year table.

    A month during which the sun stays inside one 30 deg sector contains no
    principal term: its start and the next month's start share a sector.
    The first such month (earliest position) is the leap month; later
    repeats are ignored.
    """
    if not expect_leap:
        return LeapDecision(leap_pos=None, sectors=[])

    sectors = month_start_sectors(start_jds)
    for i in range(len(sectors) - 1):
        if sectors[i] == sectors[i + 1]:
            return LeapDecision(leap_pos=i, sectors=sectors)
    return LeapDecision(leap_pos=None, sectors=sectors)


# ============================
# Month numbering
# ============================

def assign_month_numbers(span_count: int, *, leap_pos: Optional[int]) -> List[MonthLabel]:
    """
    Assign month ordinals to table positions.
    Rules:
      - position 0 is the month-11 anchor; each next position advances by one (mod 12),
        so position i is (i + 11) % 12 and 0 stands for the 12th month.
      - the leap position repeats the previous ordinal, and every later
        position is shifted back by one: (i + 10) % 12.
    """
    if span_count <= 0:
        return []

    labels: List[MonthLabel] = []
    for pos in range(span_count):
        if leap_pos is not None and pos >= leap_pos:
            ordinal = (pos + ANCHOR_ORDINAL - 1) % 12
        else:
            ordinal = (pos + ANCHOR_ORDINAL) % 12
        labels.append(MonthLabel(ordinal=ordinal, is_leap=(pos == leap_pos)))
    return labels
