# src/vncal/core/newmoon.py
from __future__ import annotations

import math
from typing import List, Tuple

from .astronomy import DR
from .config import NEW_MOON_EPOCH_JD, SYNODIC_MONTH_DAYS


def new_moon(k: int) -> float:
    """
    JD (UT) of the k-th new moon after the 1900-01-01 new moon (k may be negative).

    Mean lunation plus the main periodic terms and a delta-T correction
    (Meeus, "Astronomical Algorithms", ch. 49, abridged). Term order is part
    of the result: do not reorder the sums.
    """
    t = k / 1236.85  # Julian centuries from 1900 Jan 0.5
    t2 = t * t
    t3 = t2 * t

    jd1 = 2415020.75933 + 29.53058868 * k + 0.0001178 * t2 - 0.000000155 * t3
    jd1 = jd1 + 0.00033 * math.sin((166.56 + 132.87 * t - 0.009173 * t2) * DR)

    m = 359.2242 + 29.10535608 * k - 0.0000333 * t2 - 0.00000347 * t3     # sun mean anomaly
    mpr = 306.0253 + 385.81691806 * k + 0.0107306 * t2 + 0.00001236 * t3  # moon mean anomaly
    f = 21.2964 + 390.67050646 * k - 0.0016528 * t2 - 0.00000239 * t3     # moon argument of latitude

    c1 = (0.1734 - 0.000393 * t) * math.sin(DR * m) + 0.0021 * math.sin(2 * DR * m)
    c1 = c1 - 0.4068 * math.sin(DR * mpr) + 0.0161 * math.sin(DR * 2 * mpr)
    c1 = c1 - 0.0004 * math.sin(DR * 3 * mpr)
    c1 = c1 + 0.0104 * math.sin(DR * 2 * f) - 0.0051 * math.sin(DR * (m + mpr))
    c1 = c1 - 0.0074 * math.sin(DR * (m - mpr)) + 0.0004 * math.sin(DR * (2 * f + m))
    c1 = c1 - 0.0004 * math.sin(DR * (2 * f - m)) - 0.0006 * math.sin(DR * (2 * f + mpr))
    c1 = c1 + 0.0010 * math.sin(DR * (2 * f - mpr)) + 0.0005 * math.sin(DR * (2 * mpr + m))

    if t < -11:
        deltat = 0.001 + 0.000839 * t + 0.0002261 * t2 - 0.00000845 * t3 - 0.000000081 * t * t3
    else:
        deltat = -0.000278 + 0.000265 * t + 0.000262 * t2

    return jd1 + c1 - deltat


def lunation_index(jd: float, *, nearest: bool = False) -> int:
    """
    Estimate the lunation index k for an instant.

    nearest=False floors: the new moon at or before jd, also before the
    1900 epoch (used to search from an arbitrary date). nearest=True rounds
    half up: the index of a new moon when jd already is one.
    """
    x = (jd - NEW_MOON_EPOCH_JD) / SYNODIC_MONTH_DAYS
    if nearest:
        return math.floor(0.5 + x)
    return math.floor(x)


def new_moons_between(start_jd: float, end_jd: float) -> List[Tuple[int, float]]:
    """
    All new moons in [start_jd, end_jd) as (k, jd), ascending.
    """
    if not (start_jd < end_jd):
        raise ValueError("start_jd must be < end_jd")

    # the estimate can be off by one either way near the boundary
    k = math.floor((start_jd - NEW_MOON_EPOCH_JD) / SYNODIC_MONTH_DAYS) - 1
    while new_moon(k) >= start_jd:
        k -= 1

    out: List[Tuple[int, float]] = []
    while True:
        jd = new_moon(k)
        if jd >= end_jd:
            break
        if jd >= start_jd:
            out.append((k, jd))
        k += 1
    return out
