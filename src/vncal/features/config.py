# src/vncal/features/config.py
from __future__ import annotations

"""
Feature-level labels / constants.

- 24 tiết khí (solar terms): 0..345 deg (15-deg step) => name / kind / n(0..23)
- lunar month names: month_no 1..12 => "Giêng" .. "Chạp"

Labels stay out of vncal.core: the core only returns numbers.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

# ============================================================
# 24 tiết khí
#   n = (deg_norm / 15) % 24, n = 0 at the vernal equinox.
#   kind:
#     n even  -> "trung khí" (principal term, 30-deg boundary)
#     n odd   -> "tiết khí"  (sectional term)
# ============================================================

TIETKHI24: List[Tuple[int, str]] = [
    (0,   "Xuân phân"),
    (15,  "Thanh minh"),
    (30,  "Cốc vũ"),
    (45,  "Lập hạ"),
    (60,  "Tiểu mãn"),
    (75,  "Mang chủng"),
    (90,  "Hạ chí"),
    (105, "Tiểu thử"),
    (120, "Đại thử"),
    (135, "Lập thu"),
    (150, "Xử thử"),
    (165, "Bạch lộ"),
    (180, "Thu phân"),
    (195, "Hàn lộ"),
    (210, "Sương giáng"),
    (225, "Lập đông"),
    (240, "Tiểu tuyết"),
    (255, "Đại tuyết"),
    (270, "Đông chí"),
    (285, "Tiểu hàn"),
    (300, "Đại hàn"),
    (315, "Lập xuân"),
    (330, "Vũ thủy"),
    (345, "Kinh trập"),
]

LUNAR_MONTH_NAME_BY_MONTH_NO: Dict[int, str] = {
    1:  "Giêng",
    2:  "Hai",
    3:  "Ba",
    4:  "Tư",
    5:  "Năm",
    6:  "Sáu",
    7:  "Bảy",
    8:  "Tám",
    9:  "Chín",
    10: "Mười",
    11: "Mười một",
    12: "Chạp",
}

TIETKHI24_NAME_BY_DEG: Dict[int, str] = {deg: name for deg, name in TIETKHI24}


def term_kind_from_n(n: int) -> str:
    nn = int(n) % 24
    return "trung khí" if (nn % 2 == 0) else "tiết khí"


def lunar_month_name_from_month_no(month_no: int) -> str:
    m = int(month_no)
    try:
        return LUNAR_MONTH_NAME_BY_MONTH_NO[m]
    except KeyError as e:
        raise ValueError(f"invalid lunar month_no: {month_no}") from e


def lunar_month_display_name(month_no: int, is_leap: bool) -> str:
    """
    e.g. (1, False) -> "Tháng Giêng", (4, True) -> "Tháng Tư nhuận".
    Ordinal 0 (the 12th month, as returned by the core) is accepted.
    """
    m = 12 if int(month_no) == 0 else int(month_no)
    base = f"Tháng {lunar_month_name_from_month_no(m)}"
    return f"{base} nhuận" if is_leap else base


@dataclass(frozen=True)
class TermInfo:
    """
    Structured info for a solar-term degree.
    """
    n: int
    deg: int
    kind: str
    name: str


def term_info_from_n(n: int) -> TermInfo:
    nn = int(n) % 24
    deg = nn * 15
    return TermInfo(n=nn, deg=deg, kind=term_kind_from_n(nn), name=TIETKHI24_NAME_BY_DEG[deg])
