# src/vncal/core/canchi.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List

# index 0 of each cycle is the last label (Quý / Hợi), so index 1 is Giáp / Tý
STEMS: List[str] = ["Quý", "Giáp", "Ất", "Bính", "Đinh", "Mậu", "Kỷ", "Canh", "Tân", "Nhâm"]
BRANCHES: List[str] = ["Hợi", "Tý", "Sửu", "Dần", "Mão", "Thìn", "Tỵ", "Ngọ", "Mùi", "Thân", "Dậu", "Tuất"]


@dataclass(frozen=True)
class SexagesimalName:
    stem: str     # can
    branch: str   # chi

    def __str__(self) -> str:
        return f"{self.stem} {self.branch}"


def stem_branch(index: int) -> SexagesimalName:
    """
    Can-Chi pair for a (caller-biased) cycle index: stem = index mod 10,
    branch = index mod 12. Negative indices wrap like positive ones.
    """
    n = int(index)
    return SexagesimalName(stem=STEMS[n % 10], branch=BRANCHES[n % 12])
