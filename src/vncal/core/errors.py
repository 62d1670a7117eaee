# src/vncal/core/errors.py
class VnCalError(Exception):
    """Base error."""


class UnrepresentableLunarDate(VnCalError, ValueError):
    """
    Raised when a lunar (month, is_leap) pair does not exist in the lunar year,
    e.g. a leap month asked for in a year without one.
    """

    def __init__(self, day: int, month: int, lunar_year: int, is_leap: bool) -> None:
        self.day = day
        self.month = month
        self.lunar_year = lunar_year
        self.is_leap = is_leap
        leap = " (leap)" if is_leap else ""
        super().__init__(
            f"no lunar month {month}{leap} in lunar year {lunar_year} "
            f"(requested day {day})"
        )
