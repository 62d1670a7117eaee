from __future__ import annotations

"""
Lunisolar check script.

Uses:
- vncal.core.lunisolar.gregorian_to_lunar_between
- vncal.features.canchi / vncal.features.config for labels
"""

import argparse
from datetime import timedelta

from vncal.core.lunisolar import gregorian_to_lunar_between
from vncal.features.canchi import canchi_for
from vncal.features.config import lunar_month_display_name

from tools.common import add_common_args, resolve_date_range, resolve_utc_offset, dump_json


def _format_label(month_no: int, day: int, is_leap: bool) -> str:
    return f"{day:02d}/{month_no:02d}{' (nhuận)' if is_leap else ''}"


def main() -> None:
    parser = argparse.ArgumentParser(description="Âm lịch (lunisolar) check")
    add_common_args(parser)
    args = parser.parse_args()

    start, end = resolve_date_range(args)
    if start is None or end is None:
        parser.error("--date or --start/--end required")

    off = resolve_utc_offset(args)

    rows = []
    for cur, l in gregorian_to_lunar_between(start, end + timedelta(days=1), utc_offset=off):
        month_name = lunar_month_display_name(l.month_no, l.is_leap)
        label = _format_label(l.month_no, l.day, l.is_leap)
        cc = canchi_for(l, cur.day, cur.month, cur.year)

        if args.json:
            rows.append(
                {
                    "date": cur.isoformat(),
                    "year": int(l.year),
                    "month": int(l.month_no),
                    "day": int(l.day),
                    "leap": bool(l.is_leap),
                    "label": label,
                    "month_name": month_name,
                    "canchi": {"year": cc.year, "month": cc.month, "day": cc.day},
                }
            )
        else:
            sep = "\n" if (l.day == 1 and cur != start) else ""
            print(
                f"{sep}{cur.isoformat()}  AL={label}  "
                f"year={int(l.year)} ({cc.year}) month_name={month_name} day={cc.day}"
            )

    if args.json:
        dump_json({"utc_offset": off, "rows": rows})


if __name__ == "__main__":
    main()
