from __future__ import annotations

"""
Leap month check script.

Uses:
- vncal.core.solstice_anchor.lunar_year_window
- vncal.core.lunisolar.build_lunar_year / leap_month_of_year
- vncal.core.leap_month.month_start_sectors
"""

import argparse

from vncal.core.leap_month import month_start_sectors
from vncal.core.lunisolar import build_lunar_year, leap_month_of_year
from vncal.core.solstice_anchor import lunar_year_window
from vncal.features.config import lunar_month_display_name

from tools.common import add_common_args, resolve_date_range, resolve_utc_offset, dump_json


def _years_from_args(args, start, end) -> list[int]:
    if args.year:
        return [int(args.year)]
    if start and end:
        return list(range(start.year, end.year + 1))
    return []


def main() -> None:
    parser = argparse.ArgumentParser(description="Leap month (tháng nhuận) check")
    add_common_args(parser)
    parser.add_argument("--year", type=int, help="target year (solar)")
    args = parser.parse_args()

    start, end = resolve_date_range(args)
    years = _years_from_args(args, start, end)
    if not years:
        parser.error("--year or --date or --start/--end required")

    off = resolve_utc_offset(args)

    out_rows = []
    for year in years:
        table = build_lunar_year(year, off)
        leap = leap_month_of_year(table)

        leap_info = None
        if leap is not None:
            leap_info = {
                "pos": table.index(leap),
                "month_no": int(leap.month_no),
                "month_name": lunar_month_display_name(leap.month_no, True),
                "start": leap.start.isoformat(),
            }

        row = {
            "year": int(year),
            "span_count": len(table),
            "leap": leap_info,
        }

        if args.verbose:
            a, b = lunar_year_window(year, off)
            row["anchors"] = {"start": a.start.isoformat(), "end": b.start.isoformat(), "span_days": b.start_jd - a.start_jd}
            row["sectors"] = month_start_sectors([e.start_jd for e in table])
            row["months"] = [
                {
                    "pos": i,
                    "start": e.start.isoformat(),
                    "month_no": e.month_no,
                    "is_leap": e.is_leap,
                }
                for i, e in enumerate(table)
            ]

        out_rows.append(row)

        if not args.json:
            if leap_info is None:
                print(f"{year}: leap=none span_count={len(table)}")
            else:
                print(
                    f"{year}: leap_pos={leap_info['pos']} month_no={leap_info['month_no']} "
                    f"month_name={leap_info['month_name']} start={leap_info['start']} span_count={len(table)}"
                )
            if args.verbose:
                print(f"  sectors={row['sectors']}")

    if args.json:
        dump_json({"utc_offset": off, "years": out_rows})


if __name__ == "__main__":
    main()
