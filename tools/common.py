from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from typing import Optional, Tuple

from vncal.core.config import default_utc_offset
from vncal.core.providers.skyfield_provider import locate_ephemeris


def add_common_args(parser: argparse.ArgumentParser, *, ephemeris: bool = False) -> None:
    """Options shared by the check scripts (date / range / offset / output)."""
    g = parser.add_argument_group("dates")
    g.add_argument("--date", type=date.fromisoformat, help="single day, YYYY-MM-DD")
    g.add_argument("--start", type=date.fromisoformat, help="first day, YYYY-MM-DD")
    g.add_argument("--end", type=date.fromisoformat, help="last day (inclusive), YYYY-MM-DD")

    parser.add_argument(
        "--utc-offset",
        type=float,
        default=None,
        help="hours east of UTC (default: $VNCAL_UTC_OFFSET, else 7)",
    )
    parser.add_argument("--json", action="store_true", help="print one JSON document")
    parser.add_argument("--verbose", action="store_true")

    if ephemeris:
        parser.add_argument("--ephemeris", default=None, help="kernel file name under data/")
        parser.add_argument("--ephemeris-path", default=None, help="kernel file path")


def resolve_date_range(args: argparse.Namespace) -> Tuple[Optional[date], Optional[date]]:
    if args.start and args.end:
        return args.start, args.end
    if args.date:
        return args.date, args.date
    return None, None


def resolve_utc_offset(args: argparse.Namespace) -> float:
    if args.utc_offset is None:
        return default_utc_offset()
    return float(args.utc_offset)


def require_ephemeris(args: argparse.Namespace):
    """Kernel path from --ephemeris / --ephemeris-path / env; exits with SKIP if none."""
    p = locate_ephemeris(args.ephemeris, args.ephemeris_path)
    if p is None:
        skip("ephemeris not found (set VNCAL_EPHEMERIS_PATH, pass --ephemeris-path, or place data/de440s.bsp)")
    return p


def dump_json(obj: object) -> None:
    json.dump(obj, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def skip(msg: str) -> None:
    print(f"SKIP: {msg}")
    sys.exit(0)
