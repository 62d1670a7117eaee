from __future__ import annotations

"""
Series vs ephemeris check.

Compares the closed-form series (vncal.core.astronomy / vncal.core.newmoon)
against skyfield on a JPL kernel:
- new-moon instants (hours)
- sun longitude at each new moon (degrees)

Skips when no ephemeris is available.
"""

import argparse
from datetime import date

from vncal.core.astronomy import angdiff180, sun_longitude_deg
from vncal.core.julian import local_to_jd
from vncal.core.newmoon import new_moons_between
from vncal.core.providers.skyfield_provider import SkyfieldProvider

from tools.common import add_common_args, dump_json, require_ephemeris, resolve_date_range, resolve_utc_offset, skip


def main() -> None:
    parser = argparse.ArgumentParser(description="Series vs skyfield (new moon / sun longitude)")
    add_common_args(parser, ephemeris=True)
    args = parser.parse_args()

    start, end = resolve_date_range(args)
    if start is None or end is None:
        start, end = date(2000, 1, 1), date(2000, 12, 31)

    eph_path = require_ephemeris(args)

    off = resolve_utc_offset(args)
    provider = SkyfieldProvider(ephemeris_path=eph_path)

    jd0 = local_to_jd(start.day, start.month, start.year, off)
    jd1 = local_to_jd(end.day, end.month, end.year, off) + 1.0
    if not provider.covers(jd0, jd1):
        skip(f"range {start}..{end} is outside ephemeris coverage {provider.coverage_jd}")

    series = new_moons_between(jd0, jd1)
    truth = provider.new_moons_between(jd0, jd1)

    rows = []
    worst_h = 0.0
    worst_deg = 0.0
    for k, jd in series:
        ref = min(truth, key=lambda t: abs(t - jd)) if truth else None
        dh = None if ref is None else (jd - ref) * 24.0
        dlon = angdiff180(sun_longitude_deg(jd) - provider.sun_ecliptic_longitude_deg(jd))
        if dh is not None:
            worst_h = max(worst_h, abs(dh))
        worst_deg = max(worst_deg, abs(dlon))

        rows.append({"k": k, "jd": jd, "ref_jd": ref, "dt_hours": dh, "dlon_deg": dlon})
        if not args.json:
            dh_s = "n/a" if dh is None else f"{dh:+.3f}h"
            print(f"k={k} jd={jd:.5f} dt={dh_s} dlon={dlon:+.5f}deg")

    if args.json:
        dump_json(
            {
                "ephemeris": str(eph_path),
                "start": start.isoformat(),
                "end": end.isoformat(),
                "worst_dt_hours": worst_h,
                "worst_dlon_deg": worst_deg,
                "rows": rows,
            }
        )
    else:
        print(f"worst dt={worst_h:.3f}h worst dlon={worst_deg:.5f}deg ({len(rows)} new moons)")


if __name__ == "__main__":
    main()
