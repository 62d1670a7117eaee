# src/vncal/core/providers/skyfield_provider.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Literal, Optional, Tuple, Union

from skyfield import almanac
from skyfield.api import Loader
from skyfield.framelib import ecliptic_J2000_frame, ecliptic_frame as ecliptic_of_date

log = logging.getLogger(__name__)

EPHEMERIS_ENV = "VNCAL_EPHEMERIS"
EPHEMERIS_PATH_ENV = "VNCAL_EPHEMERIS_PATH"

# searched in order under data/ when nothing is configured
KNOWN_KERNELS: Tuple[str, ...] = ("de440s.bsp", "de421.bsp")

# "of_date" is the true ecliptic/equinox of date, which the series approximate
EclipticFrame = Literal["of_date", "J2000"]


def data_dir() -> Path:
    return Path(__file__).resolve().parents[4] / "data"


def locate_ephemeris(
    name: Optional[Union[str, Path]] = None,
    path: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """
    Find a JPL kernel on disk.

    path, then $VNCAL_EPHEMERIS_PATH, are taken as given. Otherwise name (or
    $VNCAL_EPHEMERIS) is looked up under data/, absolute names as they are.
    With nothing configured the first of KNOWN_KERNELS present wins.
    Returns None when no file exists.
    """
    explicit = path or os.environ.get(EPHEMERIS_PATH_ENV, "").strip()
    if explicit:
        p = Path(explicit).expanduser()
        return p if p.exists() else None

    wanted = name or os.environ.get(EPHEMERIS_ENV, "").strip()
    if wanted:
        p = Path(wanted).expanduser()
        if not p.is_absolute():
            p = data_dir() / p
        return p if p.exists() else None

    for kernel in KNOWN_KERNELS:
        p = data_dir() / kernel
        if p.exists():
            return p
    return None


class SkyfieldProvider:
    """
    JPL-ephemeris reference for the series solvers in core.astronomy / core.newmoon.

    Instants in and out are Julian Days on the UT1 scale, like the series.
    """

    def __init__(
        self,
        ephemeris_path: Optional[Path] = None,
        ephemeris: Optional[str] = None,
        ecliptic_frame: EclipticFrame = "of_date",
    ) -> None:
        found = locate_ephemeris(ephemeris, ephemeris_path)
        if found is None:
            raise FileNotFoundError(
                f"no ephemeris kernel found (path={ephemeris_path}, name={ephemeris}); "
                f"put one of {', '.join(KNOWN_KERNELS)} under {data_dir()} "
                f"or set {EPHEMERIS_PATH_ENV}"
            )
        self.ephemeris_path = found
        self.ecliptic_frame = ecliptic_frame

        loader = Loader(str(found.parent))
        self._kernel = loader(found.name)
        self._ts = loader.timescale()
        self._earth = self._kernel["earth"]
        self._sun = self._kernel["sun"]

        self._frame = ecliptic_J2000_frame if ecliptic_frame == "J2000" else ecliptic_of_date
        self._coverage = self._kernel_coverage()

    def _kernel_coverage(self) -> Tuple[float, float]:
        # SPK segment bounds (TT); unbounded if the kernel does not report them
        spk = getattr(self._kernel, "spk", None)
        segs = getattr(spk, "segments", None) if spk is not None else None
        if not segs:
            return float("-inf"), float("inf")
        return min(s.start_jd for s in segs), max(s.end_jd for s in segs)

    @property
    def coverage_jd(self) -> Tuple[float, float]:
        return self._coverage

    def covers(self, start_jd: float, end_jd: float) -> bool:
        lo, hi = self._coverage
        # one day of slack for UT1 vs TT
        return lo + 1.0 <= start_jd and end_jd <= hi - 1.0

    def _time(self, jd_ut: float):
        lo, hi = self._coverage
        if not (lo <= jd_ut <= hi):
            raise ValueError(
                f"JD {jd_ut} is outside {self.ephemeris_path.name} coverage (JD {lo} .. {hi})"
            )
        return self._ts.ut1_jd(jd_ut)

    def sun_ecliptic_longitude_deg(self, jd_ut: float) -> float:
        """Apparent solar ecliptic longitude, degrees in [0, 360)."""
        astrometric = self._earth.at(self._time(jd_ut)).observe(self._sun)
        _lat, lon, _dist = astrometric.apparent().frame_latlon(self._frame)
        return float(lon.degrees % 360.0)

    def new_moons_between(self, start_jd: float, end_jd: float) -> List[float]:
        """True new-moon instants (UT1 JD) in [start_jd, end_jd)."""
        times, phases = almanac.find_discrete(
            self._time(start_jd), self._time(end_jd), almanac.moon_phases(self._kernel)
        )
        out = [float(t.ut1) for t, ph in zip(times, phases) if int(ph) == 0]
        if not out:
            log.warning("no new moon found: start_jd=%.5f end_jd=%.5f", start_jd, end_jd)
        return out
