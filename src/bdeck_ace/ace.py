"""Accumulated Cyclone Energy from bdeck fixes.

A fix counts toward ACE when its storm type is tropical, its hour is a
synoptic time (00/06/12/18 UTC) and its wind is at least tropical-storm
strength. Its contribution is wind^2 in kt^2, so ACE in the usual
10^4 kt^2 units is the accumulated value / 10000.

Peak wind is tracked over every kept fix, eligible or not.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from bdeck_ace.basins import classify_basin
from bdeck_ace.bdeck import read_bdeck
from bdeck_ace.models import AceConfig, BdeckTrack, FixRecord, StormStats, YearlyACE
from bdeck_ace.utils import load_config

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Eligibility
# ---------------------------------------------------------------------------


def is_tropical(storm_type: str, config: AceConfig | None = None) -> bool:
    """False for the non-tropical stages (SD, SS, LO, MD, EX, DB, ET)."""
    config = config or load_config()
    return storm_type not in config.non_tropical_types


def is_synoptic_time(hour: int, config: AceConfig | None = None) -> bool:
    """True at 00/06/12/18 UTC."""
    config = config or load_config()
    return hour % config.synoptic_interval_hours == 0


def fix_energy(fix: FixRecord, config: AceConfig | None = None) -> int:
    """Energy (kt^2) one fix adds to ACE; 0 when it does not qualify."""
    config = config or load_config()
    if not (is_tropical(fix.storm_type, config) and is_synoptic_time(fix.hour, config)):
        return 0
    if fix.wind_knots < config.tropical_storm_threshold_kt:
        return 0
    return fix.wind_knots ** 2


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


@dataclass
class AceAggregator:
    """Accumulate ACE across storms.

    Attributes
    ----------
    config : AceConfig
        Rule constants; defaults to configs/ace.yaml.
    yearly : YearlyACE
        Season year -> per-basin energy, shared by every storm added.
    storms : list[StormStats]
        One entry per track, in the order they were added.
    """

    config: AceConfig = field(default_factory=load_config)
    yearly: YearlyACE = field(default_factory=YearlyACE)
    storms: list[StormStats] = field(default_factory=list)

    def add_track(self, track: BdeckTrack) -> StormStats:
        """Fold one storm's fixes into a new StormStats and the yearly totals."""
        stats = StormStats(atcf_code=track.atcf_code)
        for fix in track.fixes:
            stats.update_max_wind(fix.wind_knots)
            season_ace = self.yearly.for_year(fix.season)
            energy = fix_energy(fix, self.config)
            if energy == 0:
                continue
            basin = classify_basin(fix.latitude, fix.longitude)
            stats.ace.add(basin, energy)
            season_ace.add(basin, energy)
            logger.debug(
                "%s %s %s +%d", track.atcf_code, fix.timestamp, basin.value, energy,
            )
        self.storms.append(stats)
        return stats

    def add_file(self, path: str | Path) -> StormStats:
        return self.add_track(read_bdeck(path, self.config))

    def merge(self, other: AceAggregator) -> None:
        """Combine with an aggregator that processed a disjoint set of files."""
        self.yearly.merge(other.yearly)
        self.storms.extend(other.storms)

    def summary(self) -> dict:
        """Return a JSON-serialisable summary of storms and yearly totals."""
        return {
            "storms": [
                {
                    "atcf_code": s.atcf_code,
                    "max_wind": s.max_wind,
                    "ace": s.ace.model_dump(),
                    "total_ace": s.total_ace,
                }
                for s in self.storms
            ],
            "yearly": {
                year: ace.model_dump() for year, ace in self.yearly.items()
            },
        }


def process_bdeck_files(
    file_list: Iterable[str | Path],
    config: AceConfig | None = None,
) -> tuple[list[StormStats], YearlyACE]:
    """Process files in order; the first malformed file aborts the run."""
    aggregator = AceAggregator(config=config or load_config())
    for path in file_list:
        aggregator.add_file(path)
    return aggregator.storms, aggregator.yearly
