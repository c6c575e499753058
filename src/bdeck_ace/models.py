"""Pydantic models for bdeck fixes and ACE accumulation."""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field


class Basin(str, Enum):
    """Ocean basin a fix is credited to."""

    WPAC = "WPAC"
    NIO = "NIO"
    SHEM = "SHEM"
    EPAC = "EPAC"
    ATL = "ATL"

    @property
    def label(self) -> str:
        """Name used in report text."""
        return _BASIN_LABELS[self]


_BASIN_LABELS: dict[Basin, str] = {
    Basin.WPAC: "WPAC",
    Basin.EPAC: "ECPAC",
    Basin.ATL: "ATL",
    Basin.SHEM: "SHEM",
    Basin.NIO: "NIO",
}

# Report order.
DISPLAY_ORDER: tuple[Basin, ...] = (
    Basin.WPAC,
    Basin.EPAC,
    Basin.ATL,
    Basin.SHEM,
    Basin.NIO,
)


class AceConfig(BaseModel):
    """Rule constants for ACE accumulation (see configs/ace.yaml)."""

    model_config = ConfigDict(frozen=True)

    tropical_storm_threshold_kt: int = Field(default=35, ge=0)
    synoptic_interval_hours: int = Field(default=6, ge=1)
    no_report_wind: int = 999
    non_tropical_types: list[str] = Field(
        default_factory=lambda: ["SD", "SS", "LO", "MD", "EX", "DB", "ET"],
    )
    southern_hemisphere_basins: list[str] = Field(default_factory=lambda: ["SH"])
    season_rollover_month: int = Field(default=6, ge=1, le=12)


class FixRecord(BaseModel):
    """One decoded bdeck line."""

    model_config = ConfigDict(frozen=True)

    timestamp: str
    year: int
    month: int
    hour: int
    # year after the southern-hemisphere season shift
    season: int
    wind_knots: int = Field(ge=0)
    latitude: float
    longitude: float
    storm_type: str = ""


class BdeckTrack(BaseModel):
    """All kept fixes of one bdeck file."""

    atcf_code: str
    basin_code: str
    fixes: list[FixRecord] = Field(default_factory=list)
    source: str | None = None


class PerBasinACE(BaseModel):
    """Accumulated energy per basin, in kt^2 (ACE is this / 10000)."""

    wpac: int = Field(default=0, ge=0)
    nio: int = Field(default=0, ge=0)
    shem: int = Field(default=0, ge=0)
    epac: int = Field(default=0, ge=0)
    atl: int = Field(default=0, ge=0)

    def get(self, basin: Basin) -> int:
        return getattr(self, basin.name.lower())

    def add(self, basin: Basin, energy: int) -> None:
        """Add *energy* to *basin*. Energy only ever increases."""
        if energy < 0:
            raise ValueError(f"ACE energy must be non-negative, got {energy}")
        attr = basin.name.lower()
        setattr(self, attr, getattr(self, attr) + energy)

    def merge(self, other: PerBasinACE) -> None:
        """Add every basin of *other* into this one."""
        for basin in Basin:
            self.add(basin, other.get(basin))

    def total(self) -> int:
        return sum(self.get(b) for b in Basin)

    def basin_count(self) -> int:
        """Number of basins with positive energy."""
        return sum(1 for b in Basin if self.get(b) > 0)

    def items(self) -> Iterator[tuple[Basin, int]]:
        """Yield (basin, energy) in report order."""
        for basin in DISPLAY_ORDER:
            yield basin, self.get(basin)


class StormStats(BaseModel):
    """Per-file result: ATCF code, peak wind and the storm's ACE by basin."""

    atcf_code: str
    # over every kept fix, ACE-eligible or not
    max_wind: int = Field(default=0, ge=0)
    ace: PerBasinACE = Field(default_factory=PerBasinACE)

    @property
    def total_ace(self) -> int:
        return self.ace.total()

    def update_max_wind(self, wind: int) -> None:
        if wind > self.max_wind:
            self.max_wind = wind


class YearlyACE:
    """Season year -> PerBasinACE, shared across every processed storm.

    Entries are created on first reference to a year, so a year can be
    present with zero energy.
    """

    def __init__(self) -> None:
        self._years: dict[int, PerBasinACE] = {}

    def for_year(self, year: int) -> PerBasinACE:
        """Return the entry for *year*, creating an empty one if needed."""
        if year not in self._years:
            self._years[year] = PerBasinACE()
        return self._years[year]

    def add(self, year: int, basin: Basin, energy: int) -> None:
        self.for_year(year).add(basin, energy)

    def merge(self, other: YearlyACE) -> None:
        """Fold *other* into this mapping by per-year integer addition."""
        for year, ace in other.items():
            self.for_year(year).merge(ace)

    def items(self) -> Iterator[tuple[int, PerBasinACE]]:
        """Yield (year, ace) in ascending year order."""
        for year in sorted(self._years):
            yield year, self._years[year]

    def active_years(self) -> list[int]:
        """Sorted years whose total energy is positive."""
        return [year for year, ace in self.items() if ace.total() > 0]

    def total(self, year: int) -> int:
        ace = self._years.get(year)
        return ace.total() if ace is not None else 0

    def __contains__(self, year: object) -> bool:
        return year in self._years

    def __getitem__(self, year: int) -> PerBasinACE:
        return self._years[year]

    def __len__(self) -> int:
        return len(self._years)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._years))
