"""Plain-text report of storm and yearly ACE."""

from __future__ import annotations

from bdeck_ace.models import PerBasinACE, StormStats, YearlyACE

# Accumulated kt^2 -> ACE in 10^4 kt^2.
ACE_SCALE = 10000.0


def to_ace(energy: int) -> float:
    return energy / ACE_SCALE


def format_basin_summary(ace: PerBasinACE, separator: str) -> str:
    """``LABEL: 0.0000`` for every basin with energy, joined by *separator*."""
    return separator.join(
        f"{basin.label}: {to_ace(energy):.4f}"
        for basin, energy in ace.items()
        if energy > 0
    )


def format_storm_line(stats: StormStats) -> str:
    """One summary line per storm, plus a basin breakdown if it crossed basins."""
    line = (
        f"{stats.atcf_code}: {to_ace(stats.total_ace):7.4f}"
        f"   Max Wind: {stats.max_wind:3d}kt"
    )
    if stats.ace.basin_count() > 1:
        line += "\n     Per basin ACE: " + format_basin_summary(stats.ace, "  ")
    return line


def format_yearly_summary(yearly: YearlyACE) -> str:
    lines = ["--------Summary--------"]
    for year in yearly.active_years():
        lines.append(f"{year}: ")
        lines.append(format_basin_summary(yearly[year], "\n"))
    return "\n".join(lines)


def format_report(storms: list[StormStats], yearly: YearlyACE) -> str:
    """Storm lines in input order followed by the yearly summary."""
    lines = [format_storm_line(s) for s in storms]
    lines.append(format_yearly_summary(yearly))
    return "\n".join(lines) + "\n"
