"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from bdeck_ace.models import AceConfig

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_line(
    ts: str = "2023091200",
    lat: str = "150N",
    lon: str = "1400E",
    wind: int | str = 65,
    storm_type: str = "TS",
    basin: str = "WP",
    number: str = "01",
    style: str = "long",
) -> str:
    """Build one bdeck line with every field at its fixed column.

    ``style`` is ``"long"`` (storm type present), ``"medium"`` (wind at its
    long-form column, no storm type) or ``"short"`` (line ends at the wind).
    """
    head = f"{basin}, {number}, {ts},   , BEST,   0, {lat:>4}, {lon:>5}, {wind:>3}"
    if style == "short":
        return head
    if style == "medium":
        return head + ", 1000,"
    return head + f", 1000, {storm_type:>2},  34, NEQ,   60,   50,   40,   50,"


def make_file(*lines: str) -> str:
    return "\n".join(lines) + "\n"


@pytest.fixture()
def config() -> AceConfig:
    """Default ACE rules, independent of configs/ace.yaml."""
    return AceConfig()


@pytest.fixture()
def wp_file() -> Path:
    """Seven-line West Pacific storm (one duplicate, one off-synoptic, one EX)."""
    return FIXTURES_DIR / "bwp012023.dat"


@pytest.fixture()
def sh_file() -> Path:
    """Short-style southern-hemisphere storm in December."""
    return FIXTURES_DIR / "bsh022024.dat"
