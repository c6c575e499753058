"""Ocean-basin classification from fix coordinates.

Longitude is in degrees east, 0-360 (west longitudes already converted).
Rules are checked top to bottom and the first match wins; later rules rely
on earlier ones having failed, so the order must not change.
"""

from __future__ import annotations

from typing import Callable

from bdeck_ace.models import Basin

_Rule = tuple[Callable[[float, float], bool], Basin]

_BASIN_RULES: list[_Rule] = [
    # Southern hemisphere before any longitude logic.
    (lambda lat, lon: lat < 0, Basin.SHEM),
    (lambda lat, lon: lon < 100 and lat < 40, Basin.NIO),
    (lambda lat, lon: lon < 70, Basin.ATL),
    (lambda lat, lon: lon < 100, Basin.WPAC),
    (lambda lat, lon: lon <= 180, Basin.WPAC),
    (lambda lat, lon: lon < 240, Basin.EPAC),
    (lambda lat, lon: lon > 300, Basin.ATL),
    # 240-300: the EPAC/ATL boundary is not resolved here, default to EPAC.
    (lambda lat, lon: True, Basin.EPAC),
]


def classify_basin(latitude: float, longitude: float) -> Basin:
    """Return the basin for (*latitude*, *longitude*). Total over all inputs."""
    for matches, basin in _BASIN_RULES:
        if matches(latitude, longitude):
            return basin
    raise AssertionError("unreachable: last basin rule always matches")
