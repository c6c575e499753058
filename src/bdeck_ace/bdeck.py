"""Fixed-column reader for bdeck (best-track) advisory files.

Every field is described once in ``LINE_SCHEMA``: a name, a 0-based
half-open column range and a decode rule. ``decode_line`` walks the table
for one line; ``parse_bdeck_text`` adds the per-file logic (ATCF code,
timestamp de-duplication, season year).

A typical long-style line::

    WP, 01, 2023091200,   , BEST,   0, 150N, 1400E,  65, 1000, TS, ...

Short-style lines stop after the wind field and drop its trailing comma,
so their wind is read from the last three characters instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from bdeck_ace.models import AceConfig, BdeckTrack, FixRecord
from bdeck_ace.utils import load_config

logger = logging.getLogger(__name__)

# Lines shorter than this omit the padding after the wind field.
LONG_LINE_MIN = 52
# Storm type is only present on lines longer than this.
STORM_TYPE_MIN = 60


class BdeckFormatError(ValueError):
    """A bdeck line could not be decoded. Fatal for the whole run."""

    def __init__(self, message: str, source: str | None = None, line_no: int | None = None):
        self.source = source
        self.line_no = line_no
        where = source or "<text>"
        if line_no is not None:
            where = f"{where}:{line_no}"
        super().__init__(f"{where}: {message}")


# ---------------------------------------------------------------------------
# Decode rules
# ---------------------------------------------------------------------------


def _decode_timestamp(raw: str) -> dict[str, Any]:
    return {
        "timestamp": raw,
        "year": int(raw[:4]),
        "month": int(raw[4:6]),
        "hour": int(raw[8:10]),
    }


def _decode_tenths(digits: str) -> float:
    return float("".join(digits.split())) / 10.0


def _decode_latitude(raw: str) -> float:
    value = _decode_tenths(raw[:3])
    if raw[3] == "S":
        value = -value
    return value


def _decode_longitude(raw: str) -> float:
    value = _decode_tenths(raw[:4])
    if raw[4] == "W":
        value = 360.0 - value
    return value


def _decode_wind(raw: str) -> int:
    """Wind in knots. Unparseable values read as 0."""
    try:
        wind = int(raw.lstrip(" "))
    except ValueError:
        return 0
    return max(wind, 0)


# ---------------------------------------------------------------------------
# Line schema
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BdeckField:
    """One fixed-width field of a bdeck line.

    ``start``/``end`` may be negative, meaning offsets from the end of the
    trimmed line. ``applies`` decides from the trimmed line length whether
    the field is present; absent fields take ``default``.
    """

    name: str
    start: int
    end: int
    decode: Callable[[str], Any]
    applies: Callable[[int], bool] = lambda n: True
    default: Any = None

    def span(self, length: int) -> tuple[int, int]:
        start = self.start if self.start >= 0 else length + self.start
        end = self.end if self.end > 0 else length + self.end
        return start, end

    def extract(self, line: str) -> str:
        """Return the raw characters of this field; out of range is an error."""
        start, end = self.span(len(line))
        if start < 0 or end > len(line) or start >= end:
            raise IndexError(
                f"field {self.name!r} [{self.start},{self.end}) outside line of "
                f"length {len(line)}"
            )
        return line[start:end]


LINE_SCHEMA: list[BdeckField] = [
    BdeckField("timestamp", 8, 18, _decode_timestamp),
    BdeckField("latitude", 35, 39, _decode_latitude),
    BdeckField("longitude", 41, 46, _decode_longitude),
    BdeckField(
        "wind_knots", 48, 51, _decode_wind,
        applies=lambda n: n >= LONG_LINE_MIN,
    ),
    BdeckField(
        "wind_knots", -3, 0, _decode_wind,
        applies=lambda n: n < LONG_LINE_MIN,
    ),
    BdeckField(
        "storm_type", 59, 61, str,
        applies=lambda n: n > STORM_TYPE_MIN,
        default="",
    ),
]

TIMESTAMP_FIELD = LINE_SCHEMA[0]


def _trim(line: str) -> str:
    return line.rstrip("\r\n")


def decode_line(line: str, config: AceConfig | None = None) -> dict[str, Any]:
    """Decode every schema field of one line into a dict.

    Raises ``IndexError`` for reads past the end of the line and
    ``ValueError`` for malformed numbers (wind excepted).
    """
    config = config or load_config()
    line = _trim(line)
    values: dict[str, Any] = {}
    for field in LINE_SCHEMA:
        if not field.applies(len(line)):
            values.setdefault(field.name, field.default)
            continue
        decoded = field.decode(field.extract(line))
        if isinstance(decoded, dict):
            values.update(decoded)
        else:
            values[field.name] = decoded
    if values["wind_knots"] == config.no_report_wind:
        values["wind_knots"] = 0
    return values


def season_year(year: int, month: int, basin_code: str, config: AceConfig | None = None) -> int:
    """Shift southern-hemisphere fixes from July on into the next season."""
    config = config or load_config()
    if basin_code in config.southern_hemisphere_basins and month > config.season_rollover_month:
        return year + 1
    return year


def atcf_code_from_header(text: str) -> tuple[str, str]:
    """Return (ATCF code, basin code) from the first characters of a file."""
    if len(text) < 6:
        raise IndexError(f"header {text[:6]!r} too short for an ATCF code")
    basin_code = text[0:2]
    return basin_code + text[4:6], basin_code


# ---------------------------------------------------------------------------
# File-level extraction
# ---------------------------------------------------------------------------


def parse_bdeck_text(
    text: str,
    source: str | None = None,
    config: AceConfig | None = None,
) -> BdeckTrack:
    """Extract the ATCF code and de-duplicated fixes from one file's text.

    Consecutive lines with the same timestamp keep only the first.
    """
    config = config or load_config()
    try:
        atcf_code, basin_code = atcf_code_from_header(text)
    except IndexError as e:
        raise BdeckFormatError(str(e), source=source) from e

    fixes: list[FixRecord] = []
    last_time: str | None = None
    for line_no, line in enumerate(text.splitlines(), start=1):
        try:
            line_time = TIMESTAMP_FIELD.extract(_trim(line))
            if line_time == last_time:
                logger.debug("%s:%d duplicate fix %s skipped", source, line_no, line_time)
                continue
            last_time = line_time
            values = decode_line(line, config)
            values["season"] = season_year(values["year"], values["month"], basin_code, config)
            fixes.append(FixRecord(**values))
        except (IndexError, ValueError) as e:
            raise BdeckFormatError(str(e), source=source, line_no=line_no) from e

    return BdeckTrack(
        atcf_code=atcf_code,
        basin_code=basin_code,
        fixes=fixes,
        source=source,
    )


def read_bdeck(path: str | Path, config: AceConfig | None = None) -> BdeckTrack:
    """Read and extract one bdeck file. I/O errors propagate."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise BdeckFormatError(f"not UTF-8 text: {e}", source=str(path)) from e
    track = parse_bdeck_text(text, source=str(path), config=config)
    logger.info("read %s: %s, %d fixes", path, track.atcf_code, len(track.fixes))
    return track
