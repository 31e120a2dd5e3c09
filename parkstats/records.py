from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, NamedTuple

from .numeric_utils import as_float, as_int


logger = logging.getLogger(__name__)

RUN_DATE_FORMAT = "%d/%m/%Y"


class Coordinate(NamedTuple):
    latitude: float
    longitude: float


def parse_run_date(raw: object) -> date | None:
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        logger.debug("Unparsable run date %r", raw)
        return None
    try:
        return datetime.strptime(text, RUN_DATE_FORMAT).date()
    except ValueError:
        logger.debug("Unparsable run date %r", raw)
        return None


def time_in_minutes(raw: object) -> float:
    """Convert ``MM:SS`` text to decimal minutes, ``0.0`` when malformed."""
    if not isinstance(raw, str):
        return 0.0
    parts = raw.split(":")
    if len(parts) != 2:
        return 0.0
    minutes = as_float(parts[0])
    seconds = as_float(parts[1])
    if minutes is None or seconds is None:
        return 0.0
    if not (math.isfinite(minutes) and math.isfinite(seconds)) or minutes < 0 or seconds < 0:
        return 0.0
    return minutes + (seconds / 60.0)


@dataclass(frozen=True)
class RunRecord:
    venue: str
    date: str
    time: str
    event_url: str | None = None
    run_number: int | None = None
    position: int | None = None
    age_grading: float | None = None
    is_pb: bool = False

    @property
    def time_in_minutes(self) -> float:
        return time_in_minutes(self.time)

    @property
    def parsed_date(self) -> date | None:
        return parse_run_date(self.date)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "RunRecord":
        return cls(
            venue=str(payload.get("venue") or ""),
            date=str(payload.get("date") or ""),
            time=str(payload.get("time") or ""),
            event_url=payload.get("event_url") or None,
            run_number=as_int(payload.get("run_number")),
            position=as_int(payload.get("position")),
            age_grading=as_float(payload.get("age_grading")),
            is_pb=bool(payload.get("is_pb", False)),
        )


@dataclass(frozen=True)
class VolunteerRecord:
    role: str
    venue: str
    date: str

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "VolunteerRecord":
        return cls(
            role=str(payload.get("role") or ""),
            venue=str(payload.get("venue") or ""),
            date=str(payload.get("date") or ""),
        )


@dataclass(frozen=True)
class AnnualPerformance:
    year: int
    best_time: str
    best_age_grading: float
    total_runs: int = 0


@dataclass(frozen=True)
class OverallStats:
    fastest_time: str
    average_time: str
    slowest_time: str
    best_age_grading: float
    average_age_grading: float
    worst_age_grading: float
    best_position: int
    average_position: float
    worst_position: int


@dataclass(frozen=True)
class VenueStats:
    name: str
    run_count: int
    best_time: str
    best_time_in_minutes: float
    percentage: float
    most_recent_date: str | None
    coordinate: Coordinate | None = None

    @property
    def frequency_band(self) -> str:
        if self.percentage >= 30:
            return "dominant"
        if self.percentage >= 15:
            return "frequent"
        if self.percentage >= 5:
            return "regular"
        if self.percentage >= 2:
            return "occasional"
        return "rare"


@dataclass(frozen=True)
class VolunteerStats:
    role: str
    count: int
    venues: list[str]
    percentage: float


@dataclass(frozen=True)
class GeographicStats:
    region: str
    venue_count: int
    total_runs: int
    venues: list[str]


@dataclass(frozen=True)
class ActivityDay:
    date: date
    has_run: bool
    venue: str | None = None
    time: str | None = None


@dataclass(frozen=True)
class PerformancePoint:
    date: str
    parsed_date: date | None
    venue: str
    time_in_minutes: float
    formatted_time: str

    @classmethod
    def from_record(cls, record: RunRecord) -> "PerformancePoint":
        return cls(
            date=record.date,
            parsed_date=record.parsed_date,
            venue=record.venue,
            time_in_minutes=record.time_in_minutes,
            formatted_time=record.time,
        )
