from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Sequence

from ..records import ActivityDay, RunRecord


def _runs_by_day(records: Sequence[RunRecord]) -> dict[date, RunRecord]:
    lookup: dict[date, RunRecord] = {}
    for record in records:
        parsed = record.parsed_date
        if parsed is None:
            continue
        lookup.setdefault(parsed, record)
    return lookup


def activity_days(records: Sequence[RunRecord], year: int) -> list[ActivityDay]:
    """Return one entry per calendar day of ``year``, Jan 1 through Dec 31."""
    if not MINYEAR <= year <= MAXYEAR:
        return []

    lookup = _runs_by_day(records)
    current = date(year, 1, 1)
    last_day = date(year, 12, 31)

    days: list[ActivityDay] = []
    while True:
        run = lookup.get(current)
        days.append(
            ActivityDay(
                date=current,
                has_run=run is not None,
                venue=run.venue if run is not None else None,
                time=run.time if run is not None else None,
            )
        )
        if current == last_day:
            break
        current += timedelta(days=1)
    return days


def activity_years(records: Sequence[RunRecord]) -> list[int]:
    return sorted({parsed.year for parsed in (record.parsed_date for record in records) if parsed is not None})


def all_years_activity(records: Sequence[RunRecord]) -> dict[int, list[ActivityDay]]:
    return {year: activity_days(records, year) for year in activity_years(records)}
