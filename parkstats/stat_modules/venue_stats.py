from __future__ import annotations

from datetime import date
from typing import Sequence

from ..numeric_utils import percentage
from ..records import RunRecord, VenueStats
from ..venue_coordinates import VenueCoordinateRegistry


def _group_by_venue(records: Sequence[RunRecord]) -> dict[str, list[RunRecord]]:
    groups: dict[str, list[RunRecord]] = {}
    for record in records:
        groups.setdefault(record.venue, []).append(record)
    return groups


def _sort_date(record: RunRecord) -> date:
    return record.parsed_date or date.min


def _best_run(runs: list[RunRecord]) -> RunRecord:
    # min() keeps the first of equal times.
    return min(runs, key=lambda run: run.time_in_minutes)


def _most_recent_run(runs: list[RunRecord]) -> RunRecord:
    latest = runs[0]
    latest_date = _sort_date(latest)
    for run in runs[1:]:
        run_date = _sort_date(run)
        if run_date >= latest_date:
            latest, latest_date = run, run_date
    return latest


def venue_stats(
    records: Sequence[RunRecord],
    registry: VenueCoordinateRegistry | None = None,
) -> list[VenueStats]:
    total_runs = len(records)
    stats: list[VenueStats] = []
    for venue, runs in _group_by_venue(records).items():
        best = _best_run(runs)
        most_recent = _most_recent_run(runs)
        stats.append(
            VenueStats(
                name=venue,
                run_count=len(runs),
                best_time=best.time,
                best_time_in_minutes=best.time_in_minutes,
                percentage=percentage(len(runs), total_runs),
                most_recent_date=most_recent.date,
                coordinate=registry.coordinate(venue) if registry is not None else None,
            )
        )

    stats.sort(key=lambda item: (-item.run_count, item.name))
    return stats
