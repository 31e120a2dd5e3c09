from __future__ import annotations

from datetime import date
from typing import Sequence

from ..numeric_utils import format_minutes, mean
from ..records import AnnualPerformance, OverallStats, PerformancePoint, RunRecord


def performance_series(records: Sequence[RunRecord]) -> list[PerformancePoint]:
    points = [PerformancePoint.from_record(record) for record in records]
    # sorted() is stable, so same-day points keep input order.
    return sorted(points, key=lambda point: point.parsed_date or date.min)


def annual_performances(records: Sequence[RunRecord]) -> list[AnnualPerformance]:
    years: dict[int, list[RunRecord]] = {}
    for record in records:
        parsed = record.parsed_date
        if parsed is None:
            continue
        years.setdefault(parsed.year, []).append(record)

    summaries: list[AnnualPerformance] = []
    for year, runs in years.items():
        timed = [run for run in runs if run.time_in_minutes > 0]
        best_time = min(timed, key=lambda run: run.time_in_minutes).time if timed else "N/A"
        gradings = [run.age_grading for run in runs if run.age_grading is not None]
        summaries.append(
            AnnualPerformance(
                year=year,
                best_time=best_time,
                best_age_grading=max(gradings) if gradings else 0.0,
                total_runs=len(runs),
            )
        )

    summaries.sort(key=lambda item: item.year, reverse=True)
    return summaries


def overall_stats(records: Sequence[RunRecord]) -> OverallStats | None:
    if not records:
        return None

    timed = [record for record in records if record.time_in_minutes > 0]
    minutes = [record.time_in_minutes for record in timed]
    gradings = [record.age_grading for record in records if record.age_grading is not None]
    positions = [record.position for record in records if record.position is not None]

    if timed:
        fastest_time = min(timed, key=lambda record: record.time_in_minutes).time
        slowest_time = max(timed, key=lambda record: record.time_in_minutes).time
        average_time = format_minutes(mean(minutes))
    else:
        fastest_time = slowest_time = average_time = "N/A"

    return OverallStats(
        fastest_time=fastest_time,
        average_time=average_time,
        slowest_time=slowest_time,
        best_age_grading=max(gradings) if gradings else 0.0,
        average_age_grading=mean(gradings),
        worst_age_grading=min(gradings) if gradings else 0.0,
        best_position=min(positions) if positions else 0,
        average_position=mean([float(position) for position in positions]),
        worst_position=max(positions) if positions else 0,
    )
