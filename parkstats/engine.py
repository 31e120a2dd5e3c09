from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .config import Settings
from .records import (
    ActivityDay,
    AnnualPerformance,
    GeographicStats,
    OverallStats,
    PerformancePoint,
    RunRecord,
    VenueStats,
    VolunteerRecord,
    VolunteerStats,
)
from .stat_modules.activity_calendar import activity_days, activity_years
from .stat_modules.geographic_stats import geographic_stats
from .stat_modules.milestones import Milestone, check_milestones
from .stat_modules.performance import annual_performances, overall_stats, performance_series
from .stat_modules.venue_stats import venue_stats
from .stat_modules.volunteer_stats import volunteer_stats
from .stats_cache import StatsCache
from .venue_coordinates import MapRegion, VenueCoordinateRegistry, default_uk_region, load_registry


logger = logging.getLogger(__name__)

VENUE_STATS_OPERATION = "venue_stats"
ACTIVITY_DAYS_OPERATION = "activity_days"


@dataclass(frozen=True)
class ProfileSummary:
    total_runs: int
    volunteer_count: int
    venue_count: int
    best_time: str | None
    best_time_venue: str | None
    home_venue: str | None
    milestones: list[Milestone] = field(default_factory=list)


class StatsEngine:
    """Entry point for the presentation layer.

    Owns one coordinate registry and one memoization cache; every other
    computation is a pure function of the records passed in.
    """

    def __init__(
        self,
        registry: VenueCoordinateRegistry | None = None,
        cache: StatsCache | None = None,
    ) -> None:
        self.registry = registry if registry is not None else VenueCoordinateRegistry()
        self.cache = cache if cache is not None else StatsCache()

    @classmethod
    def from_settings(cls, settings: Settings) -> "StatsEngine":
        return cls(
            registry=load_registry(settings.events_file),
            cache=StatsCache(ttl_seconds=settings.cache_ttl_seconds),
        )

    def venue_stats(self, records: Sequence[RunRecord]) -> list[VenueStats]:
        stats = self.cache.get_or_compute(
            VENUE_STATS_OPERATION,
            records,
            lambda: venue_stats(records, self.registry),
        )
        return list(stats)

    def activity_days(self, records: Sequence[RunRecord], year: int) -> list[ActivityDay]:
        days = self.cache.get_or_compute(
            ACTIVITY_DAYS_OPERATION,
            records,
            lambda: activity_days(records, year),
            year,
        )
        return list(days)

    def all_years_activity(self, records: Sequence[RunRecord]) -> dict[int, list[ActivityDay]]:
        return {year: self.activity_days(records, year) for year in activity_years(records)}

    def volunteer_stats(self, records: Sequence[VolunteerRecord]) -> list[VolunteerStats]:
        return volunteer_stats(records)

    def geographic_stats(self, records: Sequence[RunRecord]) -> list[GeographicStats]:
        return geographic_stats(self.venue_stats(records), self.registry)

    def map_region(self, records: Sequence[RunRecord]) -> MapRegion:
        region = self.registry.map_region(stats.name for stats in self.venue_stats(records))
        return region if region is not None else default_uk_region()

    def performance_series(self, records: Sequence[RunRecord]) -> list[PerformancePoint]:
        return performance_series(records)

    def annual_performances(self, records: Sequence[RunRecord]) -> list[AnnualPerformance]:
        return annual_performances(records)

    def overall_stats(self, records: Sequence[RunRecord]) -> OverallStats | None:
        return overall_stats(records)

    def check_milestones(self, total_runs: int, volunteer_count: int, venue_count: int) -> list[Milestone]:
        return check_milestones(total_runs, volunteer_count, venue_count)

    def profile_summary(
        self,
        runs: Sequence[RunRecord],
        volunteers: Sequence[VolunteerRecord],
    ) -> ProfileSummary:
        venues = self.venue_stats(runs)
        timed = [run for run in runs if run.time_in_minutes > 0]
        best = min(timed, key=lambda run: run.time_in_minutes) if timed else None
        return ProfileSummary(
            total_runs=len(runs),
            volunteer_count=len(volunteers),
            venue_count=len(venues),
            best_time=best.time if best is not None else None,
            best_time_venue=best.venue if best is not None else None,
            home_venue=venues[0].name if venues else None,
            milestones=check_milestones(len(runs), len(volunteers), len(venues)),
        )

    def register_venue(self, venue_name: str, latitude: float, longitude: float) -> None:
        self.registry.register(venue_name, latitude, longitude)
        self.clear_venue_stats_cache()

    def clear_venue_stats_cache(self) -> None:
        removed = self.cache.clear_operation(VENUE_STATS_OPERATION)
        logger.debug("Cleared %d cached venue stats entries", removed)

    def clear_cache(self) -> None:
        self.cache.clear()
