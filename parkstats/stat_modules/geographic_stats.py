from __future__ import annotations

from typing import Sequence

from ..records import GeographicStats, VenueStats
from ..regions import classify_region
from ..venue_coordinates import VenueCoordinateRegistry


def geographic_stats(
    venues: Sequence[VenueStats],
    registry: VenueCoordinateRegistry | None = None,
) -> list[GeographicStats]:
    regions: dict[str, list[VenueStats]] = {}
    for venue in venues:
        regions.setdefault(classify_region(venue.name, registry), []).append(venue)

    stats = [
        GeographicStats(
            region=region,
            venue_count=len(members),
            total_runs=sum(member.run_count for member in members),
            venues=[member.name for member in members],
        )
        for region, members in regions.items()
    ]
    stats.sort(key=lambda item: (-item.venue_count, -item.total_runs, item.region))
    return stats
