from __future__ import annotations

from typing import Sequence

from ..numeric_utils import percentage
from ..records import VolunteerRecord, VolunteerStats


def volunteer_stats(records: Sequence[VolunteerRecord]) -> list[VolunteerStats]:
    total = len(records)
    roles: dict[str, list[VolunteerRecord]] = {}
    for record in records:
        roles.setdefault(record.role, []).append(record)

    stats = [
        VolunteerStats(
            role=role,
            count=len(occasions),
            venues=sorted({occasion.venue for occasion in occasions}),
            percentage=percentage(len(occasions), total),
        )
        for role, occasions in roles.items()
    ]
    stats.sort(key=lambda item: (-item.count, item.role))
    return stats
