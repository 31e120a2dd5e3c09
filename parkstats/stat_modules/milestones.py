from __future__ import annotations

from enum import Enum


RUNNING = "Running"
VOLUNTEERING = "Volunteering"
TOURISM = "Tourism"

CATEGORY_ORDER = (RUNNING, VOLUNTEERING, TOURISM)


class Milestone(Enum):
    RUNS_25 = ("25 Club", 25, RUNNING)
    RUNS_50 = ("50 Club", 50, RUNNING)
    RUNS_100 = ("100 Club", 100, RUNNING)
    RUNS_250 = ("250 Club", 250, RUNNING)
    RUNS_500 = ("500 Club", 500, RUNNING)
    VOLUNTEER_25 = ("25 Volunteer", 25, VOLUNTEERING)
    VOLUNTEER_50 = ("50 Volunteer", 50, VOLUNTEERING)
    VOLUNTEER_100 = ("100 Volunteer", 100, VOLUNTEERING)
    VOLUNTEER_250 = ("250 Volunteer", 250, VOLUNTEERING)
    TOURIST_10 = ("10 Event Tourist", 10, TOURISM)
    TOURIST_20 = ("20 Event Tourist", 20, TOURISM)
    TOURIST_50 = ("50 Event Tourist", 50, TOURISM)

    def __init__(self, label: str, threshold: int, category: str) -> None:
        self.label = label
        self.threshold = threshold
        self.category = category

    def is_achieved(self, total_runs: int, volunteer_count: int, venue_count: int) -> bool:
        counter = {
            RUNNING: total_runs,
            VOLUNTEERING: volunteer_count,
            TOURISM: venue_count,
        }[self.category]
        return counter >= self.threshold


def check_milestones(total_runs: int, volunteer_count: int, venue_count: int) -> list[Milestone]:
    """Every milestone met, not only the highest tier of each category."""
    achieved = [
        milestone
        for milestone in Milestone
        if milestone.is_achieved(total_runs, volunteer_count, venue_count)
    ]
    achieved.sort(key=lambda milestone: (CATEGORY_ORDER.index(milestone.category), milestone.threshold))
    return achieved


def next_milestones(total_runs: int, volunteer_count: int, venue_count: int) -> dict[str, Milestone]:
    upcoming: dict[str, Milestone] = {}
    for milestone in Milestone:
        if milestone.is_achieved(total_runs, volunteer_count, venue_count):
            continue
        current = upcoming.get(milestone.category)
        if current is None or milestone.threshold < current.threshold:
            upcoming[milestone.category] = milestone
    return upcoming
