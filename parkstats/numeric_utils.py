from __future__ import annotations

from typing import Any


def as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def as_int(value: Any) -> int | None:
    parsed = as_float(value)
    if parsed is None:
        return None
    return int(round(parsed))


def format_minutes(value: Any, *, none_value: str = "N/A") -> str:
    minutes_total = as_float(value)
    if minutes_total is None or minutes_total < 0:
        return none_value
    total = int(round(minutes_total * 60))
    minutes = total // 60
    seconds = total % 60
    return f"{minutes:02d}:{seconds:02d}"


def percentage(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return part / whole * 100


def mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)
