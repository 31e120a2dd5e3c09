from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .records import RunRecord, VolunteerRecord


logger = logging.getLogger(__name__)


def read_json(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.warning("Ignoring invalid JSON in %s", path)
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def records_from_payload(payload: dict[str, Any]) -> tuple[list[RunRecord], list[VolunteerRecord]]:
    runs_raw = payload.get("runs")
    volunteers_raw = payload.get("volunteers")
    runs = [
        RunRecord.from_dict(item)
        for item in (runs_raw if isinstance(runs_raw, list) else [])
        if isinstance(item, dict)
    ]
    volunteers = [
        VolunteerRecord.from_dict(item)
        for item in (volunteers_raw if isinstance(volunteers_raw, list) else [])
        if isinstance(item, dict)
    ]
    return runs, volunteers

