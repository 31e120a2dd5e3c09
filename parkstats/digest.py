from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from .engine import StatsEngine
from .records import RunRecord, VolunteerRecord
from .stat_modules.milestones import next_milestones


logger = logging.getLogger(__name__)

DEFAULT_DIGEST_TEMPLATE = """🏃 {{ profile.total_runs }} runs at {{ profile.venue_count }} venues | 🙌 {{ profile.volunteer_count }} volunteer occasions
{% if profile.best_time %}⏱️ Best: {{ profile.best_time }} at {{ profile.best_time_venue }}
{% endif %}{% if profile.home_venue %}🏠 Home: {{ profile.home_venue }}
{% endif %}{% if overall %}📊 Fastest {{ overall.fastest_time }} | Average {{ overall.average_time }} | Slowest {{ overall.slowest_time }}
{% endif %}
📍 Top venues:
{% for venue in venues[:5] %}  {{ venue.name }}: {{ venue.run_count }} runs ({{ "%.1f"|format(venue.percentage) }}%), best {{ venue.best_time }}
{% endfor %}
🗺️ Regions:
{% for region in regions %}  {{ region.region }}: {{ region.venue_count }} venues, {{ region.total_runs }} runs
{% endfor %}
{% if volunteering %}🦺 Volunteering:
{% for role in volunteering %}  {{ role.role }}: {{ role.count }}
{% endfor %}{% endif %}
📅 {{ year }}: {{ year_run_days }} run days of {{ year_days }}
{% for year_summary in annual %}  {{ year_summary.year }}: {{ year_summary.total_runs }} runs, best {{ year_summary.best_time }}
{% endfor %}
{% if milestones %}🏅 {{ milestones | join(", ") }}
{% endif %}{% for category, upcoming in next_milestones.items() %}🎯 Next {{ category }}: {{ upcoming }}
{% endfor %}"""


def _template_environment() -> SandboxedEnvironment:
    return SandboxedEnvironment(
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
        undefined=StrictUndefined,
    )


def _normalize_rendered_text(rendered: str) -> str:
    lines = [line.rstrip() for line in rendered.replace("\r\n", "\n").split("\n")]
    return "\n".join(lines).strip()


def build_digest_context(
    engine: StatsEngine,
    runs: Sequence[RunRecord],
    volunteers: Sequence[VolunteerRecord],
    year: int,
) -> dict[str, Any]:
    profile = engine.profile_summary(runs, volunteers)
    days = engine.activity_days(runs, year)
    upcoming = next_milestones(profile.total_runs, profile.volunteer_count, profile.venue_count)
    return {
        "profile": profile,
        "overall": engine.overall_stats(runs),
        "venues": engine.venue_stats(runs),
        "regions": engine.geographic_stats(runs),
        "volunteering": engine.volunteer_stats(volunteers),
        "annual": engine.annual_performances(runs),
        "milestones": [milestone.label for milestone in profile.milestones],
        "next_milestones": {category: milestone.label for category, milestone in upcoming.items()},
        "year": year,
        "year_days": len(days),
        "year_run_days": sum(1 for day in days if day.has_run),
    }


def load_template_text(path: Path | None) -> str:
    if path is None:
        return DEFAULT_DIGEST_TEMPLATE
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("Digest template %s unreadable (%s); using default template.", path, exc)
        return DEFAULT_DIGEST_TEMPLATE


def render_digest(context: dict[str, Any], template_text: str | None = None) -> dict[str, Any]:
    env = _template_environment()
    text = (template_text or DEFAULT_DIGEST_TEMPLATE).replace("\r\n", "\n").strip("\n")
    try:
        rendered = env.from_string(text).render(context)
    except TemplateError as exc:
        return {
            "ok": False,
            "error": str(exc),
            "digest": None,
        }

    return {
        "ok": True,
        "error": None,
        "digest": _normalize_rendered_text(rendered),
    }
