from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from datetime import date
from pathlib import Path

from .config import Settings
from .digest import build_digest_context, load_template_text, render_digest
from .engine import StatsEngine
from .storage import read_json, records_from_payload


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parkstats",
        description="Print a statistics digest for a parkrun run/volunteer history.",
    )
    parser.add_argument("records", type=Path, help='JSON file with "runs" and "volunteers" lists.')
    parser.add_argument("--year", type=int, default=None, help="Calendar year for the activity summary.")
    parser.add_argument("--events", type=Path, default=None, help="parkrun events.json with venue coordinates.")
    parser.add_argument("--template", type=Path, default=None, help="Jinja2 digest template file.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings.from_env()
    if args.events is not None:
        settings = replace(settings, events_file=args.events)
    if args.template is not None:
        settings = replace(settings, digest_template_file=args.template)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    payload = read_json(args.records)
    if payload is None:
        raise SystemExit(f"Could not read records from {args.records}")
    runs, volunteers = records_from_payload(payload)
    logger.info("Loaded %d runs and %d volunteer records", len(runs), len(volunteers))

    engine = StatsEngine.from_settings(settings)
    year = args.year if args.year is not None else date.today().year
    context = build_digest_context(engine, runs, volunteers, year)
    result = render_digest(context, load_template_text(settings.digest_template_file))
    if not result["ok"]:
        raise SystemExit(f"Digest template failed to render: {result['error']}")
    print(result["digest"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
