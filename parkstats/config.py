from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from dotenv import load_dotenv

from .stats_cache import DEFAULT_CACHE_TTL_SECONDS


load_dotenv()


EnvGetter = Callable[[str], str | None]


def _str_env(*names: str, default: str = "", getenv: EnvGetter = os.getenv) -> str:
    for name in names:
        value = getenv(name)
        if value is not None:
            return value.strip()
    return default


def _optional_str_env(*names: str, getenv: EnvGetter = os.getenv) -> str | None:
    value = _str_env(*names, default="", getenv=getenv)
    return value or None


def _optional_path_env(*names: str, getenv: EnvGetter = os.getenv) -> Path | None:
    value = _optional_str_env(*names, getenv=getenv)
    if value is None:
        return None
    return Path(value).expanduser()


def _int_env(
    name: str,
    default: int,
    minimum: int | None = None,
    maximum: int | None = None,
    *,
    getenv: EnvGetter = os.getenv,
) -> int:
    value = getenv(name)
    if value is None:
        parsed = default
    else:
        try:
            parsed = int(value.strip())
        except ValueError:
            parsed = default

    if minimum is not None and parsed < minimum:
        parsed = minimum
    if maximum is not None and parsed > maximum:
        parsed = maximum
    return parsed


@dataclass(frozen=True)
class Settings:
    cache_ttl_seconds: int
    events_file: Path | None
    digest_template_file: Path | None
    log_level: str

    @classmethod
    def from_env(cls, *, getenv: EnvGetter = os.getenv) -> "Settings":
        return cls(
            cache_ttl_seconds=_int_env(
                "PARKSTATS_CACHE_TTL_SECONDS",
                DEFAULT_CACHE_TTL_SECONDS,
                minimum=0,
                maximum=86400,
                getenv=getenv,
            ),
            events_file=_optional_path_env("PARKSTATS_EVENTS_FILE", getenv=getenv),
            digest_template_file=_optional_path_env("PARKSTATS_DIGEST_TEMPLATE_FILE", getenv=getenv),
            log_level=_str_env("LOG_LEVEL", default="INFO", getenv=getenv).upper() or "INFO",
        )
