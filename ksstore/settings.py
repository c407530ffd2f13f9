from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATABASE = "(default)"

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> float | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("SETTINGS: ignoring non-numeric %s=%r", name, raw)
        return None


@dataclass(frozen=True)
class Settings:
    # Backend
    project: str | None
    database: str

    # Store defaults
    table: str
    timeout: float | None
    query_match_all: bool

    # Debug
    debug_log_requests: bool


def get_settings(env_file: str | Path | None = None) -> Settings:
    if env_file is not None:
        load_dotenv(env_file)

    # Fall back to the variable the Google client libraries already understand.
    project = os.getenv("KSSTORE_PROJECT") or os.getenv("GOOGLE_CLOUD_PROJECT") or None
    database = os.getenv("KSSTORE_DATABASE", DEFAULT_DATABASE).strip() or DEFAULT_DATABASE

    table = os.getenv("KSSTORE_TABLE", "").strip()
    timeout = _env_float("KSSTORE_TIMEOUT")

    # Off by default: only the last query term applies unless explicitly enabled.
    query_match_all = _env_bool("KSSTORE_QUERY_MATCH_ALL", False)

    debug_log_requests = _env_bool("KSSTORE_DEBUG_LOG_REQUESTS", False)

    return Settings(
        project=project,
        database=database,
        table=table,
        timeout=timeout,
        query_match_all=query_match_all,
        debug_log_requests=debug_log_requests,
    )
