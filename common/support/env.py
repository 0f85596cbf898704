from pathlib import Path
from typing import Any

import pandas as pd
from dotenv import dotenv_values

from common.model.constants import ENV_PREFIX
from common.parse.time import parse_timestamp


def _parse_bool(raw: str | None, default: bool = False) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _parse_int(var: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer. Got: {raw}") from None


def _parse_ts(var: str, raw: str) -> pd.Timestamp:
    try:
        return parse_timestamp(raw)
    except ValueError:
        raise ValueError(f"{var} must be an RFC3339 timestamp. Got: {raw}") from None


def load_env_defaults(*, env_path: Path) -> dict[str, Any]:
    """
    Reads QUERYLOG_* settings from a .env file and returns them keyed by the
    matching CLI destination. A missing or empty file yields no defaults.
    """
    values = dotenv_values(env_path) if env_path.is_file() else {}

    def get(name: str) -> str | None:
        raw = values.get(f"{ENV_PREFIX}{name}")
        return raw if raw else None

    defaults: dict[str, Any] = {}

    if (raw := get("FILE")) is not None:
        defaults["file"] = raw
    if (raw := get("FROM")) is not None:
        defaults["window_from"] = _parse_ts(f"{ENV_PREFIX}FROM", raw)
    if (raw := get("TO")) is not None:
        defaults["window_to"] = _parse_ts(f"{ENV_PREFIX}TO", raw)
    if (raw := get("TOP")) is not None:
        defaults["top"] = _parse_int(f"{ENV_PREFIX}TOP", raw)
    if (raw := get("PERCENTILE")) is not None:
        defaults["percentile"] = _parse_int(f"{ENV_PREFIX}PERCENTILE", raw)
    if (raw := get("PLOT")) is not None:
        defaults["plot"] = _parse_bool(raw)

    return defaults
