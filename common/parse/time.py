import re

import pandas as pd

# date-time per RFC3339 section 5.6; the offset is mandatory
RFC3339_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})"
)


def to_utc(ts: pd.Timestamp) -> pd.Timestamp:
    """
    Naive timestamps are taken to be UTC; aware ones are converted to UTC.
    """
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def parse_timestamp(raw: str) -> pd.Timestamp:
    """
    Parse an RFC3339 timestamp into a UTC pandas Timestamp.

    Only the RFC3339 shape is accepted: relative words ("now"), bare dates,
    compact or prose dates and values without an offset raise ValueError.
    """
    if not isinstance(raw, str) or RFC3339_RE.fullmatch(raw) is None:
        raise ValueError(f"not an RFC3339 timestamp: {raw!r}")

    # shape is right but the calendar may not be (month 13, Feb 30)
    try:
        ts = pd.to_datetime(raw, format="ISO8601", utc=True)
    except ValueError:
        raise ValueError(f"not an RFC3339 timestamp: {raw!r}") from None

    return ts


def format_rfc3339(ts: pd.Timestamp) -> str:
    """
    Whole-second UTC rendering; offsets are normalized to Z.
    """
    return to_utc(ts).strftime("%Y-%m-%dT%H:%M:%SZ")
