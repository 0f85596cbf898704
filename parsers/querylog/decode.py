import json
from typing import Any

import pandas as pd

from common.errors import EmptyQuery, MalformedRecord
from common.model.types import LineNumber
from common.parse.time import parse_timestamp

from .records import SAMPLE_FIELDS, TIMING_FIELDS, LogRecord, RuleGroup


class _FieldError(ValueError):
    pass


def _section(obj: dict[str, Any], key: str, *, where: str) -> dict[str, Any]:
    """
    Nested JSON object; absent or null sections read as empty.
    """
    value = obj.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise _FieldError(f"{where}{key} must be an object")
    return value


def _duration(obj: dict[str, Any], key: str, *, where: str) -> float:
    value = obj.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _FieldError(f"{where}{key} must be a number")
    if value < 0:
        raise _FieldError(f"{where}{key} must not be negative")
    return float(value)


def _count(obj: dict[str, Any], key: str, *, where: str) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise _FieldError(f"{where}{key} must be an integer")
    if value < 0:
        raise _FieldError(f"{where}{key} must not be negative")
    return value


def _optional_ts(obj: dict[str, Any], key: str, *, where: str) -> pd.Timestamp | None:
    value = obj.get(key)
    if value is None:
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        raise _FieldError(f"{where}{key} is not an RFC3339 timestamp") from None


def _parse_rule_group(entry: dict[str, Any]) -> RuleGroup | None:
    if entry.get("ruleGroup") is None:
        return None

    rg = _section(entry, "ruleGroup", where="")
    name = rg.get("name")
    file = rg.get("file")
    if not all(v is None or isinstance(v, str) for v in (name, file)):
        raise _FieldError("ruleGroup name and file must be strings")
    return RuleGroup(name=name or "", file=file)


def _decode_entry(entry: dict[str, Any], line_number: LineNumber) -> LogRecord:
    params = _section(entry, "params", where="")
    stats = _section(entry, "stats", where="")
    timings = _section(stats, "timings", where="stats.")
    samples = _section(stats, "samples", where="stats.")

    ts = _optional_ts(entry, "ts", where="")

    query = params.get("query")
    if query is not None and not isinstance(query, str):
        raise _FieldError("params.query must be a string")
    if not query:
        raise EmptyQuery(line_number)

    if ts is None:
        raise _FieldError("ts is missing")

    step = params.get("step")
    if step is not None and (isinstance(step, bool) or not isinstance(step, int)):
        raise _FieldError("params.step must be an integer")

    numbers: dict[str, Any] = {
        field: _duration(timings, key, where="stats.timings.")
        for key, field in TIMING_FIELDS.items()
    }
    numbers.update(
        {
            field: _count(samples, key, where="stats.samples.")
            for key, field in SAMPLE_FIELDS.items()
        }
    )

    return LogRecord(
        query=query,
        timestamp=ts,
        line_number=line_number,
        params_start=_optional_ts(params, "start", where="params."),
        params_end=_optional_ts(params, "end", where="params."),
        params_step=step or 0,
        rule_group=_parse_rule_group(entry),
        **numbers,
    )


def decode_line(line: str, line_number: LineNumber) -> LogRecord:
    """
    Pure decode: one query log line -> LogRecord.

    Raises MalformedRecord when the line does not fit the schema and
    EmptyQuery when it fits but names no query.
    """
    text = line.rstrip("\r\n")

    try:
        entry = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedRecord(line_number, str(e)) from e

    if not isinstance(entry, dict):
        raise MalformedRecord(line_number, "record must be a JSON object")

    try:
        return _decode_entry(entry, line_number)
    except _FieldError as e:
        raise MalformedRecord(line_number, str(e)) from e
