"""Shared fixtures for the query log tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import matplotlib
import pandas as pd
import pytest

from parsers.querylog.records import LogRecord, RuleGroup

matplotlib.use("Agg")

BASE_TS = "2024-05-01T10:00:00Z"


@dataclass
class ListReporter:
    """Reporter that keeps every message for assertions."""

    infos: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def info(self, msg: str) -> None:
        self.infos.append(msg)

    def warning(self, msg: str) -> None:
        self.warnings.append(msg)


def build_entry(
    query: str | None = "up",
    *,
    ts: str | None = BASE_TS,
    exec_time: float = 0.0,
    total_samples: int = 0,
    peak_samples: int = 0,
    rule_group: str | None = None,
) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "params": {"query": query, "start": ts, "end": ts, "step": 0},
        "stats": {
            "timings": {
                "evalTotalTime": exec_time,
                "execQueueTime": 0.00001,
                "execTotalTime": exec_time,
                "innerEvalTime": exec_time,
                "queryPreparationTime": 0.0,
                "resultSortTime": 0.0,
            },
            "samples": {
                "totalQueryableSamples": total_samples,
                "peakSamples": peak_samples,
            },
        },
    }
    if ts is not None:
        entry["ts"] = ts
    if rule_group is not None:
        entry["ruleGroup"] = {"name": rule_group, "file": "/etc/rules/alerts.yml"}
    return entry


@pytest.fixture
def reporter() -> ListReporter:
    return ListReporter()


@pytest.fixture
def make_line() -> Callable[..., str]:
    """Return a builder of JSON query log lines."""

    def _make(query: str | None = "up", **kwargs: Any) -> str:
        return json.dumps(build_entry(query, **kwargs)) + "\n"

    return _make


@pytest.fixture
def make_record() -> Callable[..., LogRecord]:
    """Return a builder of already-decoded LogRecords."""
    counter = iter(range(1, 10_000))

    def _make(
        query: str = "up",
        *,
        ts: str = BASE_TS,
        exec_time: float = 0.0,
        total_samples: int = 0,
        peak_samples: int = 0,
        rule_group: str | None = None,
    ) -> LogRecord:
        return LogRecord(
            query=query,
            timestamp=pd.Timestamp(ts),
            line_number=next(counter),
            execution_time_seconds=exec_time,
            total_queryable_samples=total_samples,
            peak_samples=peak_samples,
            rule_group=RuleGroup(name=rule_group) if rule_group else None,
        )

    return _make
