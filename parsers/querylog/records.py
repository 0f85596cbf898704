from dataclasses import dataclass

import pandas as pd

from common.model.types import LineNumber, QueryText, SampleCount, Seconds


@dataclass(frozen=True, slots=True)
class RuleGroup:
    name: str
    file: str | None = None


@dataclass(frozen=True, slots=True)
class LogRecord:
    """
    One query log line. Numeric fields missing from the line are zero.
    """

    query: QueryText
    timestamp: pd.Timestamp
    line_number: LineNumber

    # stats.timings
    execution_time_seconds: Seconds = 0.0
    queued_time_seconds: Seconds = 0.0
    eval_time_seconds: Seconds = 0.0
    inner_eval_time_seconds: Seconds = 0.0
    sample_preparation_seconds: Seconds = 0.0
    result_sort_seconds: Seconds = 0.0

    # stats.samples
    total_queryable_samples: SampleCount = 0
    peak_samples: SampleCount = 0

    # params of a range query
    params_start: pd.Timestamp | None = None
    params_end: pd.Timestamp | None = None
    params_step: int = 0

    rule_group: RuleGroup | None = None

    @property
    def rule_group_name(self) -> str | None:
        return self.rule_group.name if self.rule_group is not None else None


# JSON layout of a query log line: section path -> {json key: record field}
TIMING_FIELDS: dict[str, str] = {
    "execTotalTime": "execution_time_seconds",
    "execQueueTime": "queued_time_seconds",
    "evalTotalTime": "eval_time_seconds",
    "innerEvalTime": "inner_eval_time_seconds",
    "queryPreparationTime": "sample_preparation_seconds",
    "resultSortTime": "result_sort_seconds",
}

SAMPLE_FIELDS: dict[str, str] = {
    "totalQueryableSamples": "total_queryable_samples",
    "peakSamples": "peak_samples",
}
