from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from common.errors import InvalidQueryGroup
from common.model.types import QueryText
from parsers.querylog.records import LogRecord


def _mean_and_argmax(values: list[float] | list[int]) -> tuple[float, int]:
    # np.argmax returns the first occurrence, i.e. ties keep the earliest record
    arr = np.asarray(values)
    return float(arr.mean()), int(arr.argmax())


@dataclass(frozen=True, slots=True)
class QueryGroup:
    """
    Statistics for every record sharing one query text.
    Built through QueryGroup.build(), which computes everything up front.
    """

    query: QueryText
    records: tuple[LogRecord, ...]

    avg_execution_time: float
    avg_total_queryable_samples: float
    avg_peak_samples: float

    max_execution_time_record: LogRecord
    max_total_queryable_samples_record: LogRecord
    max_peak_samples_record: LogRecord

    @classmethod
    def build(cls, query: QueryText, records: Sequence[LogRecord]) -> "QueryGroup":
        if not query:
            raise InvalidQueryGroup("a query cannot be empty")
        if len(records) == 0:
            raise InvalidQueryGroup(
                "a number of log entries must be greater than zero"
            )

        recs = tuple(records)
        avg_exec, max_exec = _mean_and_argmax(
            [r.execution_time_seconds for r in recs]
        )
        avg_total, max_total = _mean_and_argmax(
            [r.total_queryable_samples for r in recs]
        )
        avg_peak, max_peak = _mean_and_argmax([r.peak_samples for r in recs])

        return cls(
            query=query,
            records=recs,
            avg_execution_time=avg_exec,
            avg_total_queryable_samples=avg_total,
            avg_peak_samples=avg_peak,
            max_execution_time_record=recs[max_exec],
            max_total_queryable_samples_record=recs[max_total],
            max_peak_samples_record=recs[max_peak],
        )

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def rule_group_name(self) -> str | None:
        """Rule group of the first record, used to annotate report rows."""
        return self.records[0].rule_group_name
