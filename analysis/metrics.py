from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

from analysis import dfkeys as K
from analysis.groups import QueryGroup
from parsers.querylog.records import LogRecord


class Metric(StrEnum):
    AVG_EXECUTION_TIME = K.AVG_EXECUTION_TIME
    MAX_EXECUTION_TIME = K.MAX_EXECUTION_TIME
    AVG_TOTAL_QUERYABLE_SAMPLES = K.AVG_TOTAL_QUERYABLE_SAMPLES
    MAX_TOTAL_QUERYABLE_SAMPLES = K.MAX_TOTAL_QUERYABLE_SAMPLES
    AVG_PEAK_SAMPLES = K.AVG_PEAK_SAMPLES
    MAX_PEAK_SAMPLES = K.MAX_PEAK_SAMPLES


type MetricKind = Literal["avg", "max"]


@dataclass(frozen=True, slots=True)
class MetricSpec:
    """
    One ranked table. For "max" tables, provenance returns the record that
    holds the maximum.
    """

    metric: Metric
    title: str
    unit: str
    kind: MetricKind
    value: Callable[[QueryGroup], float | int]
    provenance: Callable[[QueryGroup], LogRecord] | None = None


@dataclass(frozen=True, slots=True)
class PercentileSpec:
    title: str
    unit: str
    sample: Callable[[LogRecord], float | int]


METRIC_SPECS: dict[Metric, MetricSpec] = {
    Metric.AVG_EXECUTION_TIME: MetricSpec(
        metric=Metric.AVG_EXECUTION_TIME,
        title="average execution time",
        unit="s",
        kind="avg",
        value=lambda g: g.avg_execution_time,
    ),
    Metric.MAX_EXECUTION_TIME: MetricSpec(
        metric=Metric.MAX_EXECUTION_TIME,
        title="max execution time",
        unit="s",
        kind="max",
        value=lambda g: g.max_execution_time_record.execution_time_seconds,
        provenance=lambda g: g.max_execution_time_record,
    ),
    Metric.AVG_TOTAL_QUERYABLE_SAMPLES: MetricSpec(
        metric=Metric.AVG_TOTAL_QUERYABLE_SAMPLES,
        title="average total queryable samples",
        unit="",
        kind="avg",
        value=lambda g: g.avg_total_queryable_samples,
    ),
    Metric.MAX_TOTAL_QUERYABLE_SAMPLES: MetricSpec(
        metric=Metric.MAX_TOTAL_QUERYABLE_SAMPLES,
        title="max total queryable samples",
        unit="",
        kind="max",
        value=lambda g: g.max_total_queryable_samples_record.total_queryable_samples,
        provenance=lambda g: g.max_total_queryable_samples_record,
    ),
    Metric.AVG_PEAK_SAMPLES: MetricSpec(
        metric=Metric.AVG_PEAK_SAMPLES,
        title="average peak samples",
        unit="",
        kind="avg",
        value=lambda g: g.avg_peak_samples,
    ),
    Metric.MAX_PEAK_SAMPLES: MetricSpec(
        metric=Metric.MAX_PEAK_SAMPLES,
        title="max peak samples",
        unit="",
        kind="max",
        value=lambda g: g.max_peak_samples_record.peak_samples,
        provenance=lambda g: g.max_peak_samples_record,
    ),
}

EXECUTION_TIME_PERCENTILE = PercentileSpec(
    title="total execution time",
    unit=" seconds",
    sample=lambda r: r.execution_time_seconds,
)
TOTAL_QUERYABLE_SAMPLES_PERCENTILE = PercentileSpec(
    title="total queryable samples",
    unit="",
    sample=lambda r: r.total_queryable_samples,
)
PEAK_SAMPLES_PERCENTILE = PercentileSpec(
    title="peak samples",
    unit="",
    sample=lambda r: r.peak_samples,
)

# Report layout: each percentile summary followed by its avg and max tables
REPORT_SECTIONS: tuple[PercentileSpec | MetricSpec, ...] = (
    EXECUTION_TIME_PERCENTILE,
    METRIC_SPECS[Metric.AVG_EXECUTION_TIME],
    METRIC_SPECS[Metric.MAX_EXECUTION_TIME],
    TOTAL_QUERYABLE_SAMPLES_PERCENTILE,
    METRIC_SPECS[Metric.AVG_TOTAL_QUERYABLE_SAMPLES],
    METRIC_SPECS[Metric.MAX_TOTAL_QUERYABLE_SAMPLES],
    PEAK_SAMPLES_PERCENTILE,
    METRIC_SPECS[Metric.AVG_PEAK_SAMPLES],
    METRIC_SPECS[Metric.MAX_PEAK_SAMPLES],
)

PERCENTILE_SPECS: tuple[PercentileSpec, ...] = (
    EXECUTION_TIME_PERCENTILE,
    TOTAL_QUERYABLE_SAMPLES_PERCENTILE,
    PEAK_SAMPLES_PERCENTILE,
)


def metric_value(group: QueryGroup, metric: Metric) -> float | int:
    return METRIC_SPECS[metric].value(group)
