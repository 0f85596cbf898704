from dataclasses import dataclass

from analysis.aggregate import Aggregation
from analysis.groups import QueryGroup
from analysis.metrics import Metric, PercentileSpec


@dataclass(frozen=True, slots=True)
class PercentileSummary:
    spec: PercentileSpec
    rank: int
    value: float | int


@dataclass(frozen=True, slots=True)
class RankedView:
    metric: Metric
    groups: list[QueryGroup]


@dataclass(frozen=True, slots=True)
class PipelineOutput:
    """Container for everything the report renders."""

    aggregation: Aggregation
    percentiles: tuple[PercentileSummary, ...]
    rankings: dict[Metric, RankedView]

    def percentile_for(self, spec: PercentileSpec) -> PercentileSummary:
        return next(p for p in self.percentiles if p.spec is spec)
