from collections.abc import Iterable

from analysis.aggregate import Aggregation, aggregate
from analysis.metrics import PERCENTILE_SPECS, Metric
from analysis.percentile import percentile, validate_rank
from analysis.rank import metrics_frame, rank
from analysis.results import PercentileSummary, PipelineOutput, RankedView
from common.errors import EmptyLog
from common.model.config import QueryLogConfig
from common.reporting import NullReporter, Reporter


def _summarize_percentiles(agg: Aggregation, p: int) -> tuple[PercentileSummary, ...]:
    """
    Percentiles run over every filtered record, not per group.
    """
    return tuple(
        PercentileSummary(
            spec=spec,
            rank=p,
            value=percentile(p, [spec.sample(r) for r in agg.records]),
        )
        for spec in PERCENTILE_SPECS
    )


def _rank_all(agg: Aggregation, top: int) -> dict[Metric, RankedView]:
    # one frame, six independent orderings; the groups are never mutated
    frame = metrics_frame(agg.groups)
    return {
        metric: RankedView(
            metric=metric, groups=rank(agg.groups, metric, top, frame=frame)
        )
        for metric in Metric
    }


def execute_pipeline(
    lines: Iterable[str],
    cfg: QueryLogConfig,
    *,
    reporter: Reporter | None = None,
) -> PipelineOutput:
    """
    Orchestrates the analysis: Aggregate -> Percentiles -> Rank.
    """
    rep: Reporter = reporter if reporter is not None else NullReporter()

    validate_rank(cfg.percentile)

    agg = aggregate(lines, window=cfg.window, reporter=rep)
    if agg.empty:
        raise EmptyLog()

    return PipelineOutput(
        aggregation=agg,
        percentiles=_summarize_percentiles(agg, cfg.percentile),
        rankings=_rank_all(agg, cfg.top),
    )
