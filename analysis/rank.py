from collections.abc import Sequence

import pandas as pd

from analysis import dfkeys as K
from analysis.groups import QueryGroup
from analysis.metrics import Metric, metric_value

_METRICS_FRAME_COLS = pd.Index([K.QUERY, K.N, *(m.value for m in Metric)])


def metrics_frame(groups: Sequence[QueryGroup]) -> pd.DataFrame:
    """
    One row per group (row label = position in `groups`), one column per metric.
    """
    if not groups:
        return pd.DataFrame(columns=_METRICS_FRAME_COLS)

    rows = [
        {
            K.QUERY: g.query,
            K.N: g.count,
            **{m.value: metric_value(g, m) for m in Metric},
        }
        for g in groups
    ]
    return pd.DataFrame(rows, columns=_METRICS_FRAME_COLS)


def rank_frame(frame: pd.DataFrame, metric: Metric, count: int) -> pd.DataFrame:
    n = min(max(count, 0), len(frame))
    # mergesort is stable: equal values keep their input order
    ordered = frame.sort_values(by=metric.value, ascending=False, kind="mergesort")
    return ordered.head(n)


def rank(
    groups: Sequence[QueryGroup],
    metric: Metric,
    count: int,
    *,
    frame: pd.DataFrame | None = None,
) -> list[QueryGroup]:
    """
    The `count` worst groups by `metric`, highest first.

    `frame` is the metrics_frame of `groups` when the caller ranks the same
    groups by several metrics and has already built it.
    """
    if not groups:
        return []

    if frame is None:
        frame = metrics_frame(groups)
    top = rank_frame(frame, metric, count)
    return [groups[int(i)] for i in top.index]
