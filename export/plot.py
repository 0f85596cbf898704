import matplotlib.pyplot as plt
import numpy as np

from analysis.metrics import METRIC_SPECS, Metric
from analysis.results import PipelineOutput
from export.console import collapse_newlines

_MAX_LABEL = 60


def _label(query: str) -> str:
    q = collapse_newlines(query)
    return q if len(q) <= _MAX_LABEL else q[: _MAX_LABEL - 3] + "..."


def plot_ranked_view(
    output: PipelineOutput,
    *,
    metric: Metric = Metric.AVG_EXECUTION_TIME,
    title: str = "",
) -> None:
    """
    Show a horizontal bar chart of one ranked table, worst query on top.
    Nothing is written to disk.
    """
    spec = METRIC_SPECS[metric]
    groups = output.rankings[metric].groups
    if not groups:
        return

    y = np.arange(len(groups))
    values = [spec.value(g) for g in groups]
    labels = [_label(g.query) for g in groups]

    fig, ax = plt.subplots(figsize=(12, max(3, 0.4 * len(groups) + 1)))
    try:
        ax.barh(y, values)
        ax.set_yticks(y)
        ax.set_yticklabels(labels, fontsize=8)
        ax.invert_yaxis()
        ax.set_xlabel(f"{spec.title} ({spec.unit})" if spec.unit else spec.title)
        ax.set_title(title or f"Top {len(groups)} queries by {spec.title}")
        fig.tight_layout()
        plt.show()
    finally:
        plt.close(fig)
