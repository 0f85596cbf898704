import re
import sys
from dataclasses import dataclass
from typing import Protocol, TextIO

from analysis.groups import QueryGroup
from analysis.metrics import REPORT_SECTIONS, MetricSpec, PercentileSpec
from analysis.results import PercentileSummary, PipelineOutput
from common.parse.time import format_rfc3339

_NEWLINE_RE = re.compile(r"\n\s*")


class ReportPresenter(Protocol):
    """
    Responsible for final output format. Decouples the math from the view
    """

    def present(self, output: PipelineOutput) -> None: ...


def collapse_newlines(query: str) -> str:
    return _NEWLINE_RE.sub("", query)


def _format_value(value: float | int) -> str:
    if isinstance(value, int):
        return f"{value:d}"
    return f"{value:.3f}"


def _rule_suffix(group: QueryGroup) -> str:
    name = group.rule_group_name
    return "" if name is None else f' | ruleName="{name}"'


def format_percentile_line(summary: PercentileSummary) -> str:
    spec = summary.spec
    return (
        f"The {summary.rank}th percentile of {spec.title} is "
        f"{_format_value(summary.value)}{spec.unit}"
    )


def format_row(index: int, group: QueryGroup, spec: MetricSpec) -> str:
    value = spec.value(group)
    query = collapse_newlines(group.query)

    if spec.kind == "avg" or spec.provenance is None:
        line = f"{index:2d}) n={group.count:<6d} {value:.3f}{spec.unit} {query}"
    else:
        ts = format_rfc3339(spec.provenance(group).timestamp)
        line = f"{index:2d}) t={ts} {_format_value(value)}{spec.unit} {query}"

    return line + _rule_suffix(group)


@dataclass(slots=True)
class ConsoleReport:
    """
    Prints the percentile summaries and the six ranked tables as plain text.
    """

    out: TextIO | None = None

    def present(self, output: PipelineOutput) -> None:
        for section in REPORT_SECTIONS:
            self._emit("")
            match section:
                case PercentileSpec():
                    self._emit(format_percentile_line(output.percentile_for(section)))
                case MetricSpec():
                    self._print_table(section, output.rankings[section.metric].groups)

    def _print_table(self, spec: MetricSpec, groups: list[QueryGroup]) -> None:
        self._emit(f"Top {len(groups)} queries by {spec.title}:")
        for i, group in enumerate(groups, start=1):
            self._emit(format_row(i, group, spec))

    def _emit(self, line: str) -> None:
        print(line, file=self.out or sys.stdout)
