from collections.abc import Iterable
from dataclasses import dataclass

from common.errors import AggregationError, EmptyQuery, InvalidQueryGroup
from common.model.types import QueryText, TimeWindow
from common.parse.time import format_rfc3339
from common.reporting import NullReporter, Reporter
from parsers._reader import iter_lines
from parsers.querylog.decode import decode_line
from parsers.querylog.records import LogRecord

from analysis.groups import QueryGroup


@dataclass(frozen=True, slots=True)
class Aggregation:
    """
    Groups in first-appearance order of their query, plus every record that
    survived the time window, in arrival order.
    """

    groups: tuple[QueryGroup, ...]
    records: tuple[LogRecord, ...]
    skipped: int = 0

    @property
    def empty(self) -> bool:
        return not self.groups


@dataclass(slots=True)
class QueryLogCollector:
    window: TimeWindow
    reporter: Reporter
    records: list[LogRecord]
    buckets: dict[QueryText, list[LogRecord]]
    skipped: int = 0

    def on_line(self, lineno: int, line: str) -> None:
        try:
            rec = decode_line(line, lineno)
        except EmptyQuery as e:
            self.skipped += 1
            self.reporter.warning(str(e))
            return

        if not self.window.contains(rec.timestamp):
            return

        self.records.append(rec)
        self.buckets.setdefault(rec.query, []).append(rec)

    def finalize(self) -> Aggregation:
        groups: list[QueryGroup] = []
        for query, recs in self.buckets.items():
            try:
                groups.append(QueryGroup.build(query, recs))
            except InvalidQueryGroup as e:
                raise AggregationError(f"Failed to create query group: {e}") from e

        self._report_summary()
        return Aggregation(
            groups=tuple(groups), records=tuple(self.records), skipped=self.skipped
        )

    def _report_summary(self) -> None:
        if not self.records:
            self.reporter.info("Loaded 0 entries")
            return

        first = min(r.timestamp for r in self.records)
        last = max(r.timestamp for r in self.records)
        self.reporter.info(
            f"Loaded {len(self.records)} entries from "
            f"[{format_rfc3339(first)}] to [{format_rfc3339(last)}]"
        )


def aggregate(
    lines: Iterable[str],
    *,
    window: TimeWindow | None = None,
    reporter: Reporter | None = None,
) -> Aggregation:
    """
    Decode, window-filter and group a query log in one pass.

    The first malformed line aborts with MalformedRecord; lines without a
    query are skipped with a warning.
    """
    collector = QueryLogCollector(
        window=window if window is not None else TimeWindow(),
        reporter=reporter if reporter is not None else NullReporter(),
        records=[],
        buckets={},
    )

    for lineno, line in iter_lines(lines):
        collector.on_line(lineno, line)

    return collector.finalize()
