from common.model.types import LineNumber


class QueryLogError(Exception):
    """Base class for every failure raised while analysing a query log."""


class MalformedRecord(QueryLogError):
    def __init__(self, line_number: LineNumber, reason: str):
        super().__init__(f"Failed to parse line {line_number}: {reason}")
        self.line_number = line_number
        self.reason = reason


class EmptyQuery(QueryLogError):
    """
    The line decoded but carries no query text. Callers skip it and go on.
    """

    def __init__(self, line_number: LineNumber):
        super().__init__(f"Failed to parse line {line_number}: empty query")
        self.line_number = line_number


class InvalidRank(QueryLogError, ValueError):
    def __init__(self, rank: float):
        super().__init__(
            f"percentile {rank} is out of range. Must be between 0 and 100"
        )
        self.rank = rank


class EmptyInput(QueryLogError, ValueError):
    def __init__(self, what: str = "samples"):
        super().__init__(f"cannot take a percentile of empty {what}")
        self.what = what


class InvalidQueryGroup(QueryLogError, ValueError):
    pass


class AggregationError(QueryLogError):
    pass


class EmptyLog(QueryLogError):
    def __init__(self) -> None:
        super().__init__("Loaded 0 queries")


class SourceUnavailable(QueryLogError):
    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to read the query log file {source}: {reason}")
        self.source = source
        self.reason = reason
