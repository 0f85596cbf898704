from dataclasses import dataclass

import pandas as pd

type QueryText = str
type LineNumber = int
type Seconds = float
type SampleCount = int


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """
    Inclusive [start, end] range; an unset bound does not filter.
    """

    start: pd.Timestamp | None = None
    end: pd.Timestamp | None = None

    def contains(self, ts: pd.Timestamp) -> bool:
        if self.start is not None and ts < self.start:
            return False
        if self.end is not None and ts > self.end:
            return False
        return True
