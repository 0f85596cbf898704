from dataclasses import dataclass, field

from common.model.constants import DEFAULT_PERCENTILE, DEFAULT_TOP, STDIN_SOURCE
from common.model.types import TimeWindow


@dataclass(frozen=True, slots=True)
class QueryLogConfig:
    source: str = STDIN_SOURCE
    window: TimeWindow = field(default_factory=TimeWindow)
    percentile: int = DEFAULT_PERCENTILE
    top: int = DEFAULT_TOP
    show_version: bool = False
    plot: bool = False

    @property
    def reads_stdin(self) -> bool:
        return self.source == STDIN_SOURCE
