import sys
from dataclasses import dataclass
from typing import Protocol, TextIO


class Reporter(Protocol):
    def info(self, msg: str) -> None: ...

    def warning(self, msg: str) -> None: ...


@dataclass(frozen=True, slots=True)
class PrintReporter:
    """
    Diagnostics go to stderr so they never interleave with the report on stdout.
    """

    stream: TextIO | None = None

    def info(self, msg: str) -> None:
        print(msg, file=self.stream or sys.stderr)

    def warning(self, msg: str) -> None:
        print(f"WARNING: {msg}", file=self.stream or sys.stderr)


@dataclass(frozen=True, slots=True)
class NullReporter:
    def info(self, msg: str) -> None:
        return

    def warning(self, msg: str) -> None:
        return
