import sys
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from common.errors import SourceUnavailable
from common.model.constants import STDIN_SOURCE
from common.model.types import LineNumber


@contextmanager
def open_source(source: str, *, stdin: TextIO | None = None) -> Iterator[TextIO]:
    """
    Yield a text stream for a path, or for stdin when source is '-'.
    Only streams opened here are closed here.
    """
    if source == STDIN_SOURCE:
        yield stdin if stdin is not None else sys.stdin
        return

    path = Path(source).expanduser()
    try:
        f = path.open("r", encoding="utf-8", errors="replace")
    except OSError as e:
        raise SourceUnavailable(source, e.strerror or str(e)) from e

    with f:
        yield f


def iter_lines(stream: Iterable[str]) -> Iterator[tuple[LineNumber, str]]:
    """
    Yield (1-based line number, line) pairs, consuming the stream once.
    """
    for lineno, line in enumerate(stream, start=1):
        yield lineno, line
