import sys
from importlib.metadata import PackageNotFoundError, version

from cli import parse_cli_args
from common.errors import QueryLogError
from common.model.config import QueryLogConfig
from common.model.constants import NO_BUILD_INFO_EXIT, PROJECT_DIST
from common.reporting import PrintReporter, Reporter
from export.console import ConsoleReport
from export.plot import plot_ranked_view
from parsers._reader import open_source
from pipeline import execute_pipeline


def show_version() -> int:
    try:
        print(version(PROJECT_DIST))
    except PackageNotFoundError:
        print("Failed to get build info")
        return NO_BUILD_INFO_EXIT
    return 0


def run(cfg: QueryLogConfig, *, reporter: Reporter) -> None:
    if cfg.reads_stdin:
        reporter.info("Reading the query log from stdin")
    else:
        reporter.info(f"Reading the query log from {cfg.source}")

    with open_source(cfg.source) as stream:
        output = execute_pipeline(stream, cfg, reporter=reporter)

    ConsoleReport().present(output)

    if cfg.plot:
        plot_ranked_view(output)


def main(argv: list[str] | None = None) -> None:
    cfg = parse_cli_args(argv)

    if cfg.show_version:
        sys.exit(show_version())

    try:
        run(cfg, reporter=PrintReporter())
    except QueryLogError as e:
        sys.exit(f"Error: {e}")


if __name__ == "__main__":
    main()
