"""End-to-end tests for the command-line driver."""

from __future__ import annotations

import io
from importlib.metadata import PackageNotFoundError
from pathlib import Path

import matplotlib.pyplot as plt
import pytest

import main as driver
from analysis.metrics import Metric
from common.model.config import QueryLogConfig
from export.plot import plot_ranked_view
from pipeline import execute_pipeline


@pytest.fixture
def argv_base(tmp_path: Path) -> list[str]:
    return ["--env-file", str(tmp_path / "missing.env")]


@pytest.fixture
def log_file(tmp_path: Path, make_line) -> Path:
    path = tmp_path / "query.log"
    path.write_text(
        "".join(
            [
                make_line("up", exec_time=1.0, total_samples=10, peak_samples=1),
                make_line("up", exec_time=2.0, total_samples=20, peak_samples=2),
                make_line("up", exec_time=3.0, total_samples=30, peak_samples=3),
                make_line(
                    "sum by (job) (\n  rate(errors_total[5m])\n)",
                    exec_time=0.5,
                    total_samples=500,
                    peak_samples=50,
                    rule_group="error-alerts",
                ),
            ]
        ),
        encoding="utf-8",
    )
    return path


class TestMain:
    """Tests for main.main."""

    def test_report_from_file(self, argv_base, log_file: Path, capsys) -> None:
        """A readable log prints the full report and diagnostics to stderr."""
        driver.main(argv_base + ["-f", str(log_file), "-p", "50"])

        captured = capsys.readouterr()
        assert "Top 2 queries by average execution time:" in captured.out
        assert " 1) n=3      2.000s up" in captured.out
        assert (
            ' 1) t=2024-05-01T10:00:00Z 500 sum by (job) (rate(errors_total[5m]))'
            ' | ruleName="error-alerts"'
        ) in captured.out
        assert f"Reading the query log from {log_file}" in captured.err
        assert "Loaded 4 entries" in captured.err

    def test_report_from_stdin(self, argv_base, make_line, monkeypatch, capsys) -> None:
        """'-' reads the log from standard input."""
        monkeypatch.setattr("sys.stdin", io.StringIO(make_line("up", exec_time=1.0)))

        driver.main(argv_base)

        captured = capsys.readouterr()
        assert "Top 1 queries by max execution time:" in captured.out
        assert "Reading the query log from stdin" in captured.err

    def test_malformed_line_exits_without_report(
        self, argv_base, tmp_path: Path, make_line, capsys
    ) -> None:
        """Decode failure terminates with the line number and prints no tables."""
        path = tmp_path / "broken.log"
        path.write_text(make_line("up") + "{oops\n" + make_line("up"), encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            driver.main(argv_base + ["-f", str(path)])

        assert "Failed to parse line 2" in str(exc.value.code)
        assert "Top" not in capsys.readouterr().out

    def test_missing_file(self, argv_base, tmp_path: Path) -> None:
        """An unreadable source is a fatal error."""
        with pytest.raises(SystemExit) as exc:
            driver.main(argv_base + ["-f", str(tmp_path / "absent.log")])

        assert str(exc.value.code).startswith("Error: Failed to read the query log file")

    def test_only_empty_queries(self, argv_base, tmp_path: Path, make_line, capsys) -> None:
        """Zero groups exits with an error after warning about each skip."""
        path = tmp_path / "empty.log"
        path.write_text(make_line("") + make_line(""), encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            driver.main(argv_base + ["-f", str(path)])

        assert exc.value.code == "Error: Loaded 0 queries"
        assert capsys.readouterr().err.count("WARNING: Failed to parse line") == 2

    @pytest.mark.parametrize("rank", ["0", "101"])
    def test_out_of_range_percentile(self, argv_base, log_file: Path, rank: str) -> None:
        """Percentile ranks outside 1..100 terminate the run."""
        with pytest.raises(SystemExit) as exc:
            driver.main(argv_base + ["-f", str(log_file), "-p", rank])

        assert "out of range" in str(exc.value.code)

    def test_version(self, argv_base, monkeypatch, capsys) -> None:
        """--version prints the installed version and exits 0."""
        monkeypatch.setattr(driver, "version", lambda _: "1.2.3")

        with pytest.raises(SystemExit) as exc:
            driver.main(argv_base + ["--version"])

        assert exc.value.code == 0
        assert capsys.readouterr().out.strip() == "1.2.3"

    def test_version_without_metadata(self, argv_base, monkeypatch, capsys) -> None:
        """Missing package metadata exits with status 13."""

        def _missing(_: str) -> str:
            raise PackageNotFoundError("querylog-top")

        monkeypatch.setattr(driver, "version", _missing)

        with pytest.raises(SystemExit) as exc:
            driver.main(argv_base + ["--version"])

        assert exc.value.code == 13
        assert "Failed to get build info" in capsys.readouterr().out

    def test_plot_flag_shows_chart(self, argv_base, log_file: Path, monkeypatch) -> None:
        """--plot hands the output to the chart presenter."""
        seen = []
        monkeypatch.setattr(driver, "plot_ranked_view", seen.append)

        driver.main(argv_base + ["-f", str(log_file), "--plot"])

        assert len(seen) == 1
        assert seen[0].rankings[Metric.AVG_EXECUTION_TIME].groups[0].query == "up"


class TestPlotRankedView:
    """Tests for the chart presenter."""

    def test_draws_one_bar_per_group(self, make_line, monkeypatch) -> None:
        """The chart has a bar per ranked query and is shown, not saved."""
        bars = []

        def _show() -> None:
            bars.extend(plt.gca().patches)

        monkeypatch.setattr(plt, "show", _show)
        output = execute_pipeline(
            [make_line(q, exec_time=float(i)) for i, q in enumerate("abc")],
            QueryLogConfig(),
        )

        plot_ranked_view(output)

        assert len(bars) == 3
        assert plt.get_fignums() == []
