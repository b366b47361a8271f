from __future__ import annotations

from dataclasses import replace
import json
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

ROOT = Path(__file__).resolve().parents[1]
CLI_SRC = ROOT / "apps" / "cli" / "src"
CORE_SRC = ROOT / "libs" / "core" / "src"

for candidate in (CLI_SRC, CORE_SRC):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from sortbench import registry  # noqa: E402
import sortbench.runner as core_runner  # noqa: E402
from sortbench_cli import main as cli_main  # noqa: E402
from sortbench_cli.runners import common as runners_common  # noqa: E402


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def broken_registry(monkeypatch: pytest.MonkeyPatch):
    def _boom(values):
        raise RuntimeError("boom")

    catalog = registry.list()
    catalog["heapsort"] = replace(catalog["heapsort"], sort_fn=_boom)
    monkeypatch.setattr(core_runner.registry, "list", lambda: dict(catalog))


def test_cli_list_algos(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["list-algos"])
    assert result.exit_code == 0
    for algo_id in registry.list():
        assert f"- {algo_id}:" in result.output
    assert "Quick Sort" in result.output
    assert "worst O(n²)" in result.output


def test_cli_demo(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["demo", "mergesort", "--size", "8", "--seed", "3"])
    assert result.exit_code == 0
    assert "[mergesort] verify=True" in result.output


def test_cli_demo_unknown_algorithm(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["demo", "bogosort"])
    assert result.exit_code == 2


def test_cli_run_json(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["run", "--size", "1000", "--algo", "heapsort", "--seed", "1", "--json"])
    assert result.exit_code == 0
    start = result.stdout.index("{")
    payload = json.loads(result.stdout[start:])
    assert payload["array_size"] == 1000
    assert payload["selection"] == "heapsort"
    assert payload["results"][0]["algorithm_id"] == "heapsort"
    assert payload["results"][0]["rank"] == 1
    assert payload["results"][0]["is_sorted"] is True


def test_cli_run_table_and_export(cli_runner: CliRunner, tmp_path: Path) -> None:
    target = tmp_path / "out" / "batch.json"
    result = cli_runner.invoke(
        cli_main.app,
        ["run", "-n", "1000", "-a", "all", "--seed", "2", "--export", str(target)],
    )
    assert result.exit_code == 0
    assert "Fastest:" in result.output
    assert "x faster than" in result.output
    assert "[6/6]" in result.output
    data = json.loads(target.read_text(encoding="utf-8"))
    assert len(data["results"]) == 6
    assert sorted(r["rank"] for r in data["results"]) == [1, 2, 3, 4, 5, 6]
    assert "python" in data["environment"]


def test_cli_run_rejects_bad_size(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["run", "--size", "1234"])
    assert result.exit_code == 2
    assert "not in allowed set" in result.output


def test_cli_run_strict_reports_failures(cli_runner: CliRunner, broken_registry) -> None:
    lenient = cli_runner.invoke(cli_main.app, ["run", "-n", "1000"])
    assert lenient.exit_code == 0
    assert "FAILED (RuntimeError: boom)" in lenient.output

    strict = cli_runner.invoke(cli_main.app, ["run", "-n", "1000", "--strict"])
    assert strict.exit_code == 1
    assert "heapsort" in strict.output


def test_format_duration_units() -> None:
    assert runners_common.format_duration(0.5) == "500.00 μs"
    assert runners_common.format_duration(12.345) == "12.35 ms"
    assert runners_common.format_duration(2500) == "2.500 s"


def test_export_json_skips_without_path() -> None:
    batch = core_runner.run_benchmark(1000, "mergesort")
    assert runners_common.export_json(batch, None) is None


def test_format_insight_single_result_has_no_ratio() -> None:
    batch = core_runner.run_benchmark(1000, "heapsort")
    line = runners_common.format_insight(batch)
    assert line.startswith("Fastest: Heap Sort (")
    assert "faster than" not in line
