import json
from pathlib import Path

from typer.testing import CliRunner

from folio_core.cli import app


runner = CliRunner()
DATA = Path(__file__).parent / "data"


def _copy_fixture(tmp_path: Path, name: str) -> Path:
    target = tmp_path / name
    target.write_text((DATA / name).read_text())
    return target


def test_cli_simulate_and_summarize(tmp_path: Path):
    request_path = _copy_fixture(tmp_path, "request.json")
    brokerage_path = tmp_path / "brokerage.json"
    pension_path = tmp_path / "pension.json"
    csv_path = tmp_path / "brokerage.csv"

    result_sim = runner.invoke(
        app,
        [
            "simulate",
            "--request",
            str(request_path),
            "--seed",
            "7",
            "--out",
            str(brokerage_path),
            "--csv",
            str(csv_path),
        ],
    )
    assert result_sim.exit_code == 0, result_sim.stdout
    payload = json.loads(brokerage_path.read_text())
    assert payload["simulationStartDate"] == "2024-01-01"
    assert len(payload["median"]) == 3 * 12 + 1
    assert payload["median"][0] == 10500
    assert len(csv_path.read_text().strip().splitlines()) == 3 * 12 + 2

    result_pension = runner.invoke(
        app,
        [
            "simulate",
            "--request",
            str(request_path),
            "--deposits",
            str(_copy_fixture(tmp_path, "deposits.csv")),
            "--cycles",
            "100",
            "--years",
            "2",
            "--out",
            str(pension_path),
        ],
    )
    assert result_pension.exit_code == 0, result_pension.stdout
    pension = json.loads(pension_path.read_text())
    assert pension["median"][0] == 2100
    assert len(pension["months"]) == 25

    summary_path = tmp_path / "summary.json"
    result_summary = runner.invoke(
        app,
        [
            "summary",
            "--result",
            str(brokerage_path),
            "--result",
            str(pension_path),
            "--pension",
            str(pension_path),
            "--out",
            str(summary_path),
        ],
    )
    assert result_summary.exit_code == 0, result_summary.stdout
    summary = json.loads(summary_path.read_text())
    assert summary["has_tax"] is True
    assert summary["p50"][0] == 10500 + 2100
    assert summary["p50_after_tax"][0] == 10500 + 1365
    assert len(summary["months"]) == len(payload["months"])


def test_cli_simulate_prints_json_without_out(tmp_path: Path):
    request_path = _copy_fixture(tmp_path, "request.json")
    result = runner.invoke(app, ["simulate", "--request", str(request_path), "--cycles", "20", "--years", "1"])
    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert payload["months"] == list(range(13))


def test_cli_rejects_empty_allocations(tmp_path: Path):
    request_path = tmp_path / "empty.json"
    request_path.write_text(json.dumps({"allocations": [], "oneTimeDeposits": [], "monthlyChanges": []}))
    result = runner.invoke(app, ["simulate", "--request", str(request_path)])
    assert result.exit_code == 2
    assert "No allocations provided" in result.stdout


def test_cli_rebalance(tmp_path: Path):
    request_path = tmp_path / "request.json"
    request_path.write_text(
        json.dumps(
            {
                "allocations": [
                    {"allocation": 30, "cagr": 0.08, "volatility": 0.15},
                    {"allocation": 20, "cagr": 0.03, "volatility": 0.05},
                ],
                "cycles": 10,
                "years": 1,
            }
        )
    )
    out_path = tmp_path / "balanced.json"
    result = runner.invoke(app, ["rebalance", "--request", str(request_path), "--out", str(out_path)])
    assert result.exit_code == 0, result.stdout
    balanced = json.loads(out_path.read_text())
    assert [a["allocation"] for a in balanced["allocations"]] == [60.0, 40.0]
    assert balanced["cycles"] == 10


def test_cli_reports_overflow_generically(tmp_path: Path):
    request_path = tmp_path / "overflow.json"
    request_path.write_text(
        json.dumps(
            {
                "allocations": [{"allocation": 100, "cagr": 1e308, "volatility": 0}],
                "oneTimeDeposits": [{"date": "2024-01-01", "amount": 1000}],
                "cycles": 10,
                "years": 1,
            }
        )
    )
    result = runner.invoke(app, ["simulate", "--request", str(request_path)])
    assert result.exit_code == 1
    assert "Simulation error" in result.stdout
    assert isinstance(result.exception, SystemExit)
