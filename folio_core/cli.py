from __future__ import annotations

import dataclasses
import json
import sys
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from folio_core.domain.errors import InvalidInputError, SimulationError
from folio_core.domain.models import SimulationRequest, SimulationResult, SimulatorConfig
from folio_core.io import config as config_io
from folio_core.io import deposits as deposits_io
from folio_core.io import request as request_io
from folio_core.io import results as results_io
from folio_core.services import allocations as allocation_service
from folio_core.services import simulator
from folio_core.services import summary as summary_service
from folio_core.services.calendar import add_months, month_label

app = typer.Typer(help="Portfolio Monte Carlo projection CLI.")
console = Console()


def _save_json(path: Path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _load_config(
    config_path: Optional[Path],
    seed: Optional[int],
    workers: Optional[int],
    paired: bool,
    timeout: Optional[float],
) -> SimulatorConfig:
    base = config_io.load_simulator_config(config_path) if config_path else SimulatorConfig()
    overrides = {}
    if seed is not None:
        overrides["seed"] = seed
    if workers is not None:
        overrides["workers"] = None if workers == 0 else workers
    if paired:
        overrides["paired_normals"] = True
    if timeout is not None:
        overrides["timeout_seconds"] = timeout
    return dataclasses.replace(base, **overrides)


def _request_to_json(request: SimulationRequest) -> dict:
    return {
        "allocations": [
            {
                "allocation": a.weight_percent,
                "cagr": a.annual_return,
                "volatility": a.annual_volatility,
                **({"symbol": a.symbol} if a.symbol else {}),
            }
            for a in request.allocations
        ],
        "oneTimeDeposits": [{"date": d.date.isoformat(), "amount": d.amount} for d in request.one_time_deposits],
        "monthlyChanges": [
            {"date": c.effective_date.isoformat(), "amount": c.monthly_amount} for c in request.recurring_changes
        ],
        "cycles": request.cycles,
        "years": request.years,
    }


def _yearly_table(result: SimulationResult, tax_rate: float) -> Table:
    table = Table(title=f"Projection from {result.start_date.isoformat()}")
    table.add_column("Horizon")
    table.add_column("Date")
    for name in ("P10", "Median", "P90", "Mean", "Safe monthly (median)"):
        table.add_column(name, justify="right")

    for idx, month in enumerate(result.months):
        if month % 12 and month != result.months[-1]:
            continue
        table.add_row(
            month_label(month),
            add_months(result.start_date, month).strftime("%b %Y"),
            f"{result.percentile10[idx]:,}",
            f"{result.median[idx]:,}",
            f"{result.percentile90[idx]:,}",
            f"{result.mean[idx]:,}",
            f"{summary_service.safe_monthly_income(result.median[idx], tax_rate):,}",
        )
    return table


def _fail(message: str, details: Optional[str] = None, code: int = 2):
    console.print(f"[red]{message}[/red]" + (f" ({details})" if details else ""))
    raise typer.Exit(code=code)


@app.command()
def simulate(
    request: Path = typer.Option(..., help="Simulation request JSON (allocations, deposits, monthly changes)"),
    deposits: Optional[Path] = typer.Option(None, help="CSV with date,amount,kind replacing the request's deposits"),
    cycles: Optional[int] = typer.Option(None, help="Monte Carlo paths (overrides request)"),
    years: Optional[int] = typer.Option(None, help="Horizon in years (overrides request)"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    workers: Optional[int] = typer.Option(None, help="Worker processes (0 = all cores)"),
    paired: bool = typer.Option(False, help="Reuse the Box-Muller sine companion"),
    timeout: Optional[float] = typer.Option(None, help="Abort after this many seconds"),
    config: Optional[Path] = typer.Option(None, help="Simulator config JSON"),
    tax_rate: float = typer.Option(0.0, help="Tax rate applied to the safe monthly income column"),
    out: Optional[Path] = typer.Option(None, help="Output path for simulation JSON"),
    csv: Optional[Path] = typer.Option(None, help="Output path for a per-month CSV"),
    verbose: bool = typer.Option(False, help="Debug logging to stderr"),
):
    """Run a Monte Carlo projection of portfolio value."""
    _configure_logging(verbose)
    try:
        sim_conf = _load_config(config, seed, workers, paired, timeout)
        sim_request = request_io.load_request(request, sim_conf)
        if deposits:
            one_time, monthly = deposits_io.load_deposits(deposits)
            sim_request = dataclasses.replace(sim_request, one_time_deposits=one_time, recurring_changes=monthly)
        if cycles is not None:
            sim_request = dataclasses.replace(sim_request, cycles=cycles)
        if years is not None:
            sim_request = dataclasses.replace(sim_request, years=years)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            task = progress.add_task("Running simulation...", total=None)
            result = simulator.run_simulation(sim_request, sim_conf)
            progress.update(task, advance=1)
    except InvalidInputError as exc:
        _fail(exc.message, exc.details)
    except SimulationError as exc:
        _fail(str(exc), code=1)
    except Exception:  # noqa: BLE001
        logger.exception("Simulation failed")
        _fail("Simulation error", code=1)

    payload = request_io.result_to_json(result)
    if csv:
        results_io.write_result_csv(result, csv)
    if out:
        _save_json(out, payload)
        console.print(_yearly_table(result, tax_rate))
        typer.echo(f"Simulation written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


@app.command()
def summary(
    result: List[Path] = typer.Option(..., help="Simulation result JSON (repeatable)"),
    pension: List[Path] = typer.Option([], help="Result files taxed as pensions (repeatable)"),
    tax_rate: float = typer.Option(summary_service.PENSION_TAX_RATE, help="Pension tax rate"),
    out: Optional[Path] = typer.Option(None, help="Output path for summary JSON"),
):
    """Combine several portfolio projections into one summary."""
    results = []
    for path in result:
        with path.open("r", encoding="utf-8") as f:
            results.append(request_io.result_from_json(json.load(f)))

    taxed = {p.resolve() for p in pension}
    rates = summary_service.pension_tax_rates([p.resolve() in taxed for p in result], tax_rate)
    combined = summary_service.combine_results(results, rates)

    payload = dataclasses.asdict(combined)
    if out:
        _save_json(out, payload)
        typer.echo(f"Summary written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


@app.command()
def rebalance(
    request: Path = typer.Option(..., help="Simulation request JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for the rebalanced request"),
):
    """Scale allocation weights so they sum to 100%."""
    try:
        sim_request = request_io.load_request(request)
    except InvalidInputError as exc:
        _fail(exc.message, exc.details)

    before = allocation_service.total_weight(sim_request.allocations)
    balanced = dataclasses.replace(sim_request, allocations=allocation_service.rebalance(sim_request.allocations))
    payload = _request_to_json(balanced)
    if out:
        _save_json(out, payload)
        typer.echo(f"Rebalanced {before:.2f}% -> {allocation_service.total_weight(balanced.allocations):.2f}%, written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    app()
