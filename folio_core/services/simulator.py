from __future__ import annotations

import datetime as dt
import multiprocessing
import os
import time
from typing import List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from folio_core.domain.errors import InvalidInputError, SimulationTimeoutError
from folio_core.domain.models import AssetAllocation, SimulationRequest, SimulationResult, SimulatorConfig
from folio_core.services.aggregation import aggregate_paths
from folio_core.services.calendar import determine_start_date
from folio_core.services.sampling import BoxMullerSampler
from folio_core.services.schedule import DepositSchedule, build_schedule


def simulate_paths(
    schedule: DepositSchedule,
    allocations: Sequence[AssetAllocation],
    n_paths: int,
    sampler: BoxMullerSampler,
) -> np.ndarray:
    """
    Monthly value paths, shape (n_paths, months).

    Each month: add the scheduled cash, then (from month 1 on, and only while
    the value is positive) apply one multiplicative step per allocation,
    1 + (cagr/12 + z*vol/sqrt(12)) * weight/100, with a fresh z per path and
    allocation. Month 0 never grows.
    """
    months = schedule.months
    paths = np.zeros((n_paths, months), dtype=float)
    if n_paths <= 0 or months == 0:
        return paths

    drift = np.array([a.annual_return / 12.0 for a in allocations], dtype=float)
    scale = np.array([a.annual_volatility / np.sqrt(12.0) for a in allocations], dtype=float)
    weights = np.array([a.weight_percent / 100.0 for a in allocations], dtype=float)

    value = np.zeros(n_paths, dtype=float)
    for month in range(months):
        value = value + schedule.contributions[month]

        if month > 0:
            growing = value > 0
            n_growing = int(growing.sum())
            if n_growing:
                z = sampler.standard_normal((n_growing, len(allocations)))
                monthly_returns = drift + z * scale
                base = value[growing]
                # sequential adjustments, not a weighted sum of sub-portfolios
                for k in range(len(allocations)):
                    base = base * (1.0 + monthly_returns[:, k] * weights[k])
                value[growing] = base

        paths[:, month] = value

    return paths


def _simulate_chunk(
    schedule: DepositSchedule,
    allocations: Sequence[AssetAllocation],
    n_paths: int,
    seed_seq: np.random.SeedSequence,
    paired: bool,
) -> np.ndarray:
    sampler = BoxMullerSampler(np.random.default_rng(seed_seq), paired=paired)
    return simulate_paths(schedule, allocations, n_paths, sampler)


def _chunk_sizes(cycles: int, chunk_size: int) -> List[int]:
    if cycles <= 0:
        return []
    chunk_size = max(1, chunk_size)
    full, rest = divmod(cycles, chunk_size)
    sizes = [chunk_size] * full
    if rest:
        sizes.append(rest)
    return sizes


def _resolve_workers(config: SimulatorConfig) -> int:
    if config.workers is None:
        return os.cpu_count() or 1
    return max(1, config.workers)


def validate_request(request: SimulationRequest) -> None:
    if not request.allocations:
        raise InvalidInputError("No allocations provided")
    for deposit in request.one_time_deposits:
        if not isinstance(deposit.date, dt.date):
            raise InvalidInputError("Malformed deposit date", details=repr(deposit.date))
    for change in request.recurring_changes:
        if not isinstance(change.effective_date, dt.date):
            raise InvalidInputError("Malformed monthly change date", details=repr(change.effective_date))


def run_paths(
    schedule: DepositSchedule,
    allocations: Sequence[AssetAllocation],
    cycles: int,
    config: SimulatorConfig,
) -> np.ndarray:
    """
    Fan chunks of paths out (in-process or over a process pool) and join them
    into one (cycles, months) array. Every chunk owns a generator spawned from
    a single SeedSequence, so a fixed seed gives the same paths regardless of
    the worker count.
    """
    sizes = _chunk_sizes(cycles, config.chunk_size)
    if not sizes:
        return np.zeros((0, schedule.months), dtype=float)

    seeds = np.random.SeedSequence(config.seed).spawn(len(sizes))
    args: List[Tuple] = [
        (schedule, tuple(allocations), size, seed, config.paired_normals) for size, seed in zip(sizes, seeds)
    ]
    workers = min(_resolve_workers(config), len(sizes))
    deadline = None if config.timeout_seconds is None else time.monotonic() + config.timeout_seconds

    if workers <= 1:
        logger.debug(f"Running {cycles} paths sequentially in {len(sizes)} chunk(s)")
        chunks = []
        for chunk_args in args:
            chunks.append(_simulate_chunk(*chunk_args))
            if deadline is not None and time.monotonic() > deadline:
                raise SimulationTimeoutError(f"Simulation exceeded {config.timeout_seconds}s")
    else:
        logger.debug(f"Running {cycles} paths in {len(sizes)} chunks over {workers} processes")
        with multiprocessing.Pool(processes=workers) as pool:
            pending = pool.starmap_async(_simulate_chunk, args)
            timeout = None if deadline is None else max(0.0, deadline - time.monotonic())
            try:
                chunks = pending.get(timeout=timeout)
            except multiprocessing.TimeoutError as exc:
                raise SimulationTimeoutError(f"Simulation exceeded {config.timeout_seconds}s") from exc

    return np.concatenate(chunks, axis=0)


def run_simulation(request: SimulationRequest, config: Optional[SimulatorConfig] = None) -> SimulationResult:
    config = config or SimulatorConfig()
    validate_request(request)

    cycles = max(0, int(request.cycles))
    start_date = determine_start_date(request, config.fallback_start_date)
    schedule = build_schedule(request, start_date)

    logger.info(
        f"Simulating {cycles} paths over {schedule.months} months "
        f"({len(request.allocations)} allocations) from {start_date.isoformat()}"
    )

    paths = run_paths(schedule, request.allocations, cycles, config)
    stats = aggregate_paths(paths)

    result = SimulationResult(
        start_date=start_date,
        months=list(range(schedule.months)),
        mean=stats["mean"],
        median=stats["median"],
        percentile10=stats["percentile10"],
        percentile90=stats["percentile90"],
    )
    if result.months:
        logger.info(f"Simulation complete: median at month {result.months[-1]} is {result.median[-1]}")
    return result
