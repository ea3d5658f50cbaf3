from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Dict, List, Optional, Sequence

DEFAULT_CYCLES = 15000
DEFAULT_YEARS = 15
FALLBACK_START_DATE = dt.date(2025, 1, 1)


@dataclasses.dataclass(frozen=True)
class AssetAllocation:
    weight_percent: float  # 0..100, not normalized across allocations
    annual_return: float  # CAGR as a fraction
    annual_volatility: float
    symbol: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class Deposit:
    date: dt.date
    amount: float


@dataclasses.dataclass(frozen=True)
class RecurringDepositChange:
    effective_date: dt.date
    monthly_amount: float


@dataclasses.dataclass(frozen=True)
class SimulationRequest:
    allocations: Sequence[AssetAllocation]
    one_time_deposits: Sequence[Deposit] = ()
    recurring_changes: Sequence[RecurringDepositChange] = ()
    cycles: int = DEFAULT_CYCLES
    years: int = DEFAULT_YEARS

    @property
    def total_months(self) -> int:
        return self.years * 12


@dataclasses.dataclass(frozen=True)
class SimulatorConfig:
    default_cycles: int = DEFAULT_CYCLES
    default_years: int = DEFAULT_YEARS
    fallback_start_date: dt.date = FALLBACK_START_DATE
    workers: Optional[int] = 1  # None -> os.cpu_count()
    chunk_size: int = 2500
    seed: Optional[int] = None
    paired_normals: bool = False
    timeout_seconds: Optional[float] = None


@dataclasses.dataclass
class SimulationResult:
    start_date: dt.date
    months: List[int]
    mean: List[int]
    median: List[int]
    percentile10: List[int]
    percentile90: List[int]

    def series(self) -> Dict[str, List[int]]:
        return {
            "mean": self.mean,
            "median": self.median,
            "percentile10": self.percentile10,
            "percentile90": self.percentile90,
        }


@dataclasses.dataclass
class PortfolioSummary:
    months: List[int]
    p10: List[int]
    p50: List[int]
    p90: List[int]
    p10_after_tax: List[int]
    p50_after_tax: List[int]
    p90_after_tax: List[int]
    has_tax: bool = False
