from __future__ import annotations

import math
from typing import List, Optional, Sequence

from folio_core.domain.models import PortfolioSummary, SimulationResult

PENSION_TAX_RATE = 0.35
SAFE_WITHDRAWAL_RATE = 0.04


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


def _sum_by_index(series: Sequence[Sequence[int]], length: int) -> List[int]:
    return [sum(s[i] if i < len(s) else 0 for s in series) for i in range(length)]


def combine_results(
    results: Sequence[SimulationResult],
    tax_rates: Optional[Sequence[float]] = None,
) -> Optional[PortfolioSummary]:
    """
    Sum several portfolios' percentile series month by month.

    Months come from the first result; a shorter series contributes 0 past its
    end. After-tax series apply each portfolio's own rate before summing.
    """
    if not results:
        return None
    if tax_rates is None:
        tax_rates = [0.0] * len(results)
    if len(tax_rates) != len(results):
        raise ValueError("tax_rates must match results")

    months = list(results[0].months)
    length = len(months)

    after = {"p10": [0] * length, "p50": [0] * length, "p90": [0] * length}
    for result, tax in zip(results, tax_rates):
        for key, values in (("p10", result.percentile10), ("p50", result.median), ("p90", result.percentile90)):
            for i, v in enumerate(values[:length]):
                after[key][i] += _round(v * (1 - tax))

    return PortfolioSummary(
        months=months,
        p10=_sum_by_index([r.percentile10 for r in results], length),
        p50=_sum_by_index([r.median for r in results], length),
        p90=_sum_by_index([r.percentile90 for r in results], length),
        p10_after_tax=after["p10"],
        p50_after_tax=after["p50"],
        p90_after_tax=after["p90"],
        has_tax=any(t > 0 for t in tax_rates),
    )


def pension_tax_rates(flags: Sequence[bool], rate: float = PENSION_TAX_RATE) -> List[float]:
    return [rate if is_pension else 0.0 for is_pension in flags]


def safe_monthly_income(total: float, tax_rate: float = 0.0, withdrawal_rate: float = SAFE_WITHDRAWAL_RATE) -> int:
    """Monthly income a balance supports under a fixed annual withdrawal rate."""
    after_tax = _round(total * (1 - tax_rate))
    return _round(after_tax * withdrawal_rate / 12)
