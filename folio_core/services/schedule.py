from __future__ import annotations

import dataclasses
import datetime as dt
from collections import defaultdict
from typing import Dict, List

import numpy as np

from folio_core.domain.models import SimulationRequest
from folio_core.services.calendar import month_dates


@dataclasses.dataclass
class DepositSchedule:
    start_date: dt.date
    dates: List[dt.date]
    contributions: np.ndarray  # cash added at each month offset, before growth
    monthly_amounts: np.ndarray  # active recurring amount per month offset

    @property
    def months(self) -> int:
        return len(self.dates)


def build_schedule(request: SimulationRequest, start_date: dt.date) -> DepositSchedule:
    """
    Resolves deposits into a per-month cash vector. Deposits carry no
    randomness, so every path shares the same schedule.
    """
    total_months = max(request.total_months, -1)
    dates = month_dates(start_date, total_months)

    one_time: Dict[dt.date, float] = defaultdict(float)
    for deposit in request.one_time_deposits:
        one_time[deposit.date] += deposit.amount

    # stable sort: for equal dates the later input entry wins
    changes = sorted(request.recurring_changes, key=lambda c: c.effective_date)

    contributions = np.zeros(len(dates), dtype=float)
    monthly_amounts = np.zeros(len(dates), dtype=float)
    active = 0.0
    next_change = 0
    for idx, current in enumerate(dates):
        while next_change < len(changes) and changes[next_change].effective_date <= current:
            active = changes[next_change].monthly_amount
            next_change += 1
        monthly_amounts[idx] = active

        cash = one_time.get(current, 0.0)
        if active > 0:
            cash += active
        contributions[idx] = cash

    return DepositSchedule(
        start_date=start_date,
        dates=dates,
        contributions=contributions,
        monthly_amounts=monthly_amounts,
    )
