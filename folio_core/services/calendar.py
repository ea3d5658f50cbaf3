from __future__ import annotations

import datetime as dt
from typing import List

from dateutil.relativedelta import relativedelta

from folio_core.domain.models import FALLBACK_START_DATE, SimulationRequest


def add_months(start: dt.date, months: int) -> dt.date:
    """
    Advance by calendar months, clamping to the last day of the target month
    (Jan 31 + 1 -> Feb 28/29).
    """
    return start + relativedelta(months=months)


def month_dates(start: dt.date, total_months: int) -> List[dt.date]:
    # always offset from the start date so Jan 31 + 2 stays Mar 31
    return [add_months(start, m) for m in range(total_months + 1)]


def determine_start_date(request: SimulationRequest, fallback: dt.date = FALLBACK_START_DATE) -> dt.date:
    dates = [d.date for d in request.one_time_deposits]
    dates.extend(c.effective_date for c in request.recurring_changes)
    return min(dates) if dates else fallback


def month_label(offset: int) -> str:
    years, months = divmod(offset, 12)
    label = f"{years} Years"
    if months:
        label += f" {months} Months"
    return label
