import datetime as dt

import numpy as np

from folio_core.domain.models import AssetAllocation, Deposit, RecurringDepositChange, SimulationRequest
from folio_core.services.calendar import add_months, determine_start_date, month_dates, month_label
from folio_core.services.schedule import build_schedule

ALLOC = [AssetAllocation(weight_percent=100, annual_return=0.0, annual_volatility=0.0)]


def test_add_months_clamps_to_month_end():
    assert add_months(dt.date(2024, 1, 31), 1) == dt.date(2024, 2, 29)
    assert add_months(dt.date(2023, 1, 31), 1) == dt.date(2023, 2, 28)
    assert add_months(dt.date(2024, 8, 31), 1) == dt.date(2024, 9, 30)
    assert add_months(dt.date(2024, 11, 15), 3) == dt.date(2025, 2, 15)


def test_month_dates_offset_from_start_not_cumulative():
    dates = month_dates(dt.date(2024, 1, 31), 3)
    assert dates == [dt.date(2024, 1, 31), dt.date(2024, 2, 29), dt.date(2024, 3, 31), dt.date(2024, 4, 30)]


def test_start_date_is_earliest_of_all_dates():
    request = SimulationRequest(
        allocations=ALLOC,
        one_time_deposits=[Deposit(dt.date(2024, 5, 1), 100), Deposit(dt.date(2024, 3, 1), 100)],
        recurring_changes=[RecurringDepositChange(dt.date(2024, 2, 1), 10)],
    )
    assert determine_start_date(request) == dt.date(2024, 2, 1)


def test_start_date_falls_back_when_no_dates():
    request = SimulationRequest(allocations=ALLOC)
    assert determine_start_date(request) == dt.date(2025, 1, 1)
    assert determine_start_date(request, dt.date(2026, 1, 1)) == dt.date(2026, 1, 1)


def test_schedule_tolerates_unsorted_changes():
    request = SimulationRequest(
        allocations=ALLOC,
        recurring_changes=[
            RecurringDepositChange(dt.date(2024, 7, 1), 200),
            RecurringDepositChange(dt.date(2024, 1, 1), 50),
        ],
        years=1,
    )
    schedule = build_schedule(request, dt.date(2024, 1, 1))
    assert schedule.months == 13
    assert list(schedule.monthly_amounts[:6]) == [50] * 6
    assert list(schedule.monthly_amounts[6:]) == [200] * 7


def test_same_day_changes_last_entry_wins():
    day = dt.date(2024, 1, 1)
    request = SimulationRequest(
        allocations=ALLOC,
        recurring_changes=[RecurringDepositChange(day, 10), RecurringDepositChange(day, 30)],
        years=1,
    )
    schedule = build_schedule(request, day)
    assert schedule.contributions[0] == 30


def test_non_positive_monthly_amount_adds_nothing():
    day = dt.date(2024, 1, 1)
    request = SimulationRequest(
        allocations=ALLOC,
        one_time_deposits=[Deposit(day, 1000)],
        recurring_changes=[RecurringDepositChange(day, 100), RecurringDepositChange(dt.date(2024, 3, 1), -50)],
        years=1,
    )
    schedule = build_schedule(request, day)
    assert list(schedule.contributions[:4]) == [1100, 100, 0, 0]
    assert schedule.monthly_amounts[3] == -50


def test_one_time_deposit_needs_exact_date():
    request = SimulationRequest(
        allocations=ALLOC,
        one_time_deposits=[
            Deposit(dt.date(2024, 1, 1), 100),
            Deposit(dt.date(2024, 1, 15), 999),
            Deposit(dt.date(2024, 3, 1), 40),
            Deposit(dt.date(2024, 3, 1), 60),
        ],
        years=1,
    )
    schedule = build_schedule(request, determine_start_date(request))
    assert np.isclose(schedule.contributions.sum(), 200)
    assert schedule.contributions[2] == 100


def test_month_label():
    assert month_label(0) == "0 Years"
    assert month_label(14) == "1 Years 2 Months"
    assert month_label(24) == "2 Years"
