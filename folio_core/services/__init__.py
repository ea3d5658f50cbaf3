from folio_core.services.aggregation import aggregate_paths  # noqa: F401
from folio_core.services.allocations import rebalance  # noqa: F401
from folio_core.services.calendar import add_months, determine_start_date  # noqa: F401
from folio_core.services.schedule import build_schedule  # noqa: F401
from folio_core.services.simulator import run_simulation, simulate_paths  # noqa: F401
from folio_core.services.summary import combine_results, safe_monthly_income  # noqa: F401

__all__ = [
    "add_months",
    "aggregate_paths",
    "build_schedule",
    "combine_results",
    "determine_start_date",
    "rebalance",
    "run_simulation",
    "safe_monthly_income",
    "simulate_paths",
]
