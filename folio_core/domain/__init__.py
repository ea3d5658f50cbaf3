from folio_core.domain.errors import (  # noqa: F401
    InvalidInputError,
    SimulationError,
    SimulationTimeoutError,
)
from folio_core.domain.models import (  # noqa: F401
    AssetAllocation,
    Deposit,
    PortfolioSummary,
    RecurringDepositChange,
    SimulationRequest,
    SimulationResult,
    SimulatorConfig,
)

__all__ = [
    "AssetAllocation",
    "Deposit",
    "InvalidInputError",
    "PortfolioSummary",
    "RecurringDepositChange",
    "SimulationError",
    "SimulationRequest",
    "SimulationResult",
    "SimulationTimeoutError",
    "SimulatorConfig",
]
