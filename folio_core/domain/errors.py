from __future__ import annotations


class SimulationError(Exception):
    """Base class for failures surfaced by the simulator."""


class InvalidInputError(SimulationError, ValueError):
    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class SimulationTimeoutError(SimulationError):
    pass
