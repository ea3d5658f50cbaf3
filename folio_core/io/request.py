from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from folio_core.domain.errors import InvalidInputError
from folio_core.domain.models import (
    AssetAllocation,
    Deposit,
    RecurringDepositChange,
    SimulationRequest,
    SimulationResult,
    SimulatorConfig,
)

DATE_FORMAT = "%Y-%m-%d"


def parse_date(raw: Any, field: str = "date") -> dt.date:
    if isinstance(raw, dt.datetime):
        return raw.date()
    if isinstance(raw, dt.date):
        return raw
    try:
        return dt.datetime.strptime(str(raw).strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidInputError(f"Malformed {field}", details=f"expected YYYY-MM-DD, got {raw!r}") from exc


def _number(item: Dict[str, Any], key: str, where: str) -> float:
    if key not in item or item[key] is None:
        raise InvalidInputError(f"Missing '{key}' in {where}")
    try:
        return float(item[key])
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid '{key}' in {where}", details=repr(item[key])) from exc


def _integer(raw: Any, key: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid '{key}'", details=repr(raw)) from exc


def _list(payload: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    items = payload.get(key) or []
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise InvalidInputError(f"'{key}' must be a list of objects")
    return items


def parse_request(payload: Dict[str, Any], config: Optional[SimulatorConfig] = None) -> SimulationRequest:
    """
    Build a SimulationRequest from the JSON wire shape:
    allocations[{allocation, cagr, volatility}], oneTimeDeposits[{date, amount}],
    monthlyChanges[{date, amount}], cycles, years.
    """
    config = config or SimulatorConfig()
    if not isinstance(payload, dict):
        raise InvalidInputError("Request body must be a JSON object")

    raw_allocations = payload.get("allocations")
    if not raw_allocations:
        raise InvalidInputError("No allocations provided")

    allocations = [
        AssetAllocation(
            weight_percent=_number(item, "allocation", f"allocations[{idx}]"),
            annual_return=_number(item, "cagr", f"allocations[{idx}]"),
            annual_volatility=_number(item, "volatility", f"allocations[{idx}]"),
            symbol=item.get("symbol"),
        )
        for idx, item in enumerate(_list(payload, "allocations"))
    ]
    deposits = [
        Deposit(
            date=parse_date(item.get("date"), f"oneTimeDeposits[{idx}].date"),
            amount=_number(item, "amount", f"oneTimeDeposits[{idx}]"),
        )
        for idx, item in enumerate(_list(payload, "oneTimeDeposits"))
    ]
    changes = [
        RecurringDepositChange(
            effective_date=parse_date(item.get("date"), f"monthlyChanges[{idx}].date"),
            monthly_amount=_number(item, "amount", f"monthlyChanges[{idx}]"),
        )
        for idx, item in enumerate(_list(payload, "monthlyChanges"))
    ]

    cycles = payload.get("cycles")
    years = payload.get("years")
    return SimulationRequest(
        allocations=allocations,
        one_time_deposits=deposits,
        recurring_changes=changes,
        cycles=config.default_cycles if cycles is None else _integer(cycles, "cycles"),
        years=config.default_years if years is None else _integer(years, "years"),
    )


def load_request(path: str | Path, config: Optional[SimulatorConfig] = None) -> SimulationRequest:
    with open(path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInputError("Request file is not valid JSON", details=str(exc)) from exc
    return parse_request(payload, config)


def result_to_json(result: SimulationResult) -> Dict[str, Any]:
    return {
        "simulationStartDate": result.start_date.isoformat(),
        "months": list(result.months),
        "mean": list(result.mean),
        "median": list(result.median),
        "percentile10": list(result.percentile10),
        "percentile90": list(result.percentile90),
    }


def result_from_json(data: Dict[str, Any]) -> SimulationResult:
    return SimulationResult(
        start_date=parse_date(data["simulationStartDate"], "simulationStartDate"),
        months=[int(m) for m in data["months"]],
        mean=[int(v) for v in data["mean"]],
        median=[int(v) for v in data["median"]],
        percentile10=[int(v) for v in data.get("percentile10", data.get("p10", []))],
        percentile90=[int(v) for v in data.get("percentile90", data.get("p90", []))],
    )


def error_to_json(error: str, details: Optional[str] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"error": error}
    if details:
        payload["details"] = details
    return payload
