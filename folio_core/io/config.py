from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping

from folio_core.domain.errors import InvalidInputError
from folio_core.domain.models import DEFAULT_CYCLES, DEFAULT_YEARS, FALLBACK_START_DATE, SimulatorConfig
from folio_core.io.request import parse_date


def simulator_config_from_mapping(data: Mapping[str, Any]) -> SimulatorConfig:
    try:
        timeout = data.get("timeout_seconds")
        fallback = data.get("fallback_start_date")
        workers = data.get("workers", 1)
        return SimulatorConfig(
            default_cycles=int(data.get("default_cycles", DEFAULT_CYCLES)),
            default_years=int(data.get("default_years", DEFAULT_YEARS)),
            fallback_start_date=FALLBACK_START_DATE if fallback is None else parse_date(fallback, "fallback_start_date"),
            workers=None if workers is None else int(workers),
            chunk_size=int(data.get("chunk_size", 2500)),
            seed=data.get("seed"),
            paired_normals=bool(data.get("paired_normals", False)),
            timeout_seconds=None if timeout is None else float(timeout),
        )
    except InvalidInputError:
        raise
    except (TypeError, ValueError) as exc:
        raise InvalidInputError("Invalid simulator configuration", details=str(exc)) from exc


def load_simulator_config(path: str | Path) -> SimulatorConfig:
    return simulator_config_from_mapping(_read_json(path))


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
