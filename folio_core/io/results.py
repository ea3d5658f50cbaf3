from __future__ import annotations

from pathlib import Path

import pandas as pd

from folio_core.domain.models import SimulationResult
from folio_core.services.calendar import add_months


def result_to_frame(result: SimulationResult) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "month": result.months,
            "date": [add_months(result.start_date, m) for m in result.months],
            "mean": result.mean,
            "median": result.median,
            "percentile10": result.percentile10,
            "percentile90": result.percentile90,
        }
    )


def write_result_csv(result: SimulationResult, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    result_to_frame(result).to_csv(path, index=False)
    return path
