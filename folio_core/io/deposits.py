from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import pandas as pd

from folio_core.domain.errors import InvalidInputError
from folio_core.domain.models import Deposit, RecurringDepositChange

REQUIRED_COLUMNS = {"date", "amount", "kind"}
KINDS = {"one_time", "monthly"}


def load_deposits(csv_path: str | Path) -> Tuple[List[Deposit], List[RecurringDepositChange]]:
    """
    Read a deposit schedule CSV with columns date,amount,kind where kind is
    one_time or monthly. Monthly rows become recurring changes effective from
    their date.
    """
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)

    df = pd.read_csv(path)
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise InvalidInputError(f"Missing columns in deposits CSV: {sorted(missing)}")

    df["kind"] = df["kind"].astype(str).str.strip().str.lower()
    bad_kinds = set(df["kind"]) - KINDS
    if bad_kinds:
        raise InvalidInputError(f"Unknown deposit kinds: {sorted(bad_kinds)}")

    try:
        df["date"] = pd.to_datetime(df["date"], format="%Y-%m-%d").dt.date
        df["amount"] = pd.to_numeric(df["amount"])
    except ValueError as exc:
        raise InvalidInputError("Malformed deposits CSV", details=str(exc)) from exc

    deposits: List[Deposit] = []
    changes: List[RecurringDepositChange] = []
    for _, row in df.iterrows():
        if row["kind"] == "one_time":
            deposits.append(Deposit(date=row["date"], amount=float(row["amount"])))
        else:
            changes.append(RecurringDepositChange(effective_date=row["date"], monthly_amount=float(row["amount"])))
    return deposits, changes
