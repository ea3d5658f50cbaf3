from __future__ import annotations

import dataclasses
from typing import List, Sequence

from folio_core.domain.models import AssetAllocation


def total_weight(allocations: Sequence[AssetAllocation]) -> float:
    return sum(a.weight_percent for a in allocations)


def rebalance(allocations: Sequence[AssetAllocation]) -> List[AssetAllocation]:
    """
    Scale weights so they sum to 100 (rounded to 2 decimals). Opt-in only:
    the simulator runs whatever weights it is given.
    """
    total = total_weight(allocations)
    if total == 0:
        return list(allocations)
    return [
        dataclasses.replace(a, weight_percent=round(a.weight_percent / total * 100, 2))
        for a in allocations
    ]
