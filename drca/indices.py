"""
Indices (precomputed lookup tables)
===================================

DRCA builds its lookup tables once, right after the datasets are loaded.

Example:
- `disaster_counts["Texas"]` gives the number of disasters declared in Texas.
- `disaster_by_id[42]` gives the Disaster record with id 42.

The ranking queries (state with most/least disasters, region totals) read
`disaster_counts` instead of rescanning the disaster list on every call.
A state with zero disasters is never a key.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Sequence
from .models import Disaster


@dataclass
class Indices:
    """Container of precomputed indices. Treated as read-only after build."""
    disaster_counts: Dict[str, int]
    disaster_by_id: Dict[int, Disaster]
    states_sorted: List[str]


def build_disaster_counts(disasters: Sequence[Disaster]) -> Dict[str, int]:
    """Count disasters per state in one pass."""
    counts: Dict[str, int] = {}
    for d in disasters:
        if d.state not in counts:
            counts[d.state] = 0
        counts[d.state] += 1
    return counts


def build_indices(disasters: Sequence[Disaster]) -> Indices:
    """Build indices from the loaded disaster list.

    Returns:
        Indices object with disaster_counts, disaster_by_id and states_sorted.
    """
    disaster_by_id: Dict[int, Disaster] = {}
    for d in disasters:
        # first record wins on duplicate ids
        if d.id not in disaster_by_id:
            disaster_by_id[d.id] = d

    counts = build_disaster_counts(disasters)
    return Indices(
        disaster_counts=counts,
        disaster_by_id=disaster_by_id,
        states_sorted=sorted(counts.keys()),
    )
