"""
DSA utilities
=============

Small, explicit algorithm primitives used by the DRCA engine.

Included:
- Merge Sort (stable, O(n log n)) for the ordered top-months query
- Count ranking with an alphabetical tie-break
- Exact decimal summation and half-up rounding for money and density values
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Callable, Iterable, List, Mapping, TypeVar, Union

T = TypeVar("T")

Number = Union[int, float, Decimal]


def merge_sort(arr: List[T], key: Callable[[T], object] = lambda x: x) -> List[T]:
    """Stable merge sort (ascending by `key`)."""
    if len(arr) <= 1:
        return arr[:]
    mid = len(arr) // 2
    left = merge_sort(arr[:mid], key=key)
    right = merge_sort(arr[mid:], key=key)
    return _merge(left, right, key=key)


def _merge(left: List[T], right: List[T], key: Callable[[T], object]) -> List[T]:
    out: List[T] = []
    # i and j are pointers into each sorted list
    i = j = 0
    while i < len(left) and j < len(right):
        if key(left[i]) <= key(right[j]):
            out.append(left[i]); i += 1
        else:
            out.append(right[j]); j += 1
    out.extend(left[i:])
    out.extend(right[j:])
    return out


def pick_by_count(counts: Mapping[str, int], largest: bool = True) -> str:
    """Return the key with the largest (or smallest) count.

    Ties go to the alphabetically smallest key. An empty mapping gives "".
    """
    best = ""
    best_count = None
    for name, n in counts.items():
        if best_count is None:
            better = True
        elif n == best_count:
            better = name < best
        else:
            better = (n > best_count) if largest else (n < best_count)
        if better:
            best, best_count = name, n
    return best


def to_decimal(value: Number) -> Decimal:
    """Convert via str() so 10.005 becomes Decimal('10.005'), not its binary expansion."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def decimal_sum(values: Iterable[Number]) -> Decimal:
    total = Decimal(0)
    for v in values:
        total += to_decimal(v)
    return total


def round_half_up(value: Number, places: int = 2) -> float:
    """Round half away from zero at `places` decimals and return a float."""
    d = to_decimal(value)
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus `places`
        ctx.prec = max(ctx.prec, d.adjusted() + places + 2)
        return float(d.quantize(quantum, rounding=ROUND_HALF_UP))
