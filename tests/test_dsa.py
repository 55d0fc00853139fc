from decimal import Decimal

from drca.dsa import decimal_sum, merge_sort, pick_by_count, round_half_up


def test_merge_sort_is_stable() -> None:
    rows = [("b", 1), ("a", 2), ("c", 1), ("d", 2)]
    assert merge_sort(rows, key=lambda r: r[1]) == [("b", 1), ("c", 1), ("a", 2), ("d", 2)]
    # descending cost, ascending label, as the month ranking sorts
    assert merge_sort(rows, key=lambda r: (-r[1], r[0])) == [("a", 2), ("d", 2), ("b", 1), ("c", 1)]


def test_merge_sort_does_not_mutate_input() -> None:
    rows = [3, 1, 2]
    assert merge_sort(rows) == [1, 2, 3]
    assert rows == [3, 1, 2]


def test_pick_by_count() -> None:
    counts = {"Texas": 3, "Florida": 3, "Ohio": 1, "Maine": 1, "Iowa": 2}
    assert pick_by_count(counts, largest=True) == "Florida"
    assert pick_by_count(counts, largest=False) == "Maine"
    assert pick_by_count({}) == ""


def test_round_half_up() -> None:
    assert round_half_up(2.675, 2) == 2.68
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(Decimal("20.333333"), 2) == 20.33
    assert round_half_up(0.0127323954, 5) == 0.01273


def test_decimal_sum_is_exact() -> None:
    assert decimal_sum([10.005, 5.00]) == Decimal("15.005")
    assert decimal_sum([]) == 0


def test_round_half_up_large_values() -> None:
    assert round_half_up(1e27, 2) == 1e27
    assert round_half_up(Decimal("123456789012345678901234567890.125"), 2) == 123456789012345678901234567890.13
    assert round_half_up(3.2e40, 5) == 3.2e40
