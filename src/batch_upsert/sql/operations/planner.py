"""Per-cell placeholder planning: bound value or DEFAULT."""

from typing import Any, Mapping, Sequence, Tuple

from ..core.values import DEFAULT, CellPlan, Value, lookup


def plan_row(row: Mapping[str, Any], column_set: Sequence[str]) -> Tuple[CellPlan, ...]:
    """Plan one row; absent keys and USE_DEFAULT both become DEFAULT."""
    plans = []
    for column in column_set:
        cell = lookup(row, column)
        plans.append(cell if isinstance(cell, Value) else DEFAULT)
    return tuple(plans)


def plan_rows(
    rows: Sequence[Mapping[str, Any]], column_set: Sequence[str]
) -> Tuple[Tuple[CellPlan, ...], ...]:
    """
    Plan every row, in input order.

    Each row plan has exactly ``len(column_set)`` cells, in column order.

    Example:
        >>> plan_rows([{"id": 1}, {"id": 2, "other": None}], ("id", "other"))
        ((Value(value=1), DEFAULT), (Value(value=2), Value(value=None)))
    """
    return tuple(plan_row(row, column_set) for row in rows)
