"""Column resolution across a batch of rows."""

from typing import Any, Iterable, Mapping, Sequence, Tuple


def compute_column_set(rows: Iterable[Mapping[str, Any]]) -> Tuple[str, ...]:
    """
    Union of keys across ``rows`` in first-occurrence order.

    Rows are scanned in input order and keys in each row's own order, so the
    result is stable for a given row sequence (never alphabetical).

    Examples:
        >>> compute_column_set([{"id": 1}, {"other": 2, "id": 3}])
        ('id', 'other')
    """
    # dict preserves insertion order, giving an ordered set
    seen = {}
    for row in rows:
        for key in row:
            seen.setdefault(key, None)
    return tuple(seen)


def compute_update_columns(
    column_set: Sequence[str], exclusion: Iterable[str]
) -> Tuple[str, ...]:
    """
    Columns to assign in ``DO UPDATE SET``: ``column_set`` minus ``exclusion``.

    Examples:
        >>> compute_update_columns(("id", "name", "age"), ["id"])
        ('name', 'age')
    """
    excluded = set(exclusion)
    return tuple(col for col in column_set if col not in excluded)
