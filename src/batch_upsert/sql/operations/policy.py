"""
Missing-key policy.

Decides whether rows with differing key sets are acceptable:

- ``default``: anything goes; a column missing from a row becomes DEFAULT
  for that row
- ``throw``: every row must carry every column of the batch as a key. A key
  holding USE_DEFAULT counts as present, since presence of a key is a
  structural property independent of the value stored under it
"""

from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence

from ..exceptions import InconsistentKeysError


class MissingKeysBehavior(str, Enum):
    DEFAULT = "default"
    THROW = "throw"


def enforce_missing_keys_policy(
    rows: Sequence[Mapping[str, Any]],
    column_set: Sequence[str],
    behavior: MissingKeysBehavior,
    table: Optional[str] = None,
) -> None:
    """
    Validate row shapes against ``column_set`` under ``behavior``.

    Args:
        rows: Rows as mappings of present keys
        column_set: Union of keys across ``rows``
        behavior: Policy to enforce
        table: Table name, for error context

    Raises:
        InconsistentKeysError: Under THROW, when any row lacks a column.
            Reports the union of missing columns (in column order) and the
            indexes of every offending row.
    """
    if MissingKeysBehavior(behavior) is MissingKeysBehavior.DEFAULT:
        return

    missing = set()
    offending: List[int] = []
    for index, row in enumerate(rows):
        # keys are a subset of column_set, so equal size means equal sets
        if len(row) != len(column_set):
            offending.append(index)
            missing.update(col for col in column_set if col not in row)

    if offending:
        raise InconsistentKeysError(
            [col for col in column_set if col in missing], offending, table
        )
