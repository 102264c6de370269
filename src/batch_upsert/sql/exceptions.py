"""
Exception hierarchy for upsert statement building.

All of these are raised before any statement text is produced; a caller never
sees a partial statement.
"""

from enum import Enum
from typing import Optional, Sequence, Tuple


class ErrorKind(str, Enum):
    """Validation failure categories.

    Values:
        EMPTY_TABLE: Table name missing or blank
        EMPTY_ROWS: No rows to upsert
        EMPTY_CONSTRAINT_COLUMNS: No conflict target columns
        INCONSISTENT_KEYS: Rows with differing key sets under the throw policy
    """

    EMPTY_TABLE = "EmptyTable"
    EMPTY_ROWS = "EmptyRows"
    EMPTY_CONSTRAINT_COLUMNS = "EmptyConstraintColumns"
    INCONSISTENT_KEYS = "InconsistentKeys"


class UpsertError(Exception):
    """Base exception for all upsert-building errors."""

    pass


class UpsertValidationError(UpsertError):
    """
    Raised when an upsert request is rejected.

    Args:
        message: Error description
        kind: Failure category
        table: Target table name, for context (optional)
    """

    def __init__(self, message: str, kind: ErrorKind, table: Optional[str] = None):
        self.kind = kind
        self.table = table

        if table:
            full_message = f"{message} (table='{table}')"
        else:
            full_message = message

        super().__init__(full_message)


class EmptyTableError(UpsertValidationError):
    def __init__(self) -> None:
        super().__init__(
            "Must provide a table name to upsert into.", ErrorKind.EMPTY_TABLE
        )


class EmptyRowsError(UpsertValidationError):
    def __init__(self, table: Optional[str] = None) -> None:
        super().__init__(
            "Must provide some rows to upsert.", ErrorKind.EMPTY_ROWS, table
        )


class EmptyConstraintColumnsError(UpsertValidationError):
    def __init__(self, table: Optional[str] = None) -> None:
        super().__init__(
            "Must provide some columns that uniquely identify existing rows "
            "to trigger an update.",
            ErrorKind.EMPTY_CONSTRAINT_COLUMNS,
            table,
        )


class InconsistentKeysError(UpsertValidationError):
    """
    Raised under the throw policy when some rows lack keys other rows have.

    Attributes:
        missing_columns: Columns absent from at least one row, in column order
        row_indexes: 0-based indexes of the offending rows
    """

    def __init__(
        self,
        missing_columns: Sequence[str],
        row_indexes: Sequence[int],
        table: Optional[str] = None,
    ) -> None:
        self.missing_columns: Tuple[str, ...] = tuple(missing_columns)
        self.row_indexes: Tuple[int, ...] = tuple(row_indexes)
        super().__init__(
            "Not all rows shared the same keys. "
            "In particular, some but not all rows had these keys: "
            f"{', '.join(self.missing_columns)}.",
            ErrorKind.INCONSISTENT_KEYS,
            table,
        )
