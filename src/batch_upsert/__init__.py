"""
batch-upsert: parameterized PostgreSQL upserts for heterogeneous row batches.

Usage:
    >>> from batch_upsert import build_upsert, USE_DEFAULT
    >>> stmt = build_upsert("users", ["id"], [{"id": 1, "name": "a"}, {"id": 2}])
    >>> stmt.bindings
    [1, 'a', 2]
"""

from batch_upsert.sql import (
    USE_DEFAULT,
    EmptyConstraintColumnsError,
    EmptyRowsError,
    EmptyTableError,
    ErrorKind,
    InconsistentKeysError,
    MissingKeysBehavior,
    PostgreSQLDialect,
    UpsertBuilder,
    UpsertError,
    UpsertRequest,
    UpsertStatement,
    UpsertValidationError,
    build_upsert,
)

__version__ = "0.1.0"

__all__ = [
    "USE_DEFAULT",
    "EmptyConstraintColumnsError",
    "EmptyRowsError",
    "EmptyTableError",
    "ErrorKind",
    "InconsistentKeysError",
    "MissingKeysBehavior",
    "PostgreSQLDialect",
    "UpsertBuilder",
    "UpsertError",
    "UpsertRequest",
    "UpsertStatement",
    "UpsertValidationError",
    "build_upsert",
]
