"""
SQL module for building upsert statements.

Builds parameterized ``INSERT ... ON CONFLICT`` statements with quoted
identifiers and positional parameters, without executing them.
"""

from .core.identifier import quote_identifier
from .core.values import USE_DEFAULT
from .dialects.postgresql import PostgreSQLDialect
from .exceptions import (
    EmptyConstraintColumnsError,
    EmptyRowsError,
    EmptyTableError,
    ErrorKind,
    InconsistentKeysError,
    UpsertError,
    UpsertValidationError,
)
from .models import UpsertRequest, UpsertStatement
from .operations.policy import MissingKeysBehavior
from .operations.upsert import UpsertBuilder, build_upsert

__all__ = [
    "quote_identifier",
    "USE_DEFAULT",
    "PostgreSQLDialect",
    "ErrorKind",
    "UpsertError",
    "UpsertValidationError",
    "EmptyTableError",
    "EmptyRowsError",
    "EmptyConstraintColumnsError",
    "InconsistentKeysError",
    "UpsertRequest",
    "UpsertStatement",
    "MissingKeysBehavior",
    "UpsertBuilder",
    "build_upsert",
]
