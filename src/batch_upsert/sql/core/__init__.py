"""Core SQL utilities package."""

from .columns import compute_column_set, compute_update_columns
from .identifier import quote_identifier
from .tokens import Fragment, Identifier, Param
from .values import ABSENT, DEFAULT, USE_DEFAULT, Value

__all__ = [
    "compute_column_set",
    "compute_update_columns",
    "quote_identifier",
    "Fragment",
    "Identifier",
    "Param",
    "ABSENT",
    "DEFAULT",
    "USE_DEFAULT",
    "Value",
]
