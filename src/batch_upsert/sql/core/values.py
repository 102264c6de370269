"""
Row cell model.

A row cell is one of three things:

- ``ABSENT``: the row has no such key at all
- ``USE_DEFAULT``: the key is present but asks for the column default
- ``Value(v)``: a concrete value; ``None`` here means SQL NULL

Once planned, a cell becomes either ``DEFAULT`` (the bare SQL keyword) or a
``Value`` to be bound as a parameter.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Union

from pydantic import BaseModel


class Marker(Enum):
    ABSENT = "ABSENT"
    USE_DEFAULT = "USE_DEFAULT"
    DEFAULT = "DEFAULT"

    def __repr__(self) -> str:
        return self.value


ABSENT = Marker.ABSENT
USE_DEFAULT = Marker.USE_DEFAULT
DEFAULT = Marker.DEFAULT


@dataclass(frozen=True)
class Value:
    """A concrete cell value, bound as a query parameter."""

    value: Any


# ABSENT | USE_DEFAULT | Value
RowCell = Union[Marker, Value]
# DEFAULT | Value
CellPlan = Union[Marker, Value]
Row = Union[Mapping[str, Any], BaseModel]


def row_items(row: Row) -> Mapping[str, Any]:
    """
    Return the present keys of ``row`` as a mapping.

    Pydantic models contribute only the fields that were explicitly set, so an
    unset optional field is treated as an absent key.
    """
    if isinstance(row, BaseModel):
        dumped: Dict[str, Any] = row.model_dump(exclude_unset=True)
        return dumped
    return row


def lookup(row: Mapping[str, Any], column: str) -> RowCell:
    """Classify ``row[column]`` as ABSENT, USE_DEFAULT or Value."""
    if column not in row:
        return ABSENT
    value = row[column]
    if value is USE_DEFAULT:
        return USE_DEFAULT
    return Value(value)
