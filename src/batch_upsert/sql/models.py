"""
Request and result types for the upsert builder.

UpsertRequest carries the caller's input; UpsertStatement carries the rendered
SQL, its bindings and a marker-independent template.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from batch_upsert.sql.core.values import Row
from batch_upsert.sql.operations.policy import MissingKeysBehavior


@dataclass(frozen=True)
class UpsertRequest:
    """
    Everything needed to build one upsert statement.

    Attributes:
        table: Target table name
        constraint_columns: Conflict target columns, in order
        rows: Rows to upsert, as mappings (or pydantic models)
        schema: Optional schema name for the insert target
        on_update_ignore: Columns left out of DO UPDATE SET; None means the
            constraint columns, an empty sequence means none
        missing_keys: Missing-key policy; None means the configured default
        conflict_where_guard: Restate the conflict target as a WHERE clause
            on DO UPDATE; None means the configured default
    """

    table: str
    constraint_columns: Sequence[str]
    rows: Sequence[Row]
    schema: Optional[str] = None
    on_update_ignore: Optional[Sequence[str]] = None
    missing_keys: Optional[MissingKeysBehavior] = None
    conflict_where_guard: Optional[bool] = None


@dataclass(frozen=True)
class UpsertStatement:
    """Rendered statement ready for a SQL execution client.

    ``template`` holds the same text with ``?`` for every parameter, usable
    as a cache key independent of marker syntax.
    """

    sql: str
    bindings: List[Any] = field(default_factory=list)
    template: str = ""

    def as_tuple(self) -> Tuple[str, List[Any]]:
        """``(sql, bindings)`` for ``cursor.execute(*statement.as_tuple())``."""
        return self.sql, self.bindings
