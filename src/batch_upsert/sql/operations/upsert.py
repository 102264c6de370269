"""
Upsert statement builder.

Builds ``INSERT ... VALUES ... ON CONFLICT ... RETURNING *`` from a batch of
rows that need not share the same keys. Statements are assembled as
templated fragments and rendered in one final pass, see
``batch_upsert.sql.core.parameters``.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol, Sequence, Tuple

from batch_upsert.config import Settings, get_settings
from batch_upsert.utils.logging import bind_context, get_logger

from ..core.columns import compute_column_set, compute_update_columns
from ..core.parameters import render
from ..core.tokens import Fragment, Identifier, Param, identifier_list
from ..core.values import CellPlan, Value, row_items
from ..dialects.postgresql import PostgreSQLDialect
from ..exceptions import (
    EmptyConstraintColumnsError,
    EmptyRowsError,
    EmptyTableError,
    UpsertValidationError,
)
from ..models import UpsertRequest, UpsertStatement
from .planner import plan_rows
from .policy import MissingKeysBehavior, enforce_missing_keys_policy

logger = get_logger(__name__)


class Dialect(Protocol):
    """Protocol for SQL dialects."""

    name: str
    template_marker: str
    max_bind_params: int

    def quote(self, identifier: str) -> str: ...
    def placeholder(self, index: int) -> str: ...
    def escape_text(self, text: str) -> str: ...


def build_target(table: str, schema: Optional[str] = None) -> Fragment:
    """Insert target: ``"schema"."table"`` or ``"table"``."""
    if schema and schema.strip():
        return Fragment.of(Identifier(schema), ".", Identifier(table))
    return Fragment.of(Identifier(table))


def build_insert_clause(
    target: Fragment,
    column_set: Sequence[str],
    plans: Sequence[Sequence[CellPlan]],
) -> Fragment:
    """``INSERT INTO <target> (<cols>) VALUES (<cells>),(...)``."""
    row_tuples = (
        Fragment.of(
            "(",
            Fragment.join(
                ",",
                (Param(cell.value) if isinstance(cell, Value) else "DEFAULT" for cell in plan),
            ),
            ")",
        )
        for plan in plans
    )
    return Fragment.of(
        "INSERT INTO ",
        target,
        " ",
        identifier_list(column_set),
        " VALUES ",
        Fragment.join(",", row_tuples),
    )


def build_conflict_clause(
    table: str,
    constraint_columns: Sequence[str],
    update_columns: Sequence[str],
    where_guard: bool = True,
) -> Fragment:
    """
    ``ON CONFLICT (<constraint cols>) <action>``.

    The action is DO NOTHING when there is nothing to update. Otherwise it is
    DO UPDATE SET over ``update_columns``, optionally followed by a WHERE that
    restates the conflict target against the bare table name. The WHERE is
    redundant with the conflict target but downstream consumers may compare
    or cache the exact text, so it is emitted unless ``where_guard`` is off.
    """
    if not update_columns:
        action = Fragment.of("DO NOTHING")
    else:
        assignments = Fragment.join(
            ", ",
            (
                Fragment.of(Identifier(col), " = EXCLUDED.", Identifier(col))
                for col in update_columns
            ),
        )
        action = Fragment.of("DO UPDATE SET ", assignments)
        if where_guard:
            conditions = Fragment.join(
                " AND ",
                (
                    Fragment.of(
                        Identifier(table),
                        ".",
                        Identifier(col),
                        " = EXCLUDED.",
                        Identifier(col),
                    )
                    for col in constraint_columns
                ),
            )
            action = Fragment.of(action, " WHERE ", conditions)

    return Fragment.of("ON CONFLICT ", identifier_list(constraint_columns), " ", action)


@dataclass(frozen=True)
class _PreparedRequest:
    table: str
    schema: Optional[str]
    constraint_columns: Tuple[str, ...]
    rows: Tuple[Mapping[str, Any], ...]
    column_set: Tuple[str, ...]
    update_columns: Tuple[str, ...]
    where_guard: bool


class UpsertBuilder:
    """
    Builder for INSERT ... ON CONFLICT statements.

    The builder holds only its dialect and settings, both read-only, so one
    instance may be shared across threads.

    Example:
        >>> from batch_upsert.sql import UpsertBuilder, UpsertRequest
        >>> builder = UpsertBuilder()
        >>> stmt = builder.build(
        ...     UpsertRequest(table="x", constraint_columns=["id"], rows=[{"id": 1, "other": 2}])
        ... )
        >>> stmt.bindings
        [1, 2]
    """

    def __init__(
        self,
        dialect: Optional[Dialect] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the UpsertBuilder.

        Args:
            dialect: SQL dialect; defaults to PostgreSQL with the configured
                paramstyle
            settings: Defaults for request fields left as None
        """
        self.settings = settings or get_settings()
        self.dialect = dialect or PostgreSQLDialect(self.settings.paramstyle)

    def build(self, request: UpsertRequest, adapt_json: bool = False) -> UpsertStatement:
        """
        Build one upsert statement covering every row of ``request``.

        Args:
            request: What to upsert
            adapt_json: Wrap dict/list bindings for JSON columns

        Returns:
            UpsertStatement with SQL text, bindings and template

        Raises:
            UpsertValidationError: If the request is rejected
        """
        prepared = self._prepare(request)
        statement = self._render(prepared, prepared.rows, adapt_json)
        logger.debug(
            "upsert.statement_built",
            table=prepared.table,
            schema=prepared.schema,
            rows=len(prepared.rows),
            columns=len(prepared.column_set),
            bindings=len(statement.bindings),
            action="update" if prepared.update_columns else "nothing",
        )
        return statement

    def build_batches(
        self,
        request: UpsertRequest,
        batch_size: Optional[int] = None,
        adapt_json: bool = False,
    ) -> List[UpsertStatement]:
        """
        Build one statement per chunk of rows.

        The request is validated once as a whole and every chunk uses the
        column set of the whole request, so all statements share the same
        column list and update assignments. Chunks are also capped so no
        statement exceeds the dialect's bind parameter limit.

        Args:
            request: What to upsert
            batch_size: Maximum rows per statement; defaults to settings
            adapt_json: Wrap dict/list bindings for JSON columns

        Returns:
            Statements in row order; each numbers its markers from 1

        Raises:
            UpsertValidationError: If the request is rejected
            ValueError: If batch_size is not positive, or one row alone needs
                more bind parameters than the dialect allows
        """
        size = batch_size if batch_size is not None else self.settings.batch_size
        if size <= 0:
            raise ValueError(f"batch_size must be positive, got {size}")

        prepared = self._prepare(request)
        per_row = max(1, len(prepared.column_set))
        if per_row > self.dialect.max_bind_params:
            raise ValueError(
                f"A single row of {per_row} columns exceeds the limit of "
                f"{self.dialect.max_bind_params} bind parameters"
            )
        chunk_size = min(size, self.dialect.max_bind_params // per_row)

        batch_logger = bind_context(
            __name__, table=prepared.table, schema=prepared.schema
        )
        statements = []
        for start in range(0, len(prepared.rows), chunk_size):
            chunk = prepared.rows[start : start + chunk_size]
            statement = self._render(prepared, chunk, adapt_json)
            batch_logger.debug(
                "upsert.batch_built",
                batch=len(statements),
                rows=len(chunk),
                bindings=len(statement.bindings),
            )
            statements.append(statement)

        batch_logger.debug(
            "upsert.batches_built",
            rows=len(prepared.rows),
            batches=len(statements),
            chunk_size=chunk_size,
        )
        return statements

    def _prepare(self, request: UpsertRequest) -> _PreparedRequest:
        try:
            return self._validate(request)
        except UpsertValidationError as exc:
            logger.warning(
                "upsert.validation_failed",
                kind=exc.kind.value,
                table=request.table,
                error=str(exc),
            )
            raise

    def _validate(self, request: UpsertRequest) -> _PreparedRequest:
        table = request.table
        if not table or not str(table).strip():
            raise EmptyTableError()

        rows = tuple(row_items(row) for row in request.rows)
        if not rows:
            raise EmptyRowsError(table)

        constraint_columns = request.constraint_columns
        if isinstance(constraint_columns, str):
            constraint_columns = (constraint_columns,)
        constraint_columns = tuple(constraint_columns)
        if not constraint_columns:
            raise EmptyConstraintColumnsError(table)

        schema = request.schema if request.schema and request.schema.strip() else None
        column_set = compute_column_set(rows)

        behavior = request.missing_keys or self.settings.missing_keys_behavior
        enforce_missing_keys_policy(rows, column_set, MissingKeysBehavior(behavior), table)

        exclusion = (
            constraint_columns
            if request.on_update_ignore is None
            else request.on_update_ignore
        )
        where_guard = (
            self.settings.conflict_where_guard
            if request.conflict_where_guard is None
            else request.conflict_where_guard
        )

        return _PreparedRequest(
            table=table,
            schema=schema,
            constraint_columns=constraint_columns,
            rows=rows,
            column_set=column_set,
            update_columns=compute_update_columns(column_set, exclusion),
            where_guard=where_guard,
        )

    def _render(
        self,
        prepared: _PreparedRequest,
        rows: Sequence[Mapping[str, Any]],
        adapt_json: bool,
    ) -> UpsertStatement:
        statement = Fragment.of(
            build_insert_clause(
                build_target(prepared.table, prepared.schema),
                prepared.column_set,
                plan_rows(rows, prepared.column_set),
            ),
            " ",
            build_conflict_clause(
                prepared.table,
                prepared.constraint_columns,
                prepared.update_columns,
                prepared.where_guard,
            ),
            " RETURNING *",
        )
        return render(statement, self.dialect, adapt_json=adapt_json)


def build_upsert(
    table: str,
    constraint_columns: Sequence[str],
    rows: Sequence[Any],
    *,
    schema: Optional[str] = None,
    on_update_ignore: Optional[Sequence[str]] = None,
    missing_keys: Optional[MissingKeysBehavior] = None,
    conflict_where_guard: Optional[bool] = None,
    dialect: Optional[Dialect] = None,
    adapt_json: bool = False,
) -> UpsertStatement:
    """
    Build a single upsert statement.

    Args:
        table: Target table name
        constraint_columns: Conflict target columns
        rows: Rows to upsert
        schema: Optional schema name
        on_update_ignore: Columns left out of DO UPDATE SET (default: the
            constraint columns)
        missing_keys: "default" or "throw" (default: configured policy)
        conflict_where_guard: Emit the WHERE restating the conflict target
        dialect: SQL dialect (default: PostgreSQL, configured paramstyle)
        adapt_json: Wrap dict/list bindings for JSON columns

    Returns:
        UpsertStatement

    Example:
        >>> stmt = build_upsert("x", ["id"], [{"id": 1, "other": 2}])
        >>> stmt.sql
        'INSERT INTO "x" ("id","other") VALUES ($1,$2) ON CONFLICT ("id") DO UPDATE SET "other" = EXCLUDED."other" WHERE "x"."id" = EXCLUDED."id" RETURNING *'
    """
    request = UpsertRequest(
        table=table,
        constraint_columns=constraint_columns,
        rows=rows,
        schema=schema,
        on_update_ignore=on_update_ignore,
        missing_keys=MissingKeysBehavior(missing_keys) if missing_keys else None,
        conflict_where_guard=conflict_where_guard,
    )
    return UpsertBuilder(dialect).build(request, adapt_json=adapt_json)
