"""
SQL parameter binding: renders a composed fragment into final SQL text.

Rendering is a single left-to-right pass over the flattened token stream of
the whole statement. Positional markers are numbered only here, so numbering
stays correct however the sub-fragments were nested when the statement was
assembled.
"""

from typing import Any, List

from ..models import UpsertStatement
from .tokens import Fragment, Identifier, Param


def adapt_param(value: Any) -> Any:
    """
    Adapt dict/list parameters for JSON/JSONB columns.

    Returns:
        psycopg2.extras.Json wrapped value for dict/list, otherwise unchanged
    """
    if isinstance(value, (dict, list)):
        from psycopg2.extras import Json

        return Json(value)
    return value


class BindingCollector:
    """Accumulates SQL text, template text and bindings during rendering."""

    def __init__(self, dialect: Any, adapt_json: bool = False):
        self.dialect = dialect
        self.adapt_json = adapt_json
        self._sql: List[str] = []
        self._template: List[str] = []
        self.bindings: List[Any] = []

    def text(self, chunk: str) -> None:
        self._sql.append(self.dialect.escape_text(chunk))
        self._template.append(chunk)

    def identifier(self, name: str) -> None:
        self.text(self.dialect.quote(name))

    def param(self, value: Any) -> None:
        self.bindings.append(adapt_param(value) if self.adapt_json else value)
        self._sql.append(self.dialect.placeholder(len(self.bindings)))
        self._template.append(self.dialect.template_marker)

    @property
    def sql(self) -> str:
        return "".join(self._sql)

    @property
    def template(self) -> str:
        return "".join(self._template)


def render(fragment: Fragment, dialect: Any, adapt_json: bool = False) -> UpsertStatement:
    """
    Resolve every token of ``fragment`` into an UpsertStatement.

    Args:
        fragment: Fully composed statement
        dialect: Supplies quoting, marker syntax and text escaping
        adapt_json: Wrap dict/list bindings with psycopg2 Json

    Returns:
        UpsertStatement whose bindings line up with the markers in ``sql``

    Example:
        >>> from batch_upsert.sql.dialects import PostgreSQLDialect
        >>> stmt = render(
        ...     Fragment.of("SELECT ", Identifier("a"), " = ", Param(1)),
        ...     PostgreSQLDialect(),
        ... )
        >>> stmt.sql, stmt.bindings, stmt.template
        ('SELECT "a" = $1', [1], 'SELECT "a" = ?')
    """
    collector = BindingCollector(dialect, adapt_json=adapt_json)
    for token in fragment.tokens():
        if isinstance(token, Identifier):
            collector.identifier(token.name)
        elif isinstance(token, Param):
            collector.param(token.value)
        else:
            collector.text(token)
    return UpsertStatement(
        sql=collector.sql, bindings=collector.bindings, template=collector.template
    )
