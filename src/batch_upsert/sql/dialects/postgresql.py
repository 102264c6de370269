"""
PostgreSQL-specific SQL dialect implementation.

Provides identifier quoting and positional parameter syntax. Two parameter
styles are supported:

- ``numeric``: ``$1, $2, ...`` as used by server-side prepared statements,
  asyncpg and node-postgres
- ``format``: ``%s`` as used by psycopg2; literal ``%`` in the statement text
  is doubled so the driver does not take it for a marker
"""

from ..core.identifier import quote_identifier

PARAMSTYLES = ("numeric", "format")


class PostgreSQLDialect:
    """PostgreSQL SQL dialect implementation.

    Instances hold no mutable state and can be shared freely between threads.
    """

    name = "postgresql"
    template_marker = "?"
    # Bind parameter count is a 16-bit field in the wire protocol
    max_bind_params = 65535

    def __init__(self, paramstyle: str = "numeric"):
        if paramstyle not in PARAMSTYLES:
            raise ValueError(
                f"Unsupported paramstyle '{paramstyle}', expected one of {PARAMSTYLES}"
            )
        self.paramstyle = paramstyle

    def __repr__(self) -> str:
        return f"PostgreSQLDialect(paramstyle={self.paramstyle!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, PostgreSQLDialect)
            and other.paramstyle == self.paramstyle
        )

    def __hash__(self) -> int:
        return hash((self.name, self.paramstyle))

    def quote(self, identifier: str) -> str:
        """Quote an identifier using PostgreSQL syntax (double quotes)."""
        return quote_identifier(identifier)

    def placeholder(self, index: int) -> str:
        """Positional marker for the 1-based parameter ``index``."""
        if self.paramstyle == "format":
            return "%s"
        return f"${index}"

    def escape_text(self, text: str) -> str:
        """Escape statement text (not markers) for the driver's paramstyle."""
        if self.paramstyle == "format":
            return text.replace("%", "%%")
        return text


DEFAULT_DIALECT = PostgreSQLDialect()
