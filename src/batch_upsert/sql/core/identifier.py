"""
SQL identifier handling utilities.

Identifiers (table, schema and column names) are always quoted, so names with
upper case letters, spaces, reserved words or non-ASCII characters survive
unchanged, and a name can never break out of its quotes.
"""


def quote_identifier(name: str) -> str:
    """
    Quote a PostgreSQL identifier.

    Args:
        name: The identifier to quote

    Returns:
        The identifier wrapped in double quotes, internal quotes doubled

    Examples:
        >>> quote_identifier("company_id")
        '"company_id"'
        >>> quote_identifier("年金计划号")
        '"年金计划号"'
        >>> quote_identifier('odd"name')
        '"odd""name"'
    """
    escaped = name.replace('"', '""')
    return f'"{escaped}"'

