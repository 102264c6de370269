"""SQL dialects."""

from .postgresql import DEFAULT_DIALECT, PostgreSQLDialect

__all__ = ["DEFAULT_DIALECT", "PostgreSQLDialect"]
