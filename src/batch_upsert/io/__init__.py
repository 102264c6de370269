"""Row adapters for tabular inputs."""

from .dataframe import rows_from_dataframe

__all__ = ["rows_from_dataframe"]
