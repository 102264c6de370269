"""
DataFrame to row conversion.

pandas marks missing cells as NaN/NaT/None regardless of dtype. Upserts need
to say what a missing cell means, so the caller picks one of:

- ``"null"``: bind SQL NULL
- ``"default"``: use the column default (USE_DEFAULT)
- ``"absent"``: drop the key from that row, so the missing-key policy applies
"""

from typing import Any, Dict, List, Literal

import numpy as np
import pandas as pd

from batch_upsert.sql.core.values import USE_DEFAULT

MissingCells = Literal["null", "default", "absent"]


def _is_missing(value: Any) -> bool:
    # pd.isna on a list/array returns an array; only scalars can be missing
    if isinstance(value, (list, dict, tuple, np.ndarray)):
        return False
    return bool(pd.isna(value))


def rows_from_dataframe(
    df: pd.DataFrame, missing: MissingCells = "null"
) -> List[Dict[str, Any]]:
    """
    Convert a DataFrame into upsert rows, one per DataFrame row.

    Args:
        df: Source data; column labels become column names
        missing: How missing cells are represented (see module docstring)

    Returns:
        List of row dictionaries in DataFrame order

    Raises:
        ValueError: If ``df`` is not a DataFrame or ``missing`` is unknown

    Example:
        >>> df = pd.DataFrame({"id": [1, 2], "name": ["a", None]})
        >>> rows_from_dataframe(df, missing="default")
        [{'id': 1, 'name': 'a'}, {'id': 2, 'name': USE_DEFAULT}]
    """
    if not isinstance(df, pd.DataFrame):
        raise ValueError("rows_from_dataframe() requires a pandas DataFrame")
    if missing not in ("null", "default", "absent"):
        raise ValueError(f"Unknown missing-cell mode '{missing}'")

    rows: List[Dict[str, Any]] = []
    for record in df.to_dict(orient="records"):
        row: Dict[str, Any] = {}
        for key, value in record.items():
            str_key = str(key)
            if _is_missing(value):
                if missing == "absent":
                    continue
                row[str_key] = USE_DEFAULT if missing == "default" else None
            # Convert numpy types to native Python types
            elif isinstance(value, np.generic):
                row[str_key] = value.item()
            else:
                row[str_key] = value
        rows.append(row)
    return rows
