# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import pandas as pd


def records_to_dataframe(records: Iterable[Dict[str, Any]], include_ids: bool = True) -> pd.DataFrame:
    """Flatten Data API records into a DataFrame with one column per field.

    :param records: Records as returned in ``response["data"]``.
    :param include_ids: When True (default), add ``recordId`` and ``modId`` columns.
        Portal data is not included.
    """
    rows: List[Dict[str, Any]] = []
    for record in records:
        row = dict(record.get("fieldData") or {})
        if include_ids:
            row["recordId"] = record.get("recordId")
            row["modId"] = record.get("modId")
        rows.append(row)
    return pd.DataFrame(rows)
