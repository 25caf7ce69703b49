# =============================================================================
# psico_core/ui/formatting.py
# Display helpers shared by the pages
# =============================================================================

from __future__ import annotations
from datetime import date, datetime
from typing import Any

import pandas as pd

MISSING = "N/A"
INVALID_DATE = "Data inválida"


def format_date(value: Any) -> str:
    """
    Render an API date (ISO string, date or datetime) as dd/mm/YYYY.

    Missing values give "N/A"; unparsable ones give "Data inválida".
    """
    if value is None or value == "" or (isinstance(value, float) and pd.isna(value)):
        return MISSING
    if isinstance(value, (date, datetime)):
        return value.strftime("%d/%m/%Y")
    try:
        # Only the calendar date matters; avoids timezone shifts on "...T00:00:00Z"
        parsed = pd.to_datetime(str(value)[:10], format="%Y-%m-%d")
    except (ValueError, TypeError):
        return INVALID_DATE
    return parsed.strftime("%d/%m/%Y")
