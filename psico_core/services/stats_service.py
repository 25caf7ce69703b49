# =============================================================================
# psico_core/services/stats_service.py
# Share of pareceres per setor
# =============================================================================

from __future__ import annotations
from typing import Any, Dict, List

import pandas as pd

from psico_core.api import ApiClient
from psico_core.resources import PARECERES
from .base_service import ServiceResult
from .resource_service import ResourceService

UNKNOWN_SECTOR = "Desconhecido"


def sector_distribution(records: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Count pareceres per ``setor_name`` and their percentage of the total.

    Returns:
        DataFrame with columns setor, count, percentage (1 decimal),
        ordered by count descending. Empty input gives an empty frame.
    """
    if not records:
        return pd.DataFrame(columns=["setor", "count", "percentage"])

    sectors = pd.Series(
        [r.get("setor_name") or UNKNOWN_SECTOR for r in records],
        name="setor",
    )
    counts = sectors.value_counts(sort=False).rename("count").reset_index()
    counts.columns = ["setor", "count"]
    counts["percentage"] = (counts["count"] / len(records) * 100).round(1)
    return counts.sort_values(["count", "setor"], ascending=[False, True]).reset_index(drop=True)


class ReportStatsService(ResourceService):
    """Statistics over the pareceres collection"""

    def __init__(self, client: ApiClient):
        super().__init__(client, PARECERES)

    def sector_percentages(self) -> ServiceResult:
        """
        Fetch /pareceres and compute the per-setor distribution.

        ``data`` is the DataFrame from :func:`sector_distribution`;
        ``metadata["total"]`` is the number of pareceres.
        """
        result = self.safe_execute(
            "Computing pareceres per setor",
            lambda: sector_distribution(self._list()),
        )
        if result:
            result.metadata = {"total": int(result.data["count"].sum())}
        return result
