# =============================================================================
# psico_core/services/__init__.py
# Service Layer for the PSICO dashboard
# Separates API calls and result handling from UI presentation
# =============================================================================
"""
Service layer.

Usage Example:
-------------
    from psico_core.services import ResourceService
    from psico_core.resources import SETORES

    service = ResourceService(client, SETORES)
    result = service.list_records()
    if result:
        st.dataframe(result.data)
    else:
        st.error(result.error)
"""

from .base_service import BaseService, ServiceResult, ErrorKind, error_kind_for
from .resource_service import ResourceService
from .stats_service import ReportStatsService, sector_distribution
from .intake_service import IntakeService

__all__ = [
    "BaseService",
    "ServiceResult",
    "ErrorKind",
    "error_kind_for",
    "ResourceService",
    "ReportStatsService",
    "sector_distribution",
    "IntakeService",
]
