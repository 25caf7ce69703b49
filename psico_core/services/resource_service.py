# =============================================================================
# psico_core/services/resource_service.py
# Generic list/get/create/update for one API resource
# =============================================================================

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from psico_core.api import ApiClient, unwrap_data
from psico_core.errors import ApiError, NotFoundError
from psico_core.resources import ResourceSchema, options_from_records
from .base_service import BaseService, ServiceResult


class ResourceService(BaseService):
    """
    CRUD operations for the resource described by ``schema``.

    Usage:
        service = ResourceService(client, SETORES)
        result = service.save_and_refresh({"name": "Cardiologia"})
        if result:
            records = result.data
    """

    def __init__(self, client: ApiClient, schema: ResourceSchema):
        super().__init__()
        self.client = client
        self.schema = schema

    # -------------------------------------------------------------------------
    # RAW OPERATIONS (raise on failure)
    # -------------------------------------------------------------------------

    def _list(self, endpoint: Optional[str] = None) -> List[Dict[str, Any]]:
        endpoint = endpoint or self.schema.endpoint
        records = unwrap_data(self.client.get(endpoint))
        if records is None:
            return []
        if not isinstance(records, list):
            raise ApiError(
                f"Resposta inesperada para {endpoint}: lista esperada",
                endpoint=endpoint,
            )
        return records

    def _get(self, record_id: Any) -> Dict[str, Any]:
        record = unwrap_data(self.client.get(self.schema.record_endpoint(record_id)))
        if not record:
            raise NotFoundError(
                f"{self.schema.singular} {record_id} não encontrado",
                resource=self.schema.endpoint,
                record_id=record_id,
            )
        return record

    def _save(self, values: Dict[str, Any], record_id: Any = None) -> Any:
        payload = self.schema.build_payload(values)
        if record_id is None:
            response = self.client.post(self.schema.endpoint, payload)
        else:
            response = self.client.put(self.schema.record_endpoint(record_id), payload)
        return unwrap_data(response)

    # -------------------------------------------------------------------------
    # SERVICE OPERATIONS (return ServiceResult)
    # -------------------------------------------------------------------------

    def list_records(self) -> ServiceResult:
        return self.safe_execute(f"Listing {self.schema.endpoint}", self._list)

    def get_record(self, record_id: Any) -> ServiceResult:
        return self.safe_execute(
            f"Fetching {self.schema.record_endpoint(record_id)}",
            self._get,
            record_id,
        )

    def create_record(self, values: Dict[str, Any]) -> ServiceResult:
        return self.safe_execute(f"Creating in {self.schema.endpoint}", self._save, values)

    def update_record(self, record_id: Any, values: Dict[str, Any]) -> ServiceResult:
        return self.safe_execute(
            f"Updating {self.schema.record_endpoint(record_id)}",
            self._save,
            values,
            record_id,
        )

    def save_and_refresh(
        self,
        values: Dict[str, Any],
        record_id: Any = None,
    ) -> ServiceResult:
        """
        POST (or PUT when ``record_id`` is given) then refetch the list.

        Succeeds only when both calls succeed; ``data`` is the fresh list.
        """
        def _save_then_list():
            self._save(values, record_id)
            return self._list()

        action = "Creating" if record_id is None else "Updating"
        return self.safe_execute(f"{action} and refreshing {self.schema.endpoint}", _save_then_list)

    def fetch_many(self, endpoints: List[str]) -> Dict[str, List[Dict[str, Any]]]:
        """
        GET several collections concurrently.

        Raises the first failure; the other requests still run to completion.
        """
        if not endpoints:
            return {}
        with ThreadPoolExecutor(max_workers=len(endpoints)) as pool:
            futures = {endpoint: pool.submit(self._list, endpoint) for endpoint in endpoints}
            return {endpoint: future.result() for endpoint, future in futures.items()}

    def load_options(self) -> ServiceResult:
        """(id, name) choices for every select field fed by another endpoint"""
        def _load():
            collections = self.fetch_many(self.schema.option_endpoints)
            return {
                spec.name: options_from_records(collections[spec.options_endpoint])
                for spec in self.schema.fields
                if spec.options_endpoint
            }

        return self.safe_execute(f"Loading options for {self.schema.endpoint}", _load)
