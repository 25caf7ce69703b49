# =============================================================================
# psico_core/api/client.py
# Pre-configured HTTP client for the records API
# =============================================================================
"""
API client.

Every request is sent to one fixed origin with a JSON body and, when a
token is present in storage at call time, an ``Authorization: Bearer``
header. There is no retry policy: a failed call raises once and the
caller decides what to show.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from psico_core.auth.storage import TokenStorage, TOKEN_KEY
from psico_core.errors import (
    ApiError,
    AuthenticationError,
    NetworkError,
    NotFoundError,
    ValidationError,
)
from psico_core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ApiConfig:
    """Configuration for the API connection"""
    base_url: str
    timeout: Optional[float] = None
    headers: Dict[str, str] = field(default_factory=dict)


def unwrap_data(payload: Any) -> Any:
    """Return the ``data`` member of a ``{data: ...}`` envelope."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


class ApiClient:
    """
    Thin wrapper around requests.Session.

    Usage:
        client = ApiClient(ApiConfig(base_url="https://api.example.com"), storage)
        alunos = unwrap_data(client.get("/alunos"))
    """

    def __init__(
        self,
        config: ApiConfig,
        storage: Optional[TokenStorage] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.storage = storage
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })
        if config.headers:
            self.session.headers.update(config.headers)

    def _url(self, endpoint: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def _auth_headers(self) -> Dict[str, str]:
        """Read the token at call time so a logout takes effect immediately"""
        if self.storage is None:
            return {}
        token = self.storage.get(TOKEN_KEY)
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Any] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            NetworkError: the API could not be reached
            AuthenticationError: 401/403
            NotFoundError: 404
            ValidationError: 400/422
            ApiError: any other non-2xx status or a non-JSON body
        """
        url = self._url(endpoint)
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=data,
                headers=self._auth_headers(),
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise NetworkError(
                f"Não foi possível contatar a API: {e}",
                endpoint=endpoint,
            ) from e

        if not response.ok:
            raise self._error_for(response, endpoint)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                "Resposta inválida da API",
                status_code=response.status_code,
                endpoint=endpoint,
            ) from e

    @staticmethod
    def _error_for(response: requests.Response, endpoint: str) -> ApiError:
        status = response.status_code
        server_message = None
        try:
            body = response.json()
            if isinstance(body, dict):
                server_message = body.get("message") or body.get("error")
        except ValueError:
            pass

        logger.warning(f"API {endpoint} answered {status}: {server_message or response.reason}")

        if status in (401, 403):
            return AuthenticationError(
                server_message or "Acesso não autorizado",
                status_code=status,
                endpoint=endpoint,
            )
        if status == 404:
            return NotFoundError(
                server_message or "Registro não encontrado",
                resource=endpoint,
                status_code=status,
            )
        if status in (400, 422):
            return ValidationError(
                server_message or "Dados inválidos",
                status_code=status,
                endpoint=endpoint,
            )
        return ApiError(
            server_message or f"Erro da API ({status})",
            status_code=status,
            endpoint=endpoint,
        )

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, data: Optional[Any] = None) -> Any:
        return self.request("POST", endpoint, data=data)

    def put(self, endpoint: str, data: Optional[Any] = None) -> Any:
        return self.request("PUT", endpoint, data=data)

    def delete(self, endpoint: str) -> Any:
        return self.request("DELETE", endpoint)

    def close(self) -> None:
        self.session.close()
