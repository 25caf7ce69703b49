# =============================================================================
# tests/unit/test_api_client.py
# Unit Tests for ApiClient (auth header, error mapping)
# =============================================================================

from unittest.mock import MagicMock

import pytest
import requests

from psico_core.api import ApiClient, ApiConfig, unwrap_data
from psico_core.auth import MemoryTokenStorage, TOKEN_KEY
from psico_core.errors import (
    ApiError,
    AuthenticationError,
    NetworkError,
    NotFoundError,
    ValidationError,
)

from conftest import BASE_URL, make_response


@pytest.fixture
def session():
    session = MagicMock()
    session.headers = {}
    session.request.return_value = make_response(200, {"data": []})
    return session


@pytest.fixture
def storage():
    return MemoryTokenStorage()


@pytest.fixture
def client(session, storage):
    return ApiClient(ApiConfig(base_url=BASE_URL + "/"), storage=storage, session=session)


def sent_headers(session):
    return session.request.call_args.kwargs["headers"]


class TestApiClientRequests:

    def test_json_headers_on_session(self, client, session):
        assert session.headers["Content-Type"] == "application/json"
        assert session.headers["Accept"] == "application/json"

    def test_url_joins_base_and_endpoint(self, client, session):
        client.get("/alunos")
        assert session.request.call_args.kwargs["url"] == "https://api.test/alunos"

    def test_body_sent_as_json(self, client, session):
        client.post("/setores", {"name": "Cardiologia"})

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["json"] == {"name": "Cardiologia"}

    def test_no_timeout_by_default(self, client, session):
        client.get("/alunos")
        assert session.request.call_args.kwargs["timeout"] is None

    def test_configured_timeout_is_used(self, session):
        client = ApiClient(ApiConfig(base_url=BASE_URL, timeout=5.0), session=session)
        client.get("/alunos")
        assert session.request.call_args.kwargs["timeout"] == 5.0

    def test_returns_decoded_json(self, client, session):
        session.request.return_value = make_response(200, {"data": [{"id": 1}]})
        assert client.get("/alunos") == {"data": [{"id": 1}]}

    def test_empty_body_returns_none(self, client, session):
        session.request.return_value = make_response(204)
        assert client.delete("/alunos/1") is None

    def test_non_json_body_raises_api_error(self, client, session):
        response = make_response(200, {})
        response.content = b"<html>"
        response.json.side_effect = ValueError("bad json")
        session.request.return_value = response

        with pytest.raises(ApiError):
            client.get("/alunos")


class TestApiClientAuthorization:

    def test_bearer_header_when_token_stored(self, client, session, storage):
        storage.set(TOKEN_KEY, "abc123")
        client.get("/alunos")
        assert sent_headers(session) == {"Authorization": "Bearer abc123"}

    def test_no_header_without_token(self, client, session):
        client.get("/alunos")
        assert "Authorization" not in sent_headers(session)

    def test_token_read_at_call_time(self, client, session, storage):
        client.get("/alunos")
        assert "Authorization" not in sent_headers(session)

        storage.set(TOKEN_KEY, "abc123")
        client.get("/alunos")
        assert sent_headers(session)["Authorization"] == "Bearer abc123"

        storage.remove(TOKEN_KEY)
        client.get("/alunos")
        assert "Authorization" not in sent_headers(session)

    def test_client_without_storage_sends_no_header(self, session):
        ApiClient(ApiConfig(base_url=BASE_URL), session=session).get("/alunos")
        assert sent_headers(session) == {}


class TestApiClientErrors:

    @pytest.mark.parametrize("status, error_type", [
        (401, AuthenticationError),
        (403, AuthenticationError),
        (404, NotFoundError),
        (400, ValidationError),
        (422, ValidationError),
    ])
    def test_status_maps_to_error(self, client, session, status, error_type):
        session.request.return_value = make_response(status, {})

        with pytest.raises(error_type) as exc_info:
            client.get("/alunos")
        assert exc_info.value.status_code == status

    def test_server_error_is_plain_api_error(self, client, session):
        session.request.return_value = make_response(500, {})

        with pytest.raises(ApiError) as exc_info:
            client.get("/alunos")

        assert type(exc_info.value) is ApiError
        assert exc_info.value.status_code == 500
        assert exc_info.value.details["endpoint"] == "/alunos"

    def test_server_message_is_kept(self, client, session):
        session.request.return_value = make_response(400, {"message": "name is required"})

        with pytest.raises(ValidationError, match="name is required"):
            client.post("/setores", {})

    def test_error_body_without_json(self, client, session):
        session.request.return_value = make_response(502)

        with pytest.raises(ApiError) as exc_info:
            client.get("/alunos")
        assert exc_info.value.status_code == 502

    @pytest.mark.parametrize("exc", [
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.Timeout("slow"),
    ])
    def test_transport_failure_is_network_error(self, client, session, exc):
        session.request.side_effect = exc

        with pytest.raises(NetworkError) as exc_info:
            client.get("/alunos")
        assert exc_info.value.code == "NET_001"


class TestUnwrapData:

    def test_unwraps_envelope(self):
        assert unwrap_data({"data": [1, 2]}) == [1, 2]

    def test_passes_through_plain_values(self):
        assert unwrap_data([1, 2]) == [1, 2]
        assert unwrap_data({"id": 1}) == {"id": 1}
        assert unwrap_data(None) is None
