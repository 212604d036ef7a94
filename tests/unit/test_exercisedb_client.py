from __future__ import annotations

import httpx
import pytest

from gif_sync.exceptions import TransientFetchError
from gif_sync.infrastructure.exercisedb_client import ExerciseDBClient

BASE_URL = "https://exercisedb.test/exercises"


def _client(handler) -> ExerciseDBClient:
    return ExerciseDBClient(
        base_url=BASE_URL,
        api_key="secret-key",
        api_host="exercisedb.test",
        transport=httpx.MockTransport(handler),
    )


def test_fetch_page_sends_pagination_params_and_credentials():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {"id": "0001", "gifUrl": "https://cdn.test/0001.gif", "name": "3/4 sit-up"},
                {"id": "0002", "gifUrl": "https://cdn.test/0002.gif", "bodyPart": "waist"},
            ],
        )

    with _client(handler) as client:
        page = client.fetch_page(offset=200, limit=100)

    assert [r.id for r in page] == ["0001", "0002"]
    assert page[0].gif_url == "https://cdn.test/0001.gif"
    request = seen[0]
    assert request.method == "GET"
    assert str(request.url).startswith(BASE_URL)
    assert request.url.params["limit"] == "100"
    assert request.url.params["offset"] == "200"
    assert request.headers["X-RapidAPI-Key"] == "secret-key"
    assert request.headers["X-RapidAPI-Host"] == "exercisedb.test"


def test_fetch_page_coerces_numeric_ids_and_tolerates_missing_gif_url():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"id": 42}])

    page = _client(handler).fetch_page(offset=0, limit=100)

    assert page[0].id == "42"
    assert page[0].gif_url is None


def test_fetch_page_returns_empty_list_past_the_end():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    assert _client(handler).fetch_page(offset=5000, limit=100) == []


def test_non_success_status_is_transient():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"message": "Too many requests"})

    with pytest.raises(TransientFetchError) as exc_info:
        _client(handler).fetch_page(offset=300, limit=100)

    assert exc_info.value.offset == 300
    assert exc_info.value.status_code == 429


def test_network_error_is_transient():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransientFetchError, match="ConnectError") as exc_info:
        _client(handler).fetch_page(offset=0, limit=100)

    assert exc_info.value.status_code is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, content=b"<html>gateway</html>"),
        httpx.Response(200, json={"message": "You are not subscribed to this API."}),
        httpx.Response(200, json=[{"gifUrl": "https://cdn.test/no-id.gif"}]),
    ],
    ids=["not-json", "not-an-array", "record-without-id"],
)
def test_malformed_payloads_are_transient(response):
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    with pytest.raises(TransientFetchError):
        _client(handler).fetch_page(offset=0, limit=100)


def test_from_config_uses_configured_endpoint(make_config):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    client = ExerciseDBClient.from_config(make_config(), transport=httpx.MockTransport(handler))
    client.fetch_page(offset=0, limit=100)
    client.close()

    assert seen[0].url.host == "exercisedb.test"
    assert seen[0].headers["X-RapidAPI-Key"] == "test-key"
