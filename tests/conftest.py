"""
Shared fixtures for fetchling tests.

The mock server mirrors a small echo service:
- POST */food.json -> {"pizza": "delicious"}
- POST */animal    -> {"name": <posted JSON name>}
- POST other       -> {"method": "POST"}
- GET  */txt       -> plaintext
- GET  */headers   -> request headers as JSON
- GET  */index.html -> HTML
- GET  */animal?.. -> {"name": <query name>}
- GET  */bad-json  -> invalid JSON body
- GET  */blob      -> raw bytes
- GET  */echo      -> {"method", "url", "query"}
- GET  other       -> {"method": "GET"}
- anything else    -> 404
"""
import json

import httpx
import pytest
import pytest_asyncio

from fetchling.config import FetchlingSettings

BASE_URL = "http://localhost:8888"


def _json(payload, status_code=200):
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"Content-Type": "application/json"},
    )


def echo_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path

    if request.method == "POST":
        if path.endswith("/food.json"):
            return _json({"pizza": "delicious"})
        if path.endswith("/animal"):
            body = json.loads(request.content)
            return _json({"name": body["name"]})
        if path.endswith("/form"):
            return _json({"form": dict(httpx.QueryParams(request.content.decode()))})
        return _json({"method": "POST"})

    if request.method == "GET":
        if path.endswith("/txt"):
            return httpx.Response(200, text="plaintext")
        if path.endswith("/headers"):
            return _json(dict(request.headers))
        if path.endswith("/index.html"):
            return httpx.Response(200, text="<html><body><p>hi</p></body></html>")
        if path.endswith("/animal") and request.url.query:
            return _json({"name": request.url.params.get("name")})
        if path.endswith("/bad-json"):
            return httpx.Response(200, text="{not json")
        if path.endswith("/blob"):
            return httpx.Response(200, content=b"\x89PNG\r\n\x1a\n")
        if path.endswith("/echo"):
            return _json(
                {
                    "method": request.method,
                    "url": str(request.url),
                    "query": dict(request.url.params.multi_items()),
                }
            )
        return _json({"method": "GET"})

    if request.method in ("PUT", "PATCH", "DELETE", "OPTIONS"):
        if path.endswith("/echo"):
            return _json({"method": request.method})

    if request.method == "HEAD":
        return httpx.Response(200, headers={"X-Head": "yes"})

    return httpx.Response(404, text="")


@pytest.fixture
def settings():
    """Settings independent of the test environment."""
    return FetchlingSettings(verify_ssl=True, trace=False)


@pytest.fixture
def recorded_requests():
    return []


@pytest.fixture
def mock_transport(recorded_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        recorded_requests.append(request)
        return echo_handler(request)

    return httpx.MockTransport(handler)


@pytest_asyncio.fixture
async def async_client(mock_transport):
    """httpx.AsyncClient routed to the mock server."""
    async with httpx.AsyncClient(transport=mock_transport) as client:
        yield client


@pytest.fixture
def sync_client(mock_transport):
    """httpx.Client routed to the mock server."""
    with httpx.Client(transport=mock_transport) as client:
        yield client
