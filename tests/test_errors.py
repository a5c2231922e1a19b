import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from config import settings
from errors import error_type_for_status, install_error_handlers
from main import app
from schemas import ErrorType
from trivia_service import get_trivia_service


@pytest.mark.asyncio
async def test_unmatched_route_is_not_found(api_client: AsyncClient):
    response = await api_client.get("/v1/nope")
    assert response.status_code == 404
    assert response.json() == {"error_type": "NOT_FOUND", "error": "Not Found", "docs": settings.docs_url}


@pytest.mark.asyncio
async def test_wrong_method_is_unknown(api_client: AsyncClient):
    response = await api_client.post("/v1/categories")
    assert response.status_code == 405
    assert response.json()["error_type"] == "UNKNOWN"


@pytest.mark.asyncio
async def test_unhandled_exception_is_internal_error():
    class BrokenService:
        def list_categories(self):
            raise RuntimeError("boom")

    app.dependency_overrides[get_trivia_service] = lambda: BrokenService()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/v1/categories", headers={"Origin": "http://example.com"})

    assert response.status_code == 500
    body = response.json()
    assert body == {"error_type": "INTERNAL_SERVER_ERROR", "error": "Internal server error", "docs": settings.docs_url}
    assert "boom" not in body["error"]
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_malformed_json_body_is_parse_error():
    class Payload(BaseModel):
        name: str

    probe = FastAPI()
    install_error_handlers(probe)

    @probe.post("/echo")
    def echo(payload: Payload) -> dict:
        return {"name": payload.name}

    transport = ASGITransport(app=probe)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        bad = await client.post("/echo", content=b"{not json", headers={"content-type": "application/json"})
        missing = await client.post("/echo", json={})

    assert bad.status_code == 400
    assert bad.json()["error_type"] == "PARSE"
    assert missing.status_code == 400
    assert missing.json()["error_type"] == "VALIDATION"


@pytest.mark.parametrize(
    "status_code, expected",
    [
        (400, ErrorType.VALIDATION),
        (404, ErrorType.NOT_FOUND),
        (405, ErrorType.UNKNOWN),
        (422, ErrorType.VALIDATION),
        (500, ErrorType.INTERNAL_SERVER_ERROR),
        (503, ErrorType.INTERNAL_SERVER_ERROR),
    ],
)
def test_error_type_for_status(status_code, expected):
    assert error_type_for_status(status_code) is expected
