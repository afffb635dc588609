"""
Tests for the PostgREST backend client.
"""
import httpx
import pytest

from braketime.shared.services.backend_client import BackendClient, BackendError, encode_filter


def test_encode_filter_operators():
    assert encode_filter(5) == "eq.5"
    assert encode_filter("North") == "eq.North"
    assert encode_filter(None) == "is.null"
    assert encode_filter(True) == "is.true"
    assert encode_filter([1, 2, 3]) == "in.(1,2,3)"


@pytest.mark.asyncio
async def test_sends_api_key_headers():
    captured = {}

    def handler(request):
        captured["apikey"] = request.headers.get("apikey")
        captured["authorization"] = request.headers.get("authorization")
        captured["path"] = request.url.path
        return httpx.Response(200, json=[])

    client = BackendClient(
        base_url="http://backend.test/rest/v1",
        api_key="anon-key",
        transport=httpx.MockTransport(handler)
    )
    assert await client.select("markets") == []
    assert captured == {
        "apikey": "anon-key",
        "authorization": "Bearer anon-key",
        "path": "/rest/v1/markets",
    }
    await client.aclose()


@pytest.mark.asyncio
async def test_insert_returns_stored_row(fake_backend, backend):
    row = await backend.insert("markets", {"name": "North"})

    assert row["id"] == 1
    assert row["name"] == "North"
    assert row["created_at"]
    method, table, params, body = fake_backend.requests[-1]
    assert (method, table, body) == ("POST", "markets", [{"name": "North"}])


@pytest.mark.asyncio
async def test_select_with_filters_and_columns(fake_backend, backend):
    fake_backend.seed("market_manager_stores", manager_id=7, store_id=42)
    fake_backend.seed("market_manager_stores", manager_id=8, store_id=43)

    rows = await backend.select("market_manager_stores", columns="manager_id", filters={"store_id": 42})

    assert rows == [{"manager_id": 7}]
    _, _, params, _ = fake_backend.requests[-1]
    assert params == {"select": "manager_id", "store_id": "eq.42"}


@pytest.mark.asyncio
async def test_update_without_match_returns_none(fake_backend, backend):
    assert await backend.update("markets", {"name": "X"}, {"id": 99}) is None


@pytest.mark.asyncio
async def test_error_response_raises_backend_error(fake_backend, backend):
    fake_backend.fail("GET", "stores", status=400, message="permission denied for table stores")

    with pytest.raises(BackendError) as exc_info:
        await backend.select("stores")

    assert exc_info.value.message == "permission denied for table stores"
    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "XX000"


@pytest.mark.asyncio
async def test_transport_error_raises_backend_error(fake_backend, backend):
    fake_backend.drop_connection("GET", "markets")

    with pytest.raises(BackendError, match="Could not reach backend"):
        await backend.select("markets")


@pytest.mark.asyncio
async def test_delete_requires_filters(backend):
    with pytest.raises(BackendError):
        await backend.delete("stores", {})
