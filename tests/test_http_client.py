from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from adapters.http_client import ClientHolder, build_async_client, close_client, get_client
from core.config import AppSettings


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(api_base_url="http://clinic.test/api", http_timeout_seconds=12.5, user_agent="tests/1.0")


@pytest.mark.asyncio
async def test_builder_applies_defaults(settings: AppSettings) -> None:
    async with build_async_client(settings, extra_headers={"X-Client": "cli"}) as client:
        assert client.headers["accept"] == "application/json"
        assert "gzip" in client.headers["accept-encoding"]
        assert "deflate" in client.headers["accept-encoding"]
        assert client.headers["user-agent"] == "tests/1.0"
        assert client.headers["x-client"] == "cli"
        assert client.timeout.read == 12.5
        assert str(client.base_url) == "http://clinic.test/api/"


@pytest.mark.asyncio
async def test_gzip_response_is_decompressed(settings: AppSettings) -> None:
    import gzip

    async def handler(request: httpx.Request) -> httpx.Response:
        body = gzip.compress(b'{"ok": true}')
        return httpx.Response(200, content=body, headers={"Content-Encoding": "gzip"})

    async with build_async_client(settings, transport=httpx.MockTransport(handler)) as client:
        response = await client.get("/ping")

    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_holder_builds_once_across_threads(settings: AppSettings) -> None:
    holder = ClientHolder(settings)

    with ThreadPoolExecutor(max_workers=8) as pool:
        clients = list(pool.map(lambda _: holder.get(), range(32)))

    assert all(c is clients[0] for c in clients)
    await holder.aclose()
    assert holder.get() is not clients[0]
    await holder.aclose()


@pytest.mark.asyncio
async def test_process_client_is_shared_until_closed() -> None:
    first = get_client()
    assert get_client() is first

    await close_client()
    second = get_client()
    assert second is not first
    await close_client()
