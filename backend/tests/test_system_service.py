"""
System health and factory reset tests
"""
import httpx

from services.system_service import check_system_health, factory_reset


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_health_online(store):
    await store.set("investors", [{"id": "1"}])

    def handler(request):
        assert request.url.path == "/health"
        return httpx.Response(200, json={"status": "ok"})

    async with _client(handler) as client:
        health = await check_system_health(store, "http://api.test/", client=client)

    assert health["backend"] == "ONLINE"
    assert health["database"] == "SYNCED"
    assert health["localStorage"] == {"count": 1, "used": len('[{"id": "1"}]')}
    assert health["latency"] >= 0


async def test_health_offline_on_connection_error(store):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        health = await check_system_health(store, "http://api.test", client=client)

    assert health["backend"] == "OFFLINE"
    assert health["database"] == "LOCAL_ONLY"


async def test_health_offline_on_error_status(store):
    async with _client(lambda request: httpx.Response(503)) as client:
        health = await check_system_health(store, "http://api.test", client=client)

    assert health["backend"] == "OFFLINE"


async def test_factory_reset_reseeds(services, store):
    await services.tickets.delete("101")
    await services.investors.list()

    removed = await factory_reset(store)

    assert removed == 2
    assert len(await services.tickets.list()) == 3
