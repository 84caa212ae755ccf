"""Test the data service over memory and hosted REST backends."""
import json

import httpx
import pytest

from core.integrations.hosted_table import HostedTableClient
from core.settings import Settings
from verticals.outdoor import seed
from verticals.outdoor.backend import DataStoreError
from verticals.outdoor.data_service import DataService, build_backend
from verticals.outdoor.mapping import product_to_row
from verticals.outdoor.memory_store import MemoryStore
from verticals.outdoor.rest_store import RestStore


class BrokenStore(MemoryStore):
    name = "broken"
    remote = True

    async def fetch_brands(self):
        raise DataStoreError("offline")

    async def fetch_products(self):
        raise DataStoreError("offline")

    async def fetch_transactions(self):
        raise DataStoreError("offline")

    async def fetch_domain_bindings(self):
        raise DataStoreError("offline")

    async def insert_transaction(self, row):
        raise DataStoreError("offline")


def rest_service(handler, **kwargs) -> DataService:
    client = HostedTableClient(
        "https://db.example.co", "anon-key",
        transport=httpx.MockTransport(handler), backoff_base=0, **kwargs,
    )
    return DataService(RestStore(client))


# --- Memory backend ---

@pytest.mark.asyncio
async def test_default_service_is_seeded():
    service = DataService()
    assert service.backend_name == "memory"
    assert [b.id for b in await service.get_brands()] == [seed.PWT, seed.PBG, seed.MAMAS]
    assert len(await service.get_products()) == 6
    assert len(await service.get_transactions()) == 3


@pytest.mark.asyncio
async def test_empty_memory_store_stays_empty():
    service = DataService(MemoryStore())
    assert await service.get_brands() == []
    assert await service.get_products() == []


@pytest.mark.asyncio
async def test_product_round_trip_and_delete():
    service = DataService(MemoryStore())
    product = seed.default_products()[0]
    assert await service.save_product(product)
    assert (await service.get_products())[0] == product
    assert await service.delete_product(product.id)
    assert await service.get_products() == []


@pytest.mark.asyncio
async def test_transaction_status_update():
    service = DataService()
    tx = seed.default_transactions()[2]
    assert await service.update_transaction_status(tx.id, {**tx.details, "status": "Ready"})
    stored = {t.id: t for t in await service.get_transactions()}
    assert stored[tx.id].status == "Ready"


@pytest.mark.asyncio
async def test_domain_bindings():
    service = DataService(MemoryStore())
    assert await service.bind_domain("shop.example", seed.PBG)
    assert await service.get_domain_bindings() == {"shop.example": seed.PBG}
    assert await service.unbind_domain("shop.example")
    assert await service.get_domain_bindings() == {}


# --- Fallbacks ---

@pytest.mark.asyncio
async def test_read_failures_fall_back_to_seed():
    service = DataService(BrokenStore())
    assert len(await service.get_brands()) == 3
    assert len(await service.get_products()) == 6
    assert [t.id for t in await service.get_transactions()] == ["tx-001", "tx-002", "tx-003"]
    assert await service.get_domain_bindings() == {}


@pytest.mark.asyncio
async def test_undecodable_rows_fall_back_to_seed():
    def handler(request: httpx.Request) -> httpx.Response:
        table = request.url.path.rsplit("/", 1)[-1]
        if table == "brands":
            return httpx.Response(200, json=[{"id": "X", "name": "X", "theme": {"primary": "red"}}])
        if table == "products":
            return httpx.Response(200, json=[{"id": "1", "category": "Tent"}])
        if table == "transactions":
            return httpx.Response(200, json=[{"id": "tx-9", "branch": seed.PWT, "date": "yesterday", "type": "RENTAL"}])
        return httpx.Response(200, json=[{"host": "shop.example"}])

    service = rest_service(handler)
    assert [b.id for b in await service.get_brands()] == [seed.PWT, seed.PBG, seed.MAMAS]
    assert len(await service.get_products()) == 6
    assert [t.id for t in await service.get_transactions()] == ["tx-001", "tx-002", "tx-003"]
    assert await service.get_domain_bindings() == {}


@pytest.mark.asyncio
async def test_camel_case_brand_row():
    row = {
        "id": "BDG",
        "name": "Bandung Outdoor",
        "shortName": "Bandung",
        "logoIcon": "tent",
        "theme": json.dumps({
            "primary": "#111111",
            "secondary": "#222222",
            "bgGradient": "from-slate-50 to-white",
            "accent": "#333333",
        }),
        "domains": ["bandung.example"],
    }

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/brands"):
            return httpx.Response(200, json=[row])
        return httpx.Response(200, json=[])

    brands = await rest_service(handler).get_brands()
    assert brands[0].short_name == "Bandung"
    assert brands[0].logo_icon == "tent"
    assert brands[0].theme.bg_gradient == "from-slate-50 to-white"
    assert brands[0].theme.model_dump()["bg_gradient"] == "from-slate-50 to-white"


@pytest.mark.asyncio
async def test_write_failure_returns_false():
    service = DataService(BrokenStore())
    assert await service.create_transaction(seed.default_transactions()[0]) is False


# --- Hosted REST backend ---

@pytest.mark.asyncio
async def test_rest_reads_with_auth_headers():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        table = request.url.path.rsplit("/", 1)[-1]
        if table == "products":
            row = product_to_row(seed.default_products()[0])
            row["stock"] = json.dumps(row["stock"])
            return httpx.Response(200, json=[row])
        return httpx.Response(200, json=[])

    service = rest_service(handler)
    products = await service.get_products()
    assert products[0].stock_at(seed.PWT) == 10
    assert seen[0].headers["apikey"] == "anon-key"
    assert seen[0].headers["authorization"] == "Bearer anon-key"
    assert seen[0].url.path == "/rest/v1/products"
    assert seen[0].url.params["select"] == "*"


@pytest.mark.asyncio
async def test_rest_empty_tables_serve_seed_catalog():
    service = rest_service(lambda request: httpx.Response(200, json=[]))
    assert len(await service.get_brands()) == 3
    assert len(await service.get_products()) == 6
    assert await service.get_transactions() == []


@pytest.mark.asyncio
async def test_rest_transactions_ordered_newest_first():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    await rest_service(handler).get_transactions()
    assert seen[0].url.params["order"] == "date.desc"


@pytest.mark.asyncio
async def test_rest_server_errors_retry_then_fall_back():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503, text="unavailable")

    service = rest_service(handler, max_retries=2)
    brands = await service.get_brands()
    assert len(brands) == 3
    assert len(calls) == 3
    assert service.health()["failed"] == 1


@pytest.mark.asyncio
async def test_rest_client_error_is_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(401, json={"message": "bad key"})

    service = rest_service(handler)
    assert await service.save_product(seed.default_products()[0]) is False
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_rest_upsert_binding_merges_on_host():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201)

    assert await rest_service(handler).bind_domain("shop.example", seed.MAMAS)
    request = seen[0]
    assert request.method == "POST"
    assert request.url.params["on_conflict"] == "host"
    assert "resolution=merge-duplicates" in request.headers["prefer"]
    assert json.loads(request.content) == {"host": "shop.example", "branch": seed.MAMAS}


@pytest.mark.asyncio
async def test_rest_update_filters_by_id():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(204)

    assert await rest_service(handler).update_transaction_status("tx-9", {"status": "Ready"})
    assert seen[0].method == "PATCH"
    assert seen[0].url.params["id"] == "eq.tx-9"


# --- Backend selection ---

@pytest.mark.asyncio
async def test_build_backend_defaults_to_memory():
    backend = await build_backend(Settings())
    assert backend.name == "memory"


@pytest.mark.asyncio
async def test_build_backend_prefers_rest():
    backend = await build_backend(
        Settings(supabase_url="https://db.example.co", supabase_key="k", database_url="sqlite+aiosqlite://")
    )
    assert backend.name == "rest"
