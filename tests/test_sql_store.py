"""Test the SQL backend against in-memory SQLite."""
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from core.database import create_engine, create_session_factory, init_db
from core.settings import Settings
from verticals.outdoor import seed
from verticals.outdoor.backend import DataStoreError
from verticals.outdoor.data_service import DataService, build_backend
from verticals.outdoor.models.schemas import Transaction, TransactionType
from verticals.outdoor.repository import SqlStore

SQLITE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def store():
    engine = create_engine(SQLITE_URL)
    await init_db(engine)
    store = SqlStore(create_session_factory(engine), engine=engine)
    yield store
    await store.close()


@pytest.mark.asyncio
async def test_brand_upsert_and_fetch(store):
    service = DataService(store)
    for brand in seed.default_brands():
        assert await service.save_brand(brand)

    brands = {b.id: b for b in await service.get_brands()}
    assert brands[seed.MAMAS].theme.primary == "orange"
    assert "mamasoutdoor.id" in brands[seed.MAMAS].domains


@pytest.mark.asyncio
async def test_empty_tables_serve_seed_catalog(store):
    service = DataService(store)
    assert len(await service.get_brands()) == 3
    assert len(await service.get_products()) == 6


@pytest.mark.asyncio
async def test_product_upsert_overwrites(store):
    service = DataService(store)
    product = seed.default_products()[0]
    await service.save_product(product)
    await service.save_product(product.model_copy(update={"stock": {seed.PWT: 1}}))

    stored = await service.get_products()
    assert len(stored) == 1
    assert stored[0].stock == {seed.PWT: 1}


@pytest.mark.asyncio
async def test_transactions_newest_first_and_tz_aware(store):
    service = DataService(store)
    now = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
    for i in range(3):
        tx = Transaction(
            id=f"tx-{i}", branch=seed.PWT, date=now + timedelta(hours=i),
            type=TransactionType.SALE, total_amount=1000 * i, customer_name="A",
        )
        assert await service.create_transaction(tx)

    stored = await service.get_transactions()
    assert [t.id for t in stored] == ["tx-2", "tx-1", "tx-0"]
    assert stored[0].date == now + timedelta(hours=2)
    assert stored[0].date.tzinfo is not None


@pytest.mark.asyncio
async def test_update_transaction_details(store):
    service = DataService(store)
    tx = seed.default_transactions()[1]
    await service.create_transaction(tx)
    assert await service.update_transaction_status(tx.id, {**tx.details, "status": "Returned"})
    assert (await service.get_transactions())[0].status == "Returned"


@pytest.mark.asyncio
async def test_update_missing_transaction_raises(store):
    with pytest.raises(DataStoreError):
        await store.update_transaction_details("nope", {})


@pytest.mark.asyncio
async def test_domain_binding_upsert_and_delete(store):
    service = DataService(store)
    await service.bind_domain("shop.example", seed.PWT)
    await service.bind_domain("shop.example", seed.PBG)
    assert await service.get_domain_bindings() == {"shop.example": seed.PBG}
    await service.unbind_domain("shop.example")
    assert await service.get_domain_bindings() == {}


@pytest.mark.asyncio
async def test_build_backend_uses_database_url():
    backend = await build_backend(Settings(database_url=SQLITE_URL))
    try:
        assert backend.name == "sql"
        assert await backend.fetch_brands() == []
    finally:
        await backend.close()
