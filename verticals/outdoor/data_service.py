"""Data service — CRUD façade over brands, products, transactions and
domain bindings.

Reads never fail: a backend error is logged and the built-in seed data is
served instead, so storefronts stay up when the hosted store is down.
Writes report success as a bool and log failures.
"""

import logging
from typing import Any

from core.settings import Settings
from verticals.outdoor import seed
from verticals.outdoor.backend import DataStoreError, StoreBackend
from verticals.outdoor.mapping import (
    brand_to_row,
    product_to_row,
    row_to_brand,
    row_to_product,
    row_to_transaction,
    transaction_to_row,
)
from verticals.outdoor.memory_store import MemoryStore
from verticals.outdoor.models.schemas import BrandProfile, Product, Transaction

logger = logging.getLogger(__name__)

# An unreachable store and a row that does not decode both fall back to seed data.
READ_ERRORS = (DataStoreError, ValueError, KeyError, TypeError)


class DataService:
    """Domain-level access to the configured backend.

    Usage::

        service = DataService(build_backend(settings))
        brands = await service.get_brands()
        ok = await service.create_transaction(tx)
    """

    def __init__(self, backend: StoreBackend | None = None):
        self.backend = backend or MemoryStore.seeded()

    @property
    def backend_name(self) -> str:
        return self.backend.name

    # -- Brands --

    async def get_brands(self) -> list[BrandProfile]:
        try:
            rows = await self.backend.fetch_brands()
            brands = [row_to_brand(r) for r in rows]
        except READ_ERRORS as exc:
            logger.error("Brand lookup failed, serving built-in brands: %s", exc)
            return seed.default_brands()
        if not brands and self.backend.remote:
            return seed.default_brands()
        return brands

    async def save_brand(self, brand: BrandProfile) -> bool:
        return await self._write("save brand", self.backend.upsert_brand(brand_to_row(brand)))

    # -- Products --

    async def get_products(self) -> list[Product]:
        try:
            rows = await self.backend.fetch_products()
            products = [row_to_product(r) for r in rows]
        except READ_ERRORS as exc:
            logger.error("Product lookup failed, serving built-in catalog: %s", exc)
            return seed.default_products()
        if not products and self.backend.remote:
            return seed.default_products()
        return products

    async def save_product(self, product: Product) -> bool:
        return await self._write("save product", self.backend.upsert_product(product_to_row(product)))

    async def delete_product(self, product_id: str) -> bool:
        return await self._write("delete product", self.backend.delete_product(product_id))

    # -- Transactions --

    async def get_transactions(self) -> list[Transaction]:
        try:
            rows = await self.backend.fetch_transactions()
            return [row_to_transaction(r) for r in rows]
        except READ_ERRORS as exc:
            logger.error("Transaction lookup failed, serving sample transactions: %s", exc)
            return seed.default_transactions()

    async def create_transaction(self, tx: Transaction) -> bool:
        return await self._write("create transaction", self.backend.insert_transaction(transaction_to_row(tx)))

    async def update_transaction_status(self, tx_id: str, details: dict[str, Any]) -> bool:
        return await self._write(
            "update transaction", self.backend.update_transaction_details(tx_id, details)
        )

    # -- Domain bindings --

    async def get_domain_bindings(self) -> dict[str, str]:
        try:
            rows = await self.backend.fetch_domain_bindings()
            return {r["host"]: r["branch"] for r in rows}
        except READ_ERRORS as exc:
            logger.error("Domain binding lookup failed: %s", exc)
            return {}

    async def bind_domain(self, host: str, branch: str) -> bool:
        return await self._write(
            "bind domain", self.backend.upsert_domain_binding({"host": host, "branch": branch})
        )

    async def unbind_domain(self, host: str) -> bool:
        return await self._write("unbind domain", self.backend.delete_domain_binding(host))

    # -- Lifecycle --

    async def close(self) -> None:
        await self.backend.close()

    def health(self) -> dict[str, Any]:
        return self.backend.health()

    @staticmethod
    async def _write(action: str, op) -> bool:
        try:
            await op
        except DataStoreError as exc:
            logger.error("Could not %s: %s", action, exc)
            return False
        return True


# ---------------------------------------------------------------------------
# Backend selection
# ---------------------------------------------------------------------------

async def build_backend(settings: Settings) -> StoreBackend:
    """Pick the backend for the current settings.

    Hosted REST wins over a direct database URL; with neither configured
    the service runs on the seeded in-memory store.
    """
    if settings.rest_configured:
        from core.integrations.hosted_table import HostedTableClient
        from verticals.outdoor.rest_store import RestStore

        logger.info("Using hosted REST backend at %s", settings.supabase_url)
        return RestStore(HostedTableClient(settings.supabase_url, settings.supabase_key, name="supabase"))

    if settings.sql_configured:
        from core.database import create_engine, create_session_factory, init_db
        from verticals.outdoor.repository import SqlStore

        engine = create_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            echo=settings.db_echo,
        )
        await init_db(engine)
        logger.info("Using SQL backend")
        return SqlStore(create_session_factory(engine), engine=engine)

    logger.warning("No data backend configured, running on built-in demo data")
    return MemoryStore.seeded()
