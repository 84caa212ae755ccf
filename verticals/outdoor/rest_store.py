"""Hosted REST backend (Supabase / PostgREST tables)."""

from typing import Any

from core.integrations.hosted_table import HostedTableClient, TableResponse
from verticals.outdoor.backend import (
    BRANDS,
    DOMAIN_BINDINGS,
    PRODUCTS,
    TRANSACTIONS,
    DataStoreError,
    Row,
    StoreBackend,
)


class RestStore(StoreBackend):
    """Maps backend operations onto hosted table calls."""

    name = "rest"

    def __init__(self, client: HostedTableClient):
        self.client = client

    @staticmethod
    def _check(resp: TableResponse, action: str) -> Any:
        if not resp.ok:
            raise DataStoreError(f"{action} failed: {resp.error or resp.status_code}")
        return resp.data

    async def _rows(self, table: str, **params: Any) -> list[Row]:
        data = self._check(await self.client.select(table, **params), f"select {table}")
        return list(data or [])

    # -- Brands --

    async def fetch_brands(self) -> list[Row]:
        return await self._rows(BRANDS)

    async def upsert_brand(self, row: Row) -> None:
        self._check(await self.client.upsert(BRANDS, row), "upsert brand")

    # -- Products --

    async def fetch_products(self) -> list[Row]:
        return await self._rows(PRODUCTS)

    async def upsert_product(self, row: Row) -> None:
        self._check(await self.client.upsert(PRODUCTS, row), "upsert product")

    async def delete_product(self, product_id: str) -> None:
        self._check(await self.client.delete(PRODUCTS, {"id": product_id}), "delete product")

    # -- Transactions --

    async def fetch_transactions(self) -> list[Row]:
        return await self._rows(TRANSACTIONS, order="date.desc")

    async def insert_transaction(self, row: Row) -> None:
        self._check(await self.client.insert(TRANSACTIONS, row), "insert transaction")

    async def update_transaction_details(self, tx_id: str, details: dict[str, Any]) -> None:
        self._check(
            await self.client.update(TRANSACTIONS, {"id": tx_id}, {"details": details}),
            "update transaction",
        )

    # -- Domain bindings --

    async def fetch_domain_bindings(self) -> list[Row]:
        return await self._rows(DOMAIN_BINDINGS)

    async def upsert_domain_binding(self, row: Row) -> None:
        self._check(
            await self.client.upsert(DOMAIN_BINDINGS, row, on_conflict="host"),
            "upsert domain binding",
        )

    async def delete_domain_binding(self, host: str) -> None:
        self._check(await self.client.delete(DOMAIN_BINDINGS, {"host": host}), "delete domain binding")

    def health(self) -> dict[str, Any]:
        return {"backend": self.name, **self.client.get_health().to_dict()}
