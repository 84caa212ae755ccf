"""In-process backend used when no hosted store is configured."""

import copy
from typing import Any

from verticals.outdoor import seed
from verticals.outdoor.backend import Row, StoreBackend
from verticals.outdoor.mapping import brand_to_row, product_to_row, transaction_to_row


class MemoryStore(StoreBackend):
    """Dict-backed tables. Rows are copied in and out."""

    name = "memory"
    remote = False

    def __init__(
        self,
        brands: list[Row] | None = None,
        products: list[Row] | None = None,
        transactions: list[Row] | None = None,
        bindings: list[Row] | None = None,
    ):
        self._brands = {r["id"]: copy.deepcopy(r) for r in brands or []}
        self._products = {r["id"]: copy.deepcopy(r) for r in products or []}
        self._transactions = {r["id"]: copy.deepcopy(r) for r in transactions or []}
        self._bindings = {r["host"]: copy.deepcopy(r) for r in bindings or []}

    @classmethod
    def seeded(cls) -> "MemoryStore":
        """A store pre-filled with the built-in demo data."""
        return cls(
            brands=[brand_to_row(b) for b in seed.default_brands()],
            products=[product_to_row(p) for p in seed.default_products()],
            transactions=[transaction_to_row(t) for t in seed.default_transactions()],
        )

    # -- Brands --

    async def fetch_brands(self) -> list[Row]:
        return copy.deepcopy(list(self._brands.values()))

    async def upsert_brand(self, row: Row) -> None:
        self._brands[row["id"]] = copy.deepcopy(row)

    # -- Products --

    async def fetch_products(self) -> list[Row]:
        return copy.deepcopy(list(self._products.values()))

    async def upsert_product(self, row: Row) -> None:
        self._products[row["id"]] = copy.deepcopy(row)

    async def delete_product(self, product_id: str) -> None:
        self._products.pop(product_id, None)

    # -- Transactions --

    async def fetch_transactions(self) -> list[Row]:
        rows = sorted(self._transactions.values(), key=lambda r: str(r["date"]), reverse=True)
        return copy.deepcopy(rows)

    async def insert_transaction(self, row: Row) -> None:
        self._transactions[row["id"]] = copy.deepcopy(row)

    async def update_transaction_details(self, tx_id: str, details: dict[str, Any]) -> None:
        if tx_id in self._transactions:
            self._transactions[tx_id]["details"] = copy.deepcopy(details)

    # -- Domain bindings --

    async def fetch_domain_bindings(self) -> list[Row]:
        return copy.deepcopy(list(self._bindings.values()))

    async def upsert_domain_binding(self, row: Row) -> None:
        self._bindings[row["host"]] = copy.deepcopy(row)

    async def delete_domain_binding(self, host: str) -> None:
        self._bindings.pop(host, None)
