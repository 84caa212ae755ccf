"""Storage backend contract shared by the memory, REST and SQL stores.

Backends speak in rows: plain dicts keyed by the table's column names
(``short_name``, ``price_sale``, ``total_amount``…). Mapping rows to
domain objects is the data service's job. Any failure is raised as
DataStoreError.
"""

from abc import ABC, abstractmethod
from typing import Any

Row = dict[str, Any]

BRANDS = "brands"
PRODUCTS = "products"
TRANSACTIONS = "transactions"
DOMAIN_BINDINGS = "domain_bindings"


class DataStoreError(Exception):
    """The backing store could not complete an operation."""


class StoreBackend(ABC):
    """Row-level CRUD over the four SummitBase tables."""

    name: str = ""
    remote: bool = True

    # -- Brands --

    @abstractmethod
    async def fetch_brands(self) -> list[Row]: ...

    @abstractmethod
    async def upsert_brand(self, row: Row) -> None: ...

    # -- Products --

    @abstractmethod
    async def fetch_products(self) -> list[Row]: ...

    @abstractmethod
    async def upsert_product(self, row: Row) -> None: ...

    @abstractmethod
    async def delete_product(self, product_id: str) -> None: ...

    # -- Transactions --

    @abstractmethod
    async def fetch_transactions(self) -> list[Row]:
        """Rows ordered by date, newest first."""

    @abstractmethod
    async def insert_transaction(self, row: Row) -> None: ...

    @abstractmethod
    async def update_transaction_details(self, tx_id: str, details: dict[str, Any]) -> None: ...

    # -- Domain bindings --

    @abstractmethod
    async def fetch_domain_bindings(self) -> list[Row]: ...

    @abstractmethod
    async def upsert_domain_binding(self, row: Row) -> None: ...

    @abstractmethod
    async def delete_domain_binding(self, host: str) -> None: ...

    async def close(self) -> None:
        """Release connections; most backends hold none."""

    def health(self) -> dict[str, Any]:
        return {"backend": self.name}
