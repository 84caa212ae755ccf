"""SQL backend — async repositories over the outdoor tables.

Extends BaseRepository with the queries the data service needs and wraps
them in a StoreBackend so a plain database (``DATABASE_URL``) can stand in
for the hosted REST store.
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from core.database import close_db, session_scope
from patterns.repository import BaseRepository
from verticals.outdoor.backend import DataStoreError, Row, StoreBackend
from verticals.outdoor.models import db_models

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------

class BrandRepository(BaseRepository[db_models.Brand]):
    model = db_models.Brand


class ProductRepository(BaseRepository[db_models.Product]):
    model = db_models.Product


class TransactionRepository(BaseRepository[db_models.Transaction]):
    model = db_models.Transaction

    async def newest_first(self) -> list[dict]:
        return await self.list(order_by="date", descending=True)

    async def for_branch(self, branch: str) -> list[dict]:
        return await self.list(filters={"branch": branch}, order_by="date", descending=True)


class DomainBindingRepository(BaseRepository[db_models.DomainBinding]):
    model = db_models.DomainBinding
    key = "host"


# ---------------------------------------------------------------------------
# Backend
# ---------------------------------------------------------------------------

def _coerce_date(row: Row) -> Row:
    value = row.get("date")
    if isinstance(value, str):
        row = {**row, "date": datetime.fromisoformat(value)}
    return row


class SqlStore(StoreBackend):
    """StoreBackend over an async SQLAlchemy session factory."""

    name = "sql"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
    ):
        self.session_factory = session_factory
        self.engine = engine

    async def _run(self, action: str, repo_cls: type[BaseRepository], method: str, *args: Any) -> Any:
        try:
            async with session_scope(self.session_factory) as session:
                repo = repo_cls(session)
                return await getattr(repo, method)(*args)
        except SQLAlchemyError as exc:
            raise DataStoreError(f"{action} failed: {exc}") from exc

    # -- Brands --

    async def fetch_brands(self) -> list[Row]:
        return await self._run("select brands", BrandRepository, "list")

    async def upsert_brand(self, row: Row) -> None:
        await self._run("upsert brand", BrandRepository, "upsert", row)

    # -- Products --

    async def fetch_products(self) -> list[Row]:
        return await self._run("select products", ProductRepository, "list")

    async def upsert_product(self, row: Row) -> None:
        await self._run("upsert product", ProductRepository, "upsert", row)

    async def delete_product(self, product_id: str) -> None:
        await self._run("delete product", ProductRepository, "delete", product_id)

    # -- Transactions --

    async def fetch_transactions(self) -> list[Row]:
        return await self._run("select transactions", TransactionRepository, "newest_first")

    async def insert_transaction(self, row: Row) -> None:
        await self._run("insert transaction", TransactionRepository, "upsert", _coerce_date(row))

    async def update_transaction_details(self, tx_id: str, details: dict[str, Any]) -> None:
        updated = await self._run(
            "update transaction", TransactionRepository, "update", tx_id, {"details": details}
        )
        if updated is None:
            raise DataStoreError(f"update transaction failed: {tx_id} not found")

    # -- Domain bindings --

    async def fetch_domain_bindings(self) -> list[Row]:
        return await self._run("select domain bindings", DomainBindingRepository, "list")

    async def upsert_domain_binding(self, row: Row) -> None:
        await self._run("upsert domain binding", DomainBindingRepository, "upsert", row)

    async def delete_domain_binding(self, host: str) -> None:
        await self._run("delete domain binding", DomainBindingRepository, "delete", host)

    async def close(self) -> None:
        if self.engine is not None:
            await close_db(self.engine)
