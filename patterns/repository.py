"""Async repository pattern for database access.

Provides a generic base repository with list/get/upsert/update/delete over
an AsyncSession. Verticals subclass this to add domain-specific queries.

Repositories return plain dicts (via each model's ``to_dict()``) whose
keys are the table's column names, so callers never hold live ORM objects
outside the session.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.models.base import Base

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)

_PROTECTED_COLUMNS = ("created_at", "updated_at")


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository keyed by a single primary-key column.

    Subclass and set ``model`` (and ``key`` if the key column is not
    ``id``)::

        class ProductRepository(BaseRepository[Product]):
            model = Product

            async def by_category(self, category: str):
                stmt = select(self.model).where(self.model.category == category)
                result = await self.session.execute(stmt)
                return [r.to_dict() for r in result.scalars().all()]
    """

    model: type[ModelT]
    key: str = "id"

    def __init__(self, session: AsyncSession):
        self.session = session

    # -- List --

    async def list(
        self,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict]:
        """List rows with optional equality filters and ordering."""
        stmt = select(self.model)

        if filters:
            for col_name, value in filters.items():
                if hasattr(self.model, col_name) and value is not None:
                    stmt = stmt.where(getattr(self.model, col_name) == value)

        if order_by and hasattr(self.model, order_by):
            column = getattr(self.model, order_by)
            stmt = stmt.order_by(column.desc() if descending else column)

        result = await self.session.execute(stmt)
        return [row.to_dict() for row in result.scalars().all()]

    # -- Get by key --

    async def get(self, item_id: str) -> dict | None:
        item = await self.session.get(self.model, item_id)
        return item.to_dict() if item else None

    # -- Upsert --

    async def upsert(self, data: dict[str, Any]) -> dict:
        """Insert a row, or overwrite the existing row with the same key."""
        item = await self.session.get(self.model, data[self.key])
        if item is None:
            item = self.model(**data)
            self.session.add(item)
        else:
            self._apply(item, data)

        await self.session.flush()
        return item.to_dict()

    # -- Update --

    async def update(self, item_id: str, data: dict[str, Any]) -> dict | None:
        """Update an existing row. Returns None if not found."""
        item = await self.session.get(self.model, item_id)
        if not item:
            return None

        self._apply(item, data)
        await self.session.flush()
        return item.to_dict()

    # -- Delete --

    async def delete(self, item_id: str) -> bool:
        """Delete a row. Returns True if deleted, False if not found."""
        item = await self.session.get(self.model, item_id)
        if not item:
            return False

        await self.session.delete(item)
        await self.session.flush()
        return True

    def _apply(self, item: ModelT, data: dict[str, Any]) -> None:
        for key, value in data.items():
            if hasattr(item, key) and key != self.key and key not in _PROTECTED_COLUMNS:
                setattr(item, key, value)
