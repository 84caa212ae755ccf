"""In-process application state with optimistic updates.

The API serves every read from ``AppState``. Mutations change the state
immediately and hand the matching data-service write to ``defer`` (a
FastAPI ``BackgroundTasks.add_task`` in request handlers), so the
response never waits on the hosted store. A failed write is logged by the
data service; the in-memory state keeps the change.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from verticals.outdoor.data_service import DataService
from verticals.outdoor.models.schemas import BrandProfile, Product, Transaction

logger = logging.getLogger(__name__)

Defer = Callable[..., Any]


class NotFoundError(LookupError):
    """No brand, product or transaction with the requested id."""


@dataclass
class AppState:
    brands: list[BrandProfile] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)  # newest first
    bindings: dict[str, str] = field(default_factory=dict)


class StateManager:
    """Owns the AppState and keeps the backing store in step with it."""

    def __init__(self, service: DataService):
        self.service = service
        self.state = AppState()

    async def load(self) -> AppState:
        """(Re)load everything from the data service."""
        brands, products, transactions, bindings = await asyncio.gather(
            self.service.get_brands(),
            self.service.get_products(),
            self.service.get_transactions(),
            self.service.get_domain_bindings(),
        )
        self.state = AppState(
            brands=brands,
            products=products,
            transactions=sorted(transactions, key=lambda t: t.date, reverse=True),
            bindings=bindings,
        )
        logger.info(
            "State loaded from %s backend: %d brands, %d products, %d transactions",
            self.service.backend_name,
            len(brands),
            len(products),
            len(transactions),
        )
        return self.state

    # -- Lookups --

    def brand(self, brand_id: str) -> BrandProfile:
        found = next((b for b in self.state.brands if b.id == brand_id), None)
        if found is None:
            raise NotFoundError(f"Brand not found: {brand_id}")
        return found

    def product(self, product_id: str) -> Product:
        found = next((p for p in self.state.products if p.id == product_id), None)
        if found is None:
            raise NotFoundError(f"Product not found: {product_id}")
        return found

    def transaction(self, tx_id: str) -> Transaction:
        found = next((t for t in self.state.transactions if t.id == tx_id), None)
        if found is None:
            raise NotFoundError(f"Transaction not found: {tx_id}")
        return found

    # -- Mutations --

    def add_transaction(self, tx: Transaction, defer: Defer) -> Transaction:
        self.state.transactions.insert(0, tx)
        defer(self.service.create_transaction, tx)
        return tx

    def set_transaction_details(self, tx_id: str, details: dict[str, Any], defer: Defer) -> Transaction:
        current = self.transaction(tx_id)
        updated = current.model_copy(update={"details": details})
        self.state.transactions = [updated if t.id == tx_id else t for t in self.state.transactions]
        defer(self.service.update_transaction_status, tx_id, details)
        return updated

    def save_product(self, product: Product, defer: Defer) -> Product:
        if any(p.id == product.id for p in self.state.products):
            self.state.products = [product if p.id == product.id else p for p in self.state.products]
        else:
            self.state.products.append(product)
        defer(self.service.save_product, product)
        return product

    def delete_product(self, product_id: str, defer: Defer) -> None:
        self.product(product_id)
        self.state.products = [p for p in self.state.products if p.id != product_id]
        defer(self.service.delete_product, product_id)

    def save_brand(self, brand: BrandProfile, defer: Defer) -> BrandProfile:
        if any(b.id == brand.id for b in self.state.brands):
            self.state.brands = [brand if b.id == brand.id else b for b in self.state.brands]
        else:
            self.state.brands.append(brand)
        defer(self.service.save_brand, brand)
        return brand

    def bind_domain(self, host: str, branch: str, defer: Defer) -> dict[str, str]:
        self.brand(branch)
        self.state.bindings = {**self.state.bindings, host: branch}
        defer(self.service.bind_domain, host, branch)
        return self.state.bindings

    def unbind_domain(self, host: str, defer: Defer) -> Optional[str]:
        removed = self.state.bindings.get(host)
        if removed is None:
            raise NotFoundError(f"No binding for host: {host}")
        self.state.bindings = {h: b for h, b in self.state.bindings.items() if h != host}
        defer(self.service.unbind_domain, host)
        return removed
