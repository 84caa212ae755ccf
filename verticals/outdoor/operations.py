"""Business actions behind the storefront and back-office screens.

Each action validates, builds the transaction or product, and applies it
through the StateManager (which defers persistence).
"""

import logging
import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from patterns.domain_config import SummitBaseConfig
from patterns.workflow_states import (
    InvalidTransition,
    LaundryStatus,
    RentalStatus,
    WorkflowInstance,
    next_laundry_status,
)
from verticals.outdoor.models.schemas import (
    CheckoutRequest,
    LaundryDetails,
    LaundryIntakeRequest,
    Product,
    ProductUpsert,
    RentalDetails,
    RentalItem,
    SaleDetails,
    SaleItem,
    Transaction,
    TransactionType,
)
from verticals.outdoor.rules import booking_rules, checkout_rules, enforce
from verticals.outdoor.state import Defer, NotFoundError, StateManager

logger = logging.getLogger(__name__)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def guest_name() -> str:
    return f"Guest Customer {random.randint(0, 999)}"


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Rentals
# ---------------------------------------------------------------------------

def book_rental(
    manager: StateManager,
    branch: str,
    product_id: str,
    customer_name: Optional[str],
    days: int,
    config: SummitBaseConfig,
    defer: Defer,
    now: Optional[datetime] = None,
) -> Transaction:
    """Book one unit of a product at ``branch`` for ``days`` days."""
    manager.brand(branch)
    product = manager.product(product_id)
    enforce(booking_rules(product, branch, customer_name, days, config))

    start = _now(now)
    details = RentalDetails(
        items=[RentalItem(product_id=product.id, quantity=1, name=product.name)],
        start_date=start,
        end_date=start + timedelta(days=days),
        status=RentalStatus.BOOKED,
    )
    tx = Transaction(
        id=new_id("tx"),
        branch=branch,
        date=start,
        type=TransactionType.RENTAL,
        total_amount=product.rent_price(branch) * days,
        customer_name=customer_name.strip(),
        details=details.model_dump(mode="json"),
    )
    logger.info("Rental %s booked at %s for %s", tx.id, branch, tx.customer_name)
    return manager.add_transaction(tx, defer)


def set_rental_status(
    manager: StateManager,
    tx_id: str,
    status: RentalStatus,
    defer: Defer,
) -> Transaction:
    tx = manager.transaction(tx_id)
    if tx.type != TransactionType.RENTAL:
        raise NotFoundError(f"Rental not found: {tx_id}")

    try:
        workflow = WorkflowInstance.for_rental(tx.id, tx.status or RentalStatus.BOOKED)
    except ValueError as exc:
        raise InvalidTransition(f"Rental {tx_id} has unknown status {tx.status!r}") from exc
    record = workflow.transition(status, actor="admin")
    logger.info("Rental %s: %s -> %s", tx.id, record.from_state, record.to_state)
    return manager.set_transaction_details(tx.id, {**tx.details, "status": status.value}, defer)


# ---------------------------------------------------------------------------
# Point of sale
# ---------------------------------------------------------------------------

def checkout(
    manager: StateManager,
    branch: str,
    request: CheckoutRequest,
    config: SummitBaseConfig,
    defer: Defer,
    now: Optional[datetime] = None,
) -> Transaction:
    """Price the cart at the branch's sale prices and record the sale."""
    manager.brand(branch)

    # merge repeated lines for the same product
    quantities: dict[str, int] = {}
    for line in request.items:
        quantities[line.product_id] = quantities.get(line.product_id, 0) + line.quantity
    lines = [(manager.product(pid), qty) for pid, qty in quantities.items()]
    enforce(checkout_rules(lines, branch))

    items = [
        SaleItem(
            product_id=product.id,
            quantity=qty,
            price_at_sale=product.sale_price(branch),
            name=product.name,
        )
        for product, qty in lines
    ]
    tx = Transaction(
        id=new_id("tx"),
        branch=branch,
        date=_now(now),
        type=TransactionType.SALE,
        total_amount=sum(i.price_at_sale * i.quantity for i in items),
        customer_name=(request.customer_name or "").strip() or config.walk_in_customer,
        details=SaleDetails(items=items).model_dump(mode="json"),
    )
    logger.info("Sale %s at %s: %d line(s), total %.0f", tx.id, branch, len(items), tx.total_amount)
    return manager.add_transaction(tx, defer)


# ---------------------------------------------------------------------------
# Laundry
# ---------------------------------------------------------------------------

def intake_laundry(
    manager: StateManager,
    branch: str,
    request: LaundryIntakeRequest,
    config: SummitBaseConfig,
    defer: Defer,
    now: Optional[datetime] = None,
) -> Transaction:
    manager.brand(branch)
    received = _now(now)
    details = LaundryDetails(
        items=request.items,
        status=LaundryStatus.RECEIVED,
        estimated_ready=request.estimated_ready
        or received + timedelta(days=config.laundry.turnaround_days),
    )
    tx = Transaction(
        id=new_id("tx"),
        branch=branch,
        date=received,
        type=TransactionType.LAUNDRY,
        total_amount=request.total_amount,
        customer_name=request.customer_name.strip(),
        details=details.model_dump(mode="json"),
    )
    return manager.add_transaction(tx, defer)


def advance_laundry(manager: StateManager, tx_id: str, defer: Defer) -> Transaction:
    """Move a laundry order to its next stage."""
    tx = manager.transaction(tx_id)
    if tx.type != TransactionType.LAUNDRY:
        raise NotFoundError(f"Laundry order not found: {tx_id}")

    try:
        workflow = WorkflowInstance.for_laundry(tx.id, tx.status)
    except ValueError as exc:
        raise InvalidTransition(f"Laundry order {tx_id} has unknown status {tx.status!r}") from exc
    if workflow.is_terminal:
        raise InvalidTransition(f"Laundry order {tx_id} is already {tx.status}")
    record = workflow.transition(next_laundry_status(workflow.current_state), actor="admin")
    logger.info("Laundry %s: %s -> %s", tx.id, record.from_state, record.to_state)
    return manager.set_transaction_details(tx.id, {**tx.details, "status": record.to_state}, defer)


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------

def save_inventory_item(
    manager: StateManager,
    branch: str,
    form: ProductUpsert,
    defer: Defer,
) -> Product:
    """Create or edit a product, touching only ``branch``'s price/stock."""
    manager.brand(branch)

    if form.id:
        existing = manager.product(form.id)
        product = existing.model_copy(
            update={
                "name": form.name,
                "category": form.category,
                "image": form.image if form.image is not None else existing.image,
                "stock": {**existing.stock, branch: form.stock},
                "price_rent_per_day": {**existing.price_rent_per_day, branch: form.price_rent_per_day},
                "price_sale": {**existing.price_sale, branch: form.price_sale},
            }
        )
    else:
        product = Product(
            id=new_id("prod"),
            name=form.name,
            category=form.category,
            image=form.image,
            stock={branch: form.stock},
            price_rent_per_day={branch: form.price_rent_per_day},
            price_sale={branch: form.price_sale},
        )
    return manager.save_product(product, defer)
