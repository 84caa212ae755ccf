"""View models for the storefront and back-office screens.

Pure functions of ``AppState``; routers serialize the returned dicts as-is.
Money values are carried as numbers plus a display string (``Rp 150,000``).
"""

import math
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from patterns.domain_config import SummitBaseConfig
from patterns.workflow_states import LAUNDRY_SEQUENCE, LaundryStatus, RentalStatus, next_laundry_status
from verticals.outdoor.models.schemas import BrandProfile, Product, Transaction, TransactionType
from verticals.outdoor.state import AppState
from verticals.outdoor.tenancy import TenantResolution

LAUNDRY_COLUMNS = [s for s in LAUNDRY_SEQUENCE if s != LaundryStatus.DELIVERED]


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def fmt_money(value: float | int | None, currency: str = "Rp ") -> str:
    """Format a number as whole Rupiah."""
    if value is None:
        return "N/A"
    return f"{currency}{value:,.0f}"


def _parse_dt(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value:
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def _branch_transactions(state: AppState, branch: str, kind: TransactionType | None = None) -> List[Transaction]:
    return [
        t for t in state.transactions
        if t.branch == branch and (kind is None or t.type == kind)
    ]


def _brand_card(brand: BrandProfile) -> Dict[str, Any]:
    return brand.model_dump()


# ---------------------------------------------------------------------------
# Storefront
# ---------------------------------------------------------------------------

def landing_view(state: AppState, resolution: TenantResolution) -> Dict[str, Any]:
    return {
        "view": "landing",
        "detected_host": resolution.detected_host,
        "simulated_domain": resolution.simulated_domain,
        "brands": [_brand_card(b) for b in state.brands],
        "admin_path": "/api/admin",
    }


def storefront_catalog(products: List[Product], branch: str, category: str = "All") -> List[Product]:
    """Products rentable at ``branch``: in stock with a daily rate."""
    return [
        p for p in products
        if p.stock_at(branch) > 0
        and p.rent_price(branch) > 0
        and (category == "All" or p.category == category)
    ]


def storefront_view(
    state: AppState,
    resolution: TenantResolution,
    config: SummitBaseConfig,
    category: str = "All",
) -> Dict[str, Any]:
    brand = resolution.brand
    items = storefront_catalog(state.products, brand.id, category)
    return {
        "view": "shop",
        "brand": _brand_card(brand),
        "resolution": resolution.to_dict(),
        "simulation": {
            "active": resolution.simulated_domain is not None,
            "domain": resolution.simulated_domain,
        },
        "categories": list(config.storefront_categories),
        "category": category,
        "default_duration_days": config.rental.default_days,
        "products": [
            {
                "id": p.id,
                "name": p.name,
                "category": p.category,
                "image": p.image,
                "price_rent_per_day": p.rent_price(brand.id),
                "price_display": fmt_money(p.rent_price(brand.id)),
                "stock": p.stock_at(brand.id),
            }
            for p in items
        ],
    }


def booking_message(brand: BrandProfile) -> str:
    return f"Booking Confirmed! Thank you for choosing {brand.name}. Please pick up your gear at our store."


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

def dashboard_stats(state: AppState, branch: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Revenue and activity totals for one branch."""
    now = now or datetime.now(timezone.utc)
    txs = _branch_transactions(state, branch)

    mix: Dict[str, float] = {t.value: 0.0 for t in TransactionType}
    for tx in txs:
        mix[tx.type.value] += tx.total_amount
    counts = Counter(tx.type for tx in txs)

    today = now.date()
    activity = []
    for offset in range(6, -1, -1):
        day = today - timedelta(days=offset)
        revenue = sum(t.total_amount for t in txs if t.date.astimezone(now.tzinfo).date() == day)
        activity.append({"date": day.isoformat(), "name": day.strftime("%a"), "revenue": revenue})

    total = sum(t.total_amount for t in txs)
    return {
        "branch": branch,
        "total_revenue": total,
        "total_revenue_display": fmt_money(total),
        "active_rentals": counts[TransactionType.RENTAL],
        "sales_count": counts[TransactionType.SALE],
        "laundry_orders": counts[TransactionType.LAUNDRY],
        "revenue_mix": [{"name": k, "value": v} for k, v in mix.items()],
        "activity": activity,
    }


# ---------------------------------------------------------------------------
# Point of sale
# ---------------------------------------------------------------------------

def pos_catalog(state: AppState, branch: str, search: str = "") -> List[Dict[str, Any]]:
    term = search.strip().lower()
    return [
        {
            "id": p.id,
            "name": p.name,
            "category": p.category,
            "price_sale": p.sale_price(branch),
            "price_display": fmt_money(p.sale_price(branch)),
            "stock": p.stock_at(branch),
        }
        for p in state.products
        if p.sale_price(branch) > 0 and p.stock_at(branch) > 0 and term in p.name.lower()
    ]


# ---------------------------------------------------------------------------
# Rentals
# ---------------------------------------------------------------------------

def rental_board(
    state: AppState,
    branch: str,
    search: str = "",
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """The branch's rentals, newest first, with days left until due."""
    now = now or datetime.now(timezone.utc)
    term = search.strip().lower()
    rows = []
    for tx in _branch_transactions(state, branch, TransactionType.RENTAL):
        names = tx.item_names
        if term and not (
            term in tx.customer_name.lower()
            or term in tx.id.lower()
            or any(term in n.lower() for n in names)
        ):
            continue
        end = _parse_dt(tx.details.get("end_date"))
        days_left = math.ceil((end - now).total_seconds() / 86400) if end else None
        status = tx.status or RentalStatus.BOOKED.value
        rows.append({
            "id": tx.id,
            "customer_name": tx.customer_name,
            "items": names,
            "status": status,
            "start_date": tx.details.get("start_date"),
            "end_date": tx.details.get("end_date"),
            "days_left": days_left,
            "overdue": status == RentalStatus.OVERDUE.value
            or (status == RentalStatus.ACTIVE.value and days_left is not None and days_left < 0),
            "total_amount": tx.total_amount,
            "total_display": fmt_money(tx.total_amount),
        })
    return rows


def rental_inventory(state: AppState, branch: str, config: SummitBaseConfig) -> List[Dict[str, Any]]:
    threshold = config.inventory.low_stock_threshold
    return [
        {
            "id": p.id,
            "name": p.name,
            "category": p.category,
            "price_rent_per_day": p.rent_price(branch),
            "price_display": fmt_money(p.rent_price(branch)),
            "stock": p.stock_at(branch),
            "low_stock": p.stock_at(branch) < threshold,
        }
        for p in state.products
        if p.rent_price(branch) > 0
    ]


# ---------------------------------------------------------------------------
# Laundry
# ---------------------------------------------------------------------------

def laundry_board(state: AppState, branch: str) -> Dict[str, Any]:
    """Kanban columns of open laundry orders (delivered ones drop off)."""
    columns: Dict[str, List[Dict[str, Any]]] = {s.value: [] for s in LAUNDRY_COLUMNS}
    for tx in _branch_transactions(state, branch, TransactionType.LAUNDRY):
        if tx.status not in columns:
            continue
        nxt = next_laundry_status(tx.status)
        columns[tx.status].append({
            "id": tx.id,
            "customer_name": tx.customer_name,
            "items": tx.details.get("items", []),
            "estimated_ready": tx.details.get("estimated_ready"),
            "total_amount": tx.total_amount,
            "next_status": nxt.value if nxt else None,
        })
    return {
        "branch": branch,
        "columns": [{"status": status, "orders": orders} for status, orders in columns.items()],
    }


# ---------------------------------------------------------------------------
# Inventory editor
# ---------------------------------------------------------------------------

def inventory_rows(state: AppState, branch: str, search: str = "") -> List[Dict[str, Any]]:
    term = search.strip().lower()
    rows = []
    for p in state.products:
        if term and term not in p.name.lower() and term not in p.category.lower():
            continue
        stock = p.stock_at(branch)
        rent = p.rent_price(branch)
        sale = p.sale_price(branch)
        rows.append({
            "id": p.id,
            "name": p.name,
            "category": p.category,
            "image": p.image,
            "stock": stock,
            "price_rent_per_day": rent,
            "price_sale": sale,
            "active": stock > 0 or rent > 0 or sale > 0,
        })
    return rows


# ---------------------------------------------------------------------------
# Domain binding settings
# ---------------------------------------------------------------------------

def domain_settings(state: AppState, detected_host: str) -> Dict[str, Any]:
    return {
        "detected_host": detected_host,
        "current_binding": state.bindings.get(detected_host),
        "bindings": [{"host": h, "branch": b} for h, b in sorted(state.bindings.items())],
        "brands": [{"id": b.id, "name": b.name} for b in state.brands],
    }


# ---------------------------------------------------------------------------
# Advisor context
# ---------------------------------------------------------------------------

def business_summary(state: AppState, branch: str, config: SummitBaseConfig) -> Dict[str, Any]:
    """Snapshot handed to the AI advisor."""
    threshold = config.inventory.low_stock_threshold
    revenue = {b.id: 0.0 for b in state.brands}
    for tx in state.transactions:
        revenue[tx.branch] = revenue.get(tx.branch, 0.0) + tx.total_amount

    recent = state.transactions[: config.advisor.recent_transactions]
    return {
        "current_branch": branch,
        "total_transactions": len(state.transactions),
        "revenue_by_branch": revenue,
        "recent_transactions": [t.model_dump(mode="json") for t in recent],
        "low_stock_items": [
            p.name for p in state.products
            if branch in p.stock and p.stock[branch] < threshold
        ],
    }
