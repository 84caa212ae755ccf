"""Built-in brands, catalog and sample transactions.

Served when no backend is configured (offline mode) and as the fallback
when the hosted backend cannot be read. Every call returns fresh objects.
"""

from datetime import datetime, timedelta, timezone

from patterns.workflow_states import LaundryStatus, RentalStatus
from verticals.outdoor.models.schemas import (
    BrandProfile,
    BrandTheme,
    Product,
    Transaction,
    TransactionType,
)

PWT = "JKT-Central"
PBG = "BDG-North"
MAMAS = "BALI-South"


def default_brands() -> list[BrandProfile]:
    return [
        BrandProfile(
            id=PWT,
            name="Fourteen Adventure Purwokerto",
            short_name="Fourteen PWT",
            tagline="Your Journey Starts in Purwokerto",
            theme=BrandTheme(
                primary="emerald",
                secondary="stone",
                bg_gradient="from-stone-900 via-emerald-950 to-stone-900",
                accent="emerald-400",
            ),
            logo_icon="mountain",
            domains=["fourteen-pwt.vercel.app", "fourteen-pwt-app.vercel.app", "pwt", "jakarta", "central"],
        ),
        BrandProfile(
            id=PBG,
            name="Fourteen Adventure Purbalingga",
            short_name="Fourteen PBG",
            tagline="Explore Purbalingga's Heights",
            theme=BrandTheme(
                primary="blue",
                secondary="slate",
                bg_gradient="from-slate-900 via-blue-950 to-slate-900",
                accent="blue-400",
            ),
            logo_icon="tent",
            domains=["fourteen-pbg.vercel.app", "fourteen-pbg-app.vercel.app", "pbg", "bandung", "north"],
        ),
        BrandProfile(
            id=MAMAS,
            name="Mamas Outdoor",
            short_name="Mamas Outdoor",
            tagline="Premium Gear for Professionals",
            theme=BrandTheme(
                primary="orange",
                secondary="amber",
                bg_gradient="from-orange-950 via-red-950 to-stone-900",
                accent="orange-400",
            ),
            logo_icon="compass",
            domains=["mamas-bali.vercel.app", "mamasoutdoor.id", "mamas", "bali", "south"],
        ),
    ]


def _per_branch(pwt, pbg, mamas) -> dict:
    return {PWT: pwt, PBG: pbg, MAMAS: mamas}


def default_products() -> list[Product]:
    return [
        Product(
            id="1", name="North Face Tent 4P", category="Tent",
            price_sale=_per_branch(4500000, 4400000, 4800000),
            price_rent_per_day=_per_branch(150000, 120000, 200000),
            stock=_per_branch(10, 5, 8),
        ),
        Product(
            id="2", name="Deuter Aircontact 65+10", category="Backpack",
            price_sale=_per_branch(3200000, 3100000, 3500000),
            price_rent_per_day=_per_branch(75000, 65000, 95000),
            stock=_per_branch(15, 12, 20),
        ),
        Product(
            id="3", name="Gas Canister 230g", category="Cooking",
            price_sale=_per_branch(55000, 50000, 75000),
            price_rent_per_day=_per_branch(0, 0, 0),
            stock=_per_branch(100, 80, 150),
        ),
        Product(
            id="4", name="Sleeping Bag Mummy", category="Accessories",
            price_sale=_per_branch(850000, 800000, 950000),
            price_rent_per_day=_per_branch(35000, 30000, 50000),
            stock=_per_branch(20, 25, 10),
        ),
        Product(
            id="5", name="Hiking Pole (Pair)", category="Accessories",
            price_sale=_per_branch(450000, 420000, 500000),
            price_rent_per_day=_per_branch(25000, 20000, 35000),
            stock=_per_branch(30, 30, 15),
        ),
        Product(
            id="6", name="Rain Cover Universal", category="Accessories",
            price_sale=_per_branch(120000, 110000, 150000),
            price_rent_per_day=_per_branch(10000, 8000, 15000),
            stock=_per_branch(50, 45, 60),
        ),
    ]


def default_transactions() -> list[Transaction]:
    now = datetime.now(timezone.utc)
    return [
        Transaction(
            id="tx-001", branch=PWT, date=now, type=TransactionType.SALE,
            total_amount=55000, customer_name="Walk-in",
            details={"items": [{"product_id": "3", "quantity": 1, "price_at_sale": 55000, "name": "Gas Canister 230g"}]},
        ),
        Transaction(
            id="tx-002", branch=PWT, date=now, type=TransactionType.RENTAL,
            total_amount=450000, customer_name="John Doe",
            details={
                "items": [{"product_id": "1", "quantity": 1, "name": "North Face Tent 4P"}],
                "start_date": now.isoformat(),
                "end_date": (now + timedelta(days=2)).isoformat(),
                "status": RentalStatus.ACTIVE.value,
            },
        ),
        Transaction(
            id="tx-003", branch=PBG, date=now, type=TransactionType.LAUNDRY,
            total_amount=75000, customer_name="Jane Smith",
            details={
                "items": [{"item_name": "Down Jacket", "quantity": 1, "service_type": "Wash & Fold"}],
                "status": LaundryStatus.WASHING.value,
                "estimated_ready": (now + timedelta(days=1)).isoformat(),
            },
        ),
    ]
