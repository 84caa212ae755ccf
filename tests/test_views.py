"""Test view models built from application state."""
from datetime import datetime, timedelta, timezone

from patterns.domain_config import InventoryConfig, SummitBaseConfig
from verticals.outdoor import seed, views
from verticals.outdoor.models.schemas import Transaction, TransactionType
from verticals.outdoor.tenancy import resolve_tenant

CONFIG = SummitBaseConfig.default()
NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


def _tx(tx_id, branch, kind, amount, date, **details):
    return Transaction(
        id=tx_id, branch=branch, date=date, type=kind,
        total_amount=amount, customer_name="Test", details=details,
    )


def test_fmt_money():
    assert views.fmt_money(150000) == "Rp 150,000"
    assert views.fmt_money(None) == "N/A"


def test_storefront_catalog_hides_non_rentals():
    names = [p.name for p in views.storefront_catalog(seed.default_products(), seed.PWT)]
    assert "Gas Canister 230g" not in names
    assert "North Face Tent 4P" in names


def test_storefront_catalog_category_filter():
    items = views.storefront_catalog(seed.default_products(), seed.PWT, "Accessories")
    assert {p.category for p in items} == {"Accessories"}
    assert len(items) == 3


def test_storefront_view(manager):
    resolution = resolve_tenant("mamas", manager.state.brands)
    body = views.storefront_view(manager.state, resolution, CONFIG)
    assert body["brand"]["id"] == seed.MAMAS
    assert body["categories"][0] == "All"
    assert body["simulation"]["active"] is False
    tent = next(p for p in body["products"] if p["id"] == "1")
    assert tent["price_rent_per_day"] == 200000


def test_landing_view_lists_brands(manager):
    body = views.landing_view(manager.state, resolve_tenant("localhost", manager.state.brands))
    assert body["view"] == "landing"
    assert len(body["brands"]) == 3


def test_dashboard_stats(manager):
    manager.state.transactions = [
        _tx("a", seed.PWT, TransactionType.SALE, 100, NOW),
        _tx("b", seed.PWT, TransactionType.RENTAL, 300, NOW - timedelta(days=2)),
        _tx("c", seed.PWT, TransactionType.LAUNDRY, 50, NOW - timedelta(days=10)),
        _tx("d", seed.PBG, TransactionType.SALE, 999, NOW),
    ]
    stats = views.dashboard_stats(manager.state, seed.PWT, now=NOW)
    assert stats["total_revenue"] == 450
    assert stats["active_rentals"] == 1
    assert stats["sales_count"] == 1
    assert stats["laundry_orders"] == 1
    assert {m["name"]: m["value"] for m in stats["revenue_mix"]} == {
        "RENTAL": 300, "SALE": 100, "LAUNDRY": 50,
    }
    assert len(stats["activity"]) == 7
    assert stats["activity"][-1] == {"date": "2026-03-02", "name": "Mon", "revenue": 100}
    assert stats["activity"][-3]["revenue"] == 300


def test_pos_catalog_search(manager):
    rows = views.pos_catalog(manager.state, seed.PWT, "CANISTER")
    assert [r["id"] for r in rows] == ["3"]


def test_rental_board_days_left_and_search(manager):
    manager.state.transactions = [
        _tx("r1", seed.PWT, TransactionType.RENTAL, 1, NOW, status="Active (Out)",
            end_date=(NOW - timedelta(days=1)).isoformat(), items=[{"name": "Tent"}]),
        _tx("r2", seed.PWT, TransactionType.RENTAL, 1, NOW, status="Booked",
            end_date=(NOW + timedelta(hours=30)).isoformat(), items=[{"name": "Backpack"}]),
    ]
    rows = views.rental_board(manager.state, seed.PWT, now=NOW)
    assert rows[0]["overdue"] is True
    assert rows[1]["days_left"] == 2
    assert rows[1]["overdue"] is False
    assert [r["id"] for r in views.rental_board(manager.state, seed.PWT, "backpack", now=NOW)] == ["r2"]


def test_rental_inventory_low_stock(manager):
    rows = {r["id"]: r for r in views.rental_inventory(manager.state, seed.PBG, CONFIG)}
    assert "3" not in rows
    assert rows["1"]["low_stock"] is False
    tight = SummitBaseConfig(inventory=InventoryConfig(low_stock_threshold=6))
    rows = {r["id"]: r for r in views.rental_inventory(manager.state, seed.PBG, tight)}
    assert rows["1"]["low_stock"] is True


def test_laundry_board_columns(manager):
    board = views.laundry_board(manager.state, seed.PBG)
    columns = {c["status"]: c["orders"] for c in board["columns"]}
    assert list(columns) == ["Received", "Washing", "Drying", "Ready"]
    assert columns["Washing"][0]["id"] == "tx-003"
    assert columns["Washing"][0]["next_status"] == "Drying"


def test_laundry_board_hides_delivered(manager):
    manager.state.transactions = [
        _tx("l1", seed.PBG, TransactionType.LAUNDRY, 1, NOW, status="Delivered", items=[]),
    ]
    board = views.laundry_board(manager.state, seed.PBG)
    assert all(not c["orders"] for c in board["columns"])


def test_inventory_rows_filter_and_active(manager):
    rows = views.inventory_rows(manager.state, seed.PWT, "accessories")
    assert len(rows) == 3
    assert all(r["active"] for r in rows)


def test_domain_settings(manager):
    manager.state.bindings = {"shop.example": seed.PBG}
    body = views.domain_settings(manager.state, "shop.example")
    assert body["current_binding"] == seed.PBG
    assert body["bindings"] == [{"host": "shop.example", "branch": seed.PBG}]


def test_business_summary(manager):
    summary = views.business_summary(manager.state, seed.PWT, CONFIG)
    assert summary["current_branch"] == seed.PWT
    assert summary["total_transactions"] == 3
    assert summary["revenue_by_branch"] == {seed.PWT: 505000, seed.PBG: 75000, seed.MAMAS: 0.0}
    assert summary["low_stock_items"] == []
