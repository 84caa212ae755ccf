"""Test the HTTP API end to end on the in-memory backend."""
import pytest
from fastapi.testclient import TestClient
from pydantic_ai.models.test import TestModel

from api.main import create_app
from core.settings import Settings
from verticals.outdoor import seed
from verticals.outdoor.advisor import InsightsAdvisor
from verticals.outdoor.data_service import DataService
from verticals.outdoor.memory_store import MemoryStore


@pytest.fixture
def service():
    return DataService(MemoryStore.seeded())


@pytest.fixture
def client(service):
    app = create_app(
        settings=Settings(),
        data_service=service,
        advisor=InsightsAdvisor(model=TestModel(custom_output_text="Stock looks healthy.")),
    )
    with TestClient(app) as client:
        yield client


# --- Health ---

def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["backend"] == {"backend": "memory"}


def test_root(client):
    assert client.get("/").json()["name"] == "SummitBase"


# --- Storefront ---

def test_generic_host_shows_landing(client):
    body = client.get("/api/storefront").json()
    assert body["view"] == "landing"
    assert len(body["brands"]) == 3


def test_brand_domain_shows_shop_and_sets_cookie(client):
    resp = client.get("/api/storefront", headers={"host": "www.mamasoutdoor.id"})
    body = resp.json()
    assert body["view"] == "shop"
    assert body["brand"]["id"] == seed.MAMAS
    assert resp.cookies.get("selected_branch_id") == seed.MAMAS


def test_forwarded_host_wins(client):
    body = client.get(
        "/api/storefront/resolve",
        headers={"host": "internal:8000", "x-forwarded-host": "fourteen-pbg.vercel.app"},
    ).json()
    assert body["brand_id"] == seed.PBG
    assert body["source"] == "domain"


def test_simulation_param(client):
    body = client.get("/api/storefront?domain=pwt&category=Tent").json()
    assert body["brand"]["id"] == seed.PWT
    assert body["simulation"] == {"active": True, "domain": "pwt"}
    assert [p["category"] for p in body["products"]] == ["Tent"]


def test_select_then_remembered(client):
    resp = client.post(f"/api/storefront/select/{seed.PBG}")
    assert resp.status_code == 200
    assert resp.json()["brand"]["id"] == seed.PBG
    body = client.get("/api/storefront/resolve").json()
    assert body["brand_id"] == seed.PBG
    assert body["source"] == "persisted"


def test_select_unknown_brand(client):
    assert client.post("/api/storefront/select/NOPE").status_code == 404


def test_switch_clears_choice(client):
    client.post(f"/api/storefront/select/{seed.PBG}")
    body = client.post("/api/storefront/switch").json()
    assert body["view"] == "landing"
    assert client.get("/api/storefront/resolve").json()["view"] == "landing"


def test_switch_from_simulated_domain_clears_choice(client):
    client.get("/api/storefront?domain=mamasoutdoor.id")
    assert client.cookies.get("selected_branch_id") == seed.MAMAS

    body = client.post("/api/storefront/switch?domain=mamasoutdoor.id").json()
    assert body["view"] == "landing"
    assert body["clear_simulation"] is True
    assert client.get("/api/storefront/resolve").json()["view"] == "landing"


def test_select_on_brand_domain_keeps_pick(client):
    resp = client.post(f"/api/storefront/select/{seed.PBG}", headers={"host": "mamasoutdoor.id"})
    assert resp.json()["brand"]["id"] == seed.PBG
    assert resp.headers.get_list("set-cookie")[0].startswith(f"selected_branch_id={seed.PBG};")
    assert len(resp.headers.get_list("set-cookie")) == 1

    body = client.get("/api/storefront/resolve").json()
    assert body["brand_id"] == seed.PBG
    assert body["source"] == "persisted"


def test_booking_on_brand_domain(client, service):
    resp = client.post(
        "/api/storefront/bookings",
        json={"product_id": "1", "customer_name": "Rina", "duration_days": 2},
        headers={"host": "mamasoutdoor.id"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["transaction"]["branch"] == seed.MAMAS
    assert body["transaction"]["total_amount"] == 400000
    assert "Mamas Outdoor" in body["message"]


def test_booking_persists_in_background(client, service):
    client.post(
        "/api/storefront/bookings?domain=pbg",
        json={"product_id": "2", "customer_name": "Rina"},
    )
    rows = service.backend._transactions
    booked = [r for r in rows.values() if r["customer_name"] == "Rina"]
    assert booked[0]["total_amount"] == 65000 * 3


def test_booking_without_store(client):
    resp = client.post("/api/storefront/bookings", json={"product_id": "1", "customer_name": "Rina"})
    assert resp.status_code == 400


def test_booking_rule_violation(client):
    resp = client.post(
        "/api/storefront/bookings?domain=pwt",
        json={"product_id": "1", "customer_name": " ", "duration_days": 40},
    )
    assert resp.status_code == 400
    assert len(resp.json()["violations"]) == 2


# --- Admin ---

def test_dashboard(client):
    body = client.get(f"/api/admin/branches/{seed.PWT}/dashboard").json()
    assert body["total_revenue"] == 505000
    assert len(body["activity"]) == 7


def test_unknown_branch_404(client):
    assert client.get("/api/admin/branches/NOPE/dashboard").status_code == 404


def test_pos_checkout(client):
    resp = client.post(
        f"/api/admin/branches/{seed.PWT}/pos/checkout",
        json={"items": [{"product_id": "3", "quantity": 2}]},
    )
    assert resp.status_code == 201
    assert resp.json()["total_amount"] == 110000
    assert resp.json()["customer_name"] == "Walk-in Customer"


def test_pos_checkout_invalid_quantity(client):
    resp = client.post(
        f"/api/admin/branches/{seed.PWT}/pos/checkout",
        json={"items": [{"product_id": "3", "quantity": 0}]},
    )
    assert resp.status_code == 422


def test_quick_rental_defaults(client):
    resp = client.post(f"/api/admin/branches/{seed.PBG}/rentals", json={"product_id": "4"})
    tx = resp.json()
    assert resp.status_code == 201
    assert tx["customer_name"].startswith("Guest Customer")
    assert tx["total_amount"] == 30000 * 3


def test_quick_rental_zero_days_rejected(client):
    resp = client.post(f"/api/admin/branches/{seed.PBG}/rentals", json={"product_id": "4", "days": 0})
    assert resp.status_code == 400
    assert resp.json()["violations"]


def test_rental_with_unknown_stored_status_conflicts(client):
    state = client.app.state.state_manager.state
    state.transactions = [
        t.model_copy(update={"details": {**t.details, "status": "Lost"}}) if t.id == "tx-002" else t
        for t in state.transactions
    ]
    resp = client.patch("/api/admin/rentals/tx-002/status", json={"status": "Returned"})
    assert resp.status_code == 409


def test_rental_status_transitions(client):
    assert client.patch("/api/admin/rentals/tx-002/status", json={"status": "Returned"}).status_code == 200
    resp = client.patch("/api/admin/rentals/tx-002/status", json={"status": "Active (Out)"})
    assert resp.status_code == 409
    board = client.get(f"/api/admin/branches/{seed.PWT}/rentals").json()
    assert board[0]["status"] == "Returned"


def test_laundry_flow(client):
    resp = client.post(
        f"/api/admin/branches/{seed.PBG}/laundry",
        json={"customer_name": "Sari", "items": [{"item_name": "Jacket"}], "total_amount": 40000},
    )
    tx_id = resp.json()["id"]
    assert client.post(f"/api/admin/laundry/{tx_id}/advance").json()["details"]["status"] == "Washing"
    board = client.get(f"/api/admin/branches/{seed.PBG}/laundry").json()
    washing = next(c for c in board["columns"] if c["status"] == "Washing")
    assert {o["id"] for o in washing["orders"]} == {tx_id, "tx-003"}


def test_laundry_intake_needs_items(client):
    resp = client.post(
        f"/api/admin/branches/{seed.PBG}/laundry",
        json={"customer_name": "Sari", "items": [], "total_amount": 1},
    )
    assert resp.status_code == 422


def test_inventory_create_edit_delete(client):
    created = client.put(
        f"/api/admin/branches/{seed.MAMAS}/inventory",
        json={"name": "Headlamp", "category": "Accessories", "stock": 3, "price_rent_per_day": 10000},
    ).json()
    assert created["id"].startswith("prod-")

    rows = client.get(f"/api/admin/branches/{seed.MAMAS}/inventory?search=headlamp").json()
    assert rows[0]["active"] is True

    assert client.delete(f"/api/admin/inventory/{created['id']}").status_code == 204
    assert client.get(f"/api/admin/branches/{seed.MAMAS}/inventory?search=headlamp").json() == []
    assert client.delete(f"/api/admin/inventory/{created['id']}").status_code == 404


def test_domain_binding_routes_storefront(client):
    resp = client.post(
        "/api/admin/settings/domains",
        json={"branch": seed.PBG},
        headers={"host": "gear.example.com"},
    )
    assert resp.status_code == 201
    assert resp.json()["current_binding"] == seed.PBG

    body = client.get("/api/storefront/resolve", headers={"host": "gear.example.com"}).json()
    assert body["source"] == "binding"
    assert body["brand_id"] == seed.PBG

    assert client.delete("/api/admin/settings/domains/gear.example.com").status_code == 200
    assert client.delete("/api/admin/settings/domains/gear.example.com").status_code == 404


def test_bind_unknown_brand(client):
    resp = client.post("/api/admin/settings/domains", json={"branch": "NOPE", "host": "x.example"})
    assert resp.status_code == 404


def test_brand_update(client):
    brand = client.get("/api/admin/brands").json()[0]
    brand["tagline"] = "New tagline"
    assert client.put(f"/api/admin/brands/{brand['id']}", json=brand).json()["tagline"] == "New tagline"
    assert client.put("/api/admin/brands/OTHER", json=brand).status_code == 400


def test_advisor(client):
    resp = client.post(f"/api/admin/branches/{seed.PWT}/advisor", json={"query": "Stock?"})
    assert resp.json() == {"response": "Stock looks healthy.", "branch": seed.PWT}


def test_advisor_blank_query(client):
    resp = client.post(f"/api/admin/branches/{seed.PWT}/advisor", json={"query": "  "})
    assert resp.status_code == 422


def test_sync_reloads_state(client, service):
    body = client.post("/api/admin/sync").json()
    assert body == {"backend": "memory", "brands": 3, "products": 6, "transactions": 3, "bindings": 0}
