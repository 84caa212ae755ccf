"""Back-office API router.

Branch-scoped screens live under ``/branches/{branch}/``: dashboard, POS,
rental board, laundry board, inventory editor and the AI advisor.
Transaction and product actions that don't need a branch are addressed by
id. Mutations answer from the in-memory state and persist in the
background.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from verticals.outdoor import operations, views
from verticals.outdoor.advisor import InsightsAdvisor
from verticals.outdoor.config import config
from verticals.outdoor.deps import get_advisor, get_resolution, get_state_manager
from verticals.outdoor.models.schemas import (
    AdvisorRequest,
    AdvisorResponse,
    BrandProfile,
    CheckoutRequest,
    DomainBindingRequest,
    LaundryIntakeRequest,
    Product,
    ProductUpsert,
    QuickRentalRequest,
    RentalStatusUpdate,
    Transaction,
)
from verticals.outdoor.state import StateManager
from verticals.outdoor.tenancy import TenantResolution, normalize_host

router = APIRouter()


# ============================================================================
# Brands
# ============================================================================

@router.get("/brands", response_model=list[BrandProfile])
async def list_brands(manager: StateManager = Depends(get_state_manager)):
    return manager.state.brands


@router.put("/brands/{brand_id}", response_model=BrandProfile)
async def save_brand(
    brand_id: str,
    brand: BrandProfile,
    background_tasks: BackgroundTasks,
    manager: StateManager = Depends(get_state_manager),
):
    if brand.id != brand_id:
        raise HTTPException(status_code=400, detail="Brand id in path and body differ")
    return manager.save_brand(brand, background_tasks.add_task)


# ============================================================================
# Dashboard
# ============================================================================

@router.get("/branches/{branch}/dashboard")
async def dashboard(branch: str, manager: StateManager = Depends(get_state_manager)):
    manager.brand(branch)
    return views.dashboard_stats(manager.state, branch)


# ============================================================================
# Point of sale
# ============================================================================

@router.get("/branches/{branch}/pos/catalog")
async def pos_catalog(
    branch: str,
    search: str = "",
    manager: StateManager = Depends(get_state_manager),
):
    manager.brand(branch)
    return views.pos_catalog(manager.state, branch, search)


@router.post("/branches/{branch}/pos/checkout", response_model=Transaction, status_code=201)
async def checkout(
    branch: str,
    request: CheckoutRequest,
    background_tasks: BackgroundTasks,
    manager: StateManager = Depends(get_state_manager),
):
    return operations.checkout(manager, branch, request, config, background_tasks.add_task)


# ============================================================================
# Rentals
# ============================================================================

@router.get("/branches/{branch}/rentals")
async def rental_board(
    branch: str,
    search: str = "",
    manager: StateManager = Depends(get_state_manager),
):
    manager.brand(branch)
    return views.rental_board(manager.state, branch, search)


@router.get("/branches/{branch}/rentals/inventory")
async def rental_inventory(branch: str, manager: StateManager = Depends(get_state_manager)):
    manager.brand(branch)
    return views.rental_inventory(manager.state, branch, config)


@router.post("/branches/{branch}/rentals", response_model=Transaction, status_code=201)
async def quick_rental(
    branch: str,
    request: QuickRentalRequest,
    background_tasks: BackgroundTasks,
    manager: StateManager = Depends(get_state_manager),
):
    """Counter booking: defaults to the standard duration and a guest name."""
    return operations.book_rental(
        manager,
        branch,
        request.product_id,
        request.customer_name or operations.guest_name(),
        config.rental.default_days if request.days is None else request.days,
        config,
        background_tasks.add_task,
    )


@router.patch("/rentals/{tx_id}/status", response_model=Transaction)
async def update_rental_status(
    tx_id: str,
    update: RentalStatusUpdate,
    background_tasks: BackgroundTasks,
    manager: StateManager = Depends(get_state_manager),
):
    return operations.set_rental_status(manager, tx_id, update.status, background_tasks.add_task)


# ============================================================================
# Laundry
# ============================================================================

@router.get("/branches/{branch}/laundry")
async def laundry_board(branch: str, manager: StateManager = Depends(get_state_manager)):
    manager.brand(branch)
    return views.laundry_board(manager.state, branch)


@router.post("/branches/{branch}/laundry", response_model=Transaction, status_code=201)
async def laundry_intake(
    branch: str,
    request: LaundryIntakeRequest,
    background_tasks: BackgroundTasks,
    manager: StateManager = Depends(get_state_manager),
):
    return operations.intake_laundry(manager, branch, request, config, background_tasks.add_task)


@router.post("/laundry/{tx_id}/advance", response_model=Transaction)
async def advance_laundry(
    tx_id: str,
    background_tasks: BackgroundTasks,
    manager: StateManager = Depends(get_state_manager),
):
    return operations.advance_laundry(manager, tx_id, background_tasks.add_task)


# ============================================================================
# Inventory
# ============================================================================

@router.get("/branches/{branch}/inventory")
async def inventory(
    branch: str,
    search: str = "",
    manager: StateManager = Depends(get_state_manager),
):
    manager.brand(branch)
    return views.inventory_rows(manager.state, branch, search)


@router.put("/branches/{branch}/inventory", response_model=Product)
async def save_inventory_item(
    branch: str,
    form: ProductUpsert,
    background_tasks: BackgroundTasks,
    manager: StateManager = Depends(get_state_manager),
):
    return operations.save_inventory_item(manager, branch, form, background_tasks.add_task)


@router.delete("/inventory/{product_id}", status_code=204)
async def delete_inventory_item(
    product_id: str,
    background_tasks: BackgroundTasks,
    manager: StateManager = Depends(get_state_manager),
):
    manager.delete_product(product_id, background_tasks.add_task)


# ============================================================================
# AI advisor
# ============================================================================

@router.post("/branches/{branch}/advisor", response_model=AdvisorResponse)
async def ask_advisor(
    branch: str,
    request: AdvisorRequest,
    manager: StateManager = Depends(get_state_manager),
    advisor: InsightsAdvisor = Depends(get_advisor),
):
    manager.brand(branch)
    answer = await advisor.ask(manager.state, branch, request.query)
    return AdvisorResponse(response=answer, branch=branch)


# ============================================================================
# Domain binding settings
# ============================================================================

@router.get("/settings/domains")
async def domain_settings(
    resolution: TenantResolution = Depends(get_resolution),
    manager: StateManager = Depends(get_state_manager),
):
    return views.domain_settings(manager.state, resolution.detected_host)


@router.post("/settings/domains", status_code=201)
async def bind_domain(
    request: DomainBindingRequest,
    background_tasks: BackgroundTasks,
    resolution: TenantResolution = Depends(get_resolution),
    manager: StateManager = Depends(get_state_manager),
):
    """Bind a hostname (default: the one the admin is browsing on) to a brand."""
    host = normalize_host(request.host or resolution.detected_host)
    if not host:
        raise HTTPException(status_code=400, detail="No hostname to bind")
    manager.bind_domain(host, request.branch, background_tasks.add_task)
    return views.domain_settings(manager.state, resolution.detected_host)


@router.delete("/settings/domains/{host}")
async def unbind_domain(
    host: str,
    background_tasks: BackgroundTasks,
    resolution: TenantResolution = Depends(get_resolution),
    manager: StateManager = Depends(get_state_manager),
):
    manager.unbind_domain(normalize_host(host), background_tasks.add_task)
    return views.domain_settings(manager.state, resolution.detected_host)


# ============================================================================
# Sync
# ============================================================================

@router.post("/sync")
async def sync(manager: StateManager = Depends(get_state_manager)):
    """Reload all state from the data store."""
    state = await manager.load()
    return {
        "backend": manager.service.backend_name,
        "brands": len(state.brands),
        "products": len(state.products),
        "transactions": len(state.transactions),
        "bindings": len(state.bindings),
    }
