"""Storefront API router — what a visitor on a brand's domain sees.

The tenant middleware has already resolved the brand; these endpoints
render the landing page or the brand's rental catalog, take bookings,
and let the visitor pick or switch brands.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Response

from core.settings import Settings
from verticals.outdoor import operations, views
from verticals.outdoor.config import config
from verticals.outdoor.deps import get_app_settings, get_resolution, get_state_manager
from verticals.outdoor.models.schemas import BookingConfirmation, BookingRequest
from verticals.outdoor.state import StateManager
from verticals.outdoor.tenancy import ResolutionSource, TenantResolution, ViewMode

router = APIRouter()


@router.get("")
async def storefront(
    category: str = Query("All"),
    resolution: TenantResolution = Depends(get_resolution),
    manager: StateManager = Depends(get_state_manager),
):
    """Landing page (brand picker) or the resolved brand's catalog."""
    if resolution.view == ViewMode.LANDING:
        return views.landing_view(manager.state, resolution)
    return views.storefront_view(manager.state, resolution, config, category)


@router.get("/resolve")
async def resolve(resolution: TenantResolution = Depends(get_resolution)):
    return resolution.to_dict()


@router.post("/select/{brand_id}")
async def select_brand(
    brand_id: str,
    response: Response,
    resolution: TenantResolution = Depends(get_resolution),
    manager: StateManager = Depends(get_state_manager),
    settings: Settings = Depends(get_app_settings),
):
    """Pick a brand from the landing page and remember it."""
    brand = manager.brand(brand_id)
    response.set_cookie(
        settings.selection_cookie,
        brand.id,
        max_age=settings.selection_cookie_max_age,
        samesite="lax",
    )
    picked = TenantResolution(
        view=ViewMode.SHOP,
        source=ResolutionSource.PERSISTED,
        detected_host=resolution.detected_host,
        brand=brand,
        simulated_domain=resolution.simulated_domain,
    )
    return views.storefront_view(manager.state, picked, config)


@router.post("/switch")
async def switch_brand(
    response: Response,
    resolution: TenantResolution = Depends(get_resolution),
    manager: StateManager = Depends(get_state_manager),
    settings: Settings = Depends(get_app_settings),
):
    """Forget the remembered brand and leave any domain simulation."""
    response.delete_cookie(settings.selection_cookie)
    body = views.landing_view(manager.state, resolution)
    body["clear_simulation"] = resolution.simulated_domain is not None
    return body


@router.post("/bookings", response_model=BookingConfirmation, status_code=201)
async def create_booking(
    request: BookingRequest,
    background_tasks: BackgroundTasks,
    resolution: TenantResolution = Depends(get_resolution),
    manager: StateManager = Depends(get_state_manager),
):
    """Book a rental at the resolved brand."""
    if resolution.brand is None:
        raise HTTPException(status_code=400, detail="Select a store before booking")

    tx = operations.book_rental(
        manager,
        resolution.brand.id,
        request.product_id,
        request.customer_name,
        request.duration_days,
        config,
        background_tasks.add_task,
    )
    return BookingConfirmation(transaction=tx, message=views.booking_message(resolution.brand))
