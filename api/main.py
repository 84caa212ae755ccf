"""SummitBase API — FastAPI entry point.

Registers middleware, routers, error handlers and lifecycle hooks. The
storefront lives under /api/storefront/ and the back office under
/api/admin/.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.middleware import TenantMiddleware
from core.settings import Settings, get_settings
from patterns.workflow_states import InvalidTransition
from verticals.outdoor.advisor import InsightsAdvisor
from verticals.outdoor.config import config
from verticals.outdoor.data_service import DataService, build_backend
from verticals.outdoor.rules import RuleViolation
from verticals.outdoor.state import NotFoundError, StateManager

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

def register_error_handlers(app: FastAPI) -> None:
    """Map domain exceptions onto HTTP status codes."""

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(InvalidTransition)
    async def invalid_transition(request: Request, exc: InvalidTransition):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(RuleViolation)
    async def rule_violation(request: Request, exc: RuleViolation):
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc), "violations": exc.outcome.messages},
        )


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(
    settings: Optional[Settings] = None,
    data_service: Optional[DataService] = None,
    advisor: Optional[InsightsAdvisor] = None,
) -> FastAPI:
    """Build the API. Tests pass their own data service and advisor."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup/shutdown hooks."""
        service = data_service or DataService(await build_backend(settings))
        manager = StateManager(service)
        await manager.load()

        app.state.settings = settings
        app.state.state_manager = manager
        app.state.advisor = advisor or InsightsAdvisor(
            api_key=settings.gemini_api_key,
            model_name=settings.advisor_model,
            config=config,
        )
        logger.info("%s API started (%s backend)", settings.app_name, service.backend_name)
        yield
        logger.info("%s API shutting down", settings.app_name)
        await service.close()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-brand outdoor gear rental, retail and laundry back office",
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Multi-tenant middleware
    app.add_middleware(TenantMiddleware, settings=settings)

    register_error_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------

    from verticals.outdoor.admin_router import router as admin_router
    from verticals.outdoor.router import router as storefront_router

    app.include_router(storefront_router, prefix="/api/storefront", tags=["Storefront"])
    app.include_router(admin_router, prefix="/api/admin", tags=["Admin"])

    # -----------------------------------------------------------------------
    # Health & root
    # -----------------------------------------------------------------------

    @app.get("/health")
    async def health(request: Request):
        manager = getattr(request.app.state, "state_manager", None)
        return {
            "status": "healthy",
            "version": settings.version,
            "backend": manager.service.health() if manager else None,
        }

    @app.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.version,
            "docs": "/docs",
            "storefront": "/api/storefront",
            "admin": "/api/admin",
        }

    return app


app = create_app()
