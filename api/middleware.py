"""Tenant resolution middleware using ContextVar.

Resolves which brand a request belongs to from the visited hostname (the
``?domain=`` simulation parameter, admin domain bindings, the brands'
static domain lists) or the visitor's last pick stored in the selection
cookie. The result is stored in a ContextVar so that downstream code can
call get_current_resolution() without explicit parameter passing.
"""

import logging
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.settings import Settings, get_settings
from verticals.outdoor.tenancy import TenantResolution, landing, normalize_host, resolve_tenant

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Context variable: task-safe tenant state
# ---------------------------------------------------------------------------

_current_resolution: ContextVar[TenantResolution] = ContextVar(
    "current_resolution", default=landing()
)


def get_current_resolution() -> TenantResolution:
    """Return the tenant resolution for the current request.

    Safe to call from any async context within the request lifecycle::

        resolution = get_current_resolution()
        if resolution.brand:
            ...
    """
    return _current_resolution.get()


def request_host(request: Request) -> str:
    """Client-facing hostname, honouring a reverse proxy's forwarded host."""
    return normalize_host(
        request.headers.get("x-forwarded-host") or request.headers.get("host", "")
    )


def sets_cookie(response: Response, name: str) -> bool:
    """True when the response already writes or deletes cookie ``name``."""
    return any(
        value.startswith(f"{name}=") for value in response.headers.getlist("set-cookie")
    )


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class TenantMiddleware(BaseHTTPMiddleware):
    """Resolve the brand for every request.

    Priority:
    1. ``?domain=`` simulation parameter (replaces the real hostname)
    2. Admin domain binding for the hostname
    3. Brand whose static domain list contains the hostname
    4. ``selected_branch_id`` cookie
    5. Landing page
    """

    def __init__(self, app, settings: Settings | None = None):
        super().__init__(app)
        self.settings = settings or get_settings()

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in self.settings.passthrough_paths:
            return await call_next(request)

        manager = getattr(request.app.state, "state_manager", None)
        host = request_host(request)
        if manager is None:
            resolution = landing(host)
        else:
            resolution = resolve_tenant(
                host,
                manager.state.brands,
                bindings=manager.state.bindings,
                simulated_domain=request.query_params.get(self.settings.simulation_param),
                saved_brand_id=request.cookies.get(self.settings.selection_cookie),
            )
        request.state.resolution = resolution
        logger.debug("Resolved %s -> %s (%s)", host, resolution.brand_id, resolution.source.value)

        token = _current_resolution.set(resolution)
        try:
            response = await call_next(request)
        finally:
            _current_resolution.reset(token)

        # A route that picked or cleared the brand owns the cookie for this response.
        if resolution.persist and not sets_cookie(response, self.settings.selection_cookie):
            response.set_cookie(
                self.settings.selection_cookie,
                resolution.brand_id,
                max_age=self.settings.selection_cookie_max_age,
                samesite="lax",
            )
        return response
