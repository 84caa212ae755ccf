"""FastAPI dependencies shared by the outdoor routers."""

from fastapi import Request

from api.middleware import get_current_resolution
from core.settings import Settings, get_settings
from verticals.outdoor.advisor import InsightsAdvisor
from verticals.outdoor.state import StateManager
from verticals.outdoor.tenancy import TenantResolution


def get_state_manager(request: Request) -> StateManager:
    return request.app.state.state_manager


def get_advisor(request: Request) -> InsightsAdvisor:
    return request.app.state.advisor


def get_resolution(request: Request) -> TenantResolution:
    return getattr(request.state, "resolution", None) or get_current_resolution()


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()
