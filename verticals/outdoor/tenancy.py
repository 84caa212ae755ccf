"""Hostname → brand resolution.

Priority chain for a visit:

1. ``?domain=`` simulation parameter replaces the real hostname
2. Domain binding configured in the admin settings
3. Static domain list on each brand profile
4. Last brand the visitor picked (selection cookie)
5. Landing page (brand picker)

Pure functions only; the middleware feeds in request data and applies the
cookie side effects.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from verticals.outdoor.models.schemas import BrandProfile


class ResolutionSource(str, Enum):
    BINDING = "binding"
    DOMAIN = "domain"
    PERSISTED = "persisted"
    LANDING = "landing"


class ViewMode(str, Enum):
    LANDING = "landing"
    SHOP = "shop"


@dataclass(frozen=True)
class TenantResolution:
    """Outcome of resolving one request."""

    view: ViewMode
    source: ResolutionSource
    detected_host: str
    brand: Optional[BrandProfile] = None
    simulated_domain: Optional[str] = None

    @property
    def brand_id(self) -> Optional[str]:
        return self.brand.id if self.brand else None

    @property
    def persist(self) -> bool:
        """Domain matches are remembered for later visits on generic hosts."""
        return self.source in (ResolutionSource.BINDING, ResolutionSource.DOMAIN)

    def to_dict(self) -> dict:
        return {
            "view": self.view.value,
            "source": self.source.value,
            "detected_host": self.detected_host,
            "brand_id": self.brand_id,
            "simulated_domain": self.simulated_domain,
        }


def normalize_host(raw: str | None) -> str:
    """Lowercase, drop any port and a leading ``www.``.

    >>> normalize_host("WWW.MamasOutdoor.id:443")
    'mamasoutdoor.id'
    """
    host = (raw or "").strip().lower()
    if "," in host:
        # X-Forwarded-Host may carry a proxy chain; the client-facing host is first
        host = host.split(",")[0].strip()
    if host.startswith("[") and "]" in host:
        host = host[: host.index("]") + 1]
    elif host.count(":") == 1:
        host = host.split(":")[0]
    if host.startswith("www."):
        host = host[4:]
    return host


def find_brand(brands: list[BrandProfile], brand_id: str | None) -> Optional[BrandProfile]:
    if not brand_id:
        return None
    return next((b for b in brands if b.id == brand_id), None)


def match_domain(brands: list[BrandProfile], domain: str) -> Optional[BrandProfile]:
    """First brand listing ``domain`` in its static domain list."""
    for brand in brands:
        if domain in (normalize_host(d) for d in brand.domains):
            return brand
    return None


def resolve_tenant(
    host: str | None,
    brands: list[BrandProfile],
    bindings: dict[str, str] | None = None,
    simulated_domain: str | None = None,
    saved_brand_id: str | None = None,
) -> TenantResolution:
    """Resolve which storefront a visitor should see."""
    detected = normalize_host(host)
    simulated = normalize_host(simulated_domain) or None
    target = simulated or detected
    bindings = {normalize_host(h): b for h, b in (bindings or {}).items()}

    def shop(brand: BrandProfile, source: ResolutionSource) -> TenantResolution:
        return TenantResolution(
            view=ViewMode.SHOP,
            source=source,
            detected_host=detected,
            brand=brand,
            simulated_domain=simulated,
        )

    bound = find_brand(brands, bindings.get(target))
    if bound:
        return shop(bound, ResolutionSource.BINDING)

    matched = match_domain(brands, target)
    if matched:
        return shop(matched, ResolutionSource.DOMAIN)

    saved = find_brand(brands, saved_brand_id)
    if saved:
        return shop(saved, ResolutionSource.PERSISTED)

    return TenantResolution(
        view=ViewMode.LANDING,
        source=ResolutionSource.LANDING,
        detected_host=detected,
        simulated_domain=simulated,
    )


def landing(detected_host: str = "") -> TenantResolution:
    return TenantResolution(
        view=ViewMode.LANDING,
        source=ResolutionSource.LANDING,
        detected_host=detected_host,
    )
