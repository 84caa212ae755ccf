"""
Hosted table client for PostgREST-style database APIs (e.g. Supabase).

Every call goes through one request pipeline:
- API-key auth (``apikey`` + ``Authorization: Bearer`` headers)
- Retry with exponential backoff on transport errors and 5xx responses
- Health tracking (latency, failures, last error)
- Standardized request/response envelope

Filters use PostgREST syntax: ``{"id": "eq.tx-1"}``, ordering with
``{"order": "date.desc"}``.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import httpx

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request / Response envelope
# ---------------------------------------------------------------------------

@dataclass
class TableRequest:
    """Standardized outbound request."""
    method: str  # GET, POST, PATCH, DELETE
    table: str
    params: dict[str, Any] = field(default_factory=dict)
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float = 15.0


@dataclass
class TableResponse:
    """Standardized inbound response."""
    status_code: int
    data: Any = None
    latency_ms: float = 0.0
    error: str | None = None
    retries: int = 0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


# ---------------------------------------------------------------------------
# Health tracking
# ---------------------------------------------------------------------------

@dataclass
class IntegrationHealth:
    """Health metrics for the hosted backend."""
    name: str
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    avg_latency_ms: float = 0.0
    last_success: datetime | None = None
    last_failure: datetime | None = None
    last_error: str | None = None

    @property
    def error_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.failed_requests / self.total_requests

    def record(self, latency_ms: float, success: bool, error: str | None = None) -> None:
        self.total_requests += 1
        # running mean
        self.avg_latency_ms += (latency_ms - self.avg_latency_ms) / self.total_requests
        now = datetime.now(timezone.utc)
        if success:
            self.successful_requests += 1
            self.last_success = now
        else:
            self.failed_requests += 1
            self.last_failure = now
            self.last_error = error

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "total_requests": self.total_requests,
            "successful": self.successful_requests,
            "failed": self.failed_requests,
            "error_rate": round(self.error_rate, 4),
            "avg_latency_ms": round(self.avg_latency_ms, 1),
            "last_success": self.last_success.isoformat() if self.last_success else None,
            "last_failure": self.last_failure.isoformat() if self.last_failure else None,
            "last_error": self.last_error,
        }


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class HostedTableClient:
    """Thin async client over a hosted table REST API.

    Usage::

        client = HostedTableClient(url, anon_key)
        resp = await client.select("products")
        resp = await client.upsert("products", {"id": "1", "name": "Tent"})
    """

    MAX_RETRIES: int = 2
    BACKOFF_BASE: float = 0.5
    BACKOFF_MAX: float = 5.0

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        name: str = "hosted_table",
        max_retries: int | None = None,
        backoff_base: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = f"{base_url.rstrip('/')}/rest/v1"
        self.api_key = api_key
        self.max_retries = self.MAX_RETRIES if max_retries is None else max_retries
        self.backoff_base = self.BACKOFF_BASE if backoff_base is None else backoff_base
        self._transport = transport
        self._health = IntegrationHealth(name=name)

    # --- Auth headers ---

    def get_auth_headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }

    def get_health(self) -> IntegrationHealth:
        return self._health

    # --- Convenience verbs ---

    async def select(self, table: str, **params: Any) -> TableResponse:
        params.setdefault("select", "*")
        return await self.request(TableRequest("GET", table, params=params))

    async def insert(self, table: str, row: dict[str, Any]) -> TableResponse:
        return await self.request(
            TableRequest("POST", table, body=row, headers={"Prefer": "return=minimal"})
        )

    async def upsert(self, table: str, row: dict[str, Any], on_conflict: str | None = None) -> TableResponse:
        params = {"on_conflict": on_conflict} if on_conflict else {}
        return await self.request(
            TableRequest(
                "POST",
                table,
                params=params,
                body=row,
                headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
            )
        )

    async def update(self, table: str, match: dict[str, str], values: dict[str, Any]) -> TableResponse:
        params = {col: f"eq.{value}" for col, value in match.items()}
        return await self.request(
            TableRequest("PATCH", table, params=params, body=values, headers={"Prefer": "return=minimal"})
        )

    async def delete(self, table: str, match: dict[str, str]) -> TableResponse:
        params = {col: f"eq.{value}" for col, value in match.items()}
        return await self.request(TableRequest("DELETE", table, params=params))

    # --- Core request ---

    async def request(self, req: TableRequest) -> TableResponse:
        """
        Execute a request through the pipeline:
        Auth → Retry w/ Backoff → Health
        """
        url = f"{self.base_url}/{req.table}"
        headers = {**self.get_auth_headers(), **req.headers}

        last_error: str | None = None
        latency = 0.0
        retries = 0

        async with httpx.AsyncClient(transport=self._transport) as client:
            for attempt in range(self.max_retries + 1):
                start = time.time()
                try:
                    resp = await client.request(
                        method=req.method,
                        url=url,
                        params=req.params or None,
                        json=req.body,
                        headers=headers,
                        timeout=req.timeout,
                    )
                    latency = (time.time() - start) * 1000

                    if resp.status_code < 500:
                        ok = resp.status_code < 400
                        error = None if ok else f"HTTP {resp.status_code}: {resp.text[:200]}"
                        self._health.record(latency, ok, error)
                        return TableResponse(
                            status_code=resp.status_code,
                            data=_decode(resp),
                            latency_ms=latency,
                            error=error,
                            retries=retries,
                        )

                    # 5xx: retry
                    last_error = f"HTTP {resp.status_code}: {resp.text[:200]}"
                    retries += 1

                except httpx.HTTPError as exc:
                    latency = (time.time() - start) * 1000
                    last_error = str(exc) or exc.__class__.__name__
                    retries += 1

                if attempt < self.max_retries:
                    backoff = min(self.backoff_base * (2 ** attempt), self.BACKOFF_MAX)
                    logger.warning(
                        "%s %s failed (%s), retrying in %.2fs", req.method, req.table, last_error, backoff
                    )
                    await asyncio.sleep(backoff)

        # All retries exhausted
        self._health.record(latency, False, last_error)
        return TableResponse(
            status_code=502,
            error=last_error,
            retries=retries,
        )


def _decode(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    if resp.headers.get("content-type", "").startswith("application/json"):
        return resp.json()
    return resp.text
