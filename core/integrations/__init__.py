"""
SummitBase integrations with hosted services.

- HostedTableClient: PostgREST-style table API client with retries and
  health tracking.
"""
from core.integrations.hosted_table import (
    HostedTableClient,
    IntegrationHealth,
    TableRequest,
    TableResponse,
)

__all__ = [
    "HostedTableClient",
    "IntegrationHealth",
    "TableRequest",
    "TableResponse",
]
