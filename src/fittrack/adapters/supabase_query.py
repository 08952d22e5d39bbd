"""Shared execution helper for Supabase queries."""

import logging
from typing import Any

import httpx
from postgrest.exceptions import APIError

from fittrack.domain.errors import StorageError

_logger = logging.getLogger(__name__)


def execute(query: Any, action: str) -> list[dict[str, Any]]:
    """Run a PostgREST query, returning its rows or raising StorageError."""
    try:
        response = query.execute()
    except (APIError, httpx.HTTPError) as exc:
        _logger.warning("Supabase %s failed: %s", action, exc)
        raise StorageError(f"Failed to {action}") from exc
    return response.data or []
