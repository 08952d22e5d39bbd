"""USDA FoodData Central API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from fittrack.domain.errors import NotFoundError, ServiceUnavailableError

# Energy (kcal), Atwater general/specific energy, protein, fat, carbs, fiber, sugars
NUTRIENT_NUMBERS = ("208", "957", "958", "203", "204", "205", "291", "269")

_logger = logging.getLogger(__name__)


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions."""

    async def search_foods(self, query: str, page_size: int = 20) -> dict[str, object]:
        """Search foods by query and return raw API data."""

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch a food by FDC id and return raw API data."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client.

    Transport failures and non-success statuses surface as
    ``ServiceUnavailableError``; a 404 on a detail lookup is ``NotFoundError``.
    """

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def search_foods(self, query: str, page_size: int = 20) -> dict[str, object]:
        """Search foods by query."""
        return await self._send(
            "POST",
            f"{self.base_url}/foods/search",
            json={"query": query, "pageSize": page_size},
        )

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch a food by FDC id, limited to the nutrients we track."""
        return await self._send(
            "GET",
            f"{self.base_url}/food/{fdc_id}",
            params={"nutrients": list(NUTRIENT_NUMBERS)},
            not_found_message=f"Food {fdc_id} not found",
        )

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, object] | None = None,
        json: dict[str, object] | None = None,
        not_found_message: str | None = None,
    ) -> dict[str, object]:
        query = {"api_key": self.api_key, **(params or {})}
        try:
            response = await self.http_client.request(
                method, url, params=query, json=json, timeout=self.timeout_seconds
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code == httpx.codes.NOT_FOUND and not_found_message:
                raise NotFoundError(not_found_message) from exc
            _logger.warning("FDC %s %s failed: status=%s", method, url, status_code)
            raise ServiceUnavailableError("Nutrition provider unavailable") from exc
        except httpx.HTTPError as exc:
            _logger.warning("FDC %s %s failed: %s", method, url, exc)
            raise ServiceUnavailableError("Nutrition provider unavailable") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise ServiceUnavailableError(
                "Nutrition provider returned bad data"
            ) from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
