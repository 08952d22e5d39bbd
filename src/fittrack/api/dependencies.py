"""Request-scoped dependencies for API routers."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fittrack.domain.errors import UnauthorizedError

if TYPE_CHECKING:
    from fittrack.containers import AppContainer

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UUID:
    """Resolve the bearer token to the authenticated user id."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing access token")
    container = get_container(request)
    return container.auth_service.resolve_token(credentials.credentials)
