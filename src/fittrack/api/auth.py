"""Signup and login endpoints."""

from fastapi import APIRouter, Request, status

from fittrack.api.dependencies import get_container
from fittrack.api.models import LoginRequest, SignupRequest

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupRequest, request: Request) -> dict[str, object]:
    """Create an account."""
    container = get_container(request)
    user = container.auth_service.signup(
        name=payload.name, email=payload.email, password=payload.password
    )
    return {
        "success": True,
        "message": "User created successfully",
        "user_id": str(user.id),
    }


@router.post("/login")
async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
    """Exchange credentials for a bearer token."""
    container = get_container(request)
    token = container.auth_service.login(payload.email, payload.password)
    return {"success": True, "access_token": token, "token_type": "bearer"}
