"""Profile endpoints for the authenticated user."""

from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from fittrack.api.dependencies import current_user_id, get_container
from fittrack.api.models import ProfileUpdateRequest
from fittrack.domain.models import UserProfile

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me")
async def get_profile(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the caller's account details and biometric profile."""
    container = get_container(request)
    return _profile_payload(container.user_service.get_profile(user_id))


@router.put("/me")
async def update_profile(
    payload: ProfileUpdateRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Update profile fields present in the request body."""
    container = get_container(request)
    profile = container.user_service.update_profile(
        user_id, payload.model_dump(exclude_unset=True)
    )
    return {"message": "User details updated successfully", **_profile_payload(profile)}


def _profile_payload(profile: UserProfile) -> dict[str, object]:
    data = asdict(profile)
    data["id"] = str(profile.id)
    return data
