"""User profile business logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fittrack.domain.errors import NotFoundError, ValidationError
from fittrack.domain.models import GENDERS, WEEKLY_RATES_KG, UserProfile, UserRecord

_RANGES: dict[str, tuple[float, float]] = {
    "age": (1, 120),
    "weight_kg": (20, 300),
    "height_cm": (100, 250),
    "weight_goal_kg": (20, 300),
    "daily_calorie_target": (500, 10000),
}
_NULLABLE = {"weight_goal_kg", "daily_calorie_target"}


class UserRepository(Protocol):
    """Persistence interface for accounts and profiles."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the account for an email address, if present."""

    def create_user(
        self, name: str, email: str, password_hash: str, timezone: str
    ) -> UserRecord:
        """Create and return a new account."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user id, if present."""

    def update_profile(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserProfile | None:
        """Apply profile changes and return the updated profile."""


@dataclass
class UserService:
    """Application service for profile reads and updates."""

    repository: UserRepository

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return the user's profile or raise NotFoundError."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise NotFoundError("User not found")
        return profile

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Validate and persist profile changes.

        A new email must not belong to another account.
        """
        cleaned = validate_profile_changes(changes)
        if not cleaned:
            return self.get_profile(user_id)
        if "email" in cleaned:
            owner = self.repository.get_by_email(str(cleaned["email"]))
            if owner is not None and owner.id != user_id:
                raise ValidationError("User with this email already exists")
        profile = self.repository.update_profile(user_id, cleaned)
        if profile is None:
            raise NotFoundError("User not found")
        return profile


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address, rejecting obvious garbage."""
    normalized = email.strip().lower()
    if "@" not in normalized:
        raise ValidationError("A valid email is required")
    return normalized


def validate_profile_changes(changes: dict[str, object]) -> dict[str, object]:
    """Check ranges and enums, returning only recognised fields."""
    cleaned: dict[str, object] = {}
    for key, value in changes.items():
        if key in _RANGES:
            if value is None and key in _NULLABLE:
                cleaned[key] = None
                continue
            cleaned[key] = _in_range(key, value)
        elif key == "gender":
            if value not in GENDERS:
                raise ValidationError("Gender must be male, female or other")
            cleaned[key] = value
        elif key == "weekly_rate_kg":
            cleaned[key] = _weekly_rate(value)
        elif key == "timezone":
            cleaned[key] = _timezone(value)
        elif key == "name":
            if not isinstance(value, str) or not value.strip():
                raise ValidationError("Name is required")
            cleaned[key] = value.strip()
        elif key == "email":
            if not isinstance(value, str):
                raise ValidationError("A valid email is required")
            cleaned[key] = normalize_email(value)
    for key in ("age", "daily_calorie_target"):
        if cleaned.get(key) is not None:
            cleaned[key] = int(cleaned[key])
    return cleaned


def _in_range(key: str, value: object) -> float:
    low, high = _RANGES[key]
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError(f"{key} must be a number")
    if not low <= value <= high:
        raise ValidationError(f"{key} must be between {low:g} and {high:g}")
    return value


def _weekly_rate(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError("weekly_rate_kg must be a number")
    if float(value) not in WEEKLY_RATES_KG:
        allowed = ", ".join(f"{rate:g}" for rate in WEEKLY_RATES_KG)
        raise ValidationError(f"weekly_rate_kg must be one of {allowed}")
    return float(value)


def _timezone(value: object) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError("timezone must be an IANA name")
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValidationError(f"Unknown timezone: {value}") from exc
    return value
