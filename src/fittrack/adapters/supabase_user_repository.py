"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fittrack.adapters.supabase_query import execute
from fittrack.domain.errors import StorageError
from fittrack.domain.models import DEFAULT_WEEKLY_RATE_KG, UserProfile, UserRecord
from fittrack.domain.nutrition import coerce_number
from fittrack.services.users import UserRepository

_PROFILE_COLUMNS = (
    "id, age, gender, weight_kg, height_cm, weight_goal_kg, weekly_rate_kg, "
    "daily_calorie_target, timezone, name, email"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for account and profile persistence."""

    client: Client

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the account for an email address, if present."""
        rows = execute(
            self.client.table("users")
            .select("id, name, email, password_hash, created_at")
            .eq("email", email)
            .limit(1),
            "load user",
        )
        if rows:
            return _parse_user(rows[0])
        return None

    def create_user(
        self, name: str, email: str, password_hash: str, timezone: str
    ) -> UserRecord:
        """Create a new user row and return it."""
        rows = execute(
            self.client.table("users").insert(
                {
                    "name": name,
                    "email": email,
                    "password_hash": password_hash,
                    "timezone": timezone,
                    "weekly_rate_kg": DEFAULT_WEEKLY_RATE_KG,
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            ),
            "create user",
        )
        if not rows:
            raise StorageError("Failed to create user")
        return _parse_user(rows[0])

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the biometric profile for a user."""
        rows = execute(
            self.client.table("users")
            .select(_PROFILE_COLUMNS)
            .eq("id", str(user_id))
            .limit(1),
            "load profile",
        )
        if not rows:
            return None
        return _parse_profile(rows[0])

    def update_profile(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserProfile | None:
        """Apply profile changes in a single row update."""
        rows = execute(
            self.client.table("users").update(changes).eq("id", str(user_id)),
            "update profile",
        )
        if not rows:
            return None
        return _parse_profile(rows[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    created_raw = row.get("created_at")
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        email=str(row.get("email") or ""),
        password_hash=str(row.get("password_hash") or ""),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        id=UUID(str(row["id"])),
        age=_optional_int(row.get("age")),
        gender=row.get("gender") or None,
        weight_kg=_optional_float(row.get("weight_kg")),
        height_cm=_optional_float(row.get("height_cm")),
        weight_goal_kg=_optional_float(row.get("weight_goal_kg")),
        weekly_rate_kg=(
            _optional_float(row.get("weekly_rate_kg")) or DEFAULT_WEEKLY_RATE_KG
        ),
        daily_calorie_target=_optional_int(row.get("daily_calorie_target")),
        timezone=str(row.get("timezone") or "UTC"),
        name=str(row.get("name") or ""),
        email=str(row.get("email") or ""),
    )


def _optional_float(value: object) -> float | None:
    number = coerce_number(value)
    return number or None


def _optional_int(value: object) -> int | None:
    number = _optional_float(value)
    return int(number) if number is not None else None
