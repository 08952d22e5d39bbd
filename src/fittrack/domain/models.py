"""Domain models for users and their biometric profile."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

GENDERS = frozenset({"male", "female", "other"})
WEEKLY_RATES_KG = (0.25, 0.5, 0.75, 1.0)
DEFAULT_WEEKLY_RATE_KG = 0.5


@dataclass(frozen=True)
class UserRecord:
    """Represents an account stored in the database."""

    id: UUID
    name: str
    email: str
    password_hash: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class UserProfile:
    """Account details plus the biometrics and goals behind nutrition targets."""

    id: UUID
    age: int | None = None
    gender: str | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    weight_goal_kg: float | None = None
    weekly_rate_kg: float = DEFAULT_WEEKLY_RATE_KG
    daily_calorie_target: int | None = None
    timezone: str = "UTC"
    name: str = ""
    email: str = ""
