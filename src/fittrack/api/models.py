"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """New account payload."""

    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    """Credentials payload."""

    email: str
    password: str


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    age: int | None = None
    gender: str | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    weight_goal_kg: float | None = None
    weekly_rate_kg: float | None = None
    daily_calorie_target: int | None = None
    timezone: str | None = None
    name: str | None = None
    email: str | None = None


class AddFoodRequest(BaseModel):
    """Food to log into a meal slot for today."""

    meal_type: str
    food_id: str
    grams: float = Field(default=100.0)
