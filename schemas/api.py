"""Request and response bodies for the HTTP API."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from schemas.enums import Role


class SignupRequest(BaseModel):
    """Self sign-up from the login screen."""
    email: str = Field(..., description="Login email")
    password: str = Field(..., min_length=6, description="Login password")
    full_name: str = Field(..., min_length=1, description="Full name")
    role: Role = Field(Role.CLIENT, description="trainer or client")
    trainer_id: Optional[str] = Field(None, description="Owning trainer, required for clients")


class LoginRequest(BaseModel):
    email: str = Field(..., description="Login email")
    password: str = Field(..., description="Login password")


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    principal_id: str


class MealLogRequest(BaseModel):
    meal_time: datetime
    meal_description: str
    diet_plan_id: Optional[str] = None


class ExerciseLogRequest(BaseModel):
    exercise_name: str
    exercise_time: datetime
    duration_minutes: int
    notes: Optional[str] = None


class WeightLogRequest(BaseModel):
    weight_kg: float
    measured_at: datetime


class DietPlanRequest(BaseModel):
    meal_name: str
    meal_description: str
    recommended_time: Optional[str] = None


class TrainingPlanRequest(BaseModel):
    exercise_name: str
    sets: int
    reps: int
    notes: Optional[str] = None


class CreateClientRequest(BaseModel):
    """Trainer-initiated client account creation."""
    email: str
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)


class PaymentStatusRequest(BaseModel):
    active: bool
    due_date: Optional[datetime] = None
