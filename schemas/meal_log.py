"""Meal logs collection schema."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class MealLogCreate(BaseModel):
    client_id: str = Field(..., min_length=1, description="Client identifier")
    meal_time: datetime = Field(..., description="When the meal was eaten")
    meal_description: str = Field(..., min_length=1, description="Free-text description of the meal")
    diet_plan_id: Optional[str] = Field(None, description="Diet plan entry this meal follows")


class MealLog(MealLogCreate):
    """Meal logs collection model."""
    id: str = Field(..., description="Log identifier")
    created_at: datetime = Field(default_factory=datetime.utcnow)
