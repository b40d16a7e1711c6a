"""Exercise logs collection schema."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ExerciseLogCreate(BaseModel):
    client_id: str = Field(..., min_length=1, description="Client identifier")
    exercise_name: str = Field(..., min_length=1, description="Name of the exercise")
    duration_minutes: int = Field(..., gt=0, description="Duration in minutes")
    exercise_time: datetime = Field(..., description="When the exercise was done")
    notes: Optional[str] = Field(None, description="Optional notes")


class ExerciseLog(ExerciseLogCreate):
    """Exercise logs collection model."""
    id: str = Field(..., description="Log identifier")
    calories_burned: int = Field(0, ge=0, description="Calories burned, computed on write")
    created_at: datetime = Field(default_factory=datetime.utcnow)
