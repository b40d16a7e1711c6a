"""Training plan collection schema."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class TrainingPlanEntryCreate(BaseModel):
    """Fields a trainer supplies when assigning an exercise."""
    client_id: str = Field(..., min_length=1, description="Owning client identifier")
    created_by: str = Field(..., min_length=1, description="Authoring trainer identifier")
    exercise_name: str = Field(..., min_length=1, description="Name of the exercise")
    sets: int = Field(..., gt=0, description="Number of sets")
    reps: int = Field(..., gt=0, description="Number of repetitions per set")
    notes: Optional[str] = Field(None, description="Optional notes")


class TrainingPlanEntry(TrainingPlanEntryCreate):
    """Training plan collection model."""
    id: str = Field(..., description="Entry identifier")
    created_at: datetime = Field(default_factory=datetime.utcnow)
