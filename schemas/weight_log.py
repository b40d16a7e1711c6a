"""Weight logs collection schema."""

from datetime import datetime
from pydantic import BaseModel, Field


class WeightLogCreate(BaseModel):
    client_id: str = Field(..., min_length=1, description="Client identifier")
    weight_kg: float = Field(..., gt=0, description="Weight in kg")
    measured_at: datetime = Field(..., description="Measurement time")


class WeightLog(WeightLogCreate):
    """Weight logs collection model."""
    id: str = Field(..., description="Log identifier")
    created_at: datetime = Field(default_factory=datetime.utcnow)
