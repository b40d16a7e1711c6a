"""Diet plan collection schema."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class DietPlanEntryCreate(BaseModel):
    """Fields a trainer supplies when assigning a meal."""
    client_id: str = Field(..., min_length=1, description="Owning client identifier")
    created_by: str = Field(..., min_length=1, description="Authoring trainer identifier")
    meal_name: str = Field(..., min_length=1, description="Name of the meal")
    meal_description: str = Field(..., description="Description of the meal")
    recommended_time: Optional[str] = Field(None, description="Recommended time of day, e.g. 08:00")


class DietPlanEntry(DietPlanEntryCreate):
    """Diet plan collection model."""
    id: str = Field(..., description="Entry identifier")
    created_at: datetime = Field(default_factory=datetime.utcnow)
