"""Profile collection schema.

A profile is either a trainer or a client, discriminated on ``role``.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field, TypeAdapter


class TrainerProfile(BaseModel):
    """Trainer profile. Trainers are always active and have no trainer."""
    id: str = Field(..., description="Principal identifier")
    role: Literal["trainer"] = Field("trainer", description="Profile role")
    full_name: str = Field(..., description="Full name")
    payment_status: bool = Field(True, description="Always true for trainers")
    trainer_id: None = Field(None, description="Always empty for trainers")
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_active(self) -> bool:
        return True


class ClientProfile(BaseModel):
    """Client profile owned by exactly one trainer."""
    id: str = Field(..., description="Principal identifier")
    role: Literal["client"] = Field("client", description="Profile role")
    full_name: str = Field(..., description="Full name")
    payment_status: bool = Field(False, description="Whether the client is paid up")
    payment_due_date: Optional[datetime] = Field(None, description="Next payment due date")
    trainer_id: str = Field(..., description="Owning trainer identifier")
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_active(self) -> bool:
        return self.payment_status


Profile = Annotated[Union[TrainerProfile, ClientProfile], Field(discriminator="role")]

_profile_adapter = TypeAdapter(Profile)


def parse_profile(document: dict) -> Union[TrainerProfile, ClientProfile]:
    """Validate a stored profile document into its role variant."""
    return _profile_adapter.validate_python(document)
