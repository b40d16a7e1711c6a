"""View models returned by the aggregators.

Derived metrics are exposed as computed fields so they are recalculated on
every load and included when a view is serialized.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, computed_field

from schemas.enums import ViewMode
from schemas.profile import ClientProfile
from schemas.diet_plan import DietPlanEntry
from schemas.meal_log import MealLog
from schemas.exercise_log import ExerciseLog
from schemas.weight_log import WeightLog
from schemas.training_plan import TrainingPlanEntry
from services import metrics


class WeightHistoryEntry(BaseModel):
    """One weight log with its change against the previous measurement."""
    id: str
    weight_kg: float
    measured_at: datetime
    delta: Optional[float] = Field(None, description="Change against the next older log")


class ClientAggregate(BaseModel):
    """Everything loaded for one client, newest first in each list."""
    client_id: str
    diet_plans: List[DietPlanEntry] = Field(default_factory=list)
    meal_logs: List[MealLog] = Field(default_factory=list)
    exercise_logs: List[ExerciseLog] = Field(default_factory=list)
    weight_logs: List[WeightLog] = Field(default_factory=list)
    training_plans: List[TrainingPlanEntry] = Field(default_factory=list)
    failed_collections: List[str] = Field(default_factory=list, description="Collections that failed to load")

    @computed_field
    @property
    def total_calories_burned(self) -> int:
        return metrics.total_calories_burned(self.exercise_logs)

    @computed_field
    @property
    def latest_weight(self) -> Optional[float]:
        return metrics.latest_weight(self.weight_logs)

    @computed_field
    @property
    def weight_change(self) -> float:
        return metrics.weight_change(self.weight_logs)

    @computed_field
    @property
    def weight_history(self) -> List[WeightHistoryEntry]:
        deltas = metrics.weight_deltas(self.weight_logs)
        return [
            WeightHistoryEntry(id=log.id, weight_kg=log.weight_kg, measured_at=log.measured_at, delta=delta)
            for log, delta in zip(self.weight_logs, deltas)
        ]


class ClientDashboard(BaseModel):
    """A client's own view of their plans and logs."""
    profile: ClientProfile
    data: ClientAggregate

    @computed_field
    @property
    def mutations_enabled(self) -> bool:
        return self.profile.payment_status


class RosterEntry(BaseModel):
    """One client on a trainer's roster with its bounded aggregate."""
    profile: ClientProfile
    data: ClientAggregate


class Roster(BaseModel):
    """All clients of one trainer, newest first."""
    trainer_id: str
    entries: List[RosterEntry] = Field(default_factory=list)

    @computed_field
    @property
    def total_clients(self) -> int:
        return len(self.entries)

    @computed_field
    @property
    def active_clients(self) -> int:
        return metrics.count_active(entry.profile for entry in self.entries)

    @computed_field
    @property
    def inactive_clients(self) -> int:
        return self.total_clients - self.active_clients


class ClientDetailView(BaseModel):
    """A roster entry seen through one view mode.

    Overview carries the whole aggregate; diet and training carry only the
    plan list the trainer is editing.
    """
    mode: ViewMode
    profile: ClientProfile
    overview: Optional[ClientAggregate] = None
    diet_plans: Optional[List[DietPlanEntry]] = None
    training_plans: Optional[List[TrainingPlanEntry]] = None
