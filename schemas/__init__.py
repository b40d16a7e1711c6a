"""Collection schemas organized by collection type."""

from schemas.enums import Role, ViewMode
from schemas.profile import TrainerProfile, ClientProfile, Profile, parse_profile
from schemas.diet_plan import DietPlanEntryCreate, DietPlanEntry
from schemas.meal_log import MealLogCreate, MealLog
from schemas.exercise_log import ExerciseLogCreate, ExerciseLog
from schemas.weight_log import WeightLogCreate, WeightLog
from schemas.training_plan import TrainingPlanEntryCreate, TrainingPlanEntry
from schemas.views import (
    WeightHistoryEntry,
    ClientAggregate,
    ClientDashboard,
    RosterEntry,
    Roster,
    ClientDetailView,
)

__all__ = [
    "Role",
    "ViewMode",
    "TrainerProfile",
    "ClientProfile",
    "Profile",
    "parse_profile",
    "DietPlanEntryCreate",
    "DietPlanEntry",
    "MealLogCreate",
    "MealLog",
    "ExerciseLogCreate",
    "ExerciseLog",
    "WeightLogCreate",
    "WeightLog",
    "TrainingPlanEntryCreate",
    "TrainingPlanEntry",
    "WeightHistoryEntry",
    "ClientAggregate",
    "ClientDashboard",
    "RosterEntry",
    "Roster",
    "ClientDetailView",
]
