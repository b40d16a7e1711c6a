"""Mutation gateway: every write the coaching app performs.

Each operation validates its input, performs one write (two for account
creation) and returns a :class:`MutationResult` naming what it invalidated.
Callers reload the affected view through ``services.refresh.refetch``;
nothing is cached or updated optimistically and nothing is retried.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Type

from pydantic import BaseModel, ValidationError as PydanticValidationError

from models.database import PROFILES, MEAL_LOGS, EXERCISE_LOGS, WEIGHT_LOGS, DIET_PLANS, TRAINING_PLANS
from schemas.enums import Role
from schemas.profile import ClientProfile, TrainerProfile, parse_profile
from schemas.diet_plan import DietPlanEntry, DietPlanEntryCreate
from schemas.meal_log import MealLog, MealLogCreate
from schemas.exercise_log import ExerciseLog, ExerciseLogCreate
from schemas.weight_log import WeightLog, WeightLogCreate
from schemas.training_plan import TrainingPlanEntry, TrainingPlanEntryCreate
from services.errors import ProfileNotFound, StoreError, ValidationError
from services.metrics import calories_for_duration
from utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Invalidation:
    """Which aggregates a mutation made stale."""
    client_id: str
    trainer_id: Optional[str] = None


@dataclass(frozen=True)
class MutationResult:
    record: Any
    invalidation: Invalidation


def _validate(model: Type[BaseModel], **fields) -> BaseModel:
    try:
        return model(**fields)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {model.__name__}: {e}") from e


class MutationGateway:
    """Scoped create/update operations against the store."""

    def __init__(self, store, auth):
        self.store = store
        self.auth = auth

    async def _insert(self, collection: str, data: dict) -> dict:
        try:
            return await self.store.insert(collection, data)
        except StoreError as e:
            logger.error(f"Error writing to {collection}: {e}", exc_info=True)
            raise

    async def _get_trainer(self, trainer_id: str) -> TrainerProfile:
        document = await self.store.get(PROFILES, trainer_id) if trainer_id else None
        if document is None or document.get("role") != Role.TRAINER.value:
            raise ValidationError(f"'{trainer_id}' is not an existing trainer")
        return TrainerProfile(**document)

    async def _get_client(self, client_id: str) -> ClientProfile:
        document = await self.store.get(PROFILES, client_id)
        if document is None:
            raise ProfileNotFound(client_id)
        profile = parse_profile(document)
        if not isinstance(profile, ClientProfile):
            raise ValidationError(f"'{client_id}' is not a client")
        return profile

    # Client-authored logs

    async def log_meal(
        self,
        client_id: str,
        meal_time: datetime,
        description: str,
        diet_plan_id: Optional[str] = None,
    ) -> MutationResult:
        """Record a meal eaten by the client, optionally against one of their diet plan entries."""
        if diet_plan_id:
            plan = await self.store.get(DIET_PLANS, diet_plan_id)
            if plan is None or plan.get("client_id") != client_id:
                raise ValidationError(f"Diet plan entry '{diet_plan_id}' does not belong to client {client_id}")
        entry = _validate(
            MealLogCreate,
            client_id=client_id,
            meal_time=meal_time,
            meal_description=description,
            diet_plan_id=diet_plan_id or None,
        )
        document = await self._insert(MEAL_LOGS, entry.model_dump())
        return MutationResult(MealLog(**document), Invalidation(client_id))

    async def log_exercise(
        self,
        client_id: str,
        name: str,
        time: datetime,
        duration_minutes: int,
        notes: Optional[str] = None,
    ) -> MutationResult:
        """Record an exercise session; calories are computed here and stored."""
        entry = _validate(
            ExerciseLogCreate,
            client_id=client_id,
            exercise_name=name,
            exercise_time=time,
            duration_minutes=duration_minutes,
            notes=notes or None,
        )
        data = entry.model_dump()
        data["calories_burned"] = calories_for_duration(entry.duration_minutes)
        document = await self._insert(EXERCISE_LOGS, data)
        return MutationResult(ExerciseLog(**document), Invalidation(client_id))

    async def log_weight(self, client_id: str, weight_kg: float, measured_at: datetime) -> MutationResult:
        """Record a weight measurement."""
        entry = _validate(WeightLogCreate, client_id=client_id, weight_kg=weight_kg, measured_at=measured_at)
        document = await self._insert(WEIGHT_LOGS, entry.model_dump())
        return MutationResult(WeightLog(**document), Invalidation(client_id))

    # Trainer-authored plans

    async def add_diet_plan_entry(
        self,
        client_id: str,
        trainer_id: str,
        meal_name: str,
        description: str,
        recommended_time: Optional[str] = None,
    ) -> MutationResult:
        entry = _validate(
            DietPlanEntryCreate,
            client_id=client_id,
            created_by=trainer_id,
            meal_name=meal_name,
            meal_description=description,
            recommended_time=recommended_time or None,
        )
        document = await self._insert(DIET_PLANS, entry.model_dump())
        return MutationResult(DietPlanEntry(**document), Invalidation(client_id, trainer_id))

    async def add_training_plan_entry(
        self,
        client_id: str,
        trainer_id: str,
        exercise_name: str,
        sets: int,
        reps: int,
        notes: Optional[str] = None,
    ) -> MutationResult:
        entry = _validate(
            TrainingPlanEntryCreate,
            client_id=client_id,
            created_by=trainer_id,
            exercise_name=exercise_name,
            sets=sets,
            reps=reps,
            notes=notes or None,
        )
        document = await self._insert(TRAINING_PLANS, entry.model_dump())
        return MutationResult(TrainingPlanEntry(**document), Invalidation(client_id, trainer_id))

    # Profiles

    async def set_payment_status(
        self,
        client_id: str,
        active: bool,
        due_date: Optional[datetime] = None,
    ) -> MutationResult:
        """Mark a client as paid up (active) or suspended."""
        if not isinstance(active, bool):
            raise ValidationError("Payment status must be true or false")
        await self._get_client(client_id)

        changes = {"payment_status": active}
        if due_date is not None:
            changes["payment_due_date"] = due_date

        try:
            matched = await self.store.update(PROFILES, client_id, changes)
        except StoreError as e:
            logger.error(f"Error updating payment status for {client_id}: {e}", exc_info=True)
            raise
        if not matched:
            raise ProfileNotFound(client_id)

        client = await self._get_client(client_id)
        logger.info(f"Payment status for client {client_id} set to {active}")
        return MutationResult(client, Invalidation(client_id, client.trainer_id))

    async def toggle_payment_status(self, client_id: str) -> MutationResult:
        """Flip a client's payment status."""
        client = await self._get_client(client_id)
        return await self.set_payment_status(client_id, not client.payment_status)

    async def create_client_account(
        self,
        trainer_id: str,
        email: str,
        password: str,
        full_name: str,
    ) -> MutationResult:
        """Create a login and an active client profile owned by ``trainer_id``.

        The two writes are not atomic: if the profile write fails the new
        identity is left without a profile and the failure is raised as
        ``StoreError``.
        """
        if not (full_name or "").strip():
            raise ValidationError("Full name is required")
        await self._get_trainer(trainer_id)

        principal_id = await self.auth.sign_up(email, password)
        profile = ClientProfile(
            id=principal_id,
            full_name=full_name.strip(),
            trainer_id=trainer_id,
            payment_status=True,
        )
        try:
            await self.store.set(PROFILES, principal_id, profile.model_dump())
        except StoreError as e:
            logger.error(
                f"Profile creation failed for new identity {principal_id}; identity left without a profile: {e}",
                exc_info=True,
            )
            raise

        logger.info(f"Trainer {trainer_id} created client {principal_id}")
        return MutationResult(profile, Invalidation(principal_id, trainer_id))

    async def register(
        self,
        email: str,
        password: str,
        full_name: str,
        role: Role,
        trainer_id: Optional[str] = None,
    ) -> MutationResult:
        """Self sign-up. Trainers start active; clients start suspended.

        A client must name an existing trainer.
        """
        if not (full_name or "").strip():
            raise ValidationError("Full name is required")
        try:
            role = Role(role)
        except ValueError as e:
            raise ValidationError(f"Unknown role '{role}'") from e
        if role == Role.CLIENT:
            await self._get_trainer(trainer_id)

        principal_id = await self.auth.sign_up(email, password)
        if role == Role.TRAINER:
            profile = TrainerProfile(id=principal_id, full_name=full_name.strip())
        else:
            profile = ClientProfile(id=principal_id, full_name=full_name.strip(), trainer_id=trainer_id)

        try:
            await self.store.set(PROFILES, principal_id, profile.model_dump())
        except StoreError as e:
            logger.error(f"Profile creation failed for new identity {principal_id}: {e}", exc_info=True)
            raise

        logger.info(f"Registered {role.value} {principal_id}")
        return MutationResult(profile, Invalidation(principal_id, profile.trainer_id))
