"""Trainer routes: roster, client detail, plans and client accounts."""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_gateway, get_identity_resolver, get_store, require_trainer
from schemas.api import CreateClientRequest, DietPlanRequest, PaymentStatusRequest, TrainingPlanRequest
from schemas.enums import ViewMode
from schemas.profile import TrainerProfile
from services.errors import FitnessError
from services.identity import IdentityResolver
from services.mutations import MutationGateway, MutationResult
from services.refresh import refetch
from services.roster_aggregator import build_detail_view, load_roster, load_roster_entry
from utils.helpers import format_mutation_response, to_http_exception
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1/trainer", tags=["trainer"])


async def _respond(store, trainer: TrainerProfile, result: MutationResult, message: str) -> dict:
    view = await refetch(store, trainer, result.invalidation)
    return format_mutation_response(result.record, view, message)


@router.get("/roster")
async def get_roster(trainer: TrainerProfile = Depends(require_trainer), store=Depends(get_store)):
    """All clients of the calling trainer with their recent activity."""
    try:
        roster = await load_roster(store, trainer)
        return roster.model_dump(mode="json")
    except FitnessError as e:
        logger.error(f"Error loading roster for {trainer.id}: {e}", exc_info=True)
        raise to_http_exception(e)


@router.post("/clients")
async def create_client(
    request: CreateClientRequest,
    trainer: TrainerProfile = Depends(require_trainer),
    store=Depends(get_store),
    gateway: MutationGateway = Depends(get_gateway),
):
    """Create a login and an active profile for a new client."""
    try:
        result = await gateway.create_client_account(trainer.id, request.email, request.password, request.full_name)
        return await _respond(store, trainer, result, "Client created")
    except FitnessError as e:
        raise to_http_exception(e)


@router.get("/clients/{client_id}")
async def get_client_detail(
    client_id: str,
    mode: ViewMode = Query(ViewMode.OVERVIEW, description="overview, diet or training"),
    trainer: TrainerProfile = Depends(require_trainer),
    store=Depends(get_store),
    resolver: IdentityResolver = Depends(get_identity_resolver),
):
    """One of the trainer's clients seen through a view mode."""
    try:
        client = await resolver.ensure_can_view(trainer, client_id)
        entry = await load_roster_entry(store, client)
        return build_detail_view(entry, mode).model_dump(mode="json")
    except FitnessError as e:
        raise to_http_exception(e)


@router.put("/clients/{client_id}/payment")
async def set_payment_status(
    client_id: str,
    request: PaymentStatusRequest,
    trainer: TrainerProfile = Depends(require_trainer),
    store=Depends(get_store),
    resolver: IdentityResolver = Depends(get_identity_resolver),
    gateway: MutationGateway = Depends(get_gateway),
):
    """Activate or suspend a client."""
    try:
        await resolver.ensure_can_view(trainer, client_id)
        result = await gateway.set_payment_status(client_id, request.active, due_date=request.due_date)
        return await _respond(store, trainer, result, "Payment status updated")
    except FitnessError as e:
        raise to_http_exception(e)


@router.post("/clients/{client_id}/payment/toggle")
async def toggle_payment_status(
    client_id: str,
    trainer: TrainerProfile = Depends(require_trainer),
    store=Depends(get_store),
    resolver: IdentityResolver = Depends(get_identity_resolver),
    gateway: MutationGateway = Depends(get_gateway),
):
    """Flip a client's payment status."""
    try:
        await resolver.ensure_can_view(trainer, client_id)
        result = await gateway.toggle_payment_status(client_id)
        return await _respond(store, trainer, result, "Payment status updated")
    except FitnessError as e:
        raise to_http_exception(e)


@router.post("/clients/{client_id}/diet-plans")
async def add_diet_plan(
    client_id: str,
    request: DietPlanRequest,
    trainer: TrainerProfile = Depends(require_trainer),
    store=Depends(get_store),
    resolver: IdentityResolver = Depends(get_identity_resolver),
    gateway: MutationGateway = Depends(get_gateway),
):
    """Assign a meal to a client's diet plan."""
    try:
        await resolver.ensure_can_view(trainer, client_id)
        result = await gateway.add_diet_plan_entry(
            client_id,
            trainer.id,
            request.meal_name,
            request.meal_description,
            recommended_time=request.recommended_time,
        )
        return await _respond(store, trainer, result, "Diet plan entry added")
    except FitnessError as e:
        raise to_http_exception(e)


@router.post("/clients/{client_id}/training-plans")
async def add_training_plan(
    client_id: str,
    request: TrainingPlanRequest,
    trainer: TrainerProfile = Depends(require_trainer),
    store=Depends(get_store),
    resolver: IdentityResolver = Depends(get_identity_resolver),
    gateway: MutationGateway = Depends(get_gateway),
):
    """Assign an exercise to a client's training plan."""
    try:
        await resolver.ensure_can_view(trainer, client_id)
        result = await gateway.add_training_plan_entry(
            client_id,
            trainer.id,
            request.exercise_name,
            request.sets,
            request.reps,
            notes=request.notes,
        )
        return await _respond(store, trainer, result, "Training plan entry added")
    except FitnessError as e:
        raise to_http_exception(e)
