"""Client routes: the client's own dashboard and activity logging."""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_gateway, get_store, require_client
from schemas.api import ExerciseLogRequest, MealLogRequest, WeightLogRequest
from schemas.profile import ClientProfile
from services.client_aggregator import load_client_dashboard
from services.errors import FitnessError
from services.mutations import MutationGateway, MutationResult
from services.refresh import refetch
from utils.helpers import format_mutation_response, to_http_exception
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1/client", tags=["client"])


def ensure_mutations_enabled(client: ClientProfile) -> None:
    """Suspended clients can read but not log."""
    if not client.payment_status:
        raise HTTPException(status_code=403, detail="Account suspended: payment pending")


async def _respond(store, client: ClientProfile, result: MutationResult, message: str) -> dict:
    view = await refetch(store, client, result.invalidation)
    return format_mutation_response(result.record, view, message)


@router.get("/dashboard")
async def get_dashboard(client: ClientProfile = Depends(require_client), store=Depends(get_store)):
    """Plans, logs and progress metrics for the calling client."""
    try:
        dashboard = await load_client_dashboard(store, client)
        return dashboard.model_dump(mode="json")
    except FitnessError as e:
        logger.error(f"Error loading dashboard for {client.id}: {e}", exc_info=True)
        raise to_http_exception(e)


@router.post("/meals")
async def log_meal(
    request: MealLogRequest,
    client: ClientProfile = Depends(require_client),
    store=Depends(get_store),
    gateway: MutationGateway = Depends(get_gateway),
):
    """Log a meal."""
    ensure_mutations_enabled(client)
    try:
        result = await gateway.log_meal(
            client.id,
            request.meal_time,
            request.meal_description,
            diet_plan_id=request.diet_plan_id,
        )
        return await _respond(store, client, result, "Meal logged")
    except FitnessError as e:
        raise to_http_exception(e)


@router.post("/exercises")
async def log_exercise(
    request: ExerciseLogRequest,
    client: ClientProfile = Depends(require_client),
    store=Depends(get_store),
    gateway: MutationGateway = Depends(get_gateway),
):
    """Log an exercise session. Calories are computed from the duration."""
    ensure_mutations_enabled(client)
    try:
        result = await gateway.log_exercise(
            client.id,
            request.exercise_name,
            request.exercise_time,
            request.duration_minutes,
            notes=request.notes,
        )
        return await _respond(store, client, result, "Exercise logged")
    except FitnessError as e:
        raise to_http_exception(e)


@router.post("/weights")
async def log_weight(
    request: WeightLogRequest,
    client: ClientProfile = Depends(require_client),
    store=Depends(get_store),
    gateway: MutationGateway = Depends(get_gateway),
):
    """Log a weight measurement."""
    ensure_mutations_enabled(client)
    try:
        result = await gateway.log_weight(client.id, request.weight_kg, request.measured_at)
        return await _respond(store, client, result, "Weight logged")
    except FitnessError as e:
        raise to_http_exception(e)
