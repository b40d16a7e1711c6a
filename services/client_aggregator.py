"""Client data aggregation.

Loads a client's five record streams concurrently. A failure in one stream is
logged and that stream comes back empty; the others still load.
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError as PydanticValidationError

from models.database import DIET_PLANS, MEAL_LOGS, EXERCISE_LOGS, WEIGHT_LOGS, TRAINING_PLANS
from schemas.diet_plan import DietPlanEntry
from schemas.meal_log import MealLog
from schemas.exercise_log import ExerciseLog
from schemas.weight_log import WeightLog
from schemas.training_plan import TrainingPlanEntry
from schemas.profile import ClientProfile
from schemas.views import ClientAggregate, ClientDashboard
from services.errors import StoreError
from utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Stream:
    """One per-client collection and how to read it."""
    collection: str
    order_by: str
    model: Type[BaseModel]


# Aggregate field name -> stream, in load order
STREAMS: Dict[str, Stream] = {
    "diet_plans": Stream(DIET_PLANS, "created_at", DietPlanEntry),
    "meal_logs": Stream(MEAL_LOGS, "meal_time", MealLog),
    "exercise_logs": Stream(EXERCISE_LOGS, "exercise_time", ExerciseLog),
    "weight_logs": Stream(WEIGHT_LOGS, "measured_at", WeightLog),
    "training_plans": Stream(TRAINING_PLANS, "created_at", TrainingPlanEntry),
}


async def _load_stream(store, stream: Stream, client_id: str, limit: Optional[int]) -> List[BaseModel]:
    documents = await store.query(
        stream.collection,
        "client_id",
        client_id,
        order_by=stream.order_by,
        descending=True,
        limit=limit,
    )
    records = []
    for document in documents:
        try:
            records.append(stream.model(**document))
        except PydanticValidationError as e:
            logger.warning(f"Skipping invalid {stream.collection} document {document.get('id')}: {e}")
    return records


async def load_client_aggregate(
    store,
    client_id: str,
    limits: Optional[Dict[str, int]] = None,
) -> ClientAggregate:
    """Fetch all five record streams for ``client_id`` concurrently.

    Args:
        store: Document store to read from.
        client_id: Client whose records to load.
        limits: Optional row limit per aggregate field name, e.g.
            ``{"meal_logs": 10}``. Streams not named are unbounded.

    Returns:
        The aggregate, with any streams that failed listed in
        ``failed_collections`` and left empty.
    """
    limits = limits or {}
    names = list(STREAMS)
    results = await asyncio.gather(
        *(_load_stream(store, STREAMS[name], client_id, limits.get(name)) for name in names),
        return_exceptions=True,
    )

    loaded = {}
    failed = []
    for name, result in zip(names, results):
        if isinstance(result, StoreError):
            logger.warning(f"Could not load {name} for client {client_id}: {result}")
            failed.append(STREAMS[name].collection)
            loaded[name] = []
        elif isinstance(result, BaseException):
            raise result
        else:
            loaded[name] = result

    return ClientAggregate(client_id=client_id, failed_collections=failed, **loaded)


async def load_client_dashboard(store, client: ClientProfile) -> ClientDashboard:
    """Full, unbounded view of a client's own data."""
    aggregate = await load_client_aggregate(store, client.id)
    logger.info(
        f"Loaded dashboard for client {client.id}: "
        f"{len(aggregate.exercise_logs)} exercise logs, {len(aggregate.weight_logs)} weight logs"
    )
    return ClientDashboard(profile=client, data=aggregate)
