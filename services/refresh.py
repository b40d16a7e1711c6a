"""Mutate, invalidate, refetch.

After a successful mutation the caller's view is reloaded in full. This is the
one place that decides what "the caller's view" is, so a cache or push-based
update can replace it later without touching the mutation gateway.
"""

from typing import Optional, Union

from models.database import PROFILES
from schemas.profile import ClientProfile, TrainerProfile
from schemas.views import ClientDashboard, Roster
from services.client_aggregator import load_client_dashboard
from services.mutations import Invalidation
from services.roster_aggregator import load_roster
from utils.logger import setup_logger

logger = setup_logger(__name__)


def is_affected(caller: Union[TrainerProfile, ClientProfile], invalidation: Invalidation) -> bool:
    """Whether ``invalidation`` touches data shown in the caller's view."""
    if isinstance(caller, ClientProfile):
        return invalidation.client_id == caller.id
    return invalidation.trainer_id == caller.id


async def refetch(
    store,
    caller: Union[TrainerProfile, ClientProfile],
    invalidation: Invalidation,
) -> Optional[Union[ClientDashboard, Roster]]:
    """Reload the caller's view after a mutation.

    Returns None without touching the store when the mutation does not
    affect anything the caller sees.
    """
    if not is_affected(caller, invalidation):
        logger.debug(f"Mutation on client {invalidation.client_id} does not affect view of {caller.id}")
        return None

    if isinstance(caller, ClientProfile):
        # Reload the profile too: payment status may have changed
        document = await store.get(PROFILES, caller.id)
        client = ClientProfile(**document) if document else caller
        return await load_client_dashboard(store, client)
    return await load_roster(store, caller)
