"""Trainer roster aggregation."""

import asyncio
from typing import List

from pydantic import ValidationError as PydanticValidationError

from models.database import PROFILES
from schemas.enums import ViewMode
from schemas.profile import ClientProfile, TrainerProfile
from schemas.views import ClientDetailView, Roster, RosterEntry
from services.client_aggregator import load_client_aggregate
from services.errors import AccessDenied
from utils.logger import setup_logger

logger = setup_logger(__name__)

# Most recent records loaded per client on the roster
ROSTER_LIMITS = {
    "meal_logs": 10,
    "exercise_logs": 10,
    "weight_logs": 5,
}


async def _load_clients(store, trainer_id: str) -> List[ClientProfile]:
    documents = await store.query(PROFILES, "trainer_id", trainer_id, order_by="created_at", descending=True)
    clients = []
    for document in documents:
        try:
            clients.append(ClientProfile(**document))
        except PydanticValidationError as e:
            logger.warning(f"Skipping invalid client profile {document.get('id')}: {e}")
    return clients


async def _load_entry(store, client: ClientProfile) -> RosterEntry:
    aggregate = await load_client_aggregate(store, client.id, limits=ROSTER_LIMITS)
    return RosterEntry(profile=client, data=aggregate)


async def load_roster(store, trainer: TrainerProfile) -> Roster:
    """Load every client of ``trainer`` with a bounded recent window of data.

    A failure listing the clients themselves propagates as ``StoreError``;
    failures inside one client's streams only empty those streams.
    """
    clients = await _load_clients(store, trainer.id)
    entries = await asyncio.gather(*(_load_entry(store, client) for client in clients))
    roster = Roster(trainer_id=trainer.id, entries=list(entries))
    logger.info(
        f"Loaded roster for trainer {trainer.id}: {roster.total_clients} clients, "
        f"{roster.active_clients} active"
    )
    return roster


async def load_roster_entry(store, client: ClientProfile) -> RosterEntry:
    """Load one client's roster entry with the same bounded windows as the roster."""
    return await _load_entry(store, client)


def find_entry(roster: Roster, client_id: str) -> RosterEntry:
    """Return the roster entry for ``client_id``."""
    for entry in roster.entries:
        if entry.profile.id == client_id:
            return entry
    raise AccessDenied(f"Client '{client_id}' is not on this trainer's roster")


def build_detail_view(entry: RosterEntry, mode: ViewMode = ViewMode.OVERVIEW) -> ClientDetailView:
    """Detail view of one roster entry in ``mode``. No store access."""
    if mode == ViewMode.DIET:
        return ClientDetailView(mode=mode, profile=entry.profile, diet_plans=entry.data.diet_plans)
    if mode == ViewMode.TRAINING:
        return ClientDetailView(mode=mode, profile=entry.profile, training_plans=entry.data.training_plans)
    return ClientDetailView(mode=ViewMode.OVERVIEW, profile=entry.profile, overview=entry.data)


def select_client(roster: Roster, client_id: str, mode: ViewMode = ViewMode.OVERVIEW) -> ClientDetailView:
    """Build the detail view for one client from already loaded roster data."""
    return build_detail_view(find_entry(roster, client_id), mode)
