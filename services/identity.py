"""Identity and role resolution, plus ownership scoping."""

from typing import Callable, TypeVar, Union

from pydantic import ValidationError as PydanticValidationError

from models.database import PROFILES
from schemas.profile import ClientProfile, TrainerProfile, parse_profile
from services.errors import AccessDenied, NotAuthenticated, ProfileNotFound, StoreError
from utils.logger import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")

AnyProfile = Union[TrainerProfile, ClientProfile]


class IdentityResolver:
    """Maps an authenticated principal to its stored profile."""

    def __init__(self, store):
        self.store = store

    async def resolve(self, principal_id: str) -> AnyProfile:
        """Return the profile keyed by ``principal_id``.

        Raises:
            NotAuthenticated: no principal was supplied.
            ProfileNotFound: the principal has no profile document.
        """
        if not principal_id:
            raise NotAuthenticated("No authenticated principal")

        document = await self.store.get(PROFILES, principal_id)
        if document is None:
            raise ProfileNotFound(principal_id)

        try:
            return parse_profile(document)
        except PydanticValidationError as e:
            raise StoreError(f"Malformed profile '{principal_id}': {e}", PROFILES) from e

    async def get_client(self, client_id: str) -> ClientProfile:
        """Fetch a profile that must be a client."""
        profile = await self.resolve(client_id)
        if not isinstance(profile, ClientProfile):
            raise AccessDenied(f"Profile '{client_id}' is not a client")
        return profile

    async def ensure_can_view(self, caller: AnyProfile, client_id: str) -> ClientProfile:
        """Return the client profile if ``caller`` may see that client's data.

        Clients may only see themselves; trainers only the clients they own.
        """
        if isinstance(caller, ClientProfile):
            if caller.id != client_id:
                raise AccessDenied("Clients may only access their own data")
            return caller

        client = await self.get_client(client_id)
        if client.trainer_id != caller.id:
            logger.warning(f"Trainer {caller.id} denied access to client {client_id}")
            raise AccessDenied(f"Client '{client_id}' is not owned by this trainer")
        return client


def dispatch_by_role(
    profile: AnyProfile,
    on_trainer: Callable[[TrainerProfile], T],
    on_client: Callable[[ClientProfile], T],
) -> T:
    """Call the handler for the profile's role."""
    if isinstance(profile, TrainerProfile):
        return on_trainer(profile)
    if isinstance(profile, ClientProfile):
        return on_client(profile)
    raise TypeError(f"Unknown profile variant: {type(profile).__name__}")
