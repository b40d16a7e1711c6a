"""FastAPI dependencies: store, auth, and the calling profile."""

from typing import Optional, Union

from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer

from schemas.profile import ClientProfile, TrainerProfile
from services.auth_service import AuthService
from services.errors import FitnessError
from services.identity import IdentityResolver
from services.mutations import MutationGateway
from services.store import DocumentStore
from utils.helpers import to_http_exception
from utils.logger import setup_logger

logger = setup_logger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_store(request: Request) -> DocumentStore:
    """Store created at startup."""
    return request.app.state.store


def get_auth_service(request: Request) -> AuthService:
    """Auth collaborator created at startup."""
    return request.app.state.auth


def get_identity_resolver(store=Depends(get_store)) -> IdentityResolver:
    return IdentityResolver(store)


def get_gateway(store=Depends(get_store), auth=Depends(get_auth_service)) -> MutationGateway:
    return MutationGateway(store, auth)


async def get_current_principal(
    token: Optional[str] = Depends(oauth2_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> str:
    """Principal id from the bearer token."""
    try:
        return await auth.verify_token(token)
    except FitnessError as e:
        raise to_http_exception(e)


async def get_current_profile(
    principal_id: str = Depends(get_current_principal),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Union[TrainerProfile, ClientProfile]:
    """Profile of the authenticated caller."""
    try:
        return await resolver.resolve(principal_id)
    except FitnessError as e:
        raise to_http_exception(e)


async def require_trainer(profile=Depends(get_current_profile)) -> TrainerProfile:
    if not isinstance(profile, TrainerProfile):
        raise HTTPException(status_code=403, detail="Trainer access required")
    return profile


async def require_client(profile=Depends(get_current_profile)) -> ClientProfile:
    if not isinstance(profile, ClientProfile):
        raise HTTPException(status_code=403, detail="Client access required")
    return profile
