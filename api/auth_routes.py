"""Authentication routes: sign-up, login, logout and the caller's profile."""

from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service, get_current_profile, get_gateway, oauth2_scheme
from schemas.api import LoginRequest, SignupRequest, TokenResponse
from services.auth_service import AuthService
from services.errors import FitnessError
from services.mutations import MutationGateway
from utils.helpers import to_http_exception
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/signup", response_model=TokenResponse)
async def signup(
    request: SignupRequest,
    gateway: MutationGateway = Depends(get_gateway),
    auth: AuthService = Depends(get_auth_service),
):
    """Register a trainer or client and sign them in."""
    try:
        result = await gateway.register(
            request.email,
            request.password,
            request.full_name,
            request.role,
            trainer_id=request.trainer_id,
        )
        session = await auth.sign_in(request.email, request.password)
        return TokenResponse(access_token=session.access_token, principal_id=result.record.id)
    except FitnessError as e:
        logger.error(f"Sign-up failed for {request.email}: {e.message}")
        raise to_http_exception(e)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Exchange email and password for an access token."""
    try:
        session = await auth.sign_in(request.email, request.password)
        return TokenResponse(access_token=session.access_token, principal_id=session.principal_id)
    except FitnessError as e:
        raise to_http_exception(e)


@router.post("/logout")
async def logout(
    token: Optional[str] = Depends(oauth2_scheme),
    auth: AuthService = Depends(get_auth_service),
):
    """Revoke the current access token."""
    try:
        await auth.sign_out(token)
        return {"message": "Signed out"}
    except FitnessError as e:
        raise to_http_exception(e)


@router.get("/me")
async def me(profile=Depends(get_current_profile)):
    """Profile of the signed-in caller; clients dispatch on ``role``."""
    return profile.model_dump(mode="json")
