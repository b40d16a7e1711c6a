"""Profile lookup routes."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_current_profile, get_identity_resolver
from services.errors import FitnessError
from services.identity import IdentityResolver
from utils.helpers import to_http_exception
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


@router.get("")
async def get_profile(
    uid: Optional[str] = Query(None, description="Principal identifier"),
    caller=Depends(get_current_profile),
    resolver: IdentityResolver = Depends(get_identity_resolver),
):
    """Get a profile by uid.

    Callers may read their own profile; trainers may also read the profiles
    of their clients.
    """
    if not uid:
        raise HTTPException(status_code=400, detail="uid is required")

    try:
        if uid == caller.id:
            return caller.model_dump(mode="json")
        client = await resolver.ensure_can_view(caller, uid)
        return client.model_dump(mode="json")

    except FitnessError as e:
        if e.status_code >= 500:
            logger.error(f"Error fetching profile {uid}: {e}", exc_info=True)
        raise to_http_exception(e)
