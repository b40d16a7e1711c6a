"""Email/password authentication collaborator.

Identities live in the ``auth_identities`` collection, separate from
profiles: an identity can exist without a profile (see
``MutationGateway.create_client_account``). Access tokens are signed JWTs;
signing out revokes the token's ``jti``.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from config.settings import Settings, settings as default_settings
from models.database import AUTH_IDENTITIES, REVOKED_TOKENS
from services.errors import NotAuthenticated, ValidationError
from utils.logger import setup_logger

logger = setup_logger(__name__)

AuthListener = Callable[[Optional[str]], None]


@dataclass(frozen=True)
class AuthSession:
    """A signed-in principal and its access token."""
    principal_id: str
    access_token: str
    expires_at: datetime


class AuthService:
    """Sign-up, sign-in, sign-out and auth-state subscriptions."""

    def __init__(self, store, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or default_settings
        self._listeners: List[AuthListener] = []

    async def sign_up(self, email: str, password: str) -> str:
        """Create an identity and return its principal id."""
        email = (email or "").strip().lower()
        if "@" not in email:
            raise ValidationError("A valid email is required")
        if not password or len(password) < 6:
            raise ValidationError("Password must be at least 6 characters")

        existing = await self.store.query(AUTH_IDENTITIES, "email", email, limit=1)
        if existing:
            raise ValidationError(f"Email '{email}' is already registered")

        identity = await self.store.insert(AUTH_IDENTITIES, {
            "email": email,
            "password_hash": generate_password_hash(password),
        })
        logger.info(f"Created auth identity {identity['id']}")
        return identity["id"]

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Check credentials and issue an access token."""
        email = (email or "").strip().lower()
        matches = await self.store.query(AUTH_IDENTITIES, "email", email, limit=1)
        if not matches or not check_password_hash(matches[0]["password_hash"], password or ""):
            raise NotAuthenticated("Invalid email or password")

        session = self._issue_token(matches[0]["id"])
        self._notify(session.principal_id)
        return session

    async def sign_out(self, token: str) -> None:
        """Revoke ``token`` so it can no longer be used."""
        payload = self._decode(token)
        await self.store.set(REVOKED_TOKENS, payload["jti"], {"principal_id": payload["sub"]})
        self._notify(None)

    async def verify_token(self, token: str) -> str:
        """Return the principal id carried by a valid, unrevoked token."""
        payload = self._decode(token)
        if await self.store.get(REVOKED_TOKENS, payload["jti"]):
            raise NotAuthenticated("Token has been revoked")
        return payload["sub"]

    def subscribe(self, callback: AuthListener) -> Callable[[], None]:
        """Register an auth-state listener and return its unsubscribe handle.

        Listeners get the principal id on sign-in and ``None`` on sign-out.
        """
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _issue_token(self, principal_id: str) -> AuthSession:
        expires_at = datetime.utcnow() + timedelta(minutes=self.settings.access_token_expire_minutes)
        token = jwt.encode(
            {"sub": principal_id, "jti": str(uuid.uuid4()), "exp": expires_at},
            self.settings.jwt_secret_key,
            algorithm=self.settings.jwt_algorithm,
        )
        return AuthSession(principal_id=principal_id, access_token=token, expires_at=expires_at)

    def _decode(self, token: str) -> dict:
        if not token:
            raise NotAuthenticated("Missing access token")
        try:
            payload = jwt.decode(token, self.settings.jwt_secret_key, algorithms=[self.settings.jwt_algorithm])
        except JWTError as e:
            raise NotAuthenticated(f"Invalid access token: {e}") from e
        if not payload.get("sub") or not payload.get("jti"):
            raise NotAuthenticated("Access token carries no principal")
        return payload

    def _notify(self, principal_id: Optional[str]) -> None:
        for listener in list(self._listeners):
            try:
                listener(principal_id)
            except Exception as e:
                logger.error(f"Auth listener failed: {e}", exc_info=True)
