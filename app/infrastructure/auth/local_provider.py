"""Local auth provider: accounts in the auth_users table, sessions as signed JWT access tokens."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.auth_provider import (
    AuthEvent,
    AuthSession,
    AuthStateListener,
    AuthUser,
)
from app.application.exceptions import AuthProviderError
from app.config.settings import AppSettings
from app.domain.models.actor import UserRole
from app.infrastructure.database.models import AuthUserRecord, ProfileRecord
from app.security.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid login credentials"
ALREADY_REGISTERED = "User already registered"
INVALID_SESSION = "Invalid or expired session"
ADMIN_SIGNUP_DISABLED = "Admin sign-up is disabled"
TOKEN_TYPE = "access"


class _Subscription:
    def __init__(self, listeners: List[AuthStateListener], callback: AuthStateListener) -> None:
        self._listeners = listeners
        self._callback = callback

    def unsubscribe(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


class LocalAuthProvider:
    """
    Implements AuthProvider protocol. One instance holds the session of one
    client; build a new instance per request and call restore_session() with
    the bearer token.

    Sign-up also writes the profiles row from the user metadata, so every
    account has a profile to resolve.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: AppSettings,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings
        self._session: Optional[AuthSession] = None
        self._listeners: List[AuthStateListener] = []
        self._lock = asyncio.Lock()

    # --- AuthProvider --------------------------------------------------------

    def on_auth_state_change(self, callback: AuthStateListener) -> _Subscription:
        self._listeners.append(callback)
        return _Subscription(self._listeners, callback)

    async def get_session(self) -> Optional[AuthSession]:
        async with self._lock:
            if self._session is not None and self._session.expires_at <= datetime.now(timezone.utc):
                self._session = None
            return self._session

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        async with self._session_factory() as db:
            result = await db.execute(
                select(AuthUserRecord).where(AuthUserRecord.email == _normalize_email(email))
            )
            record = result.scalar_one_or_none()
        if record is None or not verify_password(password, record.password_hash):
            logger.info("sign_in_rejected")
            raise AuthProviderError(INVALID_CREDENTIALS)

        session = self._issue_session(record)
        await self._set_session(AuthEvent.SIGNED_IN, session)
        return session

    async def sign_up(self, email: str, password: str, metadata: Dict[str, Any]) -> AuthSession:
        if len(password) < self._settings.min_password_length:
            raise AuthProviderError(
                f"Password should be at least {self._settings.min_password_length} characters"
            )
        name = (metadata.get("name") or "").strip()
        if not name:
            raise AuthProviderError("Name is required")
        try:
            role = UserRole(metadata.get("role") or UserRole.STUDENT.value)
        except ValueError as e:
            raise AuthProviderError(f"Unknown role: {metadata.get('role')}") from e
        if role == UserRole.ADMIN and not self._settings.allow_admin_signup:
            raise AuthProviderError(ADMIN_SIGNUP_DISABLED)

        email = _normalize_email(email)
        record = AuthUserRecord(
            email=email,
            password_hash=hash_password(password, self._settings.password_hash_iterations),
            user_metadata=metadata,
        )
        async with self._session_factory() as db:
            db.add(record)
            try:
                await db.flush()
                db.add(
                    ProfileRecord(
                        user_id=record.id,
                        name=name,
                        email=email,
                        role=role.value,
                        department=metadata.get("department"),
                        student_id=metadata.get("student_id"),
                    )
                )
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise AuthProviderError(ALREADY_REGISTERED) from e
            await db.refresh(record)

        logger.info("user_registered", extra={"user_id": record.id})
        session = self._issue_session(record)
        await self._set_session(AuthEvent.SIGNED_IN, session)
        return session

    async def sign_out(self) -> None:
        await self._set_session(AuthEvent.SIGNED_OUT, None)

    # --- token handling ----------------------------------------------------------

    async def restore_session(self, access_token: str) -> AuthSession:
        """Rebuild a session from a previously issued access token."""
        try:
            claims = jwt.decode(
                access_token,
                self._settings.jwt_secret,
                algorithms=[self._settings.jwt_algorithm],
            )
        except JWTError as e:
            raise AuthProviderError(INVALID_SESSION) from e
        if claims.get("type") != TOKEN_TYPE or not claims.get("sub"):
            raise AuthProviderError(INVALID_SESSION)

        session = AuthSession(
            access_token=access_token,
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            user=AuthUser(
                id=claims["sub"],
                email=claims.get("email", ""),
                user_metadata=claims.get("user_metadata") or {},
            ),
        )
        await self._set_session(AuthEvent.TOKEN_RESTORED, session)
        return session

    def _issue_session(self, record: AuthUserRecord) -> AuthSession:
        expires_at = datetime.now(timezone.utc) + timedelta(
            minutes=self._settings.jwt_expiration_minutes
        )
        user = AuthUser(id=record.id, email=record.email, user_metadata=record.user_metadata or {})
        claims = {
            "sub": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata,
            "exp": expires_at,
            "type": TOKEN_TYPE,
        }
        token = jwt.encode(claims, self._settings.jwt_secret, algorithm=self._settings.jwt_algorithm)
        return AuthSession(access_token=token, expires_at=expires_at, user=user)

    async def _set_session(self, event: AuthEvent, session: Optional[AuthSession]) -> None:
        async with self._lock:
            self._session = session
            # Listeners run under the lock
            for listener in list(self._listeners):
                listener(event, session)


def _normalize_email(email: str) -> str:
    return email.strip().lower()
