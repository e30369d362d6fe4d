"""Identity resolver: bridges an auth provider session to the Actor used by the complaint service."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.application.auth_provider import AuthEvent, AuthProvider, AuthSession, Subscription
from app.application.exceptions import AuthProviderError, ProfileLookupError
from app.application.profile_repository import ProfileRepository
from app.domain.models.actor import Actor

UNEXPECTED_AUTH_ERROR = "An unexpected error occurred"


@dataclass(frozen=True)
class AuthResult:
    """Outcome of sign-in/sign-up. `error` carries the provider message verbatim."""

    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class IdentityResolver:
    """
    Lifecycle: loading -> resolved -> authenticated (actor set) or anonymous (actor None).

    Every session-establishment event (the initial get_session() and each change
    notification) schedules exactly one profile lookup by the session subject.
    The lookup runs as a separate task on the next loop turn, never inside the
    provider's notification, because the provider holds its session lock while
    notifying. A lookup that finishes after its session was replaced is discarded.
    """

    def __init__(
        self,
        provider: AuthProvider,
        profiles: ProfileRepository,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._provider = provider
        self._profiles = profiles
        self._logger = logger or logging.getLogger(__name__)
        self._session: Optional[AuthSession] = None
        self._actor: Optional[Actor] = None
        self._loading = True
        self._subscription: Optional[Subscription] = None
        self._pending: Optional[asyncio.Task] = None

    # --- read-only context -------------------------------------------------

    def current_actor(self) -> Optional[Actor]:
        return self._actor

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._actor is not None and self._session is not None

    # --- lifecycle -----------------------------------------------------------

    async def start(self) -> None:
        """Subscribe to session changes first, then pick up any existing session."""
        if self._subscription is None:
            self._subscription = self._provider.on_auth_state_change(self._on_auth_state_change)
        session = await self._provider.get_session()
        self._apply_session(session)

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def wait_until_resolved(self) -> Optional[Actor]:
        """Await any scheduled profile resolution, including ones queued while waiting."""
        while self._pending is not None and not self._pending.done():
            await self._pending
        return self._actor

    # --- auth operations -----------------------------------------------------

    async def sign_in(self, email: str, password: str) -> AuthResult:
        try:
            await self._provider.sign_in_with_password(email, password)
        except AuthProviderError as e:
            return AuthResult(error=e.message)
        except Exception:
            self._logger.exception("sign_in_failed")
            return AuthResult(error=UNEXPECTED_AUTH_ERROR)
        return AuthResult()

    async def sign_up(self, email: str, password: str, profile: Dict[str, Any]) -> AuthResult:
        """profile carries {name, role, department?, student_id?}; it is stored as user metadata."""
        try:
            await self._provider.sign_up(email, password, profile)
        except AuthProviderError as e:
            return AuthResult(error=e.message)
        except Exception:
            self._logger.exception("sign_up_failed")
            return AuthResult(error=UNEXPECTED_AUTH_ERROR)
        return AuthResult()

    async def sign_out(self) -> None:
        await self._provider.sign_out()
        self._apply_session(None)

    # --- session handling ------------------------------------------------------

    def _on_auth_state_change(self, event: AuthEvent, session: Optional[AuthSession]) -> None:
        self._logger.debug("auth_state_changed", extra={"status": event.value})
        self._apply_session(session)

    def _apply_session(self, session: Optional[AuthSession]) -> None:
        self._session = session
        if session is None:
            self._actor = None
            self._loading = False
            return
        self._loading = True
        self._pending = asyncio.get_running_loop().create_task(self._resolve_actor(session))

    async def _resolve_actor(self, session: AuthSession) -> None:
        try:
            profile = await self._profiles.get_by_user_id(session.user.id)
        except ProfileLookupError as e:
            self._logger.error(
                "profile_lookup_failed",
                extra={"user_id": session.user.id, "error": e.message},
            )
            profile = None
        else:
            if profile is None:
                self._logger.warning("profile_not_found", extra={"user_id": session.user.id})
        if self._session is not session:
            return
        self._actor = profile.to_actor() if profile is not None else None
        self._loading = False
