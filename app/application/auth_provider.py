"""Auth provider protocol. The identity resolver depends on this; infrastructure implements it."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional, Protocol


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_RESTORED = "TOKEN_RESTORED"


@dataclass(frozen=True)
class AuthUser:
    """Provider-side account. `id` is the subject every profile is keyed by."""

    id: str
    email: str
    user_metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    expires_at: datetime
    user: AuthUser


AuthStateListener = Callable[[AuthEvent, Optional[AuthSession]], None]


class Subscription(Protocol):
    def unsubscribe(self) -> None:
        ...


class AuthProvider(Protocol):
    """
    Session-oriented auth provider. Listeners are invoked while the provider
    still holds its session lock, so they must not call back into it.
    """

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Raise AuthProviderError on bad credentials."""
        ...

    async def sign_up(self, email: str, password: str, metadata: Dict[str, Any]) -> AuthSession:
        """Create the account, store metadata, and start a session. Raise AuthProviderError on failure."""
        ...

    async def sign_out(self) -> None:
        ...

    async def get_session(self) -> Optional[AuthSession]:
        ...

    def on_auth_state_change(self, callback: AuthStateListener) -> Subscription:
        ...
