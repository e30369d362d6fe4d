"""FastAPI dependency injection: DB session, auth provider, identity resolver, current actor, ComplaintService."""

import logging
from typing import Annotated, AsyncIterator, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.complaint_service import ComplaintService
from app.application.exceptions import AuthProviderError
from app.application.identity_service import IdentityResolver
from app.config.settings import AppSettings, get_settings
from app.core.context import actor_id_ctx
from app.domain.models.actor import Actor
from app.infrastructure.auth.local_provider import LocalAuthProvider
from app.infrastructure.database.complaint_repository_db import DbComplaintRepository
from app.infrastructure.database.profile_repository_db import DbProfileRepository
from app.infrastructure.database.session import AsyncSessionLocal, get_db

bearer_scheme = HTTPBearer(auto_error=False)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for components that manage their own transactions (the auth provider)."""
    return AsyncSessionLocal


def get_auth_provider(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
    settings: Annotated[AppSettings, Depends(get_settings)],
) -> LocalAuthProvider:
    """One provider per request: it holds the session of the calling client only."""
    return LocalAuthProvider(session_factory=session_factory, settings=settings)


async def get_identity(
    provider: Annotated[LocalAuthProvider, Depends(get_auth_provider)],
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> AsyncIterator[IdentityResolver]:
    """Identity resolver for this request, seeded from the bearer token when one is sent."""
    resolver = IdentityResolver(
        provider=provider,
        profiles=DbProfileRepository(db),
        logger=logging.getLogger("app.identity"),
    )
    if credentials is not None:
        try:
            await provider.restore_session(credentials.credentials)
        except AuthProviderError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=e.message,
                headers={"WWW-Authenticate": "Bearer"},
            )
    await resolver.start()
    await resolver.wait_until_resolved()
    try:
        yield resolver
    finally:
        resolver.close()


async def get_current_actor(
    request: Request,
    identity: Annotated[IdentityResolver, Depends(get_identity)],
) -> Actor:
    """The signed-in actor, or 401. Also stamps the actor id on request state and logging context."""
    actor = identity.current_actor()
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    request.state.actor_id = actor.identifier
    actor_id_ctx.set(actor.identifier)
    return actor


def get_complaint_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ComplaintService:
    """Build ComplaintService with injected repository and logger."""
    repository = DbComplaintRepository(db, profiles=DbProfileRepository(db))
    logger = logging.getLogger("app.complaints")
    return ComplaintService(repository=repository, logger=logger)


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""
