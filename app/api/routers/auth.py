"""Auth API router: register, login, logout, current actor."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_current_actor, get_identity
from app.application.identity_service import AuthResult, IdentityResolver
from app.domain.models.actor import Actor
from app.domain.schemas.auth import ActorResponse, LoginRequest, RegisterRequest, TokenResponse

router = APIRouter()


async def _token_response(identity: IdentityResolver, result: AuthResult, status_code: int):
    if not result.ok:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": result.error})
    actor = await identity.wait_until_resolved()
    session = identity.session
    body = TokenResponse(
        access_token=session.access_token,
        expires_at=session.expires_at,
        actor=ActorResponse.model_validate(actor) if actor is not None else None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    identity: Annotated[IdentityResolver, Depends(get_identity)],
):
    """Create an account with its profile and sign it in."""
    result = await identity.sign_up(body.email, body.password, body.profile_metadata())
    return await _token_response(identity, result, status.HTTP_201_CREATED)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    identity: Annotated[IdentityResolver, Depends(get_identity)],
):
    """Exchange email and password for a bearer token. Provider errors come back verbatim as 400."""
    result = await identity.sign_in(body.email, body.password)
    return await _token_response(identity, result, status.HTTP_200_OK)


@router.post("/logout")
async def logout(identity: Annotated[IdentityResolver, Depends(get_identity)]):
    await identity.sign_out()
    return {"status": "signed_out"}


@router.get("/me", response_model=ActorResponse)
async def me(actor: Annotated[Actor, Depends(get_current_actor)]):
    """The actor resolved from the bearer token's profile."""
    return actor
