"""Auth API routes: magic-link sign-in, current session, token refresh, sign-out."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, EmailStr

from fluxflow.core.auth.types import Identity
from fluxflow.core.exceptions import TokenError
from fluxflow.core.rbac import home_for
from fluxflow.entrypoints.api.deps import get_auth_service, get_frontend_url
from fluxflow.entrypoints.api.middleware.session import CurrentIdentity, CurrentSession
from fluxflow.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


class MagicLinkRequest(BaseModel):
    """Magic-link request body."""

    email: EmailStr


class MagicLinkVerifyRequest(BaseModel):
    """Magic-link verification body: the token from the emailed link."""

    token: str


class RefreshRequest(BaseModel):
    """Token refresh request body."""

    refresh_token: str


class TokenResponse(BaseModel):
    """Token response."""

    access_token: str
    token_type: str = "bearer"


class SignInResponse(BaseModel):
    """Tokens for a new session and where it lands."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: Identity
    home: str


class SessionResponse(BaseModel):
    """The signed-in identity and where it lands."""

    user: Identity
    home: str
    initial: str


@router.post("/magic-link", status_code=202)
async def request_magic_link(
    body: MagicLinkRequest,
    service: AuthServiceDep,
    frontend_url: Annotated[str, Depends(get_frontend_url)],
) -> dict[str, str]:
    """Email a single-use sign-in link.

    Always answers 202 so the response does not reveal whether the email
    belongs to a profile.
    """
    await service.request_magic_link(body.email, frontend_url)
    return {"message": "If the email has an account, a sign-in link has been sent"}


@router.post("/magic-link/verify", response_model=SignInResponse)
async def verify_magic_link(
    body: MagicLinkVerifyRequest,
    service: AuthServiceDep,
) -> SignInResponse:
    """Complete a magic-link sign-in and issue session tokens."""
    try:
        result = await service.verify_magic_link(body.token)
    except TokenError as e:
        raise HTTPException(status_code=401, detail=str(e)) from None

    user: Identity = result["user"]
    return SignInResponse(
        access_token=result["access_token"],
        refresh_token=result["refresh_token"],
        token_type=result["token_type"],
        user=user,
        home=home_for(user.role),
    )


@router.get("/session", response_model=SessionResponse)
async def get_current_session(identity: CurrentIdentity) -> SessionResponse:
    """Get the current signed-in identity."""
    return SessionResponse(
        user=identity,
        home=home_for(identity.role),
        initial=identity.display_initial,
    )


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    body: RefreshRequest,
    service: AuthServiceDep,
) -> TokenResponse:
    """Refresh access token.

    Args:
        body: Refresh token.
        service: Auth service.

    Returns:
        New access token.
    """
    try:
        result = await service.refresh(refresh_token=body.refresh_token)
        return TokenResponse(**result)
    except TokenError as e:
        raise HTTPException(status_code=401, detail=str(e)) from None


@router.post("/sign-out", status_code=204)
async def sign_out(session: CurrentSession, identity: CurrentIdentity) -> Response:
    """Sign out by revoking the presented access token.

    Best effort: a failed revocation is logged but still answers 204.
    """
    await session.sign_out()
    return Response(status_code=204)
