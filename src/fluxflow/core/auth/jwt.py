"""JWT token creation and validation."""

import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from fluxflow.core.auth.types import TokenPayload
from fluxflow.core.exceptions import TokenError

# Configuration
SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "dev-secret-change-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60
REFRESH_TOKEN_EXPIRE_DAYS = 7
MAGIC_LINK_EXPIRE_MINUTES = 15


def create_access_token(
    user_id: str,
    role: str,
    client_id: str | None = None,
) -> str:
    """Create a short-lived access token.

    Args:
        user_id: User identifier
        role: User's role
        client_id: Owning client for client-side roles

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": user_id,
        "role": role,
        "client_id": client_id,
        "jti": uuid4().hex,
        "type": "access",
        "exp": int(expire.timestamp()),
        "iat": int(now.timestamp()),
    }

    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def create_refresh_token(user_id: str) -> str:
    """Create a long-lived refresh token.

    Args:
        user_id: User identifier

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    expire = now + timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)

    payload = {
        "sub": user_id,
        "role": "",  # Refresh tokens don't carry role context
        "client_id": None,
        "jti": uuid4().hex,
        "type": "refresh",
        "exp": int(expire.timestamp()),
        "iat": int(now.timestamp()),
    }

    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def create_magic_link_token(user_id: str) -> str:
    """Create a single-use sign-in token to embed in an emailed link.

    Args:
        user_id: User identifier

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=MAGIC_LINK_EXPIRE_MINUTES)

    payload = {
        "sub": user_id,
        "role": "",
        "client_id": None,
        "jti": uuid4().hex,
        "type": "magic_link",
        "exp": int(expire.timestamp()),
        "iat": int(now.timestamp()),
    }

    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> TokenPayload:
    """Decode and validate a JWT token.

    Args:
        token: Encoded JWT string

    Returns:
        Decoded token payload

    Raises:
        TokenError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return TokenPayload(
            sub=payload["sub"],
            role=payload["role"],
            client_id=payload.get("client_id"),
            jti=payload["jti"],
            type=payload.get("type", "access"),
            exp=payload["exp"],
            iat=payload["iat"],
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired") from None
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}") from None
    except KeyError as e:
        raise TokenError(f"Token missing claim: {e}") from None


def token_expiry(payload: TokenPayload) -> datetime:
    """Get the expiration time of a decoded token."""
    return datetime.fromtimestamp(payload.exp, tz=timezone.utc)
