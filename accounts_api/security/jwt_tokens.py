import datetime as dt
from typing import Any, Dict

import jwt
from pydantic import BaseModel, ValidationError

from accounts_api.core.errors import InvalidToken
from accounts_api.core.settings import settings
from accounts_api.schemas.user import Role


class TokenClaims(BaseModel):
    """Identity carried by a session token."""

    id: int
    email: str
    role: Role


def _utc_now() -> dt.datetime:
    return dt.datetime.now(tz=dt.timezone.utc)


def token_lifetime() -> dt.timedelta:
    return dt.timedelta(minutes=settings.token_expires_minutes)


def issue_token(claims: TokenClaims) -> str:
    now = _utc_now()
    payload: Dict[str, Any] = {
        "sub": str(claims.id),
        "email": claims.email,
        "role": claims.role,
        "iat": now,
        "exp": now + token_lifetime(),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> TokenClaims:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidToken("Authentication token has expired")
    except jwt.InvalidTokenError:
        raise InvalidToken()
    try:
        return TokenClaims(id=payload["sub"], email=payload.get("email"), role=payload.get("role"))
    except ValidationError:
        raise InvalidToken("Authentication token is missing required claims")
