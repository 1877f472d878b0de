from fastapi import Response

from accounts_api.core.settings import settings
from accounts_api.security.jwt_tokens import token_lifetime


def set_token_cookie(response: Response, token: str) -> None:
    """Set the HTTP-only session cookie; it expires together with the token."""
    response.set_cookie(
        key=settings.token_cookie_name,
        value=token,
        max_age=int(token_lifetime().total_seconds()),
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.token_cookie_samesite,
        path="/",
    )


def clear_token_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.token_cookie_name,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.token_cookie_samesite,
    )
