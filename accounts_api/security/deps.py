import logging
from typing import Callable, Optional

from fastapi import Cookie, Depends

from accounts_api.core.errors import AuthenticationRequired, Forbidden
from accounts_api.core.settings import settings
from accounts_api.schemas.user import Role
from accounts_api.security.jwt_tokens import TokenClaims, verify_token

logger = logging.getLogger(__name__)


def get_current_claims(
    token: Optional[str] = Cookie(default=None, alias=settings.token_cookie_name),
) -> TokenClaims:
    if not token:
        raise AuthenticationRequired()
    # verify_token raises InvalidToken on anything it cannot trust
    return verify_token(token)


def require_role(*roles: Role) -> Callable[..., TokenClaims]:
    allowed = frozenset(roles)

    def _guard(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if claims.role not in allowed:
            logger.info("User %s with role %r denied, requires one of %s", claims.id, claims.role, sorted(allowed))
            raise Forbidden("User does not have required permissions")
        return claims

    return _guard


require_admin = require_role("admin")
