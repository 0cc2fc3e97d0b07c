"""Request authentication through the ``x-auth-token`` header."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

AUTH_HEADER = "x-auth-token"

# Shows up as an API key scheme in the OpenAPI docs
security = APIKeyHeader(name=AUTH_HEADER, auto_error=False)


@lru_cache
def get_auth_provider() -> JWTAuthProvider:
    """Token provider configured from settings."""
    return JWTAuthProvider()


async def get_current_user(
    token: Annotated[str | None, Depends(security)],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """Resolve the caller from the session token.

    A missing header and a bad token are told apart by error code, both
    are 401.
    """
    if not token:
        raise AuthenticationError()

    user = await auth_provider.validate_token(token)
    if user is None:
        raise AuthenticationError("Token is not valid", ErrorCode.INVALID_TOKEN)

    return user


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
