"""
Authentication dependencies for FastAPI route protection.
"""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.schemas import CurrentLogin
from app.services.auth_service import AuthService
from app.utils.auth import TokenService

# Missing headers are reported by verify() as 401, not by HTTPBearer as 403
security = HTTPBearer(auto_error=False)


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        settings.jwt_secret,
        ttl=timedelta(minutes=settings.jwt_expire_minutes),
        algorithm=settings.jwt_algorithm,
    )


def get_auth_service(
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(settings.usuarios_autenticacao, tokens)


async def get_current_login(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> CurrentLogin:
    """
    Dependency that verifies the bearer token and returns the identity it carries.

    Raises ``Unauthorized`` or ``Expired`` (401) before any handler code runs.
    """
    claims = tokens.verify(credentials.credentials if credentials else None)
    return CurrentLogin(login=claims.get("login"), role=claims.get("role"))
