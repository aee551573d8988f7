# Authentication API route: exchanges login/senha for a JWT access token

from fastapi import APIRouter, Depends

from app.dependencies.auth import get_auth_service
from app.schemas import LoginRequest, Token
from app.services.auth_service import AuthService

router = APIRouter(prefix="/usuarios", tags=["Authentication"])


@router.post("/login", response_model=Token)
async def login_user(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate against the configured accounts and return a one-hour token."""
    token = auth_service.login(credentials.login, credentials.senha)
    return Token(token=token)
