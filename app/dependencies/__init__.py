from app.dependencies.auth import (
    get_auth_service,
    get_current_login,
    get_token_service,
)

__all__ = [
    "get_auth_service",
    "get_current_login",
    "get_token_service",
]
