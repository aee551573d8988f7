from app.services.auth_service import AuthService

__all__ = ["AuthService"]
