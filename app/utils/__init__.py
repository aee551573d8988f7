"""
Common utilities package for the Usuarios API: token handling, password
checks and logging.
"""

from app.utils.auth import TokenService, get_password_hash, verify_password
from app.utils.logger import setup_logger

__all__ = [
    # Authentication utilities
    "TokenService",
    "get_password_hash",
    "verify_password",
    # Logging utilities
    "setup_logger",
]
