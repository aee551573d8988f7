"""
Authentication utilities with JWT tokens and bcrypt-aware password checks.

- HS256 algorithm for JWT signing (python-jose)
- Secret and lifetime injected through ``TokenService``'s constructor
- Expired and invalid tokens reported as distinct errors
- UTC timezone consistency
"""

import hmac
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from app.exceptions import Expired, InternalError, Unauthorized

DEFAULT_ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL = timedelta(hours=1)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def verify_password(plain_password: str, stored_password: str) -> bool:
    """Check a password against a stored value, either a bcrypt hash or plain text."""
    if stored_password.startswith(BCRYPT_PREFIXES):
        try:
            return bcrypt.checkpw(
                plain_password.encode("utf-8"), stored_password.encode("utf-8")
            )
        except ValueError as e:
            raise InternalError("Configuração de usuários inválida.") from e
    return hmac.compare_digest(
        plain_password.encode("utf-8"), stored_password.encode("utf-8")
    )


def get_password_hash(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    salt = bcrypt.gensalt()
    hashed_password = bcrypt.hashpw(password=password.encode("utf-8"), salt=salt)
    return hashed_password.decode("utf-8")


class TokenService:
    """Signs and verifies time-limited bearer tokens with a shared secret."""

    def __init__(
        self,
        secret: str | None,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        algorithm: str = DEFAULT_ALGORITHM,
    ):
        self.secret = secret
        self.ttl = ttl
        self.algorithm = algorithm

    def _require_secret(self) -> str:
        if not self.secret:
            raise InternalError("Chave de assinatura de tokens não configurada.")
        return self.secret

    def issue(
        self, claims: dict[str, Any] | None = None, ttl: timedelta | None = None
    ) -> str:
        """Create a signed token carrying ``claims`` (possibly none) and an expiry."""
        to_encode = dict(claims or {})
        to_encode["exp"] = datetime.now(UTC) + (ttl if ttl is not None else self.ttl)
        return jwt.encode(to_encode, self._require_secret(), algorithm=self.algorithm)

    def verify(self, token: str | None) -> dict[str, Any]:
        """Return the token's claims or raise ``Unauthorized`` / ``Expired``."""
        if not token:
            raise Unauthorized("Token não fornecido.")
        secret = self._require_secret()
        try:
            return jwt.decode(token, secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise Expired("Token expirado.") from e
        except JWTError as e:
            raise Unauthorized("Token inválido.") from e
