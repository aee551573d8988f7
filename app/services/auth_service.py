"""
Login against the configured account table.

Accounts come from ``Settings.usuarios_autenticacao`` and are handed to the
service at construction; nothing here reads the environment.
"""

from collections.abc import Mapping

from app.config import AuthAccount
from app.exceptions import InternalError, Unauthorized
from app.utils.auth import TokenService, verify_password
from app.utils.logger import setup_logger

logger = setup_logger("auth_service")


class AuthService:
    """Checks login/senha pairs and issues tokens carrying ``{login, role}``."""

    def __init__(self, accounts: Mapping[str, AuthAccount], tokens: TokenService):
        self.accounts = accounts
        self.tokens = tokens

    def login(self, login: str, senha: str) -> str:
        if not self.accounts:
            raise InternalError("Configuração de usuários não encontrada.")

        account = self.accounts.get(login)
        if account is None or not verify_password(senha, account.senha):
            logger.warning(f"Failed login attempt for '{login}'")
            raise Unauthorized("Credenciais inválidas.")

        token = self.tokens.issue({"login": login, "role": account.role})
        logger.info(f"Issued token for '{login}' (role: {account.role})")
        return token
