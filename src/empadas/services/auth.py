"""Single-admin authentication with signed session tokens."""

from __future__ import annotations

import hmac
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from ..config import BaseConfig
from ..errors import UnauthorizedError, missing_env_error
from ..logging_config import get_logger

logger = get_logger(__name__)

ADMIN_ROLE = "admin"
ANON_ROLE = "anon"
TOKEN_ALGORITHM = "HS256"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AdminAuth:
    """Compare credentials against the configured pair and sign/verify admin tokens."""

    def __init__(self, config: BaseConfig, *, clock: Clock = _utcnow) -> None:
        self.config = config
        self.clock = clock

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(seconds=self.config.ADMIN_TOKEN_TTL_SECONDS)

    def issue_token(self) -> str:
        missing = self.config.missing_env(["JWT_SECRET"])
        if missing:
            raise missing_env_error(missing)
        payload = {"role": ADMIN_ROLE, "exp": self.clock() + self.token_ttl}
        return jwt.encode(payload, self.config.JWT_SECRET, algorithm=TOKEN_ALGORITHM)

    def login(self, username: str, password: str) -> str:
        """Return a fresh admin token, or raise `UnauthorizedError` on a mismatch."""

        missing = self.config.missing_env(self.config.REQUIRED_AUTH_ENV)
        if missing:
            raise missing_env_error(
                missing,
                hint="Crie um arquivo `.env` ou `.env.local` na raiz do projeto e reinicie o servidor.",
            )
        username_ok = hmac.compare_digest(username.encode(), self.config.ADMIN_USERNAME.encode())
        password_ok = hmac.compare_digest(password.encode(), self.config.ADMIN_PASSWORD.encode())
        if not (username_ok and password_ok):
            logger.warning("Rejected admin login", extra={"username": username})
            raise UnauthorizedError("Usuário ou senha inválidos.")
        logger.info("Admin logged in")
        return self.issue_token()

    def role_for_token(self, token: Optional[str]) -> str:
        """Decode a session token; anything but a valid admin token is anonymous."""

        if not token or not self.config.JWT_SECRET:
            return ANON_ROLE
        try:
            payload = jwt.decode(token, self.config.JWT_SECRET, algorithms=[TOKEN_ALGORITHM])
        except jwt.PyJWTError:
            return ANON_ROLE
        if isinstance(payload, dict) and payload.get("role") == ADMIN_ROLE:
            return ADMIN_ROLE
        return ANON_ROLE
