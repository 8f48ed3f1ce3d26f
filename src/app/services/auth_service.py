# src/app/services/auth_service.py
"""
Account service.
Handles signup and login for the catalog.
"""
from __future__ import annotations

import logging

from passlib.context import CryptContext

from src.app.domain.errors import InvalidCredentialsError
from src.app.domain.models import UserAccount
from src.app.infra.db.base import UserRepository
from src.app.services import security

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service for user accounts.

    Responsibilities:
    - Register users with a hashed password
    - Check credentials and issue bearer tokens
    """

    def __init__(
        self,
        repository: UserRepository,
        token_secret: str,
        token_ttl_hours: int = 24,
        password_context: CryptContext | None = None,
    ):
        self._repo = repository
        self._token_secret = token_secret
        self._token_ttl_hours = token_ttl_hours
        self._passwords = password_context or security.make_password_context()

    def signup(self, email: str, password: str) -> UserAccount:
        """
        Create an account.

        Raises:
            EmailAlreadyRegisteredError: if the email is taken
        """
        password_hash = security.hash_password(self._passwords, password)
        user = self._repo.create_user(email=email, password_hash=password_hash)
        logger.info("User signed up: id=%s", user.id)
        return user

    def login(self, email: str, password: str) -> tuple[str, str]:
        """
        Check credentials and return (user_id, token).

        Unknown email and wrong password raise the same error.

        Raises:
            InvalidCredentialsError: if the credentials do not match
        """
        user = self._repo.get_user_by_email(email)
        if user is None:
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not security.verify_password(self._passwords, password, user.password_hash):
            logger.info("Login failed: bad password for user=%s", user.id)
            raise InvalidCredentialsError()

        token = security.create_access_token(
            user.id,
            self._token_secret,
            ttl_hours=self._token_ttl_hours,
        )
        return user.id, token
