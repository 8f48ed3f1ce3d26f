from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from src.app.domain.errors import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from src.app.domain.models import UserAccount
from src.app.infra.db.base import UserRepository
from src.app.services import security
from src.app.services.auth_service import AuthService

SECRET = "test-secret-with-at-least-32-bytes!!"
PASSWORD = "Sup3r-Secret!"


class UserRepositoryStub(UserRepository):
    def __init__(self) -> None:
        self.users: dict[str, UserAccount] = {}

    def create_user(self, email: str, password_hash: str) -> UserAccount:
        key = email.lower()
        if key in self.users:
            raise EmailAlreadyRegisteredError(email)
        user = UserAccount(id=str(uuid4()), email=key, password_hash=password_hash)
        self.users[key] = user
        return user

    def get_user_by_email(self, email: str) -> UserAccount | None:
        return self.users.get(email.lower())


@pytest.fixture(scope="module")
def password_context():
    # minimum bcrypt cost keeps the suite fast
    return security.make_password_context(rounds=4)


@pytest.fixture
def repo() -> UserRepositoryStub:
    return UserRepositoryStub()


@pytest.fixture
def service(repo: UserRepositoryStub, password_context) -> AuthService:
    return AuthService(repo, token_secret=SECRET, password_context=password_context)


class TestPasswords:
    def test_hash_is_not_plaintext(self, password_context) -> None:
        password_hash = security.hash_password(password_context, PASSWORD)

        assert password_hash != PASSWORD
        assert password_hash.startswith("$2")

    def test_verify(self, password_context) -> None:
        password_hash = security.hash_password(password_context, PASSWORD)

        assert security.verify_password(password_context, PASSWORD, password_hash) is True
        assert security.verify_password(password_context, "wrong", password_hash) is False

    def test_verify_malformed_hash(self, password_context) -> None:
        assert security.verify_password(password_context, PASSWORD, "not-a-hash") is False


class TestTokens:
    def test_round_trip(self) -> None:
        token = security.create_access_token("u1", SECRET)

        assert security.decode_access_token(token, SECRET) == "u1"

    def test_wrong_secret(self) -> None:
        token = security.create_access_token("u1", SECRET)

        with pytest.raises(InvalidTokenError):
            security.decode_access_token(token, "another-secret-with-at-least-32-bytes")

    def test_expired(self) -> None:
        issued = datetime.now(timezone.utc) - timedelta(hours=25)
        token = security.create_access_token("u1", SECRET, ttl_hours=24, now=issued)

        with pytest.raises(InvalidTokenError) as exc_info:
            security.decode_access_token(token, SECRET)
        assert "expired" in str(exc_info.value)

    def test_missing_user_claim(self) -> None:
        token = jwt.encode({"sub": "u1"}, SECRET, algorithm=security.TOKEN_ALGORITHM)

        with pytest.raises(InvalidTokenError):
            security.decode_access_token(token, SECRET)

    def test_garbage(self) -> None:
        with pytest.raises(InvalidTokenError):
            security.decode_access_token("not.a.token", SECRET)


class TestSignup:
    def test_stores_hash_only(self, service: AuthService, repo: UserRepositoryStub) -> None:
        user = service.signup("Chef@Example.com", PASSWORD)

        stored = repo.users["chef@example.com"]
        assert stored.id == user.id
        assert stored.password_hash != PASSWORD

    def test_duplicate_email(self, service: AuthService) -> None:
        service.signup("chef@example.com", PASSWORD)

        with pytest.raises(EmailAlreadyRegisteredError):
            service.signup("chef@example.com", PASSWORD)


class TestLogin:
    def test_returns_user_id_and_token(self, service: AuthService) -> None:
        user = service.signup("chef@example.com", PASSWORD)

        user_id, token = service.login("chef@example.com", PASSWORD)

        assert user_id == user.id
        assert security.decode_access_token(token, SECRET) == user.id

    def test_unknown_email(self, service: AuthService) -> None:
        with pytest.raises(InvalidCredentialsError):
            service.login("nobody@example.com", PASSWORD)

    def test_wrong_password(self, service: AuthService) -> None:
        service.signup("chef@example.com", PASSWORD)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            service.login("chef@example.com", "Wrong-Passw0rd!")
        assert str(exc_info.value) == "Invalid login or password"
