# src/app/deps.py (singletons exposed as dependencies)

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from supabase import Client, create_client

from src.app.config import settings
from src.app.domain.errors import InvalidTokenError
from src.app.infra.db.base import SauceRepository, UserRepository
from src.app.infra.db.supabase_repo import SupabaseSauceRepository, SupabaseUserRepository
from src.app.infra.storage.base import ImageStorage
from src.app.infra.storage.local_provider import LocalImageStorage
from src.app.services import security
from src.app.services.auth_service import AuthService
from src.app.services.sauce_service import SauceService

_client: Client | None = None


def get_supabase() -> Client:
    global _client
    if _client is None:
        _client = create_client(str(settings.SUPABASE_URL),
                                settings.SUPABASE_SERVICE_ROLE_KEY)
    return _client


def get_sauce_repository(supa: Client = Depends(get_supabase)) -> SauceRepository:
    return SupabaseSauceRepository(supa)


def get_user_repository(supa: Client = Depends(get_supabase)) -> UserRepository:
    return SupabaseUserRepository(supa)


@lru_cache(maxsize=1)
def get_image_storage() -> ImageStorage:
    return LocalImageStorage(settings.IMAGES_DIR)


@lru_cache(maxsize=1)
def _password_context():
    return security.make_password_context(settings.BCRYPT_ROUNDS)


def get_auth_service(repo: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(
        repo,
        token_secret=settings.TOKEN_SECRET,
        token_ttl_hours=settings.TOKEN_TTL_HOURS,
        password_context=_password_context(),
    )


def get_sauce_service(
    repo: SauceRepository = Depends(get_sauce_repository),
    storage: ImageStorage = Depends(get_image_storage),
) -> SauceService:
    return SauceService(repo, storage)


auth_scheme = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    id: str


def get_token_secret() -> str:
    return settings.TOKEN_SECRET


async def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
    secret: str = Depends(get_token_secret),
) -> CurrentUser:
    """
    Read Authorization: Bearer <token>, check its signature and expiry
    and return the caller's user id.
    """
    if cred is None or cred.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    try:
        user_id = security.decode_access_token(cred.credentials, secret)
    except InvalidTokenError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))

    return CurrentUser(id=user_id)
