from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from postgrest.exceptions import APIError
from supabase import Client

from src.app.domain.errors import EmailAlreadyRegisteredError, RepositoryError
from src.app.domain.models import SauceRecord, UserAccount
from src.app.infra.db.base import SauceRepository, UserRepository

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"

_SAUCE_CONTENT_COLUMNS = frozenset(
    {"name", "manufacturer", "description", "main_pepper", "heat", "image_url"}
)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: str | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    try:
        normalized = value.replace("Z", "+00:00") if value.endswith("Z") else value
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def _safe_int(value: object, default: int = 0) -> int:
    return int(value) if value else default


def _id_list(value: object) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(str(item) for item in value)


def _row_to_sauce(row: dict[str, Any]) -> SauceRecord:
    return SauceRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        name=str(row.get("name") or ""),
        manufacturer=str(row.get("manufacturer") or ""),
        description=str(row.get("description") or ""),
        main_pepper=str(row.get("main_pepper") or ""),
        image_url=str(row.get("image_url") or ""),
        heat=_safe_int(row.get("heat")),
        users_liked=_id_list(row.get("users_liked")),
        users_disliked=_id_list(row.get("users_disliked")),
        likes=_safe_int(row.get("likes")),
        dislikes=_safe_int(row.get("dislikes")),
        created_at=_parse_datetime(row.get("created_at")),
    )


def _sauce_to_row(record: SauceRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "user_id": record.user_id,
        "name": record.name,
        "manufacturer": record.manufacturer,
        "description": record.description,
        "main_pepper": record.main_pepper,
        "image_url": record.image_url,
        "heat": record.heat,
        "users_liked": list(record.users_liked),
        "users_disliked": list(record.users_disliked),
        "likes": record.likes,
        "dislikes": record.dislikes,
        "created_at": (record.created_at or _now_utc()).isoformat(),
    }


def _row_to_user(row: dict[str, Any]) -> UserAccount:
    return UserAccount(
        id=str(row["id"]),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        created_at=_parse_datetime(row.get("created_at")),
    )


class SupabaseSauceRepository(SauceRepository):
    TABLE_NAME = "sauces"

    def __init__(self, client: Client):
        self._client = client
        logger.info("SupabaseSauceRepository initialized")

    def list_sauces(self) -> list[SauceRecord]:
        try:
            result = (
                self._client.table(self.TABLE_NAME)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except (APIError, ConnectionError, TimeoutError) as error:
            logger.error("Error listing sauces: %s", error)
            raise RepositoryError("list", str(error)) from error

        return [_row_to_sauce(row) for row in result.data or []]

    def get_sauce(self, sauce_id: str) -> SauceRecord | None:
        try:
            result = (
                self._client.table(self.TABLE_NAME)
                .select("*")
                .eq("id", sauce_id)
                .limit(1)
                .execute()
            )
        except (APIError, ConnectionError, TimeoutError) as error:
            logger.error("Error fetching sauce %s: %s", sauce_id, error)
            raise RepositoryError("get", str(error)) from error

        rows = result.data or []
        return _row_to_sauce(rows[0]) if rows else None

    def create_sauce(self, record: SauceRecord) -> SauceRecord:
        try:
            result = self._client.table(self.TABLE_NAME).insert(_sauce_to_row(record)).execute()
        except (APIError, ConnectionError, TimeoutError) as error:
            logger.error("Error creating sauce: %s", error)
            raise RepositoryError("create", str(error)) from error

        if not result.data:
            raise RepositoryError("create", "no row returned")

        sauce = _row_to_sauce(result.data[0])
        logger.info("Created sauce: id=%s, owner=%s", sauce.id, sauce.user_id)
        return sauce

    def update_sauce_content(
        self,
        sauce_id: str,
        changes: dict[str, Any],
    ) -> SauceRecord | None:
        update_data = {key: value for key, value in changes.items() if key in _SAUCE_CONTENT_COLUMNS}
        if not update_data:
            return self.get_sauce(sauce_id)

        try:
            result = (
                self._client.table(self.TABLE_NAME)
                .update(update_data)
                .eq("id", sauce_id)
                .execute()
            )
        except (APIError, ConnectionError, TimeoutError) as error:
            logger.error("Error updating sauce %s: %s", sauce_id, error)
            raise RepositoryError("update", str(error)) from error

        if not result.data:
            return None
        logger.info("Sauce updated: id=%s, fields=%s", sauce_id, sorted(update_data))
        return _row_to_sauce(result.data[0])

    def save_reactions(self, record: SauceRecord) -> SauceRecord:
        update_data = {
            "users_liked": list(record.users_liked),
            "users_disliked": list(record.users_disliked),
            "likes": record.likes,
            "dislikes": record.dislikes,
        }

        try:
            result = (
                self._client.table(self.TABLE_NAME)
                .update(update_data)
                .eq("id", record.id)
                .execute()
            )
        except (APIError, ConnectionError, TimeoutError) as error:
            logger.error("Error saving reactions for sauce %s: %s", record.id, error)
            raise RepositoryError("save_reactions", str(error)) from error

        if not result.data:
            raise RepositoryError("save_reactions", f"sauce {record.id} no longer exists")
        return _row_to_sauce(result.data[0])

    def delete_sauce(self, sauce_id: str) -> bool:
        try:
            result = self._client.table(self.TABLE_NAME).delete().eq("id", sauce_id).execute()
        except (APIError, ConnectionError, TimeoutError) as error:
            logger.error("Error deleting sauce %s: %s", sauce_id, error)
            raise RepositoryError("delete", str(error)) from error

        deleted = bool(result.data)
        if deleted:
            logger.info("Sauce deleted: id=%s", sauce_id)
        return deleted


class SupabaseUserRepository(UserRepository):
    TABLE_NAME = "users"

    def __init__(self, client: Client):
        self._client = client

    def create_user(self, email: str, password_hash: str) -> UserAccount:
        data = {
            "id": str(uuid4()),
            "email": email.lower(),
            "password_hash": password_hash,
            "created_at": _now_utc().isoformat(),
        }

        try:
            result = self._client.table(self.TABLE_NAME).insert(data).execute()
        except APIError as error:
            if error.code == UNIQUE_VIOLATION:
                raise EmailAlreadyRegisteredError(email) from error
            logger.error("Error creating user: %s", error)
            raise RepositoryError("create_user", str(error)) from error
        except (ConnectionError, TimeoutError) as error:
            logger.error("Network error creating user: %s", error)
            raise RepositoryError("create_user", str(error)) from error

        if not result.data:
            raise RepositoryError("create_user", "no row returned")

        user = _row_to_user(result.data[0])
        logger.info("Created user: id=%s", user.id)
        return user

    def get_user_by_email(self, email: str) -> UserAccount | None:
        try:
            result = (
                self._client.table(self.TABLE_NAME)
                .select("id, email, password_hash, created_at")
                .eq("email", email.lower())
                .limit(1)
                .execute()
            )
        except (APIError, ConnectionError, TimeoutError) as error:
            logger.error("Error fetching user: %s", error)
            raise RepositoryError("get_user", str(error)) from error

        rows = result.data or []
        return _row_to_user(rows[0]) if rows else None
