# src/app/services/sauce_service.py
"""
Sauce catalog service.
Owns the sauce lifecycle: create, edit, delete and reactions.
"""
from __future__ import annotations

import logging
from typing import Optional
from uuid import uuid4

from src.app.domain.errors import (
    ReactionError,
    RepositoryError,
    SauceNotFoundError,
    SaucePermissionError,
    StorageError,
)
from src.app.domain.models import ImageUpload, Reaction, SauceContent, SauceRecord
from src.app.domain.reactions import apply_reaction, parse_reaction
from src.app.infra.db.base import SauceRepository
from src.app.infra.storage.base import ImageStorage

logger = logging.getLogger(__name__)


class SauceService:
    """
    Service for sauce records.

    Responsibilities:
    - Store sauces together with their image
    - Restrict edits and deletion to the owner
    - Apply like/dislike reactions and persist the result
    """

    def __init__(self, repository: SauceRepository, storage: ImageStorage):
        self._repo = repository
        self._storage = storage

    def list_sauces(self) -> list[SauceRecord]:
        return self._repo.list_sauces()

    def get_sauce(self, sauce_id: str) -> SauceRecord:
        """
        Raises:
            SauceNotFoundError: if no sauce has this id
        """
        sauce = self._repo.get_sauce(sauce_id)
        if sauce is None:
            raise SauceNotFoundError(sauce_id)
        return sauce

    def _get_owned_sauce(self, sauce_id: str, user_id: str) -> SauceRecord:
        sauce = self.get_sauce(sauce_id)
        if not sauce.is_owned_by(user_id):
            logger.warning("Forbidden change on sauce %s by user %s", sauce_id, user_id)
            raise SaucePermissionError(sauce_id, user_id)
        return sauce

    def _store_image(self, image: ImageUpload) -> str:
        object_key = self._storage.generate_object_key(image.filename, image.content_type)
        return self._storage.save(object_key, image.data)

    def _release_image(self, image_url: str) -> None:
        object_key = self._storage.object_key_from_url(image_url)
        if object_key:
            self._storage.delete_object(object_key)

    def create_sauce(
        self,
        owner_id: str,
        content: SauceContent,
        image: ImageUpload,
        base_url: str,
    ) -> SauceRecord:
        """
        Create a sauce owned by `owner_id` with empty reactions.

        The image is removed again if the record cannot be stored.
        """
        object_key = self._store_image(image)
        record = SauceRecord(
            id=str(uuid4()),
            user_id=owner_id,
            name=content.name,
            manufacturer=content.manufacturer,
            description=content.description,
            main_pepper=content.main_pepper,
            heat=content.heat,
            image_url=self._storage.public_url(base_url, object_key),
        )

        try:
            return self._repo.create_sauce(record)
        except RepositoryError:
            self._storage.delete_object(object_key)
            raise

    def update_sauce(
        self,
        sauce_id: str,
        user_id: str,
        content: SauceContent,
        base_url: str,
        image: Optional[ImageUpload] = None,
    ) -> SauceRecord:
        """
        Replace the descriptive fields of a sauce, and its image if one is given.

        Owner, reaction sets and counters are never touched here. The old
        image is deleted only after the new one is recorded. Failing to delete
        it does not fail the update.

        Raises:
            SauceNotFoundError: unknown sauce
            SaucePermissionError: caller is not the owner
        """
        sauce = self._get_owned_sauce(sauce_id, user_id)
        changes: dict[str, str | int] = content.as_row()

        new_key = None
        if image is not None:
            new_key = self._store_image(image)
            changes["image_url"] = self._storage.public_url(base_url, new_key)

        try:
            updated = self._repo.update_sauce_content(sauce_id, changes)
        except RepositoryError:
            if new_key:
                self._storage.delete_object(new_key)
            raise

        if updated is None:
            if new_key:
                self._storage.delete_object(new_key)
            raise SauceNotFoundError(sauce_id)

        if new_key:
            # the row already points at the new image; a leftover old file is only logged
            try:
                self._release_image(sauce.image_url)
            except StorageError as exc:
                logger.error("Failed to remove replaced image of sauce %s: %s", sauce_id, exc)
        return updated

    def delete_sauce(self, sauce_id: str, user_id: str) -> None:
        """
        Delete a sauce and its image.

        Raises:
            SauceNotFoundError: unknown sauce
            SaucePermissionError: caller is not the owner
            ImageDeleteError: the image could not be removed; the sauce is kept
        """
        sauce = self._get_owned_sauce(sauce_id, user_id)
        self._release_image(sauce.image_url)
        if not self._repo.delete_sauce(sauce_id):
            raise SauceNotFoundError(sauce_id)

    def react(self, sauce_id: str, user_id: str, value: object) -> tuple[SauceRecord, Reaction]:
        """
        Apply a like (1), reset (0) or dislike (-1) from `user_id`.

        One read, one pure computation, one write. A rejected reaction
        writes nothing; a failed write is propagated as is.

        Raises:
            InvalidReactionValue, NothingToRemove, AlreadyReacted,
            ConflictingReaction: see apply_reaction
            SauceNotFoundError: unknown sauce
            RepositoryError: the new state could not be stored
        """
        desired = parse_reaction(value)
        sauce = self.get_sauce(sauce_id)
        if not sauce.counts_consistent:
            logger.warning(
                "Stale counters on sauce %s: likes=%d, dislikes=%d, recomputing",
                sauce_id,
                sauce.likes,
                sauce.dislikes,
            )

        try:
            updated = apply_reaction(sauce, user_id, desired)
        except ReactionError as exc:
            logger.warning(
                "Reaction rejected: sauce=%s, user=%s, like=%d, reason=%s",
                sauce_id,
                user_id,
                desired,
                exc,
            )
            raise

        saved = self._repo.save_reactions(updated)
        logger.info(
            "Reaction stored: sauce=%s, user=%s, like=%d, likes=%d, dislikes=%d",
            sauce_id,
            user_id,
            desired,
            saved.likes,
            saved.dislikes,
        )
        return saved, desired
