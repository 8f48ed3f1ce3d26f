# src/app/domain/models.py
"""
Domain models for the sauce catalog.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Optional


class Reaction(IntEnum):
    """A user's stance on a sauce, as sent in the `like` field."""
    LIKE = 1
    NEUTRAL = 0
    DISLIKE = -1


@dataclass(frozen=True)
class SauceRecord:
    """
    One catalog entry.

    `likes` and `dislikes` are a cached projection of the reaction sets;
    the sets are authoritative.
    """
    id: str
    user_id: str
    name: str
    manufacturer: str
    description: str
    main_pepper: str
    image_url: str
    heat: int

    users_liked: tuple[str, ...] = ()
    users_disliked: tuple[str, ...] = ()
    likes: int = 0
    dislikes: int = 0

    created_at: Optional[datetime] = None

    def has_liked(self, user_id: str) -> bool:
        return user_id in self.users_liked

    def has_disliked(self, user_id: str) -> bool:
        return user_id in self.users_disliked

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    @property
    def counts_consistent(self) -> bool:
        """Check that cached counters match the reaction sets."""
        return self.likes == len(self.users_liked) and self.dislikes == len(self.users_disliked)


@dataclass
class UserAccount:
    """A registered user. Only the password hash is ever stored."""
    id: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None


@dataclass
class SauceContent:
    """Owner-editable descriptive fields of a sauce."""
    name: str
    manufacturer: str
    description: str
    main_pepper: str
    heat: int

    def as_row(self) -> dict[str, str | int]:
        return {
            "name": self.name,
            "manufacturer": self.manufacturer,
            "description": self.description,
            "main_pepper": self.main_pepper,
            "heat": self.heat,
        }


@dataclass
class ImageUpload:
    """An image received with a create/update request."""
    filename: str
    content_type: Optional[str]
    data: bytes
