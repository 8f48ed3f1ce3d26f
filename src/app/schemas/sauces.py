# src/app/schemas/sauces.py
from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from src.app.domain.models import SauceContent, SauceRecord

# letters (accents included), apostrophe, space, hyphen
_TEXT_FIELD = re.compile(r"^(?:[^\W\d_]|['\- ]){2,}$")
_DESCRIPTION = re.compile(r"^(?:[^\W_]|[:@#!?'.,()\- ]){2,}$")
_IMAGE_EXTENSION = re.compile(r"\.(jpe?g|png)$", re.IGNORECASE)


def is_valid_image_filename(filename: str | None) -> bool:
    return bool(filename) and _IMAGE_EXTENSION.search(filename) is not None


class SaucePayload(BaseModel):
    """Descriptive fields sent on create/update. Ownership and reactions are ignored."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., max_length=120)
    manufacturer: str = Field(..., max_length=120)
    description: str = Field(..., max_length=1000)
    mainPepper: str = Field(..., max_length=120)
    heat: StrictInt = Field(..., ge=1, le=10)

    @field_validator("name", "manufacturer", "mainPepper")
    @classmethod
    def _check_text(cls, value: str) -> str:
        value = value.strip()
        if not _TEXT_FIELD.match(value):
            raise ValueError("must be at least 2 letters (apostrophes, spaces and hyphens allowed)")
        return value

    @field_validator("description")
    @classmethod
    def _check_description(cls, value: str) -> str:
        value = value.strip()
        if not _DESCRIPTION.match(value):
            raise ValueError("contains unsupported characters")
        return value

    @field_validator("heat", mode="before")
    @classmethod
    def _reject_bool_heat(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("heat must be a number between 1 and 10")
        return value

    def to_content(self) -> SauceContent:
        return SauceContent(
            name=self.name,
            manufacturer=self.manufacturer,
            description=self.description,
            main_pepper=self.mainPepper,
            heat=self.heat,
        )


class SauceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    userId: str
    name: str
    manufacturer: str
    description: str
    mainPepper: str
    imageUrl: str
    heat: int
    likes: int = 0
    dislikes: int = 0
    usersLiked: list[str] = Field(default_factory=list)
    usersDisliked: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: SauceRecord) -> "SauceResponse":
        return cls(
            id=record.id,
            userId=record.user_id,
            name=record.name,
            manufacturer=record.manufacturer,
            description=record.description,
            mainPepper=record.main_pepper,
            imageUrl=record.image_url,
            heat=record.heat,
            likes=record.likes,
            dislikes=record.dislikes,
            usersLiked=list(record.users_liked),
            usersDisliked=list(record.users_disliked),
        )


class ReactionRequest(BaseModel):
    # checked by parse_reaction so that unknown values map to 400, not 422
    like: Any = None
    userId: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
