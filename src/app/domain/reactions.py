# src/app/domain/reactions.py
"""
Like/dislike state machine for sauce records.

A user is in at most one of `users_liked` / `users_disliked`. Switching from
one reaction to the other takes two calls: NEUTRAL first, then the new
reaction. Counters are always recomputed from the sets.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from src.app.domain.errors import (
    AlreadyReacted,
    ConflictingReaction,
    InvalidReactionValue,
    NothingToRemove,
)
from src.app.domain.models import Reaction, SauceRecord

logger = logging.getLogger(__name__)


def parse_reaction(value: object) -> Reaction:
    """
    Convert the wire value of the `like` field into a Reaction.

    Only the integers 1, 0 and -1 are accepted. Booleans are rejected even
    though they are ints in Python.

    Raises:
        InvalidReactionValue: for any other value
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidReactionValue(value)
    try:
        return Reaction(value)
    except ValueError as exc:
        raise InvalidReactionValue(value) from exc


def _unique(user_ids: Iterable[str]) -> tuple[str, ...]:
    # dict keeps first-seen order
    return tuple(dict.fromkeys(user_ids))


def with_counts(
    record: SauceRecord,
    users_liked: Iterable[str],
    users_disliked: Iterable[str],
) -> SauceRecord:
    """Return a copy of `record` with the given sets and counters derived from them."""
    liked = _unique(users_liked)
    disliked = _unique(users_disliked)
    return replace(
        record,
        users_liked=liked,
        users_disliked=disliked,
        likes=len(liked),
        dislikes=len(disliked),
    )


def apply_reaction(record: SauceRecord, user_id: str, desired: Reaction) -> SauceRecord:
    """
    Compute the next reaction state of `record` for `user_id`.

    The input record is never modified. On success the returned record has
    disjoint reaction sets and counters equal to their sizes.

    Raises:
        NothingToRemove: NEUTRAL requested but the user has no reaction
        AlreadyReacted: the user already holds the requested reaction
        ConflictingReaction: the user holds the opposite reaction
    """
    liked = _unique(record.users_liked)
    disliked = _unique(record.users_disliked)
    in_liked = record.has_liked(user_id)
    in_disliked = record.has_disliked(user_id)

    if desired == Reaction.NEUTRAL:
        if not (in_liked or in_disliked):
            raise NothingToRemove(user_id)
        if in_liked and in_disliked:
            logger.warning("Sauce %s had user %s in both reaction sets", record.id, user_id)
        liked = tuple(uid for uid in liked if uid != user_id)
        disliked = tuple(uid for uid in disliked if uid != user_id)
        return with_counts(record, liked, disliked)

    if desired == Reaction.LIKE:
        if in_liked and not in_disliked:
            raise AlreadyReacted(user_id, liked=True)
        if in_disliked:
            raise ConflictingReaction(user_id, liked=False)
        return with_counts(record, (*liked, user_id), disliked)

    if desired == Reaction.DISLIKE:
        if in_disliked and not in_liked:
            raise AlreadyReacted(user_id, liked=False)
        if in_liked:
            raise ConflictingReaction(user_id, liked=True)
        return with_counts(record, liked, (*disliked, user_id))

    raise InvalidReactionValue(desired)
