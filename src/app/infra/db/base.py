# src/app/infra/db/base.py
"""
Abstract base classes for sauce and user persistence.
This interface allows easy swapping between different document stores.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from src.app.domain.models import SauceRecord, UserAccount


class SauceRepository(ABC):
    """
    Abstract interface for sauce documents.

    Implementations:
    - SupabaseSauceRepository: `sauces` table in Supabase
    """

    @abstractmethod
    def list_sauces(self) -> list[SauceRecord]:
        """
        Return every sauce, newest first.
        """
        pass

    @abstractmethod
    def get_sauce(self, sauce_id: str) -> Optional[SauceRecord]:
        """
        Get a sauce by its ID.

        Args:
            sauce_id: The sauce ID

        Returns:
            The sauce, or None if not found
        """
        pass

    @abstractmethod
    def create_sauce(self, record: SauceRecord) -> SauceRecord:
        """
        Insert a new sauce.

        Args:
            record: The sauce to store, with its ID already assigned

        Returns:
            The stored sauce
        """
        pass

    @abstractmethod
    def update_sauce_content(
        self,
        sauce_id: str,
        changes: dict[str, Any],
    ) -> Optional[SauceRecord]:
        """
        Update owner-editable fields of a sauce.

        Args:
            sauce_id: The sauce to update
            changes: Column values to write (descriptive fields, image_url)

        Returns:
            The updated sauce, or None if it no longer exists
        """
        pass

    @abstractmethod
    def save_reactions(self, record: SauceRecord) -> SauceRecord:
        """
        Persist the reaction sets and counters of `record`.

        Only the reaction columns are written. Last write wins.

        Args:
            record: The sauce holding the new reaction state

        Returns:
            The stored sauce
        """
        pass

    @abstractmethod
    def delete_sauce(self, sauce_id: str) -> bool:
        """
        Delete a sauce.

        Returns:
            True if a row was removed
        """
        pass


class UserRepository(ABC):
    """
    Abstract interface for user accounts.
    """

    @abstractmethod
    def create_user(self, email: str, password_hash: str) -> UserAccount:
        """
        Register a user.

        Raises:
            EmailAlreadyRegisteredError: if the email is taken
        """
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserAccount]:
        pass
