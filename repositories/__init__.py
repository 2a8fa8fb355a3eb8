"""
Repository layer for data access abstraction.

This module provides a clean separation between business logic and database operations,
following the Repository pattern for better testability and maintainability.
"""

from repositories.base_repository import BaseRepository
from repositories.handover_note_repository import HandoverNoteRepository
from repositories.handover_recipient_repository import HandoverRecipientRepository
from repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "HandoverNoteRepository",
    "HandoverRecipientRepository",
    "UserRepository",
]
