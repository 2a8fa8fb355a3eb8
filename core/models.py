"""Facade re-export for ORM models.

All real model definitions live under core/db_models/.
"""

# flake8: noqa

from core.db import Base

from core.db_models.user_directory import User
from core.db_models.handover import HandoverNote, HandoverRecipient

__all__ = [
    # Base
    "Base",
    # Directory
    "User",
    # Handover aggregate
    "HandoverNote",
    "HandoverRecipient",
]
