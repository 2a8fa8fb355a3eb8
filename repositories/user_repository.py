"""
User Repository - read access to the user directory.
"""

from __future__ import annotations
from typing import Collection, Dict, Optional
from sqlalchemy.orm import Session

from repositories.base_repository import BaseRepository
from core.models import User
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User lookups."""

    def __init__(self, session: Session):
        super().__init__(User, session)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.find_by_id(user_id)

    def get_by_ids(self, user_ids: Collection[int]) -> Dict[int, User]:
        """Look up several users at once; missing ids are simply absent."""
        ids = {i for i in user_ids if i is not None}
        if not ids:
            return {}

        def query_func(session: Session) -> Dict[int, User]:
            users = session.query(User).filter(User.id.in_(ids)).all()
            return {u.id: u for u in users}

        return self.execute_query(query_func)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address."""
        def query_func(session: Session) -> Optional[User]:
            return (
                session.query(User)
                .filter(User.email == email.lower().strip())
                .first()
            )

        return self.execute_query(query_func)
