"""
Handover Note Repository - persistence for the note half of the aggregate.
"""

from __future__ import annotations
from typing import Any, Optional
from sqlalchemy.orm import Session, joinedload

from repositories.base_repository import BaseRepository
from core.models import HandoverNote
from shared.types import Page
import logging

logger = logging.getLogger(__name__)


class HandoverNoteRepository(BaseRepository[HandoverNote]):
    """Repository for handover notes."""

    def __init__(self, session: Session):
        super().__init__(HandoverNote, session)

    def find_by_id_with_author(self, note_id: Any) -> Optional[HandoverNote]:
        """Get note with its author loaded in the same query."""
        if note_id is None:
            return None

        def query_func(session: Session) -> Optional[HandoverNote]:
            return (
                session.query(HandoverNote)
                .options(joinedload(HandoverNote.author))
                .filter(HandoverNote.id == note_id)
                .first()
            )

        return self.execute_query(query_func)

    def find_by_author_id(self, author_id: int, page: int, size: int) -> Page[HandoverNote]:
        """Page of notes written by `author_id`, newest first."""
        query = (
            self.session.query(HandoverNote)
            .options(joinedload(HandoverNote.author))
            .filter(HandoverNote.author_id == author_id)
            .order_by(HandoverNote.created_at.desc(), HandoverNote.id.desc())
        )
        return self.paginate(query, page, size)
