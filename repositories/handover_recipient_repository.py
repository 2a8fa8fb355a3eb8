"""
Handover Recipient Repository - persistence for note/recipient links.

Besides plain CRUD this repository owns the projection queries used to
render recipient names without hydrating link entities one by one.
"""

from __future__ import annotations
from typing import Collection, List
from sqlalchemy.orm import Session, joinedload

from repositories.base_repository import BaseRepository
from core.models import HandoverNote, HandoverRecipient, User
from shared.types import Page, RecipientNameRow
import logging

logger = logging.getLogger(__name__)


class HandoverRecipientRepository(BaseRepository[HandoverRecipient]):
    """Repository for handover recipient links."""

    def __init__(self, session: Session):
        super().__init__(HandoverRecipient, session)

    def find_by_recipient_id(
        self, recipient_id: int, page: int, size: int
    ) -> Page[HandoverRecipient]:
        """Page of links addressed to `recipient_id`, newest first."""
        query = (
            self.session.query(HandoverRecipient)
            .options(
                joinedload(HandoverRecipient.handover_note)
                .joinedload(HandoverNote.author)
            )
            .filter(HandoverRecipient.recipient_id == recipient_id)
            .order_by(HandoverRecipient.created_at.desc(), HandoverRecipient.id.desc())
        )
        return self.paginate(query, page, size)

    def find_all_by_handover_note_id(self, note_id: int) -> List[HandoverRecipient]:
        def query_func(session: Session) -> List[HandoverRecipient]:
            return (
                session.query(HandoverRecipient)
                .filter(HandoverRecipient.handover_note_id == note_id)
                .order_by(HandoverRecipient.id.asc())
                .all()
            )

        return self.execute_query(query_func)

    def find_recipient_names_by_handover_note_id(self, note_id: int) -> List[str]:
        """Recipient display names of one note, in the order they were added."""
        def query_func(session: Session) -> List[str]:
            rows = (
                session.query(User.username)
                .join(HandoverRecipient, HandoverRecipient.recipient_id == User.id)
                .filter(HandoverRecipient.handover_note_id == note_id)
                .order_by(HandoverRecipient.id.asc())
                .all()
            )
            return [r[0] for r in rows]

        return self.execute_query(query_func)

    def find_recipient_usernames_by_note_ids(
        self, note_ids: Collection[int]
    ) -> List[RecipientNameRow]:
        """
        Resolve recipient names for many notes with one query.

        Each row carries the id of the note it belongs to so callers can
        group rows without guessing.
        """
        ids = list(note_ids)
        if not ids:
            return []

        def query_func(session: Session) -> List[RecipientNameRow]:
            rows = (
                session.query(HandoverRecipient.handover_note_id, User.username)
                .join(User, HandoverRecipient.recipient_id == User.id)
                .filter(HandoverRecipient.handover_note_id.in_(ids))
                .order_by(HandoverRecipient.handover_note_id.asc(), HandoverRecipient.id.asc())
                .all()
            )
            return [RecipientNameRow(handover_note_id=r[0], username=r[1]) for r in rows]

        return self.execute_query(query_func)

    def delete_by_note_id_and_recipient_ids(
        self, note_id: int, recipient_ids: Collection[int]
    ) -> int:
        """Remove the links of `note_id` to the given users. Returns rows removed."""
        ids = list(recipient_ids)
        if not ids:
            return 0

        def query_func(session: Session) -> int:
            return (
                session.query(HandoverRecipient)
                .filter(
                    HandoverRecipient.handover_note_id == note_id,
                    HandoverRecipient.recipient_id.in_(ids),
                )
                .delete(synchronize_session="fetch")
            )

        return self.execute_query(query_func)

    def delete_by_handover_note_id(self, note_id: int) -> int:
        def query_func(session: Session) -> int:
            return (
                session.query(HandoverRecipient)
                .filter(HandoverRecipient.handover_note_id == note_id)
                .delete(synchronize_session="fetch")
            )

        return self.execute_query(query_func)
