"""
Handover Modify Service - write side of the handover aggregate.

Every operation runs inside one unit of work that spans the note store and
the recipient link store, so a note is never visible without its links and
links never outlive their note.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional
import logging

from core.db import SessionFactory, transaction
from core.models import HandoverNote, HandoverRecipient, User
from domain.models.handover import plan_recipient_changes, unique_in_order
from repositories import (
    HandoverNoteRepository,
    HandoverRecipientRepository,
    UserRepository,
)
from shared.exceptions import DataValidationError, EntityNotFoundError

logger = logging.getLogger(__name__)


class HandoverModifyService:
    """Create, update and delete handover notes together with their recipients."""

    def __init__(self, session_factory: Optional[SessionFactory] = None):
        self._session_factory = session_factory

    def create_handover(
        self,
        author_id: int,
        recipient_ids: Optional[Iterable[int]],
        title: Optional[str],
        content: Optional[str],
    ) -> int:
        """
        Publish a new note addressed to `recipient_ids`.

        Args:
            author_id: Directory id of the writer
            recipient_ids: Directory ids of the recipients; repeats are ignored
            title: Note title (may be empty)
            content: Note body (may be empty)

        Returns:
            Id of the persisted note

        Raises:
            EntityNotFoundError: If the author or any recipient is unknown
        """
        wanted = unique_in_order(recipient_ids or [])

        with transaction(self._session_factory, "create_handover") as session:
            users = UserRepository(session).get_by_ids([author_id, *wanted])
            author = users.get(author_id)
            if author is None:
                raise EntityNotFoundError("User", author_id)
            self._require_all(users, wanted)

            note = HandoverNoteRepository(session).save(
                HandoverNote.create(author, title, content)
            )
            links = HandoverRecipientRepository(session).save_all(
                HandoverRecipient.create(note, users[rid]) for rid in wanted
            )
            logger.info(
                f"Created handover note {note.id} by user {author_id} "
                f"with {len(links)} recipient(s)"
            )
            return note.id

    def update_handover(
        self,
        note_id: int,
        author_id: int,
        recipient_ids: Optional[Iterable[int]],
        title: Optional[str],
        content: Optional[str],
    ) -> None:
        """
        Replace title and content and reconcile the recipient set.

        Links for recipients kept by the request are left as they are; only
        the difference between the stored and requested sets is written.
        """
        if author_id is None:
            raise DataValidationError("author id is required", code="author_required")

        with transaction(self._session_factory, "update_handover") as session:
            notes = HandoverNoteRepository(session)
            links = HandoverRecipientRepository(session)

            note = notes.find_by_id(note_id)
            if note is None:
                raise EntityNotFoundError("HandoverNote", note_id)

            note.update(title, content)

            existing = [link.recipient_id for link in links.find_all_by_handover_note_id(note.id)]
            changes = plan_recipient_changes(existing, recipient_ids or [])

            users = UserRepository(session).get_by_ids([author_id, *changes.to_add])
            if author_id not in users:
                raise EntityNotFoundError("User", author_id)
            self._require_all(users, changes.to_add)

            removed = links.delete_by_note_id_and_recipient_ids(note.id, changes.to_remove)

            added: List[HandoverRecipient] = []
            if changes.to_add:
                added = links.save_all(
                    HandoverRecipient.create(note, users[rid]) for rid in changes.to_add
                )

            session.flush()
            logger.info(
                f"Updated handover note {note.id}: +{len(added)} -{removed} "
                f"recipient(s), {len(changes.unchanged)} kept"
            )

    def delete_handover(self, note_id: int) -> bool:
        """
        Delete a note and all of its recipient links.

        Returns:
            False when the note did not exist, True otherwise
        """
        with transaction(self._session_factory, "delete_handover") as session:
            notes = HandoverNoteRepository(session)
            if not notes.exists_by_id(note_id):
                logger.debug(f"Handover note {note_id} already absent; nothing to delete")
                return False

            removed = HandoverRecipientRepository(session).delete_by_handover_note_id(note_id)
            notes.delete_by_id(note_id)
            logger.info(f"Deleted handover note {note_id} and {removed} recipient link(s)")
            return True

    @staticmethod
    def _require_all(users: Dict[int, User], ids: List[int]) -> None:
        missing = [i for i in ids if i not in users]
        if missing:
            raise EntityNotFoundError("User", missing[0], details={"missing_ids": missing})
