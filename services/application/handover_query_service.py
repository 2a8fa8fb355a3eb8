"""
Handover Query Service - read side of the handover aggregate.

Builds the author list, the recipient list and the detail view. Recipient
names for a whole page of notes are resolved with one batched query.
"""

from __future__ import annotations
from collections import defaultdict
from typing import Dict, List, Optional
import logging

from core.db import SessionFactory, read_session
from core.models import HandoverNote, HandoverRecipient
from domain.models.handover import (
    HandoverAuthorItem,
    HandoverAuthorList,
    HandoverDetail,
    HandoverRecipientItem,
    HandoverRecipientList,
)
from repositories import HandoverNoteRepository, HandoverRecipientRepository
from shared.exceptions import EntityNotFoundError, validate_page_request

logger = logging.getLogger(__name__)


def _author_name(note: HandoverNote) -> Optional[str]:
    return note.author.username if note.author is not None else None


class HandoverQueryService:
    """Paginated, denormalized views of handover notes."""

    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        max_page_size: Optional[int] = None,
    ):
        self._session_factory = session_factory
        self._max_page_size = max_page_size

    def get_author_list(self, author_id: int, page: int, size: int) -> HandoverAuthorList:
        """Notes written by `author_id`, newest first, with recipient names."""
        validate_page_request(page, size, self._max_page_size)

        with read_session(self._session_factory) as session:
            notes = HandoverNoteRepository(session).find_by_author_id(author_id, page, size)

            names: Dict[int, List[Optional[str]]] = defaultdict(list)
            rows = HandoverRecipientRepository(session).find_recipient_usernames_by_note_ids(
                [note.id for note in notes.items]
            )
            for row in rows:
                names[row.handover_note_id].append(row.username)

            logger.debug(
                f"Author list for user {author_id}: page {page}, "
                f"{len(notes.items)}/{notes.total_elements} note(s)"
            )
            return HandoverAuthorList(page=notes.map(
                lambda note: HandoverAuthorItem(
                    handover_note_id=note.id,
                    author_name=_author_name(note),
                    recipient_names=names.get(note.id, []),
                    title=note.title,
                    content=note.content,
                    occurred_at=note.created_at,
                )
            ))

    def get_recipient_list(
        self, recipient_id: int, page: int, size: int
    ) -> HandoverRecipientList:
        """Notes addressed to `recipient_id`, newest link first."""
        validate_page_request(page, size, self._max_page_size)

        with read_session(self._session_factory) as session:
            links = HandoverRecipientRepository(session).find_by_recipient_id(
                recipient_id, page, size
            )

            def to_item(link: HandoverRecipient) -> HandoverRecipientItem:
                note = link.handover_note
                return HandoverRecipientItem(
                    handover_id=note.id,
                    author_name=_author_name(note),
                    title=note.title,
                    content=note.content,
                    occurred_at=note.created_at,
                )

            logger.debug(
                f"Recipient list for user {recipient_id}: page {page}, "
                f"{len(links.items)}/{links.total_elements} note(s)"
            )
            return HandoverRecipientList(page=links.map(to_item))

    def get_handover(self, note_id: int) -> HandoverDetail:
        """
        Single note with author and recipient names.

        Raises:
            EntityNotFoundError: If no note has this id
        """
        with read_session(self._session_factory) as session:
            note = HandoverNoteRepository(session).find_by_id_with_author(note_id)
            if note is None:
                raise EntityNotFoundError("HandoverNote", note_id)

            recipient_names = HandoverRecipientRepository(
                session
            ).find_recipient_names_by_handover_note_id(note.id)

            return HandoverDetail(
                handover_id=note.id,
                author_name=_author_name(note),
                recipient_names=recipient_names,
                title=note.title,
                content=note.content,
                occurred_at=note.created_at,
            )
