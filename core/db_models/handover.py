from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from sqlalchemy import (  # type: ignore
    Column,
    Integer,
    String,
    Text,
    UniqueConstraint,
    ForeignKey,
)
from sqlalchemy.orm import relationship  # type: ignore

from core.db import Base
from core.db_models.timestamps import TimestampMixin

if TYPE_CHECKING:
    from core.db_models.user_directory import User


class HandoverNote(TimestampMixin, Base):
    """
    A work-transition memo written by one author.

    The author is fixed at creation; only title and content change
    afterwards. Recipient links live in ``handover_recipient`` and are
    managed by the application service, not by an ORM cascade.
    """

    __tablename__ = "handover_note"

    id = Column(Integer, primary_key=True, autoincrement=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    title = Column(String(255), nullable=True)
    content = Column(Text, nullable=True)

    author = relationship("User", lazy="select")

    @classmethod
    def create(
        cls,
        author: Optional[User],
        title: Optional[str],
        content: Optional[str],
    ) -> HandoverNote:
        note = cls(title=title, content=content)
        if author is not None:
            note.author = author
            note.author_id = author.id
        return note

    def update(self, title: Optional[str], content: Optional[str]) -> None:
        self.title = title
        self.content = content

    def __repr__(self) -> str:
        return f"<HandoverNote id={self.id} author_id={self.author_id}>"


class HandoverRecipient(TimestampMixin, Base):
    """Record that a handover note was addressed to a user."""

    __tablename__ = "handover_recipient"
    __table_args__ = (
        UniqueConstraint(
            "handover_note_id", "recipient_id", name="uq_handover_recipient_note_user"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    handover_note_id = Column(
        Integer, ForeignKey("handover_note.id"), nullable=False, index=True
    )
    recipient_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    handover_note = relationship("HandoverNote", lazy="select")
    recipient = relationship("User", lazy="select")

    @classmethod
    def create(cls, handover_note: HandoverNote, recipient: User) -> HandoverRecipient:
        return cls(
            handover_note=handover_note,
            handover_note_id=handover_note.id,
            recipient=recipient,
            recipient_id=recipient.id,
        )

    def __repr__(self) -> str:
        return (
            f"<HandoverRecipient id={self.id} note={self.handover_note_id} "
            f"recipient={self.recipient_id}>"
        )
