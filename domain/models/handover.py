"""
Handover domain models.

Recipient reconciliation rules and the read-side view models returned
by the query service, independent of the ORM and the HTTP layer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from shared.types import Page, page_envelope


def unique_in_order(ids: Iterable[int]) -> List[int]:
    """Drop repeated ids, keeping the first occurrence."""
    seen = set()
    out: List[int] = []
    for i in ids:
        if i not in seen:
            seen.add(i)
            out.append(i)
    return out


@dataclass(frozen=True)
class RecipientChanges:
    """Minimal set of link insertions and deletions for one note."""

    to_add: List[int] = field(default_factory=list)
    to_remove: List[int] = field(default_factory=list)
    unchanged: List[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove


def plan_recipient_changes(
    existing: Iterable[int], desired: Iterable[int]
) -> RecipientChanges:
    """
    Diff the stored recipient ids against the requested ones.

    `to_add` follows the request order, `to_remove` and `unchanged` follow
    the stored order. Ids in both sets are never touched so their links
    keep their identity and creation time.
    """
    current = unique_in_order(existing)
    wanted = unique_in_order(desired)
    current_set = set(current)
    wanted_set = set(wanted)
    return RecipientChanges(
        to_add=[i for i in wanted if i not in current_set],
        to_remove=[i for i in current if i not in wanted_set],
        unchanged=[i for i in current if i in wanted_set],
    )


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class HandoverAuthorItem:
    """A note as seen by its author, with every recipient name attached."""

    handover_note_id: int
    author_name: Optional[str]
    recipient_names: List[Optional[str]]
    title: Optional[str]
    content: Optional[str]
    occurred_at: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "handoverNoteId": self.handover_note_id,
            "authorName": self.author_name,
            "recipientName": list(self.recipient_names),
            "title": self.title,
            "content": self.content,
            "occurredAt": _iso(self.occurred_at),
        }


@dataclass
class HandoverRecipientItem:
    """A note as seen by one of its recipients."""

    handover_id: int
    author_name: Optional[str]
    title: Optional[str]
    content: Optional[str]
    occurred_at: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "handoverId": self.handover_id,
            "authorName": self.author_name,
            "title": self.title,
            "content": self.content,
            "occurredAt": _iso(self.occurred_at),
        }


@dataclass
class HandoverDetail:
    handover_id: int
    author_name: Optional[str]
    recipient_names: List[Optional[str]]
    title: Optional[str]
    content: Optional[str]
    occurred_at: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "handoverId": self.handover_id,
            "authorName": self.author_name,
            "recipientNames": list(self.recipient_names),
            "title": self.title,
            "content": self.content,
            "occurredAt": _iso(self.occurred_at),
        }


@dataclass
class HandoverAuthorList:
    page: Page[HandoverAuthorItem]

    def to_dict(self) -> Dict[str, Any]:
        return {
            **page_envelope(self.page),
            "handoverNotes": [item.to_dict() for item in self.page.items],
        }


@dataclass
class HandoverRecipientList:
    page: Page[HandoverRecipientItem]

    def to_dict(self) -> Dict[str, Any]:
        return {
            **page_envelope(self.page),
            "recipients": [item.to_dict() for item in self.page.items],
        }
