"""
Domain models - Pure business entities without infrastructure dependencies.

These models represent core business concepts and rules independent
of database schemas, external APIs, or framework specifics.
"""

from domain.models.handover import (
    RecipientChanges,
    plan_recipient_changes,
    unique_in_order,
    HandoverAuthorItem,
    HandoverRecipientItem,
    HandoverDetail,
    HandoverAuthorList,
    HandoverRecipientList,
)

__all__ = [
    "RecipientChanges",
    "plan_recipient_changes",
    "unique_in_order",
    "HandoverAuthorItem",
    "HandoverRecipientItem",
    "HandoverDetail",
    "HandoverAuthorList",
    "HandoverRecipientList",
]
