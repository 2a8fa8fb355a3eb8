"""
Application Services - Orchestration and cross-cutting concerns.

This module contains services that orchestrate between repositories inside
a single unit of work (writes) or a read session (queries).
"""

from services.application.handover_modify_service import HandoverModifyService
from services.application.handover_query_service import HandoverQueryService

__all__ = [
    "HandoverModifyService",
    "HandoverQueryService",
]
