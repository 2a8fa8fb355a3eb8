"""
Handover note routes.

Thin HTTP layer over the handover services: request bodies are validated
by pydantic, domain errors are translated by the handler in `app.py`.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query  # type: ignore
from pydantic import BaseModel, Field  # type: ignore

from config import get_config
from core.db import SessionLocal
from services.application import HandoverModifyService, HandoverQueryService

_LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/handover", tags=["handover"])


class HandoverCreateRequest(BaseModel):
    authorId: int
    recipientIds: List[int] = Field(default_factory=list)
    title: Optional[str] = None
    content: Optional[str] = None


class HandoverUpdateRequest(BaseModel):
    authorId: int
    recipientIds: List[int] = Field(default_factory=list)
    title: Optional[str] = None
    content: Optional[str] = None


def get_modify_service() -> HandoverModifyService:
    return HandoverModifyService(SessionLocal)


def get_query_service() -> HandoverQueryService:
    return HandoverQueryService(
        SessionLocal, max_page_size=get_config().pagination.max_page_size
    )


def _page_size(size: Optional[int]) -> int:
    return size if size is not None else get_config().pagination.default_page_size


@router.post("")
def create_handover(
    request: HandoverCreateRequest,
    service: HandoverModifyService = Depends(get_modify_service),
) -> Dict[str, Any]:
    note_id = service.create_handover(
        request.authorId, request.recipientIds, request.title, request.content
    )
    return {"message": "Handover created", "handoverId": note_id}


@router.get("/author/{user_id}")
def get_handover_author_list(
    user_id: int,
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: Optional[int] = Query(None, ge=1),
    service: HandoverQueryService = Depends(get_query_service),
) -> Dict[str, Any]:
    return service.get_author_list(user_id, page, _page_size(size)).to_dict()


@router.get("/recipient/{user_id}")
def get_handover_recipient_list(
    user_id: int,
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: Optional[int] = Query(None, ge=1),
    service: HandoverQueryService = Depends(get_query_service),
) -> Dict[str, Any]:
    return service.get_recipient_list(user_id, page, _page_size(size)).to_dict()


@router.get("/{handover_id}")
def get_handover(
    handover_id: int,
    service: HandoverQueryService = Depends(get_query_service),
) -> Dict[str, Any]:
    return service.get_handover(handover_id).to_dict()


@router.put("/{handover_id}")
def update_handover(
    handover_id: int,
    request: HandoverUpdateRequest,
    service: HandoverModifyService = Depends(get_modify_service),
) -> Dict[str, Any]:
    service.update_handover(
        handover_id, request.authorId, request.recipientIds, request.title, request.content
    )
    return {"message": "Handover updated"}


@router.delete("/{handover_id}")
def delete_handover(
    handover_id: int,
    service: HandoverModifyService = Depends(get_modify_service),
) -> Dict[str, Any]:
    deleted = service.delete_handover(handover_id)
    if not deleted:
        _LOG.info("Delete requested for unknown handover note %s", handover_id)
    return {"message": "Handover deleted"}
