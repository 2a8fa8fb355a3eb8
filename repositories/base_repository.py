"""
Base Repository class providing common database operations.

Repositories operate on a session owned by the caller, so several
repositories can take part in one transaction. Commit and rollback are the
job of ``core.db.transaction``; repositories only flush.
"""

from __future__ import annotations
from typing import Any, Callable, Iterable, List, Optional, Type, TypeVar, Generic
from sqlalchemy.orm import Session, Query
from sqlalchemy.exc import SQLAlchemyError
from core.db import Base
from shared.types import Page
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Base)
R = TypeVar('R')


class BaseRepository(Generic[T]):
    """Base repository class with common CRUD operations."""

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    def execute_query(self, query_func: Callable[..., R], *args, **kwargs) -> R:
        """Execute custom query against the bound session, logging failures."""
        try:
            return query_func(self.session, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Error executing {self.model.__name__} query: {e}")
            raise

    def save(self, entity: T) -> T:
        """Persist entity and assign its id."""
        def query_func(session: Session) -> T:
            session.add(entity)
            session.flush()
            return entity

        return self.execute_query(query_func)

    def save_all(self, entities: Iterable[T]) -> List[T]:
        """Persist several entities with a single flush."""
        items = list(entities)
        if not items:
            return []

        def query_func(session: Session) -> List[T]:
            session.add_all(items)
            session.flush()
            return items

        return self.execute_query(query_func)

    def find_by_id(self, id: Any) -> Optional[T]:
        """Get entity by ID."""
        if id is None:
            return None
        return self.execute_query(lambda session: session.get(self.model, id))

    def exists_by_id(self, id: Any) -> bool:
        if id is None:
            return False

        def query_func(session: Session) -> bool:
            return (
                session.query(self.model.id)
                .filter(self.model.id == id)
                .first()
            ) is not None

        return self.execute_query(query_func)

    def delete(self, entity: T) -> None:
        def query_func(session: Session) -> None:
            session.delete(entity)
            session.flush()

        self.execute_query(query_func)

    def delete_by_id(self, id: Any) -> bool:
        """Delete entity by ID. Unknown ids are ignored."""
        entity = self.find_by_id(id)
        if entity is None:
            return False
        self.delete(entity)
        return True

    def count(self) -> int:
        """Count total entities."""
        return self.execute_query(lambda session: session.query(self.model).count())

    def paginate(self, query: Query, page: int, size: int) -> Page:
        """
        Slice an ordered query into a zero-based page with totals.

        Paging arguments are validated by the calling service. Pages past the
        end are answered from the count alone, so the offset never exceeds
        the row count.
        """
        def query_func(_session: Session) -> Page:
            total = query.enable_eagerloads(False).order_by(None).count()
            offset = page * size
            items = query.offset(offset).limit(size).all() if offset < total else []
            return Page(items=items, page=page, size=size, total_elements=total)

        return self.execute_query(query_func)
