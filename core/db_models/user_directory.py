from __future__ import annotations

from typing import Optional

from sqlalchemy import (  # type: ignore
    Column,
    Integer,
    String,
)

from core.db import Base
from core.db_models.timestamps import TimestampMixin


class User(TimestampMixin, Base):
    """Directory entry for an employee. Read-only from the handover core."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    username = Column(String(128), nullable=True)
    employee_no = Column(String(64), nullable=True, unique=True)

    @classmethod
    def create(
        cls,
        email: str,
        username: Optional[str] = None,
        employee_no: Optional[str] = None,
    ) -> User:
        return cls(
            email=email.lower().strip(),
            username=username,
            employee_no=employee_no,
        )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
