"""
Append-only, versioned context history per (owner, category).
"""

import uuid
from enum import Enum

from sqlalchemy import Column, String, Integer, Float, DateTime, JSON, UniqueConstraint, Index

from ..core.database import Base
from .document import utcnow


class ContextCategory(str, Enum):
    CONTEXT = "context"
    WRITING_STYLE = "writing_style"


class UserContext(Base):
    __tablename__ = "user_context"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(255), nullable=False, index=True)
    context_type = Column(String(100), nullable=False)
    data = Column(JSON, nullable=False)
    confidence = Column(Float, default=0.0, nullable=False)
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_updated = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        # Guards version allocation: a concurrent duplicate fails the insert
        UniqueConstraint("owner_id", "context_type", "version", name="uq_user_context_owner_type_version"),
        Index("idx_user_context_owner_type", "owner_id", "context_type"),
    )

    def __repr__(self):
        return f"<UserContext(owner='{self.owner_id}', type='{self.context_type}', version={self.version})>"
