"""
Vector document model: owner-scoped content with its embedding.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, String, Text, DateTime, JSON, Index

from ..core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentType(str, Enum):
    """Partitions of the document store"""
    CONTENT = "content"
    CONTEXT = "context"
    TREND = "trend"
    COMPETITOR = "competitor"
    WRITING_SAMPLE = "writing_sample"
    PROJECT = "project"


class VectorDocument(Base):
    __tablename__ = "vector_documents"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(255), nullable=False, index=True)
    content = Column(Text, nullable=False)
    document_type = Column(String(50), nullable=False, index=True)

    # "metadata" is reserved on declarative classes
    doc_metadata = Column("metadata", JSON, default=dict)

    # Fixed-length float list; length is the provider dimension
    embedding = Column(JSON, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_vector_documents_owner_type", "owner_id", "document_type"),
    )

    def __repr__(self):
        return f"<VectorDocument(id='{self.id}', owner='{self.owner_id}', type='{self.document_type}')>"
