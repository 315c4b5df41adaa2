"""
Document store schemas.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from ..models.document import DocumentType


class Document(BaseModel):
    """A stored document with its embedding"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    content: str
    document_type: DocumentType
    metadata: Dict[str, Any] = Field(default_factory=dict)
    embedding: List[float]
    created_at: datetime
    updated_at: datetime


class DocumentCreate(BaseModel):
    """Input for ``DocumentStore.batch_store``"""
    owner_id: str
    content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    document_type: DocumentType = DocumentType.CONTENT


@dataclass
class SimilarityResult:
    document: Document
    similarity: float
