"""
Semantic content search and ideation schemas.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ..models.document import DocumentType


class ContentMatch(BaseModel):
    document_id: str
    content: str
    document_type: DocumentType
    similarity: float = Field(..., ge=0.0, le=1.0)
    metadata: Optional[Dict[str, Any]] = None


class TrendMatch(BaseModel):
    trend: Dict[str, Any] = Field(default_factory=dict)
    relevance: float = Field(..., ge=0.0, le=1.0)
    content: str


class ContentIdea(BaseModel):
    type: str
    topic: str
    platform: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    source: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
