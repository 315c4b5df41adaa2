"""
Context analysis and snapshot schemas.
"""

from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, Field

Sentiment = Literal["positive", "neutral", "negative"]


class ContextAnalysis(BaseModel):
    keywords: List[str] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)
    sentiment: Sentiment = "neutral"
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    word_count: int = 0
    readability_score: float = Field(0.0, ge=0.0, le=100.0)
    professional_terms: List[str] = Field(default_factory=list)
    industries: List[str] = Field(default_factory=list)


class ContextSnapshot(BaseModel):
    """One immutable version of an owner's analyzed context"""
    id: str
    owner_id: str
    version: int = Field(..., ge=1)
    content: str
    analysis: ContextAnalysis
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    created_at: datetime


class ContextInsights(BaseModel):
    strengths: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    missing_areas: List[str] = Field(default_factory=list)
