"""
Writing style profile schemas.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Formality = Literal["formal", "semi-formal", "casual"]


class ContentSample(BaseModel):
    content: str
    platform: str
    content_type: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class VocabularyProfile(BaseModel):
    complexity: Literal["simple", "moderate", "complex"] = "simple"
    technical_level: Literal["basic", "intermediate", "advanced"] = "basic"
    common_words: List[str] = Field(default_factory=list)
    unique_words: List[str] = Field(default_factory=list)


class SentenceStructure(BaseModel):
    average_length: int = 0
    complexity: Literal["simple", "compound", "complex"] = "simple"
    variety: float = Field(0.0, ge=0.0, le=1.0)


class WritingPatterns(BaseModel):
    preferred_formats: List[str] = Field(default_factory=list)
    common_phrases: List[str] = Field(default_factory=list)
    transition_words: List[str] = Field(default_factory=list)
    call_to_action_style: List[str] = Field(default_factory=list)


class ContentThemes(BaseModel):
    primary_topics: List[str] = Field(default_factory=list)
    expertise: List[str] = Field(default_factory=list)
    perspectives: List[str] = Field(default_factory=list)


class EngagementProfile(BaseModel):
    question_usage: float = Field(0.0, ge=0.0, le=1.0)
    storytelling_elements: bool = False
    personal_anecdotes: bool = False
    data_usage: bool = False


class BrandVoice(BaseModel):
    personality: List[str] = Field(default_factory=list)
    values: List[str] = Field(default_factory=list)
    communication_style: Literal["narrative", "analytical", "direct"] = "direct"


class WritingStyleProfile(BaseModel):
    owner_id: Optional[str] = None
    tone: str = "neutral"
    formality: Formality = "semi-formal"
    vocabulary: VocabularyProfile = Field(default_factory=VocabularyProfile)
    sentence_structure: SentenceStructure = Field(default_factory=SentenceStructure)
    writing_patterns: WritingPatterns = Field(default_factory=WritingPatterns)
    content_themes: ContentThemes = Field(default_factory=ContentThemes)
    engagement: EngagementProfile = Field(default_factory=EngagementProfile)
    brand_voice: BrandVoice = Field(default_factory=BrandVoice)
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    sample_count: int = Field(0, ge=0)
    last_analyzed: datetime


class StyleComparison(BaseModel):
    similarity: float = Field(0.0, ge=0.0, le=1.0)
    differences: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class StyleRecommendations(BaseModel):
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
