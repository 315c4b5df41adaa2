from .document import Document, DocumentCreate, SimilarityResult
from .content import ContentMatch, TrendMatch, ContentIdea
from .context import ContextAnalysis, ContextSnapshot, ContextInsights
from .writing_style import (
    ContentSample,
    WritingStyleProfile,
    StyleComparison,
    StyleRecommendations,
)

__all__ = [
    "Document",
    "DocumentCreate",
    "SimilarityResult",
    "ContentMatch",
    "TrendMatch",
    "ContentIdea",
    "ContextAnalysis",
    "ContextSnapshot",
    "ContextInsights",
    "ContentSample",
    "WritingStyleProfile",
    "StyleComparison",
    "StyleRecommendations",
]
