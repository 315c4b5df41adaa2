"""
Pure heuristic analyzers for professional context and writing style.

No function in this package performs I/O; persistence and embeddings are
handled by ``content_engine.services``.
"""

from .lexicon import LEXICON_VERSION
from .context_analyzer import analyze_context, derive_insights
from .style_analyzer import analyze_writing_style, compare_writing_styles, style_recommendations

__all__ = [
    "LEXICON_VERSION",
    "analyze_context",
    "derive_insights",
    "analyze_writing_style",
    "compare_writing_styles",
    "style_recommendations",
]
