"""
Context Analyzer - Professional Profile Metrics

Derives keyword, topic, industry, sentiment, readability and confidence
metrics from an owner's free-text professional context. The pipeline is
pure: identical input always yields an identical ContextAnalysis.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..core.config import settings
from ..core.exceptions import ValidationError
from ..schemas.context import ContextAnalysis, ContextInsights, Sentiment
from . import lexicon
from .text_metrics import (
    clean_word,
    ensure_text,
    flesch_reading_ease,
    matched_terms,
    rank_by_frequency,
    sentence_count,
    tokenize,
)

MAX_KEYWORDS = 10


def analyze_context(content, min_length: Optional[int] = None) -> ContextAnalysis:
    """Run the full context pipeline over ``content``."""
    content = ensure_text(content)
    min_length = settings.MIN_CONTEXT_ANALYSIS_LENGTH if min_length is None else min_length
    if len(content.strip()) < min_length:
        raise ValidationError(
            f"Context must be at least {min_length} characters long",
            field="content",
            min_length=min_length,
        )

    words = tokenize(content)
    word_count = len(words)
    sentences = sentence_count(content)

    keywords = extract_keywords(words)
    professional_terms = extract_professional_terms(content)
    industries = identify_industries(content)
    topics = extract_topics(content, keywords)
    sentiment = analyze_sentiment(content)
    readability = calculate_readability(words, sentences)
    confidence = calculate_confidence(
        word_count=word_count,
        keyword_count=len(keywords),
        sentences=sentences,
        professional_term_count=len(professional_terms),
    )

    return ContextAnalysis(
        keywords=keywords,
        topics=topics,
        sentiment=sentiment,
        confidence=confidence,
        word_count=word_count,
        readability_score=round(readability, 2),
        professional_terms=professional_terms,
        industries=industries,
    )


def extract_keywords(words: Sequence[str], limit: int = MAX_KEYWORDS) -> List[str]:
    candidates = (
        cleaned for cleaned in (clean_word(w) for w in words)
        if len(cleaned) > 3 and cleaned not in lexicon.STOP_WORDS
    )
    return [word for word, _ in rank_by_frequency(candidates, limit)]


def extract_professional_terms(content: str) -> List[str]:
    return matched_terms(content.lower(), lexicon.all_professional_terms())


def identify_industries(content: str) -> List[str]:
    lower_content = content.lower()
    return [
        industry for industry, keywords in lexicon.INDUSTRY_KEYWORDS.items()
        if matched_terms(lower_content, keywords)
    ]


def extract_topics(content: str, keywords: Sequence[str]) -> List[str]:
    lower_content = content.lower()
    topics = []
    for topic, patterns in lexicon.TOPIC_KEYWORDS.items():
        if any(
            pattern in lower_content or any(pattern in keyword for keyword in keywords)
            for pattern in patterns
        ):
            topics.append(topic)
    return topics


def analyze_sentiment(content: str) -> Sentiment:
    lower_content = content.lower()
    positive = len(matched_terms(lower_content, lexicon.POSITIVE_WORDS))
    negative = len(matched_terms(lower_content, lexicon.NEGATIVE_WORDS))

    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def calculate_readability(words: Sequence[str], sentences: int) -> float:
    return flesch_reading_ease([w.lower() for w in words], sentences)


def calculate_confidence(
    word_count: int,
    keyword_count: int,
    sentences: int,
    professional_term_count: int,
) -> float:
    confidence = 0.5

    if word_count >= 100:
        confidence += 0.2
    elif word_count >= 50:
        confidence += 0.1

    if keyword_count >= 8:
        confidence += 0.2
    elif keyword_count >= 5:
        confidence += 0.1

    if sentences > 3:
        confidence += 0.1

    if professional_term_count >= 3:
        confidence += 0.1

    return round(min(1.0, confidence), 2)


def derive_insights(analysis: Optional[ContextAnalysis]) -> ContextInsights:
    """Rule-based strengths, suggestions and missing areas for the latest analysis."""
    if analysis is None:
        return ContextInsights(
            strengths=[],
            suggestions=["Add your professional background and expertise to get personalized insights"],
            missing_areas=["Professional background", "Skills and expertise", "Career goals", "Industry experience"],
        )

    strengths: List[str] = []
    suggestions: List[str] = []

    if analysis.professional_terms:
        strengths.append(
            f"Strong professional vocabulary ({len(analysis.professional_terms)} terms identified)"
        )
    if analysis.industries:
        strengths.append(f"Clear industry focus: {', '.join(analysis.industries)}")
    if analysis.word_count >= 100:
        strengths.append("Comprehensive professional description")
    if analysis.readability_score >= 60:
        strengths.append("Clear and readable communication style")

    if analysis.word_count < 50:
        suggestions.append("Consider adding more details about your experience and expertise")
    if not analysis.industries:
        suggestions.append("Mention your industry or field of expertise for better targeting")
    if len(analysis.professional_terms) < 3:
        suggestions.append("Include more specific skills and technologies you work with")
    if "Leadership" not in analysis.topics and "Strategy" not in analysis.topics:
        suggestions.append("Consider highlighting your leadership experience or strategic thinking")

    missing_areas = [
        f"{area} experience" for area in lexicon.INSIGHT_FOCUS_AREAS
        if area not in analysis.topics
    ]

    return ContextInsights(strengths=strengths, suggestions=suggestions, missing_areas=missing_areas)
