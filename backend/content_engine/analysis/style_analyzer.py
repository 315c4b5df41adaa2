"""
Writing Style Analyzer - Voice Profiling Across Samples

Builds a WritingStyleProfile from one or more content samples:
    - Tone and formality
    - Vocabulary and sentence structure
    - Writing patterns and content themes
    - Engagement signals and brand voice

Profiles are always computed from the full sample set; nothing is carried
over between runs.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from ..core.exceptions import ValidationError
from ..schemas.writing_style import (
    BrandVoice,
    ContentSample,
    ContentThemes,
    EngagementProfile,
    SentenceStructure,
    StyleComparison,
    StyleRecommendations,
    VocabularyProfile,
    WritingPatterns,
    WritingStyleProfile,
)
from . import lexicon
from .text_metrics import (
    SENTENCE_DELIMITERS,
    clamp,
    clean_word,
    ensure_text,
    jaccard,
    matched_terms,
    matched_words,
    mean_and_stdev,
    rank_by_frequency,
    sentence_count,
    split_sentences,
    tokenize,
)

SAMPLE_SEPARATOR = "\n\n"
MAX_COMMON_WORDS = 20
MAX_UNIQUE_WORDS = 10
MAX_PREFERRED_FORMATS = 3
MAX_COMMON_PHRASES = 5
PHRASE_WINDOW = 3
MIN_PHRASE_CHARS = 10


def analyze_writing_style(
    samples: Sequence[ContentSample],
    owner_id: Optional[str] = None,
    analyzed_at: Optional[datetime] = None,
) -> WritingStyleProfile:
    """Compute a complete profile over every sample in ``samples``."""
    if not samples:
        raise ValidationError("At least one content sample is required", field="samples")

    content = SAMPLE_SEPARATOR.join(ensure_text(sample.content) for sample in samples)
    if not content.strip():
        raise ValidationError("Content samples are empty", field="samples")

    lower_content = content.lower()
    sentences = split_sentences(content)
    words = [w.lower() for w in tokenize(content)]

    vocabulary = analyze_vocabulary(words)
    sentence_structure = analyze_sentence_structure(sentences)
    content_themes = analyze_content_themes(lower_content)

    return WritingStyleProfile(
        owner_id=owner_id,
        tone=analyze_tone(lower_content),
        formality=analyze_formality(content, words, sentences),
        vocabulary=vocabulary,
        sentence_structure=sentence_structure,
        writing_patterns=analyze_writing_patterns(content, samples),
        content_themes=content_themes,
        engagement=analyze_engagement(content),
        brand_voice=analyze_brand_voice(lower_content, content_themes),
        confidence=calculate_style_confidence(len(samples), len(words), vocabulary, sentence_structure),
        sample_count=len(samples),
        last_analyzed=analyzed_at or datetime.now(timezone.utc),
    )


def analyze_tone(lower_content: str) -> str:
    # Strictly greater: ties go to the earlier category
    dominant_tone, max_score = "neutral", 0
    for tone, indicators in lexicon.TONE_INDICATORS.items():
        score = len(matched_terms(lower_content, indicators))
        if score > max_score:
            dominant_tone, max_score = tone, score
    return dominant_tone


def analyze_formality(content: str, words: Sequence[str], sentences: Sequence[str]) -> str:
    lower_content = content.lower()
    formal_score = len(matched_terms(lower_content, lexicon.FORMAL_INDICATORS))
    casual_score = len(matched_words(lower_content, lexicon.CASUAL_INDICATORS))
    casual_score += len(re.findall(lexicon.CONTRACTION_PATTERN, content))

    if words:
        avg_sentence_length = len(words) / max(1, len(sentences))
        if avg_sentence_length > 20:
            formal_score += 1
        if avg_sentence_length < 12:
            casual_score += 1

    if formal_score - casual_score > 1:
        return "formal"
    if casual_score - formal_score > 1:
        return "casual"
    return "semi-formal"


def analyze_vocabulary(words: Sequence[str]) -> VocabularyProfile:
    cleaned = (w for w in (clean_word(word) for word in words) if len(w) > 3)
    ranked = rank_by_frequency(cleaned)

    avg_word_length = sum(len(w) for w in words) / len(words) if words else 0.0
    if avg_word_length < 4.5:
        complexity = "simple"
    elif avg_word_length < 6:
        complexity = "moderate"
    else:
        complexity = "complex"

    technical_count = sum(
        1 for term in lexicon.TECHNICAL_TERMS
        if any(term in word for word in words)
    )
    if technical_count >= 3:
        technical_level = "advanced"
    elif technical_count >= 1:
        technical_level = "intermediate"
    else:
        technical_level = "basic"

    return VocabularyProfile(
        complexity=complexity,
        technical_level=technical_level,
        common_words=[word for word, _ in ranked[:MAX_COMMON_WORDS]],
        unique_words=[word for word, count in ranked if count == 1][:MAX_UNIQUE_WORDS],
    )


def analyze_sentence_structure(sentences: Sequence[str]) -> SentenceStructure:
    lengths = [len(sentence.split()) for sentence in sentences]
    average, stdev = mean_and_stdev(lengths)
    variety = min(1.0, stdev / average) if average else 0.0

    if average < 12:
        complexity = "simple"
    elif average < 18:
        complexity = "compound"
    else:
        complexity = "complex"

    return SentenceStructure(
        average_length=round(average),
        complexity=complexity,
        variety=round(variety, 2),
    )


def analyze_writing_patterns(content: str, samples: Sequence[ContentSample]) -> WritingPatterns:
    preferred_formats = [
        fmt for fmt, _ in rank_by_frequency(
            (sample.content_type for sample in samples), MAX_PREFERRED_FORMATS
        )
    ]

    lower_content = content.lower()
    return WritingPatterns(
        preferred_formats=preferred_formats,
        common_phrases=extract_common_phrases(content),
        transition_words=matched_terms(lower_content, lexicon.TRANSITION_WORDS),
        call_to_action_style=matched_terms(lower_content, lexicon.CALL_TO_ACTION_PHRASES),
    )


def extract_common_phrases(content: str) -> List[str]:
    phrases = []
    for sentence in SENTENCE_DELIMITERS.split(content):
        words = sentence.split()
        for i in range(len(words) - PHRASE_WINDOW + 1):
            phrase = " ".join(words[i:i + PHRASE_WINDOW]).lower()
            if len(phrase) > MIN_PHRASE_CHARS:
                phrases.append(phrase)

    return [
        phrase for phrase, count in rank_by_frequency(phrases)
        if count > 1
    ][:MAX_COMMON_PHRASES]


def analyze_content_themes(lower_content: str) -> ContentThemes:
    primary_topics = [
        topic for topic, keywords in lexicon.TOPIC_KEYWORDS.items()
        if len(matched_terms(lower_content, keywords)) >= 2
    ]
    return ContentThemes(
        primary_topics=primary_topics,
        expertise=matched_terms(lower_content, lexicon.EXPERTISE_WORDS),
        perspectives=matched_terms(lower_content, lexicon.PERSPECTIVE_PHRASES),
    )


def analyze_engagement(content: str) -> EngagementProfile:
    question_usage = content.count("?") / sentence_count(content)

    return EngagementProfile(
        question_usage=round(min(1.0, question_usage), 2),
        storytelling_elements=bool(re.search(lexicon.STORYTELLING_PATTERN, content, re.IGNORECASE)),
        personal_anecdotes=bool(re.search(lexicon.PERSONAL_PATTERN, content, re.IGNORECASE)),
        data_usage=bool(re.search(lexicon.DATA_PATTERN, content, re.IGNORECASE)),
    )


def analyze_brand_voice(lower_content: str, content_themes: ContentThemes) -> BrandVoice:
    personality = [
        trait for trait, indicators in lexicon.PERSONALITY_TRAITS.items()
        if matched_terms(lower_content, indicators)
    ]

    if matched_terms(lower_content, lexicon.NARRATIVE_STYLE_WORDS):
        communication_style = "narrative"
    elif matched_terms(lower_content, lexicon.ANALYTICAL_STYLE_WORDS):
        communication_style = "analytical"
    else:
        communication_style = "direct"

    return BrandVoice(
        personality=personality,
        values=[topic.lower() for topic in content_themes.primary_topics],
        communication_style=communication_style,
    )


def calculate_style_confidence(
    sample_count: int,
    word_count: int,
    vocabulary: VocabularyProfile,
    sentence_structure: SentenceStructure,
) -> float:
    confidence = 0.3

    if sample_count >= 10:
        confidence += 0.3
    elif sample_count >= 5:
        confidence += 0.2
    elif sample_count >= 3:
        confidence += 0.1

    if word_count >= 1000:
        confidence += 0.2
    elif word_count >= 500:
        confidence += 0.1

    if len(vocabulary.unique_words) >= 8:
        confidence += 0.1

    if sentence_structure.variety >= 0.5:
        confidence += 0.1

    return round(min(1.0, confidence), 2)


def compare_writing_styles(first: WritingStyleProfile, second: WritingStyleProfile) -> StyleComparison:
    """Weighted similarity between two profiles with per-dimension differences."""
    similarity = 0.0
    differences: List[str] = []
    recommendations: List[str] = []

    if first.tone == second.tone:
        similarity += 0.2
    else:
        differences.append(f"Tone differs: {first.tone} vs {second.tone}")

    if first.formality == second.formality:
        similarity += 0.15
    else:
        differences.append(f"Formality differs: {first.formality} vs {second.formality}")

    vocabulary_matches = first.vocabulary.complexity == second.vocabulary.complexity
    if vocabulary_matches:
        similarity += 0.15
    else:
        differences.append(
            f"Vocabulary complexity differs: {first.vocabulary.complexity} vs {second.vocabulary.complexity}"
        )

    first_length = first.sentence_structure.average_length
    second_length = second.sentence_structure.average_length
    if abs(first_length - second_length) < 5:
        similarity += 0.1
    else:
        differences.append(
            f"Sentence length differs significantly: {first_length} vs {second_length} words"
        )

    topic_overlap = jaccard(first.content_themes.primary_topics, second.content_themes.primary_topics)
    similarity += topic_overlap * 0.2
    if topic_overlap < 0.3:
        differences.append("Different content focus areas")

    personality_overlap = jaccard(first.brand_voice.personality, second.brand_voice.personality)
    similarity += personality_overlap * 0.2
    if personality_overlap < 0.3:
        differences.append("Different brand personality traits")

    # Rounding absorbs float drift so identical profiles score exactly 1.0
    similarity = round(clamp(similarity), 4)

    if similarity < 0.7:
        recommendations.append("Consider maintaining more consistent tone across platforms")
    if first.formality != second.formality:
        recommendations.append("Align formality level with your target audience expectations")
    if not vocabulary_matches:
        recommendations.append("Keep vocabulary complexity consistent with your core audience")
    if topic_overlap < 0.5:
        recommendations.append("Focus on core expertise areas for better brand consistency")
    if personality_overlap < 0.5:
        recommendations.append("Reinforce the same personality traits across your content")

    return StyleComparison(similarity=similarity, differences=differences, recommendations=recommendations)


def style_recommendations(profile: Optional[WritingStyleProfile]) -> StyleRecommendations:
    if profile is None:
        return StyleRecommendations(
            strengths=[],
            improvements=["Add content samples to analyze your writing style"],
            suggestions=["Upload recent posts, articles, or other content you've written"],
        )

    strengths: List[str] = []
    improvements: List[str] = []
    suggestions: List[str] = []

    if profile.confidence >= 0.8:
        strengths.append("Consistent writing style across samples")
    if profile.vocabulary.technical_level == "advanced":
        strengths.append("Strong technical vocabulary")
    if profile.engagement.storytelling_elements:
        strengths.append("Effective use of storytelling")
    if profile.sentence_structure.variety >= 0.7:
        strengths.append("Good sentence structure variety")

    if profile.confidence < 0.6:
        improvements.append("Develop more consistent voice across content")
    if profile.sample_count < 5:
        improvements.append("Add more content samples for better analysis")
    if profile.engagement.question_usage < 0.1:
        improvements.append("Consider using more questions to engage readers")
    if profile.sentence_structure.complexity == "simple" and profile.vocabulary.complexity == "simple":
        improvements.append("Consider varying sentence complexity for more engaging content")

    if len(profile.content_themes.primary_topics) < 3:
        suggestions.append("Expand content topics to showcase broader expertise")
    if not profile.engagement.data_usage:
        suggestions.append("Include data and statistics to support your points")
    if len(profile.brand_voice.personality) < 3:
        suggestions.append("Develop clearer brand personality traits")

    return StyleRecommendations(strengths=strengths, improvements=improvements, suggestions=suggestions)

