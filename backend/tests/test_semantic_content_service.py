"""
Tests for SemanticContentService
"""

import pytest

from content_engine.models.document import DocumentType
from content_engine.services.semantic_content_service import (
    competitor_to_text,
    context_to_text,
    trend_to_text,
)

AI_TREND = {
    "topic": "AI adoption",
    "industry": "Technology",
    "type": "emerging",
    "keywords": ["llm", "agents"],
    "source": "news",
    "relevance_score": 0.8,
}


def axis(*values):
    return list(values) + [0.0] * (8 - len(values))


def test_context_to_text_flattens_values():
    text = context_to_text("profile", {
        "headline": "Platform engineer",
        "skills": ["python", "sql"],
        "links": {"blog": "example.com"},
        "years": 7,
    })

    assert text == (
        'Context Type: profile. headline: Platform engineer. skills: python, sql. '
        'links: {"blog": "example.com"}. years: 7'
    )


def test_trend_and_competitor_text():
    assert trend_to_text(AI_TREND) == (
        "Trend: AI adoption. Industry: Technology. Type: emerging. Keywords: llm, agents"
    )
    assert competitor_to_text({"name": "Acme", "industry": "SaaS", "platforms": ["linkedin"]}) == (
        "Competitor: Acme. Industry: SaaS. Platforms: linkedin"
    )


@pytest.mark.asyncio
async def test_store_helpers_set_document_types(semantic_service, document_store):
    context = await semantic_service.store_user_context("owner-1", "profile", {"headline": "Engineer"})
    sample = await semantic_service.store_writing_sample("owner-1", "A short post about shipping", "linkedin", "post")
    trend = await semantic_service.store_trend_data("owner-1", AI_TREND)
    competitor = await semantic_service.store_competitor_data("owner-1", {"name": "Acme", "industry": "SaaS"})

    assert context.document_type == DocumentType.CONTEXT
    assert context.metadata["original_data"] == {"headline": "Engineer"}
    assert sample.document_type == DocumentType.WRITING_SAMPLE
    assert sample.metadata["word_count"] == 5
    assert trend.document_type == DocumentType.TREND
    assert trend.metadata["trend_type"] == "emerging"
    assert competitor.document_type == DocumentType.COMPETITOR
    assert competitor.metadata["competitor_name"] == "Acme"

    stats = await document_store.get_owner_stats("owner-1")
    assert stats == {"context": 1, "writing_sample": 1, "trend": 1, "competitor": 1}


@pytest.mark.asyncio
async def test_find_similar_content_searches_several_types_with_one_embedding(semantic_service, embedder):
    embedder.vectors.update({
        "query": axis(1.0),
        "published post": axis(1.0, 0.2),
        "sample post": axis(1.0, 0.1),
        trend_to_text(AI_TREND): axis(1.0),
    })
    await semantic_service.store_content("owner-1", "post-1", "published post")
    await semantic_service.store_writing_sample("owner-1", "sample post", "linkedin", "post")
    await semantic_service.store_trend_data("owner-1", AI_TREND)
    embedder.calls.clear()

    matches = await semantic_service.find_similar_content("owner-1", "query")

    assert [m.content for m in matches] == ["sample post", "published post"]
    assert matches[1].metadata["content_id"] == "post-1"
    assert embedder.calls == ["query"]

    bare = await semantic_service.find_similar_content("owner-1", "query", include_metadata=False)
    assert all(m.metadata is None for m in bare)


@pytest.mark.asyncio
async def test_find_relevant_trends(semantic_service, embedder):
    embedder.vectors.update({"AI adoption in sales": axis(1.0, 0.5), trend_to_text(AI_TREND): axis(1.0)})
    await semantic_service.store_trend_data("owner-1", AI_TREND)

    trends = await semantic_service.find_relevant_trends("owner-1", "AI adoption in sales")

    assert len(trends) == 1
    assert trends[0].trend["industry"] == "Technology"
    assert trends[0].relevance == pytest.approx(0.8944, abs=1e-4)


@pytest.mark.asyncio
async def test_content_ideas_sorted_by_confidence(semantic_service, embedder):
    embedder.vectors.update({
        "developer experience": axis(1.0),
        "old post": axis(1.0, 0.6),
        trend_to_text(AI_TREND): axis(1.0, 0.1),
    })
    await semantic_service.store_content("owner-1", "post-1", "old post")
    await semantic_service.store_trend_data("owner-1", AI_TREND)

    ideas = await semantic_service.generate_content_ideas("owner-1", "developer experience", "linkedin")

    assert [idea.type for idea in ideas] == ["trend_based", "similar_content"]
    assert ideas[0].topic == "developer experience - emerging"
    assert ideas[1].topic == "developer experience - inspired by previous content"
    assert all(idea.platform == "linkedin" for idea in ideas)
    assert ideas[0].confidence >= ideas[1].confidence


@pytest.mark.asyncio
async def test_update_content_embedding(semantic_service, embedder):
    original = await semantic_service.store_content("owner-1", "post-1", "Old wording", {"channel": "blog"})

    updated = await semantic_service.update_content_embedding("owner-1", "post-1", "New wording")

    assert updated.id == original.id
    assert updated.content == "New wording"
    assert updated.embedding != original.embedding
    assert updated.metadata["content_id"] == "post-1"
    assert updated.metadata["channel"] == "blog"
    assert "last_updated" in updated.metadata


@pytest.mark.asyncio
async def test_update_content_embedding_unknown_content(semantic_service):
    assert await semantic_service.update_content_embedding("owner-1", "missing", "Anything") is None
