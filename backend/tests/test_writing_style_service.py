"""
Tests for WritingStyleService
"""

import pytest

from content_engine.core.exceptions import BatchStoreError, NotFoundError, ValidationError
from content_engine.models.document import DocumentType
from content_engine.schemas.writing_style import ContentSample


@pytest.mark.asyncio
async def test_short_sample_rejected_before_embedding(writing_style_service, embedder, linkedin_samples):
    short_sample = ContentSample(content="x" * 40, platform="linkedin", content_type="post")

    with pytest.raises(ValidationError) as exc_info:
        await writing_style_service.analyze_writing_style("owner-1", linkedin_samples + [short_sample])

    assert exc_info.value.details["min_length"] == 50
    assert embedder.call_count == 0


@pytest.mark.asyncio
async def test_add_short_sample_rejected_before_embedding(writing_style_service, embedder):
    with pytest.raises(ValidationError):
        await writing_style_service.add_content_sample(
            "owner-1", ContentSample(content="x" * 40, platform="linkedin", content_type="post")
        )

    assert embedder.call_count == 0


@pytest.mark.asyncio
async def test_no_samples_rejected(writing_style_service):
    with pytest.raises(ValidationError):
        await writing_style_service.analyze_writing_style("owner-1", [])


@pytest.mark.asyncio
async def test_analysis_indexes_samples_and_persists_profile(
    writing_style_service, document_store, version_store, linkedin_samples
):
    profile = await writing_style_service.analyze_writing_style("owner-1", linkedin_samples)

    documents = await document_store.list_by_owner("owner-1", DocumentType.WRITING_SAMPLE)
    assert len(documents) == 3
    assert {d.metadata["platform"] for d in documents} == {"linkedin", "blog"}

    assert profile.owner_id == "owner-1"
    assert profile.sample_count == 3

    stored = await writing_style_service.get_writing_style_profile("owner-1")
    assert stored == profile

    latest = await version_store.find_latest_by_type("owner-1", "writing_style")
    assert latest.version == 1
    assert latest.confidence == profile.confidence


@pytest.mark.asyncio
async def test_adding_a_sample_recomputes_from_all_samples(
    writing_style_service, document_store, version_store, embedder, linkedin_samples
):
    await writing_style_service.analyze_writing_style("owner-1", linkedin_samples)
    embedder.calls.clear()

    new_sample = ContentSample(
        content="Furthermore, our research shows that reliable delivery builds trust with every customer.",
        platform="newsletter",
        content_type="article",
    )
    profile = await writing_style_service.add_content_sample("owner-1", new_sample)

    assert profile.sample_count == 4
    assert embedder.calls == [new_sample.content]
    assert len(await document_store.list_by_owner("owner-1", DocumentType.WRITING_SAMPLE)) == 4
    assert "reliable" in profile.brand_voice.personality

    history = await version_store.find_by_type("owner-1", "writing_style")
    assert [row.version for row in history] == [2, 1]


@pytest.mark.asyncio
async def test_second_analysis_profiles_previously_stored_samples(writing_style_service, linkedin_samples):
    await writing_style_service.analyze_writing_style("owner-1", linkedin_samples[:2])

    profile = await writing_style_service.analyze_writing_style("owner-1", linkedin_samples[2:])

    assert profile.sample_count == 3
    stored = await writing_style_service.get_writing_style_profile("owner-1")
    assert stored.sample_count == 3


@pytest.mark.asyncio
async def test_refresh_profile_matches_fresh_analysis(writing_style_service, linkedin_samples):
    analyzed = await writing_style_service.analyze_writing_style("owner-1", linkedin_samples)

    refreshed = await writing_style_service.refresh_profile("owner-1")

    assert refreshed.sample_count == analyzed.sample_count
    assert refreshed.tone == analyzed.tone
    assert refreshed.content_themes == analyzed.content_themes
    assert refreshed.writing_patterns.preferred_formats == analyzed.writing_patterns.preferred_formats


@pytest.mark.asyncio
async def test_refresh_without_samples(writing_style_service):
    with pytest.raises(NotFoundError):
        await writing_style_service.refresh_profile("nobody")


@pytest.mark.asyncio
async def test_provider_failure_during_indexing(writing_style_service, version_store, embedder, linkedin_samples):
    embedder.error = RuntimeError("provider down")

    with pytest.raises(BatchStoreError) as exc_info:
        await writing_style_service.analyze_writing_style("owner-1", linkedin_samples)

    assert exc_info.value.failed_index == 0
    assert await version_store.find_by_owner("owner-1") == []


@pytest.mark.asyncio
async def test_recommendations_and_comparison(writing_style_service, linkedin_samples):
    assert (await writing_style_service.get_writing_style_profile("owner-1")) is None
    empty = await writing_style_service.get_style_recommendations("owner-1")
    assert empty.improvements == ["Add content samples to analyze your writing style"]

    profile = await writing_style_service.analyze_writing_style("owner-1", linkedin_samples)
    recommendations = await writing_style_service.get_style_recommendations("owner-1")
    assert "Add more content samples for better analysis" in recommendations.improvements

    comparison = writing_style_service.compare_writing_styles(profile, profile)
    assert comparison.similarity == 1.0
    assert comparison.differences == []
