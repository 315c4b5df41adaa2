"""
Writing Style Service - owner voice profiles built from stored samples.

Samples are indexed as ``writing_sample`` documents. A profile is always
recomputed from the owner's complete sample set and appended to the
``writing_style`` version history.
"""

from typing import List, Optional, Sequence

from ..analysis.style_analyzer import (
    analyze_writing_style,
    compare_writing_styles,
    style_recommendations,
)
from ..analysis.text_metrics import ensure_text
from ..core.config import settings
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging_config import LoggerMixin
from ..models.document import DocumentType
from ..models.user_context import ContextCategory
from ..schemas.document import DocumentCreate
from ..schemas.writing_style import (
    ContentSample,
    StyleComparison,
    StyleRecommendations,
    WritingStyleProfile,
)
from .semantic_content_service import writing_sample_metadata
from .vector_store import DocumentStore
from .version_store import VersionStore


class WritingStyleService(LoggerMixin):
    """Analyze and track an owner's writing style"""

    category = ContextCategory.WRITING_STYLE

    def __init__(self, document_store: DocumentStore, version_store: VersionStore):
        self.document_store = document_store
        self.version_store = version_store

    @staticmethod
    def _validate_sample(sample: ContentSample) -> None:
        content = ensure_text(sample.content)
        min_length = settings.MIN_PERSISTED_CONTENT_LENGTH
        if len(content.strip()) < min_length:
            raise ValidationError(
                f"Content samples must be at least {min_length} characters long",
                field="content",
                min_length=min_length,
            )

    @staticmethod
    def _to_document(owner_id: str, sample: ContentSample) -> DocumentCreate:
        return DocumentCreate(
            owner_id=owner_id,
            content=sample.content,
            metadata={
                **sample.metadata,
                **writing_sample_metadata(sample.content, sample.platform, sample.content_type),
            },
            document_type=DocumentType.WRITING_SAMPLE,
        )

    async def _persist_profile(self, owner_id: str, profile: WritingStyleProfile) -> WritingStyleProfile:
        row = await self.version_store.update_or_create(
            owner_id,
            self.category,
            profile.model_dump(mode="json"),
            profile.confidence,
        )
        self.log_info(
            f"Analyzed writing style from {profile.sample_count} samples",
            owner_id=owner_id,
            version=row.version,
        )
        return profile

    async def analyze_writing_style(self, owner_id: str, samples: Sequence[ContentSample]) -> WritingStyleProfile:
        """Index ``samples`` and re-profile every sample the owner has stored"""
        if not samples:
            raise ValidationError("At least one content sample is required", field="samples")
        for sample in samples:
            self._validate_sample(sample)

        await self.document_store.batch_store([self._to_document(owner_id, s) for s in samples])
        return await self.refresh_profile(owner_id)

    async def add_content_sample(self, owner_id: str, sample: ContentSample) -> WritingStyleProfile:
        """Index one more sample and re-profile the full sample set"""
        self._validate_sample(sample)
        document = self._to_document(owner_id, sample)
        await self.document_store.store(
            owner_id=owner_id,
            content=document.content,
            metadata=document.metadata,
            document_type=document.document_type,
        )
        return await self.refresh_profile(owner_id)

    async def refresh_profile(self, owner_id: str) -> WritingStyleProfile:
        """Recompute the profile from every stored sample, oldest first"""
        documents = await self.document_store.list_by_owner(owner_id, DocumentType.WRITING_SAMPLE)
        if not documents:
            raise NotFoundError(
                "No writing samples stored for owner",
                resource_type="writing_sample",
                resource_id=owner_id,
            )

        samples: List[ContentSample] = [
            ContentSample(
                content=doc.content,
                platform=doc.metadata.get("platform", "unknown"),
                content_type=doc.metadata.get("content_type", "unknown"),
                metadata=doc.metadata,
            )
            for doc in reversed(documents)
        ]
        profile = analyze_writing_style(samples, owner_id=owner_id)
        return await self._persist_profile(owner_id, profile)

    async def get_writing_style_profile(self, owner_id: str) -> Optional[WritingStyleProfile]:
        row = await self.version_store.find_latest_by_type(owner_id, self.category)
        if row is None:
            return None
        return WritingStyleProfile.model_validate(row.data)

    async def get_style_recommendations(self, owner_id: str) -> StyleRecommendations:
        return style_recommendations(await self.get_writing_style_profile(owner_id))

    def compare_writing_styles(self, first: WritingStyleProfile, second: WritingStyleProfile) -> StyleComparison:
        return compare_writing_styles(first, second)
