"""
Context Service - versioned professional context per owner.

Every update analyzes the text, appends a new version under the ``context``
category and indexes the text as a ``context`` document so it takes part in
semantic search.
"""

from typing import List, Optional

from ..analysis.context_analyzer import analyze_context, derive_insights
from ..analysis.text_metrics import ensure_text
from ..core.config import settings
from ..core.exceptions import ValidationError
from ..core.logging_config import LoggerMixin
from ..models.document import DocumentType, utcnow
from ..models.user_context import ContextCategory, UserContext
from ..schemas.context import ContextAnalysis, ContextInsights, ContextSnapshot
from .vector_store import DocumentStore
from .version_store import VersionStore


def _to_snapshot(row: UserContext) -> ContextSnapshot:
    return ContextSnapshot(
        id=row.id,
        owner_id=row.owner_id,
        version=row.version,
        content=row.data["content"],
        analysis=ContextAnalysis.model_validate(row.data["analysis"]),
        confidence=row.confidence,
        created_at=row.created_at,
    )


class ContextService(LoggerMixin):
    """Analyze, version and index an owner's professional context"""

    category = ContextCategory.CONTEXT

    def __init__(self, document_store: DocumentStore, version_store: VersionStore):
        self.document_store = document_store
        self.version_store = version_store

    async def update_user_context(self, owner_id: str, content: str) -> ContextSnapshot:
        """Analyze ``content`` and record it as the owner's next context version.

        The version row is written first; if indexing the text then fails the
        version stays in the history and the error propagates.
        """
        content = ensure_text(content)
        min_length = settings.MIN_PERSISTED_CONTENT_LENGTH
        if len(content.strip()) < min_length:
            raise ValidationError(
                f"Context must be at least {min_length} characters long",
                field="content",
                min_length=min_length,
            )

        analysis = analyze_context(content)
        row = await self.version_store.update_or_create(
            owner_id,
            self.category,
            {
                "content": content,
                "analysis": analysis.model_dump(),
                "last_updated": utcnow().isoformat(),
            },
            analysis.confidence,
        )

        await self.document_store.store(
            owner_id=owner_id,
            content=content,
            metadata={
                "context_type": self.category.value,
                "version": row.version,
                "analysis": analysis.model_dump(),
            },
            document_type=DocumentType.CONTEXT,
        )

        self.log_info("Updated user context", owner_id=owner_id, version=row.version)
        return _to_snapshot(row)

    def analyze_context(self, content: str) -> ContextAnalysis:
        """Analysis only, nothing is persisted"""
        return analyze_context(content)

    async def get_context_history(self, owner_id: str) -> List[ContextSnapshot]:
        rows = await self.version_store.find_by_type(owner_id, self.category)
        return [_to_snapshot(row) for row in rows]

    async def get_latest_context(self, owner_id: str) -> Optional[ContextSnapshot]:
        row = await self.version_store.find_latest_by_type(owner_id, self.category)
        return _to_snapshot(row) if row is not None else None

    async def get_context_insights(self, owner_id: str) -> ContextInsights:
        latest = await self.get_latest_context(owner_id)
        return derive_insights(latest.analysis if latest is not None else None)
