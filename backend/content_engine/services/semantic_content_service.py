"""
Semantic Content Service

Turns structured branding data (context, trends, competitors, published
content) into searchable documents and answers "what relates to this?"
questions over them.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional, Sequence

from ..core.logging_config import LoggerMixin
from ..models.document import DocumentType, utcnow
from ..schemas.content import ContentIdea, ContentMatch, TrendMatch
from ..schemas.document import Document
from .vector_store import DocumentStore

DEFAULT_CONTENT_TYPES = (DocumentType.CONTENT, DocumentType.WRITING_SAMPLE)
TREND_SEARCH_LIMIT = 5
TREND_SEARCH_THRESHOLD = 0.6
IDEA_CONTENT_LIMIT = 5


def context_to_text(context_type: str, data: Dict[str, Any]) -> str:
    """Flatten a context payload into ``key: value`` sentences"""
    parts = [f"Context Type: {context_type}"]
    for key, value in data.items():
        if isinstance(value, str):
            parts.append(f"{key}: {value}")
        elif isinstance(value, (list, tuple)):
            parts.append(f"{key}: {', '.join(str(v) for v in value)}")
        elif isinstance(value, dict):
            parts.append(f"{key}: {json.dumps(value, default=str)}")
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            parts.append(f"{key}: {value}")
    return ". ".join(parts)


def trend_to_text(trend: Dict[str, Any]) -> str:
    parts = [
        f"Trend: {trend.get('topic') or trend.get('title')}",
        f"Industry: {trend.get('industry')}",
        f"Type: {trend.get('type')}",
    ]
    if trend.get("keywords"):
        parts.append(f"Keywords: {', '.join(trend['keywords'])}")
    if trend.get("description"):
        parts.append(f"Description: {trend['description']}")
    return ". ".join(parts)


def competitor_to_text(competitor: Dict[str, Any]) -> str:
    parts = [
        f"Competitor: {competitor.get('name')}",
        f"Industry: {competitor.get('industry')}",
    ]
    if competitor.get("platforms"):
        parts.append(f"Platforms: {', '.join(competitor['platforms'])}")
    if competitor.get("strengths"):
        parts.append(f"Strengths: {', '.join(competitor['strengths'])}")
    if competitor.get("content_strategy"):
        parts.append(f"Content Strategy: {', '.join(competitor['content_strategy'])}")
    return ". ".join(parts)


class SemanticContentService(LoggerMixin):
    """Searchable branding documents on top of a DocumentStore"""

    def __init__(self, document_store: DocumentStore):
        self.document_store = document_store

    async def store_user_context(self, owner_id: str, context_type: str, data: Dict[str, Any]) -> Document:
        return await self.document_store.store(
            owner_id=owner_id,
            content=context_to_text(context_type, data),
            metadata={
                "context_type": context_type,
                "original_data": data,
                "timestamp": utcnow().isoformat(),
            },
            document_type=DocumentType.CONTEXT,
        )

    async def store_writing_sample(
        self,
        owner_id: str,
        content: str,
        platform: str,
        content_type: str,
    ) -> Document:
        return await self.document_store.store(
            owner_id=owner_id,
            content=content,
            metadata=writing_sample_metadata(content, platform, content_type),
            document_type=DocumentType.WRITING_SAMPLE,
        )

    async def store_trend_data(self, owner_id: str, trend: Dict[str, Any]) -> Document:
        return await self.document_store.store(
            owner_id=owner_id,
            content=trend_to_text(trend),
            metadata={
                "trend_type": trend.get("type"),
                "industry": trend.get("industry"),
                "relevance_score": trend.get("relevance_score"),
                "source": trend.get("source"),
                "timestamp": utcnow().isoformat(),
            },
            document_type=DocumentType.TREND,
        )

    async def store_competitor_data(self, owner_id: str, competitor: Dict[str, Any]) -> Document:
        return await self.document_store.store(
            owner_id=owner_id,
            content=competitor_to_text(competitor),
            metadata={
                "competitor_name": competitor.get("name"),
                "industry": competitor.get("industry"),
                "platforms": competitor.get("platforms"),
                "strengths": competitor.get("strengths"),
                "timestamp": utcnow().isoformat(),
            },
            document_type=DocumentType.COMPETITOR,
        )

    async def store_content(
        self,
        owner_id: str,
        content_id: str,
        content: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Document:
        """Index a published piece of content under its external ``content_id``"""
        return await self.document_store.store(
            owner_id=owner_id,
            content=content,
            metadata={**(metadata or {}), "content_id": content_id},
            document_type=DocumentType.CONTENT,
        )

    async def find_similar_content(
        self,
        owner_id: str,
        query: str,
        document_types: Sequence[DocumentType] = DEFAULT_CONTENT_TYPES,
        limit: int = 10,
        threshold: float = 0.7,
        include_metadata: bool = True,
    ) -> List[ContentMatch]:
        """Rank the owner's documents of several types against one query embedding"""
        results = await self.document_store.similarity_search(
            query,
            owner_id=owner_id,
            document_types=document_types,
            limit=limit,
            threshold=threshold,
        )
        return [
            ContentMatch(
                document_id=result.document.id,
                content=result.document.content,
                document_type=result.document.document_type,
                similarity=result.similarity,
                metadata=result.document.metadata if include_metadata else None,
            )
            for result in results
        ]

    async def find_relevant_trends(
        self,
        owner_id: str,
        context_text: str,
        limit: int = TREND_SEARCH_LIMIT,
        threshold: float = TREND_SEARCH_THRESHOLD,
    ) -> List[TrendMatch]:
        results = await self.document_store.similarity_search(
            context_text,
            owner_id=owner_id,
            document_type=DocumentType.TREND,
            limit=limit,
            threshold=threshold,
        )
        return [
            TrendMatch(
                trend=result.document.metadata,
                relevance=result.similarity,
                content=result.document.content,
            )
            for result in results
        ]

    async def generate_content_ideas(self, owner_id: str, topic: str, platform: str) -> List[ContentIdea]:
        """Ideas drawn from the owner's similar content and relevant trends, best first"""
        similar_content, relevant_trends = await asyncio.gather(
            self.find_similar_content(owner_id, topic, limit=IDEA_CONTENT_LIMIT),
            self.find_relevant_trends(owner_id, topic),
        )

        ideas = [
            ContentIdea(
                type="similar_content",
                topic=f"{topic} - inspired by previous content",
                platform=platform,
                confidence=match.similarity,
                source="user_content",
                metadata=match.metadata or {},
            )
            for match in similar_content
        ]
        ideas.extend(
            ContentIdea(
                type="trend_based",
                topic=f"{topic} - {trend.trend.get('trend_type')}",
                platform=platform,
                confidence=trend.relevance,
                source="trend_analysis",
                metadata=trend.trend,
            )
            for trend in relevant_trends
        )

        ideas.sort(key=lambda idea: -idea.confidence)
        return ideas

    async def update_content_embedding(
        self,
        owner_id: str,
        content_id: str,
        new_content: str,
    ) -> Optional[Document]:
        """Re-index edited content; returns None when nothing is indexed under ``content_id``"""
        documents = await self.document_store.list_by_owner(owner_id, DocumentType.CONTENT)
        existing = next((d for d in documents if d.metadata.get("content_id") == content_id), None)
        if existing is None:
            self.log_warning(f"No indexed document for content {content_id}", owner_id=owner_id)
            return None

        return await self.document_store.update(
            existing.id,
            content=new_content,
            metadata={**existing.metadata, "last_updated": utcnow().isoformat()},
        )


def writing_sample_metadata(content: str, platform: str, content_type: str) -> Dict[str, Any]:
    return {
        "platform": platform,
        "content_type": content_type,
        "word_count": len(content.split()),
        "timestamp": utcnow().isoformat(),
    }
