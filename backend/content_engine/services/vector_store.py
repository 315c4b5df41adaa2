"""
Document Store - owner-scoped documents with embeddings and cosine search.

Each document is persisted together with the embedding of its content.
Store and update are single transactions: a document is either written with
its embedding or not written at all. Ranking is ``1 - cosine distance``
computed over the candidate rows, so any SQL backend with a JSON column
can serve as the vector store.
"""

import asyncio
import math
import time
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity
from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..core.config import settings
from ..core.exceptions import (
    BatchStoreError,
    EmbeddingGenerationError,
    NotFoundError,
    ValidationError,
)
from ..core.logging_config import LoggerMixin
from ..models.document import DocumentType, VectorDocument, utcnow
from ..schemas.document import Document, DocumentCreate, SimilarityResult
from .embedding_service import EmbeddingProvider


def similarity_scores(query: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """Row-wise ``1 - cosine distance`` clipped to [0, 1]; zero vectors score 0."""
    similarities = cosine_similarity(np.asarray([query], dtype=float), matrix)[0]
    return np.clip(similarities, 0.0, 1.0)


def _to_document(record: VectorDocument) -> Document:
    return Document(
        id=record.id,
        owner_id=record.owner_id,
        content=record.content,
        document_type=DocumentType(record.document_type),
        metadata=dict(record.doc_metadata or {}),
        embedding=list(record.embedding),
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def _coerce_document_type(document_type) -> DocumentType:
    try:
        return DocumentType(document_type)
    except ValueError:
        raise ValidationError(f"Unknown document type: {document_type}", field="document_type")


class DocumentStore(LoggerMixin):
    """Vector-backed document store"""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        session_factory: Optional[async_sessionmaker] = None,
        embedding_timeout: Optional[float] = None,
    ):
        if session_factory is None:
            from ..core.database import AsyncSessionLocal
            session_factory = AsyncSessionLocal

        self.embedding_provider = embedding_provider
        self.session_factory = session_factory
        self.dimension = embedding_provider.dimension
        self.embedding_timeout = (
            settings.EMBEDDING_TIMEOUT_SECONDS if embedding_timeout is None else embedding_timeout
        )

    # Embeddings

    async def generate_embedding(self, text: str) -> List[float]:
        """One provider call, bounded by the timeout; never returns a fallback vector"""
        start_time = time.time()
        try:
            embedding = await asyncio.wait_for(
                self.embedding_provider.embed(text), timeout=self.embedding_timeout
            )
        except EmbeddingGenerationError:
            raise
        except asyncio.TimeoutError as e:
            raise EmbeddingGenerationError(
                f"Embedding generation timed out after {self.embedding_timeout}s"
            ) from e
        except Exception as e:
            raise EmbeddingGenerationError("Embedding generation failed") from e

        try:
            vector = [float(value) for value in embedding]
        except (TypeError, ValueError) as e:
            raise EmbeddingGenerationError("Embedding provider returned a non-numeric vector") from e

        if len(vector) != self.dimension:
            raise EmbeddingGenerationError(
                f"Embedding has dimension {len(vector)}, expected {self.dimension}"
            )
        if not all(math.isfinite(value) for value in vector):
            raise EmbeddingGenerationError("Embedding contains non-finite values")

        self.logger.debug(f"Generated embedding in {(time.time() - start_time) * 1000:.1f}ms")
        return vector

    @staticmethod
    def _validate_content(content: str) -> None:
        if not isinstance(content, str) or not content.strip():
            raise ValidationError("Document content must not be empty", field="content")

    @staticmethod
    def _validate_owner(owner_id: str) -> None:
        if not owner_id:
            raise ValidationError("owner_id is required", field="owner_id")

    @staticmethod
    def _validate_search_bounds(limit: int, threshold: float) -> None:
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")
        if not 0.0 <= threshold <= 1.0:
            raise ValidationError("threshold must be within [0, 1]", field="threshold")

    async def _commit(self, session: AsyncSession) -> None:
        try:
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise

    # Writes

    async def store(
        self,
        owner_id: str,
        content: str,
        metadata: Optional[Dict[str, Any]] = None,
        document_type: DocumentType = DocumentType.CONTENT,
    ) -> Document:
        """Embed and persist a new document"""
        self._validate_owner(owner_id)
        self._validate_content(content)
        document_type = _coerce_document_type(document_type)

        embedding = await self.generate_embedding(content)

        async with self.session_factory() as session:
            record = VectorDocument(
                owner_id=owner_id,
                content=content,
                document_type=document_type.value,
                doc_metadata=dict(metadata or {}),
                embedding=embedding,
            )
            session.add(record)
            await self._commit(session)

        self.log_info(
            "Stored document",
            owner_id=owner_id,
            document_id=record.id,
            document_type=document_type.value,
        )
        return _to_document(record)

    async def update(
        self,
        document_id: str,
        content: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[Document]:
        """Update content and/or metadata; re-embed only when the content changes"""
        if content is None and metadata is None:
            return await self.get_document(document_id)
        if content is not None:
            self._validate_content(content)

        async with self.session_factory() as session:
            record = await session.get(VectorDocument, document_id)
            if record is None:
                return None

            if content is not None and content != record.content:
                record.embedding = await self.generate_embedding(content)
                record.content = content
            if metadata is not None:
                record.doc_metadata = dict(metadata)
            record.updated_at = utcnow()

            await self._commit(session)

        self.log_info("Updated document", document_id=document_id)
        return _to_document(record)

    async def delete(self, document_id: str) -> bool:
        """Delete a document; returns whether it existed"""
        async with self.session_factory() as session:
            result = await session.execute(
                delete(VectorDocument).where(VectorDocument.id == document_id)
            )
            await self._commit(session)

        existed = result.rowcount > 0
        if existed:
            self.log_info("Deleted document", document_id=document_id)
        return existed

    async def delete_by_owner(self, owner_id: str) -> int:
        """Remove every document of an owner (account removal)"""
        async with self.session_factory() as session:
            result = await session.execute(
                delete(VectorDocument).where(VectorDocument.owner_id == owner_id)
            )
            await self._commit(session)

        self.log_info(f"Deleted {result.rowcount} documents for owner", owner_id=owner_id)
        return result.rowcount

    async def batch_store(self, documents: Sequence[DocumentCreate]) -> List[Document]:
        """Store documents one after another to stay within the provider rate budget.

        The whole batch is validated first. The first failure aborts the rest
        and raises BatchStoreError carrying the documents already stored.
        """
        for document in documents:
            self._validate_owner(document.owner_id)
            self._validate_content(document.content)

        stored: List[Document] = []
        for index, document in enumerate(documents):
            try:
                stored.append(await self.store(
                    owner_id=document.owner_id,
                    content=document.content,
                    metadata=document.metadata,
                    document_type=document.document_type,
                ))
            except (EmbeddingGenerationError, SQLAlchemyError) as e:
                self.log_error(
                    f"Batch store aborted at index {index} after {len(stored)} documents",
                    owner_id=document.owner_id,
                )
                raise BatchStoreError(
                    f"Batch store aborted at document {index}: {e}",
                    stored=stored,
                    failed_index=index,
                    cause=e,
                ) from e

        return stored

    # Reads

    async def get_document(self, document_id: str) -> Optional[Document]:
        async with self.session_factory() as session:
            record = await session.get(VectorDocument, document_id)
            return _to_document(record) if record is not None else None

    async def require_document(self, document_id: str) -> Document:
        document = await self.get_document(document_id)
        if document is None:
            raise NotFoundError(
                f"Document {document_id} not found",
                resource_type="document",
                resource_id=document_id,
            )
        return document

    async def list_by_owner(
        self,
        owner_id: str,
        document_type: Optional[DocumentType] = None,
    ) -> List[Document]:
        """All documents of an owner, newest first"""
        stmt = select(VectorDocument).where(VectorDocument.owner_id == owner_id)
        if document_type is not None:
            stmt = stmt.where(VectorDocument.document_type == _coerce_document_type(document_type).value)
        stmt = stmt.order_by(VectorDocument.created_at.desc())

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [_to_document(record) for record in result.scalars().all()]

    async def get_owner_stats(self, owner_id: str) -> Dict[str, int]:
        """Document counts per type for an owner"""
        stmt = (
            select(VectorDocument.document_type, func.count(VectorDocument.id))
            .where(VectorDocument.owner_id == owner_id)
            .group_by(VectorDocument.document_type)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return {document_type: count for document_type, count in result.all()}

    async def get_global_stats(self) -> Dict[str, int]:
        """Document counts per type across all owners"""
        stmt = (
            select(VectorDocument.document_type, func.count(VectorDocument.id))
            .group_by(VectorDocument.document_type)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return {document_type: count for document_type, count in result.all()}

    # Search

    async def similarity_search(
        self,
        query: str,
        owner_id: Optional[str] = None,
        document_type: Optional[DocumentType] = None,
        limit: Optional[int] = None,
        threshold: Optional[float] = None,
        document_types: Optional[Sequence[DocumentType]] = None,
    ) -> List[SimilarityResult]:
        """Rank stored documents against ``query``.

        ``document_type`` restricts to one type, ``document_types`` to several.
        """
        limit = settings.SEARCH_DEFAULT_LIMIT if limit is None else limit
        threshold = settings.SEARCH_DEFAULT_THRESHOLD if threshold is None else threshold
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("Search query must not be empty", field="query")
        self._validate_search_bounds(limit, threshold)
        if document_type is not None:
            document_types = [document_type]
        if document_types:
            document_types = [_coerce_document_type(t) for t in document_types]

        query_embedding = await self.generate_embedding(query)
        return await self.search_by_vector(
            query_embedding,
            owner_id=owner_id,
            document_types=document_types,
            limit=limit,
            threshold=threshold,
        )

    async def find_similar_documents(
        self,
        document_id: str,
        limit: Optional[int] = None,
        threshold: Optional[float] = None,
    ) -> List[SimilarityResult]:
        """Documents of the same owner that resemble an existing document"""
        limit = settings.SIMILAR_DOCUMENTS_DEFAULT_LIMIT if limit is None else limit
        threshold = settings.SIMILAR_DOCUMENTS_DEFAULT_THRESHOLD if threshold is None else threshold
        self._validate_search_bounds(limit, threshold)

        source = await self.require_document(document_id)
        return await self.search_by_vector(
            source.embedding,
            owner_id=source.owner_id,
            limit=limit,
            threshold=threshold,
            exclude_id=source.id,
        )

    async def search_by_vector(
        self,
        query_embedding: Sequence[float],
        owner_id: Optional[str] = None,
        document_types: Optional[Sequence[DocumentType]] = None,
        limit: int = 10,
        threshold: float = 0.7,
        exclude_id: Optional[str] = None,
    ) -> List[SimilarityResult]:
        """Shared ranking: filter, score, drop below threshold, sort, truncate.

        Ties on similarity go to the most recently created document.
        """
        self._validate_search_bounds(limit, threshold)

        stmt = select(VectorDocument)
        if owner_id is not None:
            stmt = stmt.where(VectorDocument.owner_id == owner_id)
        if document_types:
            stmt = stmt.where(VectorDocument.document_type.in_(
                [_coerce_document_type(t).value for t in document_types]
            ))
        if exclude_id is not None:
            stmt = stmt.where(VectorDocument.id != exclude_id)

        start_time = time.time()
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            records = result.scalars().all()

        candidates = [r for r in records if len(r.embedding) == len(query_embedding)]
        if len(candidates) != len(records):
            self.log_warning(
                f"Skipped {len(records) - len(candidates)} documents with mismatched embedding dimension",
                owner_id=owner_id,
            )
        if not candidates:
            return []

        matrix = np.asarray([record.embedding for record in candidates], dtype=float)
        scores = similarity_scores(query_embedding, matrix)

        ranked = [
            (float(score), record)
            for score, record in zip(scores, candidates)
            if score >= threshold
        ]
        ranked.sort(key=lambda pair: (-pair[0], -pair[1].created_at.timestamp()))

        self.logger.debug(
            f"Ranked {len(candidates)} candidates in {(time.time() - start_time) * 1000:.1f}ms"
        )
        return [
            SimilarityResult(document=_to_document(record), similarity=score)
            for score, record in ranked[:limit]
        ]
