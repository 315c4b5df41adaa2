"""
Global pytest configuration and fixtures for the content engine.
"""

import hashlib
import os
import sys
from pathlib import Path
from typing import AsyncGenerator, Dict, List, Optional, Sequence

import numpy as np
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Set test environment
os.environ["TESTING"] = "1"
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

TEST_DIMENSION = 8


class FakeEmbeddingProvider:
    """Deterministic embedder: hash-seeded vectors, or fixed ones per text."""

    def __init__(self, dimension: int = TEST_DIMENSION, vectors: Optional[Dict[str, Sequence[float]]] = None):
        self.dimension = dimension
        self.vectors = dict(vectors or {})
        self.calls: List[str] = []
        self.error: Optional[Exception] = None

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        if text in self.vectors:
            return [float(v) for v in self.vectors[text]]

        seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:4], "big")
        return np.random.default_rng(seed).random(self.dimension).tolist()


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    from content_engine.core.database import create_tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False
    )
    await create_tables(engine)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> AsyncGenerator[async_sessionmaker, None]:
    yield async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def embedder() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest_asyncio.fixture
async def document_store(embedder, session_factory):
    from content_engine.services.vector_store import DocumentStore

    return DocumentStore(embedder, session_factory=session_factory, embedding_timeout=5)


@pytest_asyncio.fixture
async def version_store(session_factory):
    from content_engine.services.version_store import VersionStore

    return VersionStore(session_factory=session_factory)


@pytest_asyncio.fixture
async def context_service(document_store, version_store):
    from content_engine.services.context_service import ContextService

    return ContextService(document_store, version_store)


@pytest_asyncio.fixture
async def writing_style_service(document_store, version_store):
    from content_engine.services.writing_style_service import WritingStyleService

    return WritingStyleService(document_store, version_store)


@pytest_asyncio.fixture
async def semantic_service(document_store):
    from content_engine.services.semantic_content_service import SemanticContentService

    return SemanticContentService(document_store)


# Test data fixtures
@pytest.fixture
def professional_context():
    return (
        "I am a senior software engineer with ten years of experience leading engineering teams. "
        "I love building scalable APIs in Python and mentoring developers. "
        "Our team shipped a cloud platform that improved customer onboarding. "
        "I focus on strategy, architecture and product growth across the technology industry."
    )


@pytest.fixture
def linkedin_samples():
    from content_engine.schemas.writing_style import ContentSample

    return [
        ContentSample(
            content=(
                "Last year our team faced a difficult migration. I learned that clear communication "
                "matters more than any framework. What would you have done differently?"
            ),
            platform="linkedin",
            content_type="post",
        ),
        ContentSample(
            content=(
                "Our data shows that 40% of onboarding time is spent on configuration. "
                "Therefore we automated the setup and measured the results across three teams."
            ),
            platform="linkedin",
            content_type="post",
        ),
        ContentSample(
            content=(
                "I believe authentic leadership starts with listening. In my experience the best "
                "engineering managers ask questions before they give answers. Share your thoughts below."
            ),
            platform="blog",
            content_type="article",
        ),
    ]
