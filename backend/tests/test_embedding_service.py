"""
Tests for embedding providers
"""

import types

import httpx
import openai
import pytest

from content_engine.core.config import Settings
from content_engine.core.exceptions import EmbeddingGenerationError
from content_engine.services.embedding_service import (
    EmbeddingProvider,
    LocalEmbeddingProvider,
    OpenAIEmbeddingProvider,
    create_embedding_provider,
)


class MockEmbeddings:
    def __init__(self, vector=None, error=None):
        self.vector = vector
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return types.SimpleNamespace(data=[types.SimpleNamespace(embedding=self.vector)])


@pytest.mark.asyncio
async def test_openai_provider_requests_configured_dimension():
    embeddings = MockEmbeddings(vector=[0.1, 0.2, 0.3])
    provider = OpenAIEmbeddingProvider(
        api_key="sk-test",
        model="text-embedding-3-small",
        dimension=3,
        client=types.SimpleNamespace(embeddings=embeddings),
    )

    vector = await provider.embed("hello world")

    assert vector == [0.1, 0.2, 0.3]
    assert embeddings.requests == [{
        "model": "text-embedding-3-small",
        "input": "hello world",
        "dimensions": 3,
        "encoding_format": "float",
    }]


@pytest.mark.asyncio
async def test_openai_provider_wraps_api_errors():
    request = httpx.Request("POST", "https://api.openai.com/v1/embeddings")
    embeddings = MockEmbeddings(error=openai.APIConnectionError(request=request))
    provider = OpenAIEmbeddingProvider(
        api_key="sk-test",
        dimension=3,
        client=types.SimpleNamespace(embeddings=embeddings),
    )

    with pytest.raises(EmbeddingGenerationError) as exc_info:
        await provider.embed("hello world")

    assert exc_info.value.details == {"provider": "openai"}
    assert isinstance(exc_info.value.__cause__, openai.APIConnectionError)


@pytest.mark.asyncio
async def test_local_provider_wraps_model_errors(monkeypatch):
    provider = LocalEmbeddingProvider()

    def broken_encode(text):
        raise RuntimeError("model missing")

    monkeypatch.setattr(provider, "_encode", broken_encode)

    with pytest.raises(EmbeddingGenerationError):
        await provider.embed("hello world")


def test_factory_builds_configured_provider():
    openai_provider = create_embedding_provider(
        Settings(EMBEDDING_PROVIDER="openai", OPENAI_API_KEY="sk-test", EMBEDDING_DIMENSION=512)
    )
    local_provider = create_embedding_provider(
        Settings(EMBEDDING_PROVIDER="local", LOCAL_EMBEDDING_MODEL="all-mpnet-base-v2")
    )

    assert isinstance(openai_provider, OpenAIEmbeddingProvider)
    assert openai_provider.dimension == 512
    assert isinstance(local_provider, LocalEmbeddingProvider)
    assert local_provider.dimension == 768


def test_providers_satisfy_protocol(embedder):
    assert isinstance(embedder, EmbeddingProvider)
    assert isinstance(LocalEmbeddingProvider(), EmbeddingProvider)
