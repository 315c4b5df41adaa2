"""
Embedding providers.

A provider turns text into a fixed-length float vector. Providers are
passed explicitly to the stores that need them; there is no process-wide
client.
"""

import asyncio
import logging
from typing import List, Optional, Protocol, runtime_checkable

import openai

from ..core.config import Settings, settings as default_settings
from ..core.exceptions import EmbeddingGenerationError

logger = logging.getLogger(__name__)

LOCAL_MODEL_DIMENSIONS = {
    "all-MiniLM-L6-v2": 384,
    "all-mpnet-base-v2": 768,
}


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Capability contract: ``embed(text) -> float[dimension]``"""

    dimension: int

    async def embed(self, text: str) -> List[float]:
        ...


class OpenAIEmbeddingProvider:
    """Embeddings from the OpenAI API"""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        dimension: int = 1536,
        timeout: float = 30.0,
        client: Optional["openai.AsyncOpenAI"] = None,
    ):
        self.model = model
        self.dimension = dimension
        self.client = client or openai.AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    async def embed(self, text: str) -> List[float]:
        try:
            response = await self.client.embeddings.create(
                model=self.model,
                input=text,
                dimensions=self.dimension,
                encoding_format="float",
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI embedding request failed: {e.__class__.__name__}")
            raise EmbeddingGenerationError("Embedding generation failed", provider=self.name) from e

        return list(response.data[0].embedding)


class LocalEmbeddingProvider:
    """Embeddings from a local sentence-transformers model"""

    name = "local"

    def __init__(self, model_name: str = "all-MiniLM-L6-v2", dimension: Optional[int] = None):
        self.model_name = model_name
        self.dimension = dimension or LOCAL_MODEL_DIMENSIONS.get(model_name, 384)
        self._model = None

    def _load_model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def _encode(self, text: str) -> List[float]:
        return self._load_model().encode(text).tolist()

    async def embed(self, text: str) -> List[float]:
        # sentence-transformers is synchronous
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._encode, text)
        except Exception as e:
            logger.error(f"Local embedding failed: {e}")
            raise EmbeddingGenerationError("Embedding generation failed", provider=self.name) from e


def create_embedding_provider(config: Optional[Settings] = None) -> EmbeddingProvider:
    """Build the provider named by ``EMBEDDING_PROVIDER``"""
    config = config or default_settings

    if config.EMBEDDING_PROVIDER == "openai":
        return OpenAIEmbeddingProvider(
            api_key=config.OPENAI_API_KEY,
            model=config.EMBEDDING_MODEL,
            dimension=config.EMBEDDING_DIMENSION,
            timeout=config.EMBEDDING_TIMEOUT_SECONDS,
        )

    if config.EMBEDDING_PROVIDER == "local":
        return LocalEmbeddingProvider(model_name=config.LOCAL_EMBEDDING_MODEL)

    raise ValueError(f"Unsupported embedding provider: {config.EMBEDDING_PROVIDER}")
