from .embedding_service import (
    EmbeddingProvider,
    LocalEmbeddingProvider,
    OpenAIEmbeddingProvider,
    create_embedding_provider,
)
from .vector_store import DocumentStore
from .version_store import VersionStore
from .context_service import ContextService
from .writing_style_service import WritingStyleService
from .semantic_content_service import SemanticContentService

__all__ = [
    "EmbeddingProvider",
    "LocalEmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "create_embedding_provider",
    "DocumentStore",
    "VersionStore",
    "ContextService",
    "WritingStyleService",
    "SemanticContentService",
]
