from ..core.database import Base, async_engine, get_db
from .document import VectorDocument, DocumentType
from .user_context import UserContext, ContextCategory

__all__ = [
    "Base",
    "async_engine",
    "get_db",
    "VectorDocument",
    "DocumentType",
    "UserContext",
    "ContextCategory",
]
