"""
Engine error types and the boundary mapping used by HTTP consumers.
"""

import logging
from typing import Any, Dict, List, Optional
from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .responses import ErrorResponse, ResponseStatus

logger = logging.getLogger(__name__)

RETRYABLE_MESSAGE = "The content engine is temporarily unavailable, please retry"


class ContentEngineError(Exception):
    """Base exception for content engine errors"""
    def __init__(self, message: str, code: str = None, details: Dict[str, Any] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ContentEngineError):
    """Input rejected before any embedding or persistence call"""
    def __init__(self, message: str, field: str = None, min_length: int = None):
        details = {}
        if field:
            details["field"] = field
        if min_length is not None:
            details["min_length"] = min_length
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class AnalysisError(ContentEngineError):
    """Input that cannot be tokenized as text"""
    def __init__(self, message: str):
        super().__init__(message, code="ANALYSIS_ERROR")


class NotFoundError(ContentEngineError):
    """Resource not found"""
    def __init__(self, message: str, resource_type: str = None, resource_id: Any = None):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = resource_id
        super().__init__(message, code="NOT_FOUND", details=details)


class EmbeddingGenerationError(ContentEngineError):
    """Embedding provider call failed, timed out or returned a bad vector"""
    def __init__(self, message: str, provider: str = None):
        details = {}
        if provider:
            details["provider"] = provider
        super().__init__(message, code="EMBEDDING_GENERATION_ERROR", details=details)


class ConcurrencyError(ContentEngineError):
    """Version allocation kept conflicting with concurrent writers"""
    def __init__(self, message: str, owner_id: str = None, category: str = None, attempts: int = None):
        details = {}
        if owner_id:
            details["owner_id"] = owner_id
        if category:
            details["category"] = category
        if attempts is not None:
            details["attempts"] = attempts
        super().__init__(message, code="CONCURRENCY_ERROR", details=details)


class BatchStoreError(ContentEngineError):
    """A batch store aborted part way; ``stored`` holds what was persisted"""
    def __init__(self, message: str, stored: List[Any] = None, failed_index: int = None,
                 cause: Optional[BaseException] = None):
        self.stored = list(stored or [])
        self.failed_index = failed_index
        self.cause = cause
        super().__init__(message, code="BATCH_STORE_ERROR", details={
            "stored_ids": [getattr(doc, "id", None) for doc in self.stored],
            "failed_index": failed_index,
        })


CLIENT_ERROR_STATUS = {
    ValidationError: 400,
    NotFoundError: 404,
    AnalysisError: 422,
}

RETRYABLE_ERRORS = (EmbeddingGenerationError, ConcurrencyError, BatchStoreError)


def setup_exception_handlers(app):
    """Setup exception handlers on a FastAPI app that calls into the engine"""

    @app.exception_handler(ContentEngineError)
    async def content_engine_exception_handler(request: Request, exc: ContentEngineError):
        logger.warning(f"Content engine error: {exc.message} (Code: {exc.code})", extra={
            "exception_type": exc.__class__.__name__,
            "code": exc.code,
            "details": exc.details,
            "path": request.url.path,
            "method": request.method
        })

        for error_type, status_code in CLIENT_ERROR_STATUS.items():
            if isinstance(exc, error_type):
                error_response = ErrorResponse(
                    status=ResponseStatus.ERROR,
                    message=exc.message,
                    code=exc.code,
                    details=exc.details
                )
                return JSONResponse(status_code=status_code, content=error_response.model_dump())

        return _retryable_response(exc.code if isinstance(exc, RETRYABLE_ERRORS) else None)

    @app.exception_handler(SQLAlchemyError)
    async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Storage error: {exc.__class__.__name__}", extra={
            "path": request.url.path,
            "method": request.method
        }, exc_info=True)
        return _retryable_response("STORAGE_ERROR")


def _retryable_response(code: Optional[str]) -> JSONResponse:
    error_response = ErrorResponse(
        status=ResponseStatus.ERROR,
        message=RETRYABLE_MESSAGE,
        code=code or "SERVICE_UNAVAILABLE",
        retryable=True
    )
    return JSONResponse(status_code=503, content=error_response.model_dump())
