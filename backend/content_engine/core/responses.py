"""
Standard response models for consumers that expose engine results.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from enum import Enum


class ResponseStatus(str, Enum):
    """Standard response status values"""
    SUCCESS = "success"
    ERROR = "error"
    PARTIAL = "partial"


class ErrorResponse(BaseModel):
    """Standard error response"""
    status: ResponseStatus = ResponseStatus.ERROR
    message: str = Field(..., description="Error message")
    errors: List[str] = Field(default_factory=list, description="Detailed error messages")
    code: Optional[str] = Field(None, description="Error code")
    retryable: bool = Field(False, description="Whether the caller may retry the request")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
