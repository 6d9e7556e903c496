"""
Error Response Schemas (OpenAPI documentation of non-2xx bodies)
"""
from pydantic import BaseModel
from typing import Optional, Dict, Any


class ErrorBody(BaseModel):
    type: str
    message: str
    request_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class AuthenticationErrorResponse(BaseModel):
    """401/403 body produced by the application exception handler"""
    success: bool = False
    error: ErrorBody


class InsufficientCreditsErrorResponse(BaseModel):
    """402 body: enough data for the client to offer a credit pack"""
    success: bool = False
    error: str
    error_code: str = "insufficient_credits"
    details: Dict[str, Any]
    credits_remaining: Optional[int] = None


class ServiceErrorResponse(BaseModel):
    """Generic error response"""
    success: bool = False
    error: str
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
