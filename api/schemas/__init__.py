"""
API Schemas Package
"""

# Base schemas
from api.schemas.base_schema import (
    BaseResponse,
    ErrorResponse
)

# Request schemas
from api.schemas.request_schemas import (
    SearchRequest,
    SuggestRequest,
    ScoreRequest,
    CheckRequest,
    BuyLinkRequest,
    GrantCreditsRequest
)

# Response schemas
from api.schemas.response_schemas import (
    DomainResult,
    SearchResponse,
    ScoreResponse,
    CheckResponse,
    SearchHistoryItem,
    SearchHistoryResponse,
    BuyLinkResponse,
    BalanceResponse,
    CreditPack,
    CreditPacksResponse,
    GrantCreditsResponse,
    ValidationLogItem,
    ValidationLogsResponse,
    HealthStatus,
    HealthCheckResponse
)

# Error schemas
from api.schemas.error_schemas import (
    AuthenticationErrorResponse,
    InsufficientCreditsErrorResponse,
    ServiceErrorResponse
)

__all__ = [
    # Base
    "BaseResponse",
    "ErrorResponse",

    # Requests
    "SearchRequest",
    "SuggestRequest",
    "ScoreRequest",
    "CheckRequest",
    "BuyLinkRequest",
    "GrantCreditsRequest",

    # Responses
    "DomainResult",
    "SearchResponse",
    "ScoreResponse",
    "CheckResponse",
    "SearchHistoryItem",
    "SearchHistoryResponse",
    "BuyLinkResponse",
    "BalanceResponse",
    "CreditPack",
    "CreditPacksResponse",
    "GrantCreditsResponse",
    "ValidationLogItem",
    "ValidationLogsResponse",
    "HealthStatus",
    "HealthCheckResponse",

    # Errors
    "AuthenticationErrorResponse",
    "InsufficientCreditsErrorResponse",
    "ServiceErrorResponse"
]
