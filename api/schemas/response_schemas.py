"""
Response Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from api.schemas.base_schema import BaseResponse


# Discovery
class DomainResult(BaseModel):
    """Single resolved domain"""
    name: str
    available: bool
    tld: str
    status: str
    price: Optional[float] = None
    flip_score: Optional[int] = None
    trend_strength: Optional[int] = None
    purchase_url: Optional[str] = None


class SearchResponse(BaseResponse):
    """Search / suggest response"""
    domains: List[DomainResult] = Field(default_factory=list)
    count: int = 0
    error: Optional[str] = None
    error_code: Optional[str] = None
    credits_remaining: Optional[int] = None
    details: Optional[Dict[str, Any]] = None


class ScoreResponse(BaseResponse):
    """Score preview"""
    domain: str
    flip_score: int = Field(ge=1, le=100)
    trend_strength: int = Field(ge=1, le=5)


class CheckResponse(BaseResponse):
    """Single-domain availability check"""
    domain: DomainResult


class SearchHistoryItem(BaseModel):
    keyword: str
    operation: str
    result_count: int
    available_count: int = 0
    created_at: datetime


class SearchHistoryResponse(BaseResponse):
    """Caller's recent searches, newest first"""
    searches: List[SearchHistoryItem]
    count: int


class BuyLinkResponse(BaseModel):
    """Buy-link validation result"""
    ok: bool
    url: str
    error: Optional[str] = None
    message: Optional[str] = None


# Credits
class BalanceResponse(BaseResponse):
    """Caller's credit balance"""
    user_id: str
    current_credits: int
    total_purchased_credits: int = 0
    is_admin: bool = False
    credit_costs: Dict[str, int]


class CreditPack(BaseModel):
    """Purchasable credit pack"""
    id: str
    name: str
    credits: int
    price_usd: float
    price_label: str
    description: Optional[str] = None


class CreditPacksResponse(BaseResponse):
    packs: List[CreditPack]


class GrantCreditsResponse(BaseResponse):
    """Result of an admin grant"""
    user_id: str
    new_balance: int


# Admin
class ValidationLogItem(BaseModel):
    """One audit entry"""
    domain: str
    source: str
    status: str
    message: Optional[str] = None
    created_at: datetime


class ValidationLogsResponse(BaseResponse):
    logs: List[ValidationLogItem]
    count: int


# Health
class HealthStatus(BaseModel):
    """Service health status"""
    service: str
    status: str  # healthy, degraded, unhealthy
    latency_ms: Optional[float] = None
    details: Optional[Dict[str, Any]] = None


class HealthCheckResponse(BaseResponse):
    """Health check response"""
    status: str  # healthy, degraded, unhealthy
    version: str
    environment: str
    services: List[HealthStatus]
    uptime_seconds: float
