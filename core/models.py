"""
Domain models shared by the discovery pipeline
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, List, Dict, Any

from config.constants import ResolutionStatus, ValidationSource, UserRole


@dataclass(frozen=True)
class Candidate:
    """A base name paired with a TLD, created per search request"""
    base_name: str
    tld: str

    @property
    def name(self) -> str:
        return f"{self.base_name}.{self.tld}"


@dataclass
class DomainRecord:
    """Resolved domain returned to callers"""
    name: str
    available: bool
    tld: str
    price: Optional[Decimal] = None
    status: ResolutionStatus = ResolutionStatus.UNAVAILABLE
    flip_score: Optional[int] = None
    trend_strength: Optional[int] = None
    purchase_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        data["price"] = float(self.price) if self.price is not None else None
        return data


@dataclass(frozen=True)
class ValidationLogEntry:
    """Append-only audit record of a resolver or buy-link anomaly"""
    domain: str
    source: ValidationSource
    status: str
    message: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_row(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "source": self.source.value,
            "status": self.status,
            "message": self.message,
            "created_at": self.created_at.isoformat()
        }


@dataclass
class LedgerBalance:
    """Credit ledger state for one user"""
    user_id: str
    current_credits: int
    total_purchased_credits: int = 0
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class LedgerDebit:
    """Result of an atomic debit: new balance when applied, current balance otherwise"""
    applied: bool
    balance: int


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller"""
    user_id: str
    role: UserRole = UserRole.USER
    email: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class FlipScore:
    """Brandability score and keyword trend strength"""
    flip_score: int
    trend_strength: int


@dataclass
class SearchResult:
    """Outcome of a billable discovery operation"""
    domains: List[DomainRecord] = field(default_factory=list)
    message: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    credits_remaining: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error_code is None


@dataclass(frozen=True)
class SearchHistoryEntry:
    """One billable discovery request made by a user"""
    user_id: str
    keyword: str
    operation: str
    result_count: int
    available_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_row(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "keyword": self.keyword,
            "operation": self.operation,
            "result_count": self.result_count,
            "available_count": self.available_count,
            "created_at": self.created_at.isoformat()
        }
