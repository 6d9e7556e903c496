"""
Request Schemas
"""
from pydantic import BaseModel, Field, validator

from utils.formatters import format_domain
from utils.validators import sanitize_input, validate_domain


class SearchRequest(BaseModel):
    """Keyword or wildcard search"""
    pattern: str = Field(..., max_length=100, description="Keyword or pattern such as 'ai*' or 'get*mind'")
    include_unavailable: bool = False

    @validator('pattern')
    def clean_pattern(cls, v):
        # Emptiness is reported by the search itself (empty_keyword)
        return sanitize_input(v, max_length=100)


class SuggestRequest(BaseModel):
    """AI-assisted suggestions for a keyword"""
    keyword: str = Field(..., max_length=100)
    include_unavailable: bool = False

    @validator('keyword')
    def clean_keyword(cls, v):
        return sanitize_input(v, max_length=100)


class DomainRequest(BaseModel):
    """Single fully-qualified domain"""
    domain: str = Field(..., min_length=3, max_length=253)

    @validator('domain')
    def validate_domain_name(cls, v):
        domain = format_domain(v)
        if not validate_domain(domain):
            raise ValueError("Invalid domain name")
        return domain


class ScoreRequest(DomainRequest):
    """Score preview request"""


class CheckRequest(DomainRequest):
    """Single-domain availability check"""


class BuyLinkRequest(DomainRequest):
    """Buy-link validation request"""


class GrantCreditsRequest(BaseModel):
    """Admin credit grant"""
    user_id: str = Field(..., min_length=1)
    amount: int = Field(..., ge=1, le=10000)
    reason: str = Field(default="admin_grant", max_length=100)
    purchased: bool = False
