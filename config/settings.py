"""
Application settings using Pydantic for validation
"""
from typing import List, Optional, Dict
from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path

# Get the base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings with environment variable validation"""

    # Application
    app_env: str = "development"
    app_name: str = "DomainDrip Discovery API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # Supabase (optional - in-process store is used when absent)
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    supabase_service_key: Optional[str] = None

    # Primary availability authority (registrar API)
    primary_api_provider: str = "spaceship"
    primary_api_key: Optional[str] = None
    primary_api_url: str = "https://api.spaceship.com/domains/v1/availability"
    primary_timeout_seconds: float = 8.0

    # Secondary availability authority (RDAP)
    secondary_api_url: str = "https://rdap.org/domain"
    secondary_timeout_seconds: float = 6.0

    # Simulated authorities - never enable in production
    simulation_mode: bool = False

    # Discovery bounds
    tlds_per_name: int = 3
    max_candidates: int = 24
    max_results: int = 15
    resolver_concurrency: int = 8

    # Credits
    starter_credits: int = 10
    credits_per_search: int = 2
    credits_per_wildcard: int = 3
    credits_per_ai_suggest: int = 1
    admin_emails: List[str] = []

    # Purchase links
    purchase_link_base: str = "https://www.spaceship.com/domains/domain-registration/results"
    purchase_link_ref: Optional[str] = None
    purchase_link_campaign: Optional[str] = None
    buy_link_timeout_seconds: float = 5.0

    # Text Generation API (AI suggestions)
    text_api_provider: str = "openrouter"
    text_api_key: Optional[str] = None
    text_api_url: str = "https://openrouter.ai/api/v1"
    text_model: str = "openai/gpt-4o-mini"

    # Security
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"

    # Frontend
    frontend_url: str = "http://localhost:3000"
    allowed_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Middleware feature flags
    enable_request_logging: bool = True

    # Paths
    @property
    def log_dir(self) -> Path:
        return BASE_DIR / "logs"

    class Config:
        env_file = ".env"
        case_sensitive = False

    def is_development(self) -> bool:
        return self.app_env == "development"

    def is_production(self) -> bool:
        return self.app_env == "production"

    def has_supabase(self) -> bool:
        """Check if the Supabase store is configured"""
        return bool(self.supabase_url and self.supabase_service_key)

    def has_primary_api(self) -> bool:
        """Check if the registrar availability API is configured"""
        return bool(self.primary_api_key)

    def has_text_api(self) -> bool:
        """Check if a text generation API is configured"""
        return bool(self.text_api_key)

    def get_credit_costs(self) -> Dict[str, int]:
        """Credits charged per billable operation"""
        return {
            "search": self.credits_per_search,
            "wildcard_explore": self.credits_per_wildcard,
            "ai_suggest": self.credits_per_ai_suggest
        }

    def credit_cost(self, operation: str) -> int:
        """Get credit cost for an operation"""
        key = getattr(operation, "value", operation)
        return self.get_credit_costs()[key]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Create a global settings instance
settings = get_settings()
