"""
Application constants and enums
"""
from decimal import Decimal
from enum import Enum
from typing import Dict, List


class OperationType(str, Enum):
    """Billable operations gated by the credit ledger"""
    SEARCH = "search"
    WILDCARD_EXPLORE = "wildcard_explore"
    AI_SUGGEST = "ai_suggest"


class ValidationSource(str, Enum):
    """Which authority produced a validation log entry"""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    BUY_LINK = "buy_link"


class ResolutionStatus(str, Enum):
    """Terminal states of an availability resolution"""
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


class UserRole(str, Enum):
    """Flat role model"""
    USER = "user"
    ADMIN = "admin"


# Pattern expansion word lists (order matters: expansion is deterministic)
NAME_PREFIXES: List[str] = [
    "get", "my", "pro", "go", "use", "try", "the", "super",
    "smart", "best", "top", "next", "new", "meta", "cloud", "digital"
]

NAME_SUFFIXES: List[str] = [
    "hub", "lab", "app", "zone", "spot", "box", "kit", "tool", "way", "link",
    "base", "core", "stack", "flow", "pilot", "sync", "wave", "boost", "verse", "scope"
]

NAME_ALTERNATIVES: List[str] = [
    "apps", "tools", "kits", "labs", "studio", "works", "plus",
    "max", "now", "quick", "fast", "easy", "simple"
]

MIDDLE_FILLERS: List[str] = ["", "app", "hub", "lab", "kit", "box", "pro", "go", "my", "get"]

# How many of each list a plain keyword is combined with
KEYWORD_PREFIX_COUNT = 8
KEYWORD_SUFFIX_COUNT = 8
KEYWORD_ALTERNATIVE_COUNT = 6

# Brandable base name length (inclusive)
MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 20

# TLDs in priority order
TLD_ORDER: List[str] = [
    "com", "net", "org", "io", "ai", "app", "dev", "tech", "co", "xyz", "online", "store"
]

# Fallback registration prices (USD/year)
DEFAULT_TLD_PRICES: Dict[str, Decimal] = {
    "com": Decimal("12.99"),
    "net": Decimal("14.99"),
    "org": Decimal("13.99"),
    "io": Decimal("49.99"),
    "ai": Decimal("89.99"),
    "app": Decimal("19.99"),
    "dev": Decimal("15.99"),
    "tech": Decimal("24.99"),
    "co": Decimal("29.99"),
    "xyz": Decimal("9.99")
}
FALLBACK_PRICE = Decimal("15.99")

# FlipScore tables
FLIP_SCORE_BASE = 30

TLD_SCORES: Dict[str, int] = {
    "com": 30, "ai": 28, "io": 25, "app": 20, "dev": 18,
    "net": 15, "tech": 15, "org": 12, "co": 12, "shop": 12,
    "store": 10, "online": 8, "biz": 6, "xyz": 5, "info": 4
}
UNKNOWN_TLD_SCORE = 5

FLIP_TREND_KEYWORDS: List[str] = [
    "ai", "app", "tech", "hub", "pro", "get", "my",
    "smart", "digital", "crypto", "nft", "meta"
]
TREND_KEYWORD_POINTS = 5
TREND_KEYWORD_CAP = 15

GENERIC_WORDS: List[str] = [
    "the", "and", "but", "for", "with", "this", "that", "from", "they", "know", "want"
]
GENERIC_WORD_PENALTY = 10

TREND_STRENGTH_KEYWORDS: List[str] = [
    "ai", "crypto", "nft", "meta", "web3", "tech", "app", "smart", "digital"
]
TREND_STRENGTH_BASE = 2

VOWELS = "aeiou"

# Credit packs (purchase flow itself is handled outside this service)
CREDIT_PACKS: List[Dict] = [
    {
        "id": "pack_10",
        "name": "10 Credits",
        "price_usd": Decimal("5"),
        "credits": 10,
        "description": "Perfect for getting started"
    }
]

# Ledger compare-and-swap attempts before giving up
LEDGER_MAX_CAS_ATTEMPTS = 5

# AI suggestions
MAX_AI_SUGGESTIONS = 5

# Error messages
ERROR_MESSAGES = {
    "empty_keyword": "Please enter a keyword or pattern to search.",
    "insufficient_credits": "You need {required} for this action but only have {available}.",
    "ledger_unavailable": "We couldn't verify your credits. Please try again in a moment.",
    "search_unavailable": "Search is temporarily unavailable. Please try again later.",
    "no_results": "No available domains found for this pattern.",
    "auth_required": "Authentication required. Please log in."
}

# Audit status tokens
STATUS_ERROR = "error"
STATUS_TIMEOUT = "timeout"
STATUS_MISMATCH = "mismatch"
STATUS_INVALID_RESPONSE = "invalid_response"
STATUS_NOT_FOUND = "404"
