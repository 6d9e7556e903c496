"""
Input Validation Utilities
"""
import re
from email_validator import validate_email, EmailNotValidError

_DOMAIN_PATTERN = re.compile(r'^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.[a-z]{2,}$')


def validate_domain(domain: str) -> bool:
    """Validate domain format (single label plus TLD)

    Args:
        domain: Domain name

    Returns:
        True if valid format
    """
    if not domain:
        return False
    return bool(_DOMAIN_PATTERN.match(domain.lower()))


def validate_email_address(email: str) -> bool:
    """Validate email address syntax

    Args:
        email: Email address

    Returns:
        True if valid
    """
    try:
        validate_email(email, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def sanitize_input(text: str, max_length: int = 200) -> str:
    """Sanitize user input

    Args:
        text: Input text
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    # Remove control characters
    text = ''.join(char for char in text if ord(char) >= 32)

    text = text.strip()

    if len(text) > max_length:
        text = text[:max_length]

    return text
