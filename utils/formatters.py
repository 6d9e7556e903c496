"""
Text and Data Formatting Utilities
"""
from decimal import Decimal
from typing import Optional, Union
from urllib.parse import urlencode
import re

from config.settings import settings

AFFILIATE_SOURCE = "domaindrip"
AFFILIATE_MEDIUM = "affiliate"


def format_domain(domain: str) -> str:
    """Format domain for consistency

    Args:
        domain: Raw domain or URL

    Returns:
        Bare lowercase host name
    """
    domain = (domain or "").lower().strip()

    # Remove protocol if present
    domain = re.sub(r'^https?://', '', domain)

    # Remove www
    domain = re.sub(r'^www\.', '', domain)

    # Drop any path
    return domain.split('/')[0]


def build_purchase_url(
    domain: str,
    base_url: Optional[str] = None,
    ref: Optional[str] = None,
    campaign: Optional[str] = None
) -> str:
    """Registrar search URL for a domain, with optional affiliate tracking

    Args:
        domain: Domain name
        base_url: Registrar results page; defaults to settings
        ref: Affiliate reference; defaults to settings
        campaign: UTM campaign; defaults to settings

    Returns:
        Purchase URL
    """
    base_url = base_url or settings.purchase_link_base
    ref = (ref if ref is not None else settings.purchase_link_ref or "").strip()
    campaign = (campaign if campaign is not None else settings.purchase_link_campaign or "").strip()

    params = {"search": domain.strip()}
    if ref:
        params["ref"] = ref
    if campaign:
        params["utm_source"] = AFFILIATE_SOURCE
        params["utm_medium"] = AFFILIATE_MEDIUM
        params["utm_campaign"] = campaign

    return f"{base_url}?{urlencode(params)}"


def format_currency(amount: Optional[Union[Decimal, float]], currency: str = 'USD') -> str:
    """Format currency amount

    Args:
        amount: Amount
        currency: Currency code

    Returns:
        Formatted currency string
    """
    if amount is None:
        return "-"
    if currency == 'USD':
        return f'${amount:,.2f}'
    elif currency == 'EUR':
        return f'€{amount:,.2f}'
    else:
        return f'{currency} {amount:,.2f}'


def format_credits(credits: int) -> str:
    return f"{credits} credit" if credits == 1 else f"{credits} credits"
