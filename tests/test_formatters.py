"""
Formatting helper tests
"""
from decimal import Decimal

import pytest

from utils.formatters import format_credits, format_currency, format_domain


@pytest.mark.parametrize("raw, expected", [
    ("https://www.AIHub.com/pricing", "aihub.com"),
    ("  mindly.io ", "mindly.io"),
    ("http://getmind.ai", "getmind.ai")
])
def test_format_domain(raw, expected):
    assert format_domain(raw) == expected


def test_format_currency():
    assert format_currency(Decimal("5")) == "$5.00"
    assert format_currency(Decimal("1249.5")) == "$1,249.50"
    assert format_currency(12.99, currency="EUR") == "€12.99"
    assert format_currency(None) == "-"


def test_format_credits():
    assert format_credits(1) == "1 credit"
    assert format_credits(0) == "0 credits"
    assert format_credits(3) == "3 credits"
