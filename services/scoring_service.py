"""
FlipScore Engine

Single implementation of the brandability rules. Every call site (search
results, score previews, AI suggestions) goes through `score()`.
"""
import re
from typing import Tuple

from config.constants import (
    FLIP_SCORE_BASE,
    TLD_SCORES,
    UNKNOWN_TLD_SCORE,
    FLIP_TREND_KEYWORDS,
    TREND_KEYWORD_POINTS,
    TREND_KEYWORD_CAP,
    GENERIC_WORDS,
    GENERIC_WORD_PENALTY,
    TREND_STRENGTH_KEYWORDS,
    TREND_STRENGTH_BASE,
    MAX_NAME_LENGTH,
    VOWELS
)
from core.models import FlipScore

_DIGIT_OR_HYPHEN = re.compile(r"[-0-9]")
_LOWERCASE_LETTERS = re.compile(r"^[a-z]+$")


def split_domain(domain_name: str) -> Tuple[str, str]:
    """
    Split a domain into (name, tld), both lowercased

    Only the first two labels count: "mind.co.uk" scores as name "mind"
    with TLD "co".
    """
    labels = domain_name.strip().lower().split(".")
    return labels[0], labels[1] if len(labels) > 1 else ""


def _length_points(length: int) -> int:
    if length <= 4:
        return 30
    if length <= 6:
        return 25
    if length <= 8:
        return 15
    if length <= 10:
        return 5
    if length > 15:
        return -20
    return 0


def _brandability_points(name: str) -> int:
    # Names past the brandable ceiling earn no brandability credit
    if len(name) > MAX_NAME_LENGTH:
        return 0

    points = 0
    if not _DIGIT_OR_HYPHEN.search(name):
        points += 15
    if _LOWERCASE_LETTERS.match(name):
        points += 5

    vowels = sum(1 for char in name if char in VOWELS)
    consonants = len(name) - vowels
    if vowels > 0 and consonants > 0 and vowels / len(name) >= 0.2:
        points += 10

    return points


def calculate_flip_score(domain_name: str) -> int:
    """
    Score a domain 1-100 on brandability and resale potential

    Additive model on a base of 30: length, TLD value, brandability,
    pronounceability, trending keywords and a generic-word penalty.
    """
    name, tld = split_domain(domain_name)

    score = FLIP_SCORE_BASE
    score += _length_points(len(name))
    score += TLD_SCORES.get(tld, UNKNOWN_TLD_SCORE)
    score += _brandability_points(name)

    matches = sum(1 for keyword in FLIP_TREND_KEYWORDS if keyword in name)
    score += min(TREND_KEYWORD_CAP, matches * TREND_KEYWORD_POINTS)

    if any(word in name for word in GENERIC_WORDS):
        score -= GENERIC_WORD_PENALTY

    return max(1, min(100, int(round(score))))


def calculate_trend_strength(domain_name: str) -> int:
    """Keyword trend strength, 1-5 stars"""
    name, _ = split_domain(domain_name)
    matches = sum(1 for keyword in TREND_STRENGTH_KEYWORDS if keyword in name)
    return max(1, min(5, TREND_STRENGTH_BASE + matches))


def score(domain_name: str) -> FlipScore:
    """Compute FlipScore and trend strength for a domain name"""
    return FlipScore(
        flip_score=calculate_flip_score(domain_name),
        trend_strength=calculate_trend_strength(domain_name)
    )
