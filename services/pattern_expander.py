"""
Keyword / wildcard pattern expansion into candidate domains
"""
import re
import logging
from typing import List, Optional

from config.settings import settings
from config.constants import (
    NAME_PREFIXES,
    NAME_SUFFIXES,
    NAME_ALTERNATIVES,
    MIDDLE_FILLERS,
    KEYWORD_PREFIX_COUNT,
    KEYWORD_SUFFIX_COUNT,
    KEYWORD_ALTERNATIVE_COUNT,
    MIN_NAME_LENGTH,
    MAX_NAME_LENGTH,
    TLD_ORDER
)
from core.exceptions import EmptyKeywordError
from core.models import Candidate
from utils.formatters import format_domain

logger = logging.getLogger(__name__)

WILDCARD = "*"

_INVALID_CHARS = re.compile(r"[^a-z0-9*-]")


def normalize_pattern(pattern: Optional[str]) -> str:
    """Lowercase, trim and drop characters that cannot appear in a domain label"""
    if pattern is None:
        return ""
    return _INVALID_CHARS.sub("", pattern.strip().lower())


def is_wildcard(pattern: Optional[str]) -> bool:
    return WILDCARD in (pattern or "")


def _dedupe(names: List[str]) -> List[str]:
    """Drop duplicates keeping first occurrence order"""
    seen = set()
    unique = []
    for name in names:
        if name not in seen:
            seen.add(name)
            unique.append(name)
    return unique


def _is_brandable_length(name: str) -> bool:
    return MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH


def expand_base_names(pattern: str) -> List[str]:
    """
    Turn a raw keyword or wildcard pattern into candidate base names

    Args:
        pattern: Plain keyword ("mind"), suffix pattern ("*mind"),
            prefix pattern ("mind*") or infix pattern ("mind*ly")

    Returns:
        Deduplicated base names, 3-20 chars, in deterministic order

    Raises:
        EmptyKeywordError: pattern is blank after trimming
    """
    cleaned = normalize_pattern(pattern)
    if not cleaned.replace(WILDCARD, "").strip("-"):
        raise EmptyKeywordError()

    if WILDCARD not in cleaned:
        names = [cleaned]
        names += [prefix + cleaned for prefix in NAME_PREFIXES[:KEYWORD_PREFIX_COUNT]]
        names += [cleaned + suffix for suffix in NAME_SUFFIXES[:KEYWORD_SUFFIX_COUNT]]
        names += [cleaned + alt for alt in NAME_ALTERNATIVES[:KEYWORD_ALTERNATIVE_COUNT]]
    elif cleaned.startswith(WILDCARD):
        suffix = cleaned[1:].replace(WILDCARD, "")
        names = [prefix + suffix for prefix in NAME_PREFIXES]
    elif cleaned.endswith(WILDCARD):
        prefix = cleaned[:-1].replace(WILDCARD, "")
        names = [prefix + suffix for suffix in NAME_SUFFIXES]
        names += [prefix + alt for alt in NAME_ALTERNATIVES]
    else:
        head, tail = cleaned.split(WILDCARD, 1)
        tail = tail.replace(WILDCARD, "")
        names = [head + middle + tail for middle in MIDDLE_FILLERS]

    names = [name.strip("-") for name in names]
    return [name for name in _dedupe(names) if _is_brandable_length(name)]


def expand(
    pattern: str,
    tlds: Optional[List[str]] = None,
    tlds_per_name: Optional[int] = None,
    max_candidates: Optional[int] = None
) -> List[Candidate]:
    """
    Expand a pattern into full domain candidates

    Each base name is crossed with the first `tlds_per_name` TLDs; the
    result is cut at `max_candidates` so upstream lookups stay bounded.
    Pure function of its inputs.
    """
    tlds = tlds or TLD_ORDER
    tlds_per_name = tlds_per_name or settings.tlds_per_name
    max_candidates = max_candidates or settings.max_candidates

    candidates: List[Candidate] = []
    for base_name in expand_base_names(pattern):
        for tld in tlds[:tlds_per_name]:
            if len(candidates) >= max_candidates:
                return candidates
            candidates.append(Candidate(base_name=base_name, tld=tld))

    return candidates


def candidates_from_names(
    names: List[str],
    tlds: Optional[List[str]] = None,
    tlds_per_name: Optional[int] = None,
    max_candidates: Optional[int] = None
) -> List[Candidate]:
    """
    Build candidates from free-form names such as AI suggestions

    Names carrying a TLD ("getmind.io") keep it; bare names are crossed
    with the TLD order. Invalid or out-of-range names are skipped.
    """
    tlds = tlds or TLD_ORDER
    tlds_per_name = tlds_per_name or settings.tlds_per_name
    max_candidates = max_candidates or settings.max_candidates

    candidates: List[Candidate] = []
    seen = set()
    for raw in names:
        name = format_domain(raw)

        base_name, _, tld = name.partition(".")
        tld = re.sub(r"[^a-z0-9.]", "", tld).strip(".")
        base_name = normalize_pattern(base_name).replace(WILDCARD, "").strip("-")
        if not _is_brandable_length(base_name):
            logger.debug(f"Skipping unusable suggestion: {raw!r}")
            continue

        for candidate_tld in ([tld] if tld else tlds[:tlds_per_name]):
            candidate = Candidate(base_name=base_name, tld=candidate_tld)
            if candidate in seen:
                continue
            seen.add(candidate)
            candidates.append(candidate)

    return candidates[:max_candidates]
