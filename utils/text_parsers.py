"""
Text Parsing Utilities
"""
import re
import json
from typing import List, Any, Optional
import logging

logger = logging.getLogger(__name__)


def extract_json_from_text(text: str) -> Optional[Any]:
    """Extract JSON from text that may contain other content

    Args:
        text: Text potentially containing JSON

    Returns:
        Parsed JSON or None
    """
    # Try direct parsing first
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Try to find JSON in markdown code blocks
    json_block_pattern = r'```(?:json)?\s*(\{.*?\}|\[.*?\])\s*```'
    for match in re.findall(json_block_pattern, text, re.DOTALL):
        try:
            return json.loads(match)
        except json.JSONDecodeError:
            continue

    # Try to find a bare array or object
    for pattern in (r'(\[[^\[\]]*\])', r'(\{[^{}]*\})'):
        for match in re.findall(pattern, text, re.DOTALL):
            try:
                return json.loads(match)
            except json.JSONDecodeError:
                continue

    return None


def parse_list_from_text(text: str) -> List[str]:
    """Parse list items from text

    Args:
        text: Text containing list items

    Returns:
        List of items
    """
    items = []

    # Numbered or bulleted lines
    for line in text.split('\n'):
        match = re.match(r'^(?:\d+[.)]|[-*•])\s+(.+)$', line.strip())
        if match:
            items.append(match.group(1).strip())

    if not items:
        if ',' in text:
            items = [item.strip() for item in text.split(',') if item.strip()]
        else:
            items = [line.strip() for line in text.split('\n') if line.strip()]

    return items


def parse_domain_suggestions(text: str, limit: int) -> List[str]:
    """Pull up to `limit` domain names out of a model reply

    Accepts a JSON array (the requested format), a JSON object holding an
    array, or a plain list as a fallback.
    """
    if not text:
        return []

    data = extract_json_from_text(text)
    if isinstance(data, dict):
        data = next((v for v in data.values() if isinstance(v, list)), None)

    if isinstance(data, list):
        items = [item for item in data if isinstance(item, str)]
    else:
        items = parse_list_from_text(text)

    cleaned = [item.strip().strip('"\'`') for item in items]
    return [item for item in cleaned if item][:limit]
