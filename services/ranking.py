"""
Result ranking: available first, then FlipScore descending
"""
from typing import List, Optional

from config.settings import settings
from core.models import DomainRecord


def _rank_key(record: DomainRecord):
    # Missing scores sort below any real score (scores are >= 1)
    flip_score = record.flip_score if record.flip_score is not None else 0
    return (not record.available, -flip_score)


def rank(records: List[DomainRecord], limit: Optional[int] = None) -> List[DomainRecord]:
    """
    Order records for display and cap the payload

    Stable: ties keep the incoming (expansion) order.
    """
    limit = limit if limit is not None else settings.max_results
    return sorted(records, key=_rank_key)[:limit]
