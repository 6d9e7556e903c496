"""
Result ranking tests
"""
from config.constants import ResolutionStatus
from core.models import DomainRecord
from services.ranking import rank


def record(name, is_available, flip_score=None):
    return DomainRecord(
        name=name,
        available=is_available,
        tld=name.split(".")[-1],
        status=ResolutionStatus.AVAILABLE if is_available else ResolutionStatus.UNAVAILABLE,
        flip_score=flip_score
    )


class TestRank:

    def test_available_before_unavailable(self):
        ranked = rank([
            record("taken.com", False),
            record("low.com", True, 40),
            record("gone.io", False),
            record("high.com", True, 90)
        ])
        flags = [r.available for r in ranked]
        assert flags == sorted(flags, reverse=True)

    def test_scores_non_increasing(self):
        ranked = rank([record(f"d{i}.com", True, s) for i, s in enumerate([40, 90, 65, 90, 10])])
        scores = [r.flip_score for r in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_stable_for_ties(self):
        ranked = rank([record("first.com", True, 70), record("second.com", True, 70), record("third.com", True, 70)])
        assert [r.name for r in ranked] == ["first.com", "second.com", "third.com"]

    def test_capped_at_fifteen_by_default(self):
        ranked = rank([record(f"d{i}.com", True, i) for i in range(30)])
        assert len(ranked) == 15
        assert ranked[0].flip_score == 29

    def test_explicit_limit(self):
        assert len(rank([record(f"d{i}.com", True, 50) for i in range(10)], limit=3)) == 3

    def test_empty(self):
        assert rank([]) == []
