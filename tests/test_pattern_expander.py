"""
Pattern expansion tests
"""
import pytest

from config.constants import MAX_NAME_LENGTH, MIN_NAME_LENGTH
from core.exceptions import EmptyKeywordError
from core.models import Candidate
from services.pattern_expander import (
    candidates_from_names,
    expand,
    expand_base_names,
    is_wildcard,
    normalize_pattern
)


class TestExpandBaseNames:
    """Base name generation"""

    def test_literal_keyword_comes_first(self):
        names = expand_base_names("mind")
        assert names[0] == "mind"
        assert names[1:3] == ["getmind", "mymind"]
        assert "mindhub" in names
        assert "mindapps" in names

    def test_prefix_pattern_uses_suffixes(self):
        names = expand_base_names("ai*")
        assert names[:3] == ["aihub", "ailab", "aiapp"]
        assert all(name.startswith("ai") for name in names)

    def test_suffix_pattern_uses_prefixes(self):
        names = expand_base_names("*mind")
        assert names[:3] == ["getmind", "mymind", "promind"]
        assert all(name.endswith("mind") for name in names)

    def test_infix_pattern_uses_fillers(self):
        names = expand_base_names("get*mind")
        assert names[0] == "getmind"
        assert "getappmind" in names

    @pytest.mark.parametrize("keyword", ["mind", "ai", "x", "cloudcomputing", "a-b", "ai*", "*ly", "go*go"])
    def test_lengths_are_brandable(self, keyword):
        for name in expand_base_names(keyword):
            assert MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH

    def test_no_duplicates(self):
        names = expand_base_names("go*go")
        assert len(names) == len(set(names))

    @pytest.mark.parametrize("pattern", ["", "   ", "*", "--", "!!!", None])
    def test_blank_patterns_rejected(self, pattern):
        with pytest.raises(EmptyKeywordError):
            expand_base_names(pattern)

    def test_overlong_keyword_yields_nothing(self):
        assert expand_base_names("a" * 25) == []


class TestExpand:
    """Candidate generation"""

    def test_deterministic(self):
        assert expand("mind") == expand("mind")

    def test_bounded_by_ceiling(self):
        assert len(expand("mind")) == 24
        assert len(expand("mind", max_candidates=5)) == 5

    def test_crosses_names_with_tld_order(self):
        candidates = expand("mind")
        assert [c.name for c in candidates[:4]] == ["mind.com", "mind.net", "mind.org", "getmind.com"]

    def test_tlds_per_name_configurable(self):
        candidates = expand("mind", tlds_per_name=1)
        assert all(c.tld == "com" for c in candidates)

    def test_wildcard_includes_expected_candidates(self):
        names = [c.name for c in expand("ai*")]
        assert "aihub.com" in names
        assert "aiapp.com" in names

    def test_input_is_normalized(self):
        assert expand("  MIND! ") == expand("mind")

    def test_empty_raises(self):
        with pytest.raises(EmptyKeywordError):
            expand("")


class TestHelpers:

    def test_normalize_pattern(self):
        assert normalize_pattern("  Get*Mind.io ") == "get*mindio"
        assert normalize_pattern(None) == ""

    def test_is_wildcard(self):
        assert is_wildcard("ai*")
        assert not is_wildcard("ai")

    def test_candidates_from_names(self):
        candidates = candidates_from_names(
            ["getmind.io", "https://www.brainy.ai/path", "mindly", "x", "getmind.io"]
        )
        assert candidates[:2] == [Candidate("getmind", "io"), Candidate("brainy", "ai")]
        assert [c.name for c in candidates[2:]] == ["mindly.com", "mindly.net", "mindly.org"]

    def test_candidates_from_names_capped(self):
        names = [f"name{i}" for i in range(20)]
        assert len(candidates_from_names(names, max_candidates=10)) == 10
