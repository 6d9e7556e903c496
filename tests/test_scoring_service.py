"""
FlipScore engine tests
"""
import pytest

from services.scoring_service import (
    calculate_flip_score,
    calculate_trend_strength,
    score,
    split_domain
)


class TestFlipScore:

    def test_short_premium_domain(self):
        assert 90 <= score("ai.com").flip_score <= 100

    def test_long_domain_scores_low(self):
        assert 20 <= score("verylongdomainnamethatistoohardtoremember.com").flip_score <= 35

    def test_tld_bonus(self):
        assert score("startup.com").flip_score > score("startup.xyz").flip_score

    def test_pure(self):
        assert score("getmind.io") == score("getmind.io")

    @pytest.mark.parametrize("domain", [
        "a.com",
        "the-and-for-with-123.xyz",
        "x1-2-3-4-5-6-7-8-9-0-1-2.unknown",
        "aihubapptechpro.ai"
    ])
    def test_clamped(self, domain):
        assert 1 <= calculate_flip_score(domain) <= 100

    def test_digits_and_hyphens_cost_points(self):
        assert calculate_flip_score("mind-ly.net") < calculate_flip_score("mindly.net")

    def test_generic_word_penalty(self):
        assert calculate_flip_score("thebox.org") < calculate_flip_score("zebox.org")

    def test_case_insensitive(self):
        assert score("AI.com") == score("ai.com")
        assert score("GetMind.IO") == score("getmind.io")

    def test_multi_label_uses_second_label(self):
        assert calculate_flip_score("mind.co.uk") == calculate_flip_score("mind.co")
        assert calculate_flip_score("mind.co.uk") > calculate_flip_score("mind.zzz")

    def test_unknown_tld_gets_small_bonus(self):
        assert calculate_flip_score("startup.zzz") < calculate_flip_score("startup.com")


class TestTrendStrength:

    def test_baseline(self):
        assert calculate_trend_strength("mind.com") == 2

    def test_keywords_add_strength(self):
        assert calculate_trend_strength("aicrypto.com") == 4

    def test_capped_at_five(self):
        assert calculate_trend_strength("aicryptonftmetaweb3.com") == 5


def test_split_domain():
    assert split_domain("GetMind.IO") == ("getmind", "io")
    assert split_domain("mind.co.uk") == ("mind", "co")
    assert split_domain("nodot") == ("nodot", "")
