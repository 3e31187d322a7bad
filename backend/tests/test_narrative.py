"""
Tests for the template-driven narrative composer.
"""
import pytest

from pitchintel.schemas.brief import JobSignal, NewsItem, TechStackItem, ToneInsights, UserCompany
from pitchintel.services.narrative import (
    SUMMARY_CLOSING,
    compose_narrative,
    normalise_sentiment,
    read_signals,
    requester_phrases,
    signal_tag_for,
    unique_sentences,
)

TAGS = {
    f"{base} - {sentiment} Market Position"
    for base in ("Scaling Operations", "Strategic Growth")
    for sentiment in ("Positive", "Negative", "Neutral")
}


def jobs(n: int) -> list[JobSignal]:
    return [JobSignal(title=f"Role {i}") for i in range(n)]


def news(*titles: str) -> list[NewsItem]:
    return [NewsItem(title=t, url=f"https://n.example/{i}") for i, t in enumerate(titles)]


def stack(*names: str) -> list[TechStackItem]:
    return [TechStackItem(name=n, confidence="Low") for n in names]


class TestSignalTag:

    @pytest.mark.parametrize("hiring", [True, False])
    @pytest.mark.parametrize("sentiment", ["positive", "NEGATIVE", "neutral", None, "", "ecstatic"])
    def test_tag_is_always_in_closed_set(self, hiring, sentiment):
        assert signal_tag_for(hiring, sentiment) in TAGS

    def test_unknown_sentiment_reads_as_neutral(self):
        assert normalise_sentiment("mixed") == "neutral"
        assert normalise_sentiment(None) == "neutral"
        assert normalise_sentiment("Positive") == "positive"

    def test_hiring_threshold_is_more_than_five(self):
        assert not read_signals([], jobs(5), [], None).is_actively_hiring
        assert read_signals([], jobs(6), [], None).is_actively_hiring


class TestRequesterPhrases:

    def test_without_context_uses_generic_opening(self):
        p = requester_phrases(None, read_signals([], [], [], None))
        assert p.opening == "Given your strategic objectives, "
        assert p.product_fit == ""
        assert p.value_alignment == ""
        assert p.replacement_warning == ""
        assert p.partner_name == ""

    def test_opening_needs_industry_and_product(self):
        signals = read_signals([], jobs(2), [], ToneInsights(sentiment="positive"))
        only_industry = requester_phrases(UserCompany(industry="fintech"), signals)
        assert only_industry.opening == "Given your strategic objectives, "

        full = requester_phrases(
            UserCompany(industry="fintech", product="LedgerSync", value_proposition="faster closes"),
            signals,
        )
        assert full.opening == "As a fintech company offering LedgerSync, "
        assert "2 active hiring positions" in full.product_fit
        assert "faster closes" in full.value_alignment
        assert "positive market position" in full.value_alignment
        assert "LedgerSync as a replacement" in full.replacement_warning


class TestComposeNarrative:

    def test_empty_inputs_do_not_raise(self):
        n = compose_narrative("Acme", "sell widgets", [], [], [], None)
        assert n.signal_tag == "Strategic Growth - Neutral Market Position"
        assert n.subject_line == "Strategic Partnership Opportunity for Acme"
        assert n.summary.endswith(SUMMARY_CLOSING)
        assert "stable operations" in n.summary
        assert "0 recent news mentions" in n.summary
        assert "sell widgets" in n.pitch_angle
        assert n.what_not_to_pitch.startswith("Given your strategic objectives, avoid approaches")

    def test_positive_news_and_partner_subject(self):
        n = compose_narrative(
            "Acme",
            "a data partnership",
            news("Acme announces expansion", "Quarterly update"),
            jobs(7),
            stack("React", "Python", "AWS", "Docker"),
            ToneInsights(emotion="joy", sentiment="positive"),
            UserCompany(name="Beta Labs", industry="analytics", product="InsightHub"),
        )
        assert n.subject_line == "Strategic Partnership: Beta Labs + Acme - Perfect Timing"
        assert n.signal_tag == "Scaling Operations - Positive Market Position"
        assert "positive momentum" in n.summary
        assert "aggressive expansion" in n.summary
        assert n.summary.startswith("As a analytics company offering InsightHub, Acme presents")
        assert "stack built on React, Python, AWS. " in n.pitch_angle
        assert "Docker" not in n.pitch_angle
        assert "InsightHub directly addresses" in n.pitch_angle
        assert "expansion phase" in n.what_not_to_pitch

    def test_growth_subject_without_partner(self):
        n = compose_narrative("Acme", "x", news("Acme closes funding round"), [], [], None)
        assert n.subject_line == "Strategic Partnership Opportunity for Acme - Capitalizing on Growth"

    def test_negative_news_adds_sensitivity(self):
        n = compose_narrative(
            "Acme", "x", news("Acme announces layoffs"), jobs(1), [], ToneInsights(sentiment="negative"),
        )
        assert "market challenges" in n.summary
        assert "Be sensitive to recent market challenges" in n.what_not_to_pitch
        assert "maintenance mode" in n.what_not_to_pitch
        assert n.signal_tag == "Strategic Growth - Negative Market Position"

    def test_summary_contains_tag_once_and_is_deterministic(self):
        args = ("Acme", "x", news("Acme growth"), jobs(3), stack("Git"), ToneInsights(sentiment="neutral"))
        first = compose_narrative(*args)
        second = compose_narrative(*args)
        assert first == second
        assert first.summary.count(first.signal_tag) == 1

    def test_unique_sentences_keeps_first_order(self):
        assert unique_sentences(["a", "b", "", "a", "c", "b"]) == ["a", "b", "c"]
