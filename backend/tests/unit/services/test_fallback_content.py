"""
Unit Tests for the deterministic fallback content generator
"""
from datetime import date

import pytest

from app.schemas.pitch import PitchFormData
from app.services.fallback_content import (
    FallbackContentGenerator,
    classify_strategy,
    DEVELOPMENT,
    FLIP,
    RENTAL,
    GENERAL,
)

AS_OF = date(2024, 6, 1)


def make_form(**overrides) -> PitchFormData:
    data = {
        "projectName": "Riverside Lofts",
        "address": "200 River Rd, Austin",
        "investmentType": "Ground-up development",
        "purchasePrice": 1_000_000,
        "totalRaise": 350_000,
        "description": "Thirty-unit mid-rise near the riverfront.",
        "sponsorBio": "Jane Doe has built 12 projects.",
        "tone": "Professional",
    }
    data.update(overrides)
    return PitchFormData.model_validate(data)


@pytest.mark.parametrize("investment_type,expected", [
    ("Ground-up Development", DEVELOPMENT),
    ("Build to rent", DEVELOPMENT),
    ("Fix and flip", FLIP),
    ("Renovate & resell", FLIP),
    ("Long-term rental", RENTAL),
    ("Buy and hold", RENTAL),
    ("Mixed-use acquisition", GENERAL),
])
def test_classify_strategy(investment_type, expected):
    assert classify_strategy(investment_type) == expected


class TestDeterminism:

    def test_same_form_same_content(self):
        first = FallbackContentGenerator(make_form(), as_of=AS_OF).generate()
        second = FallbackContentGenerator(make_form(), as_of=AS_OF).generate()

        assert first == second

    def test_section_order_does_not_matter(self):
        generator = FallbackContentGenerator(make_form(), as_of=AS_OF)
        comps_first = generator.comparable_properties()
        generator.location_snapshot()

        assert generator.comparable_properties() == comps_first

    def test_different_deals_differ(self):
        first = FallbackContentGenerator(make_form(), as_of=AS_OF).generate()
        second = FallbackContentGenerator(make_form(projectName="Hilltop Commons"), as_of=AS_OF).generate()

        assert first.comparable_properties != second.comparable_properties


class TestSections:

    def test_content_source_and_metrics(self):
        content = FallbackContentGenerator(make_form(), as_of=AS_OF).generate()

        assert content.content_source == "fallback"
        assert content.deal_metrics is not None

    def test_executive_summary_strategy_and_location(self):
        summary = FallbackContentGenerator(make_form()).executive_summary()

        assert "**Riverside Lofts**" in summary
        assert "ground-up development" in summary
        assert "*Austin*" in summary

    def test_executive_summary_tones(self):
        persuasive = FallbackContentGenerator(make_form(tone="Persuasive")).executive_summary()
        data_driven = FallbackContentGenerator(make_form(tone="Data-Driven")).executive_summary()

        assert "*exceptional*" in persuasive
        assert "*quantifiably attractive*" in data_driven

    def test_unknown_tone_renders_professional(self):
        odd = FallbackContentGenerator(make_form(tone="Whimsical")).executive_summary()
        professional = FallbackContentGenerator(make_form()).executive_summary()

        assert odd == professional

    def test_long_description_is_excerpted(self):
        summary = FallbackContentGenerator(make_form(description="x" * 250)).executive_summary()

        assert "*" + "x" * 100 + "...*" in summary

    def test_empty_location_uses_default(self):
        summary = FallbackContentGenerator(make_form(address="200 River Rd,")).executive_summary()

        assert "*the target market*" in summary

    def test_risk_factors_follow_strategy(self):
        flip = FallbackContentGenerator(make_form(investmentType="Flip")).risk_factors()
        general = FallbackContentGenerator(make_form(investmentType="Other")).risk_factors()

        assert len(flip) == 5
        assert flip[0].startswith("Renovation cost overruns")
        assert "Local Austin market economic downturn impacting demand and rental rates" in general

    def test_investment_thesis_mentions_location(self):
        thesis = FallbackContentGenerator(make_form(investmentType="Rental")).investment_thesis()

        assert "**income-generating acquisition**" in thesis
        assert "Austin's resilient rental market" in thesis

    def test_location_snapshot_figures(self):
        snapshot = FallbackContentGenerator(make_form()).location_snapshot()

        assert snapshot.startswith("**Austin**")
        assert "**Median household income:** $" in snapshot

    def test_sponsor_bio_keeps_original_text(self):
        bio = FallbackContentGenerator(make_form()).sponsor_bio()

        assert bio.startswith("Jane Doe has built 12 projects.")
        assert "**Key Qualifications:**" in bio

    def test_sponsor_bio_without_text(self):
        bio = FallbackContentGenerator(make_form(sponsorBio="")).sponsor_bio()

        assert bio.startswith("**Key Qualifications:**")


class TestComparables:

    def test_three_comparables(self):
        comps = FallbackContentGenerator(make_form()).comparable_properties()

        assert [c.address.split(" ", 1)[1] for c in comps] == ["Oak Street", "Pine Avenue", "Maple Drive"]
        for comp in comps:
            number = int(comp.address.split(" ")[0])
            assert 100 <= number <= 1098
            assert comp.price.startswith("$")
            assert comp.distance.endswith(" miles")

    def test_price_ranges(self):
        comps = FallbackContentGenerator(make_form()).comparable_properties()
        prices = [int(c.price.replace("$", "").replace(",", "")) for c in comps]

        assert 900_000 <= prices[0] <= 1_100_000
        assert 850_000 <= prices[1] <= 1_150_000
        assert 950_000 <= prices[2] <= 1_100_000


class TestMarketTrends:

    def test_five_years_ending_now(self):
        trends = FallbackContentGenerator(make_form(), as_of=AS_OF).market_trends()

        assert [t.year for t in trends.price_trends] == ["2020", "2021", "2022", "2023", "2024"]

    def test_base_median_and_ranges(self):
        trends = FallbackContentGenerator(make_form(), as_of=AS_OF).market_trends()

        assert trends.price_trends[0].median_price == 750_000
        for trend in trends.price_trends:
            assert 2.0 <= trend.rent_growth < 8.0
            assert 4.0 <= trend.cap_rate < 7.0
            assert round(trend.cap_rate, 1) == trend.cap_rate
        assert trends.price_trends[-1].median_price > trends.price_trends[0].median_price

    def test_summary(self):
        trends = FallbackContentGenerator(make_form(), as_of=AS_OF).market_trends()

        assert "over the past 5 years" in trends.summary
        assert "Rental growth has averaged" in trends.summary

    def test_zero_price(self):
        trends = FallbackContentGenerator(make_form(purchasePrice=0), as_of=AS_OF).market_trends()

        assert all(t.median_price == 0 for t in trends.price_trends)
        assert "0.0%" in trends.summary
