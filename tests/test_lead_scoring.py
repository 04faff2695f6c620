"""Tests for Lead Scoring components."""

import pytest
from lead_scoring.exceptions import InvalidConfig, InvalidInput
from lead_scoring.intent_classifier import IntentType, IntentResult, detect_intent
from lead_scoring.scoring_model import (
    LeadAttributes,
    LeadScorer,
    LeadTemperature,
    calculate_lead_score,
    get_lead_temperature,
)


# ── Intent Classifier ─────────────────────────────────

class TestIntentClassifier:
    def test_budget_with_k_suffix(self, classifier):
        result = classifier.classify("My budget is $20k")
        assert result == IntentResult(type=IntentType.BUDGET, value=20000)
        assert result.to_dict() == {"type": "budget", "value": 20000}

    def test_budget_with_thousand(self, classifier):
        result = classifier.classify("We have 50 thousand to spend")
        assert result.type == IntentType.BUDGET
        assert result.value == 50000

    def test_budget_strips_commas(self, classifier):
        result = classifier.classify("I can spend $5,000")
        assert result.value == 5000

    def test_budget_beats_timeline(self, classifier):
        result = classifier.classify("$3000 per month")
        assert result.type == IntentType.BUDGET
        assert result.value == 3000

    def test_comma_without_digits_is_not_budget(self, classifier):
        result = classifier.classify("Hello, world")
        assert result.type == IntentType.UNKNOWN

    def test_goal_uses_list_order(self, classifier):
        result = classifier.classify("we want to scale our sales")
        assert result.to_dict() == {"type": "goal", "value": "sales"}

    def test_goal_lead_gen_shadows_lead_generation(self, classifier):
        result = classifier.classify("Looking for help with lead generation")
        assert result.value == "lead gen"

    def test_goal_case_insensitive(self, classifier):
        result = classifier.classify("MARKETING is our focus")
        assert result.type == IntentType.GOAL
        assert result.value == "marketing"

    def test_timeline_rule_pluralizes(self, classifier):
        result = classifier._match_timeline("in 1 year", "in 1 year")
        assert result == IntentResult(type=IntentType.TIMELINE, value="1 years")

        result = classifier._match_timeline("2 Weeks", "2 weeks")
        assert result.value == "2 weeks"

    def test_contact_email(self, classifier):
        result = classifier.classify("reach out to me at a@b.com")
        assert result.to_dict() == {"type": "contactEmail", "value": "a@b.com"}

    def test_contact_email_keeps_casing(self, classifier):
        result = classifier.classify("Write to Jane.Doe@Example.com")
        assert result.type == IntentType.CONTACT_EMAIL
        assert result.value == "Jane.Doe@Example.com"

    def test_industry(self, classifier):
        result = classifier.classify("We are a healthcare provider")
        assert result.to_dict() == {"type": "industry", "value": "healthcare"}

    def test_industry_substring_match(self, classifier):
        result = classifier.classify("Our fintech startup")
        assert result.value == "tech"

    def test_unknown_returns_original_message(self, classifier):
        result = classifier.classify("no useful data here")
        assert result.to_dict() == {"type": "unknown", "value": "no useful data here"}
        assert not result.is_known

    def test_non_string_rejected(self, classifier):
        with pytest.raises(InvalidInput):
            classifier.classify(None)

    def test_module_function(self):
        assert detect_intent("Our goal is growth").value == "growth"


# ── Lead Scorer ───────────────────────────────────────

class TestLeadScorer:
    def test_hot_lead(self, scorer):
        result = scorer.score({
            "goal": "growth",
            "budget": 50000,
            "timeline": "2 weeks",
            "industry": "saas",
            "contactEmail": "a@b.com",
        })
        assert result.score == 100
        assert result.temperature == LeadTemperature.HOT

    def test_empty_lead_is_cold(self, scorer):
        result = scorer.score({})
        assert result.score == 0
        assert result.temperature == LeadTemperature.COLD
        assert result.score_breakdown == {}

    @pytest.mark.parametrize("budget,points", [
        (75000, 30),
        (50000, 30),
        (49999, 25),
        (20000, 25),
        (19999, 15),
        (5000, 15),
        (4999, 10),
        (1, 10),
        (0, 0),
    ])
    def test_budget_tiers(self, scorer, budget, points):
        assert scorer.score({"budget": budget}).score == points

    @pytest.mark.parametrize("timeline,points", [
        ("3 days", 20),
        ("Next WEEK", 20),
        ("2 months", 15),
        ("Q3", 10),
        ("", 0),
    ])
    def test_timeline_urgency(self, scorer, timeline, points):
        assert scorer.score({"timeline": timeline}).score == points

    def test_breakdown(self, scorer):
        result = scorer.score({"goal": "sales", "budget": 8000, "industry": "retail"})
        assert result.score == 45
        assert result.score_breakdown == {
            "goal_provided": 20,
            "budget_mid": 15,
            "industry_provided": 10,
        }
        assert result.to_dict()["temperature"] == "cold"

    @pytest.mark.parametrize("extra", [
        {"goal": "sales"},
        {"budget": 100},
        {"timeline": "soon"},
        {"contactEmail": "x@y.io"},
    ])
    def test_adding_a_field_never_lowers_score(self, scorer, extra):
        base = {"industry": "retail"}
        merged = {**base, **extra}
        assert scorer.score(merged).score >= scorer.score(base).score

    def test_snake_case_email_and_model_input(self, scorer):
        attrs = LeadAttributes(contact_email="a@b.com")
        assert scorer.score(attrs).score == 20
        assert scorer.score({"contact_email": "a@b.com"}).score == 20

    def test_numeric_string_budget_coerced(self, scorer):
        assert scorer.score({"budget": "25000"}).score == 25

    @pytest.mark.parametrize("attrs", [
        {"budget": "lots"},
        {"budget": -10},
        {"goal": 123},
    ])
    def test_invalid_fields_rejected(self, scorer, attrs):
        with pytest.raises(InvalidInput):
            scorer.score(attrs)

    def test_non_mapping_rejected(self, scorer):
        with pytest.raises(InvalidInput):
            scorer.score(["goal"])

    def test_custom_rule_is_clamped(self, scorer):
        scorer.add_custom_rule("goal_provided", 90)
        result = scorer.score({"goal": "sales", "contactEmail": "a@b.com"})
        assert result.score == 100

    def test_custom_rule_validation(self, scorer):
        with pytest.raises(InvalidConfig):
            scorer.add_custom_rule("unknown_rule", 5)
        with pytest.raises(InvalidConfig):
            scorer.add_custom_rule("goal_provided", -5)


# ── Temperature ───────────────────────────────────────

class TestTemperature:
    @pytest.mark.parametrize("score,temperature", [
        (100, LeadTemperature.HOT),
        (70, LeadTemperature.HOT),
        (69, LeadTemperature.WARM),
        (50, LeadTemperature.WARM),
        (49, LeadTemperature.COLD),
        (0, LeadTemperature.COLD),
    ])
    def test_thresholds(self, scorer, score, temperature):
        assert scorer.temperature(score) == temperature

    def test_custom_thresholds(self, scorer):
        scorer.adjust_thresholds(hot=80, warm=60)
        assert scorer.hot_threshold == 80
        assert scorer.warm_threshold == 60
        assert scorer.temperature(75) == LeadTemperature.WARM

    def test_inverted_thresholds_rejected(self, settings):
        with pytest.raises(InvalidConfig):
            LeadScorer(hot_threshold=40, warm_threshold=60, settings=settings)

    def test_non_numeric_score_rejected(self, scorer):
        with pytest.raises(InvalidInput):
            scorer.temperature("high")

    def test_module_functions(self):
        score = calculate_lead_score({"goal": "sales", "budget": 60000, "timeline": "this week"})
        assert score == 70
        assert get_lead_temperature(score) == "hot"
        assert get_lead_temperature(55) == "warm"
        assert get_lead_temperature(10) == "cold"
