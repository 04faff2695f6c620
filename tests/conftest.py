"""Shared fixtures for lead rules tests."""

import pytest

from config.settings import Settings
from lead_scoring.intent_classifier import IntentClassifier
from lead_scoring.scoring_model import LeadScorer
from analytics.metrics_analyzer import MetricsAnalyzer
from analytics.roi_calculator import ROICalculator
from automation.workflow_templates import WorkflowTemplateGenerator


@pytest.fixture
def settings():
    """Settings pinned to the documented defaults, independent of the environment."""
    return Settings(
        _env_file=None,
        lead_score_threshold_hot=70,
        lead_score_threshold_warm=50,
        trend_window=7,
        min_conversion_rate=30,
        max_cpa=100,
        decline_threshold=5,
        roi_tools_cost=200,
        roi_labor_hours_saved=40,
        roi_labor_cost_per_hour=50,
        roi_referral_revenue=0,
        roi_estimated_lead_value=0,
        default_workflow_type="follow-up",
    )


@pytest.fixture
def classifier():
    return IntentClassifier()


@pytest.fixture
def scorer(settings):
    return LeadScorer(settings=settings)


@pytest.fixture
def analyzer(settings):
    return MetricsAnalyzer(settings=settings)


@pytest.fixture
def roi_calculator(settings):
    return ROICalculator(settings=settings)


@pytest.fixture
def generator(settings):
    return WorkflowTemplateGenerator(id_seed=lambda: 1700000000000, settings=settings)


@pytest.fixture
def make_record():
    """Build a metric record dict with sensible defaults."""
    def _make(**overrides):
        record = {
            "leads": 100,
            "qualified": 40,
            "converted": 20,
            "revenue": 5000.0,
            "cpa": 50.0,
            "conversionRate": 50.0,
        }
        record.update(overrides)
        return record
    return _make
