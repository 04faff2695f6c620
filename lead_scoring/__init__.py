"""
Lead Scoring Module.

This module provides lead qualification capabilities:
- Intent detection (budget, goal, timeline, contact email, industry)
- Lead scoring (0-100 scale) with hot / warm / cold temperature
"""

from .exceptions import LeadRulesError, InvalidInput, EmptyInput, InvalidConfig
from .intent_classifier import IntentClassifier, IntentType, IntentResult, detect_intent
from .scoring_model import (
    LeadScorer,
    LeadScore,
    LeadAttributes,
    LeadTemperature,
    calculate_lead_score,
    get_lead_temperature,
)

__all__ = [
    "LeadRulesError",
    "InvalidInput",
    "EmptyInput",
    "InvalidConfig",
    "IntentClassifier",
    "IntentType",
    "IntentResult",
    "detect_intent",
    "LeadScorer",
    "LeadScore",
    "LeadAttributes",
    "LeadTemperature",
    "calculate_lead_score",
    "get_lead_temperature",
]
