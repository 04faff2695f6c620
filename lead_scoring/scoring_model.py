"""
Lead Scoring Model.

Implements the additive point scale used to qualify inbound leads at each
qualification checkpoint, plus the temperature tier derived from the score.
"""

import logging
from enum import Enum
from typing import Dict, Any, Optional, Mapping, Union
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from config.settings import Settings, get_settings
from .exceptions import InvalidConfig, InvalidInput, describe, invalid_input_from

logger = logging.getLogger(__name__)


class LeadTemperature(Enum):
    """Lead temperature tiers."""
    HOT = "hot"          # Score >= 70 - Immediate follow-up
    WARM = "warm"        # Score 50-69 - Standard follow-up
    COLD = "cold"        # Score < 50 - Nurture campaign


class LeadAttributes(BaseModel):
    """
    Facts collected about a lead so far.

    Every field is optional; a missing, empty or zero value means the fact
    is not known yet. Accepts camelCase (``contactEmail``) or snake_case keys.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    goal: Optional[str] = None
    budget: Optional[float] = None
    timeline: Optional[str] = None
    industry: Optional[str] = None
    contact_email: Optional[str] = Field(default=None, alias="contactEmail")

    @field_validator("budget")
    @classmethod
    def budget_not_negative(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value < 0:
            raise ValueError("budget must not be negative")
        return value


@dataclass
class LeadScore:
    """Lead score result."""
    score: int  # 0-100
    temperature: LeadTemperature
    score_breakdown: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "score": self.score,
            "temperature": self.temperature.value,
            "score_breakdown": dict(self.score_breakdown),
        }


class LeadScorer:
    """
    Scores leads from the attributes collected in conversation.

    Scoring Rules (0-100):
    - Goal provided: +20
    - Budget >= 50000: +30, >= 20000: +25, >= 5000: +15, otherwise: +10
    - Timeline in days/weeks: +20, in months: +15, anything else: +10
    - Industry provided: +10
    - Contact email provided: +20

    Thresholds:
    - Score >= 70: Hot Lead
    - Score 50-69: Warm Lead
    - Score < 50: Cold Lead
    """

    # Scoring weights
    SCORING_RULES = {
        "goal_provided": 20,

        # Budget tiers
        "budget_enterprise": 30,
        "budget_high": 25,
        "budget_mid": 15,
        "budget_low": 10,

        # Timeline urgency
        "timeline_urgent": 20,
        "timeline_months": 15,
        "timeline_other": 10,

        "industry_provided": 10,
        "contact_provided": 20,
    }

    # Evaluated high to low, first match wins
    BUDGET_TIERS = (
        (50000, "budget_enterprise"),
        (20000, "budget_high"),
        (5000, "budget_mid"),
    )

    MAX_SCORE = 100

    def __init__(
        self,
        custom_rules: Optional[Dict[str, int]] = None,
        hot_threshold: Optional[int] = None,
        warm_threshold: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the lead scorer.

        Args:
            custom_rules: Optional custom scoring rules to override defaults
            hot_threshold: Minimum score for a hot lead (default from settings)
            warm_threshold: Minimum score for a warm lead (default from settings)
            settings: Settings to read default thresholds from
        """
        settings = settings or get_settings()
        self.rules = self.SCORING_RULES.copy()
        if custom_rules:
            for rule_name, points in custom_rules.items():
                self.add_custom_rule(rule_name, points)

        self.hot_threshold = settings.lead_score_threshold_hot
        self.warm_threshold = settings.lead_score_threshold_warm
        self.adjust_thresholds(
            hot=self.hot_threshold if hot_threshold is None else hot_threshold,
            warm=self.warm_threshold if warm_threshold is None else warm_threshold,
        )

    def score(self, attrs: Union[LeadAttributes, Mapping[str, Any]]) -> LeadScore:
        """
        Calculate lead score from collected attributes.

        Args:
            attrs: LeadAttributes or a mapping with the same keys

        Returns:
            LeadScore with score, temperature and breakdown

        Raises:
            InvalidInput: a present field has the wrong type
        """
        attrs = self._coerce(attrs)
        breakdown: Dict[str, int] = {}

        if attrs.goal:
            breakdown["goal_provided"] = self.rules["goal_provided"]

        if attrs.budget:
            rule = self._budget_rule(attrs.budget)
            breakdown[rule] = self.rules[rule]

        if attrs.timeline:
            rule = self._timeline_rule(attrs.timeline)
            breakdown[rule] = self.rules[rule]

        if attrs.industry:
            breakdown["industry_provided"] = self.rules["industry_provided"]

        if attrs.contact_email:
            breakdown["contact_provided"] = self.rules["contact_provided"]

        # Ensure score is within bounds
        score = max(0, min(self.MAX_SCORE, sum(breakdown.values())))
        temperature = self.temperature(score)

        logger.debug(f"Lead scored {score} ({temperature.value}): {breakdown}")

        return LeadScore(score=score, temperature=temperature, score_breakdown=breakdown)

    def temperature(self, score: Union[int, float]) -> LeadTemperature:
        """Map a score to its temperature tier."""
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise InvalidInput(f"score must be a number, got {describe(score)}")

        if score >= self.hot_threshold:
            return LeadTemperature.HOT
        if score >= self.warm_threshold:
            return LeadTemperature.WARM
        return LeadTemperature.COLD

    def _budget_rule(self, budget: float) -> str:
        """Pick the budget tier rule for a positive budget."""
        for floor, rule in self.BUDGET_TIERS:
            if budget >= floor:
                return rule
        return "budget_low"

    def _timeline_rule(self, timeline: str) -> str:
        """Pick the timeline urgency rule."""
        timeline = timeline.lower()
        if "week" in timeline or "day" in timeline:
            return "timeline_urgent"
        if "month" in timeline:
            return "timeline_months"
        return "timeline_other"

    def _coerce(self, attrs: Union[LeadAttributes, Mapping[str, Any]]) -> LeadAttributes:
        if isinstance(attrs, LeadAttributes):
            return attrs
        if not isinstance(attrs, Mapping):
            raise InvalidInput(f"lead attributes must be a mapping, got {describe(attrs)}")
        try:
            return LeadAttributes.model_validate(dict(attrs))
        except ValidationError as e:
            logger.warning(f"Rejected lead attributes: {e.error_count()} invalid field(s)")
            raise invalid_input_from(e, "lead attributes") from e

    def adjust_thresholds(self, hot: int = 70, warm: int = 50):
        """
        Adjust temperature thresholds.

        Args:
            hot: Threshold for hot leads (default 70)
            warm: Threshold for warm leads (default 50)
        """
        if not 0 <= warm <= hot <= self.MAX_SCORE:
            raise InvalidConfig(
                f"Thresholds must satisfy 0 <= warm <= hot <= {self.MAX_SCORE} (warm={warm}, hot={hot})"
            )
        self.hot_threshold = hot
        self.warm_threshold = warm

    def add_custom_rule(self, rule_name: str, score: int):
        """
        Override the points awarded by an existing rule.

        Args:
            rule_name: Name of the rule
            score: Points awarded (must not be negative)
        """
        if rule_name not in self.SCORING_RULES:
            raise InvalidConfig(f"Unknown scoring rule: {rule_name}")
        if score < 0:
            raise InvalidConfig(f"Scoring rule {rule_name} cannot award negative points")
        self.rules[rule_name] = score


def calculate_lead_score(data: Union[LeadAttributes, Mapping[str, Any]]) -> int:
    """Score a lead on the default scale and return the 0-100 score."""
    return LeadScorer().score(data).score


def get_lead_temperature(score: Union[int, float]) -> str:
    """Return 'hot', 'warm' or 'cold' for a score."""
    return LeadScorer().temperature(score).value
