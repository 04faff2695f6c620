"""
Intent Detection for inbound lead messages.

Extracts at most one qualifying fact (budget, goal, timeline, contact email
or industry) from a single free-text message using fixed keyword and
pattern rules.
"""

import logging
import re
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from dataclasses import dataclass

from .exceptions import InvalidInput, describe

logger = logging.getLogger(__name__)


class IntentType(Enum):
    """Kinds of fact a message can carry."""
    BUDGET = "budget"
    GOAL = "goal"
    TIMELINE = "timeline"
    CONTACT_EMAIL = "contactEmail"
    INDUSTRY = "industry"
    UNKNOWN = "unknown"      # No rule matched


@dataclass(frozen=True)
class IntentResult:
    """Result of intent detection. Exactly one fact per message."""
    type: IntentType
    value: Union[int, str]

    @property
    def is_known(self) -> bool:
        return self.type is not IntentType.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the {type, value} record handed back to the orchestrator."""
        return {"type": self.type.value, "value": self.value}


class IntentClassifier:
    """
    Classifies a customer message into a single qualifying fact.

    Rules run in a fixed precedence order and the first match wins:
    budget, goal, timeline, contact email, industry. A message containing
    both a dollar figure and the word "month" is therefore a budget.

    Keyword matching is substring based, so "b2business" still matches "b2b".
    """

    # Goal keywords, scanned in list order (not position in text)
    GOAL_KEYWORDS: Tuple[str, ...] = (
        "lead gen",
        "lead generation",
        "sales",
        "marketing",
        "growth",
        "automation",
        "optimize",
        "scale",
    )

    INDUSTRY_KEYWORDS: Tuple[str, ...] = (
        "tech",
        "technology",
        "healthcare",
        "finance",
        "retail",
        "ecommerce",
        "saas",
        "b2b",
        "b2c",
        "manufacturing",
    )

    THOUSAND_MARKERS = ("k", "thousand")

    def __init__(self):
        self._build_patterns()
        self._rules: List[Callable[[str, str], Optional[IntentResult]]] = [
            self._match_budget,
            self._match_goal,
            self._match_timeline,
            self._match_email,
            self._match_industry,
        ]

    def _build_patterns(self):
        """Build regex patterns for fact extraction."""
        # Budget: "$20k", "5,000", "20 thousand" or "budget is 20"
        self.budget_pattern = re.compile(
            r'\$?(\d[\d,]*)(?:k|\s*thousand)?'
            r'|budget\s*(?:is|of)?\s*\$?(\d[\d,]*)',
            re.IGNORECASE
        )

        self.timeline_pattern = re.compile(
            r'(\d+)\s*(day|week|month|quarter|year)',
            re.IGNORECASE
        )

        self.email_pattern = re.compile(
            r'[\w.-]+@[\w.-]+\.\w+',
            re.IGNORECASE
        )

    def classify(self, message: str) -> IntentResult:
        """
        Detect the fact carried by a message.

        Args:
            message: Customer message

        Returns:
            IntentResult; UNKNOWN with the original message if nothing matched

        Raises:
            InvalidInput: message is not a string
        """
        if not isinstance(message, str):
            raise InvalidInput(f"message must be a string, got {describe(message)}")

        message_lower = message.lower()

        for rule in self._rules:
            result = rule(message, message_lower)
            if result is not None:
                logger.debug(f"Detected {result.type.value}: {result.value!r}")
                return result

        return IntentResult(type=IntentType.UNKNOWN, value=message)

    def _match_budget(self, message: str, message_lower: str) -> Optional[IntentResult]:
        match = self.budget_pattern.search(message_lower)
        if not match:
            return None

        budget = int((match.group(1) or match.group(2)).replace(",", ""))
        # Marker anywhere in the message scales the figure
        if any(marker in message_lower for marker in self.THOUSAND_MARKERS):
            budget *= 1000

        return IntentResult(type=IntentType.BUDGET, value=budget)

    def _match_goal(self, message: str, message_lower: str) -> Optional[IntentResult]:
        keyword = self._first_keyword(self.GOAL_KEYWORDS, message_lower)
        if keyword is None:
            return None
        return IntentResult(type=IntentType.GOAL, value=keyword)

    def _match_timeline(self, message: str, message_lower: str) -> Optional[IntentResult]:
        match = self.timeline_pattern.search(message_lower)
        if not match:
            return None
        amount, unit = match.group(1), match.group(2)
        return IntentResult(type=IntentType.TIMELINE, value=f"{amount} {unit}s")

    def _match_email(self, message: str, message_lower: str) -> Optional[IntentResult]:
        match = self.email_pattern.search(message)
        if not match:
            return None
        return IntentResult(type=IntentType.CONTACT_EMAIL, value=match.group(0))

    def _match_industry(self, message: str, message_lower: str) -> Optional[IntentResult]:
        keyword = self._first_keyword(self.INDUSTRY_KEYWORDS, message_lower)
        if keyword is None:
            return None
        return IntentResult(type=IntentType.INDUSTRY, value=keyword)

    @staticmethod
    def _first_keyword(keywords: Tuple[str, ...], message_lower: str) -> Optional[str]:
        for keyword in keywords:
            if keyword in message_lower:
                return keyword
        return None


_default_classifier = IntentClassifier()


def detect_intent(message: str) -> IntentResult:
    """Detect the single fact carried by a message."""
    return _default_classifier.classify(message)
