"""
Campaign metrics analysis.

Aggregates periodic performance records, compares the most recent window
of periods against the one before it, and flags issues that call for
optimization.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from config.settings import Settings, get_settings
from lead_scoring.exceptions import EmptyInput, InvalidConfig, InvalidInput, describe, invalid_input_from

logger = logging.getLogger(__name__)


class IssueType(Enum):
    """Performance issues detected by the analyzer."""
    LOW_CONVERSION = "LOW_CONVERSION"
    HIGH_CPA = "HIGH_CPA"
    DECLINING_PERFORMANCE = "DECLINING_PERFORMANCE"


class IssueSeverity(Enum):
    HIGH = "high"
    MEDIUM = "medium"


class TrendDirection(Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class MetricRecord(BaseModel):
    """
    One reporting period.

    Records are ordered most recent first: index 0 is the latest period.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    leads: int = Field(ge=0)
    qualified: int = Field(ge=0)
    converted: int = Field(ge=0)
    revenue: float = Field(ge=0)
    cpa: float = Field(ge=0)
    conversion_rate: float = Field(alias="conversionRate")  # percent, period-local


@dataclass(frozen=True)
class Issue:
    """A flagged performance issue."""
    type: IssueType
    message: str
    severity: IssueSeverity

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.type.value,
            "message": self.message,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class MetricAggregates:
    """Totals and averages over every record."""
    total_leads: int
    total_qualified: int
    total_converted: int
    total_revenue: float
    avg_cpa: float
    avg_conversion_rate: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalLeads": self.total_leads,
            "totalQualified": self.total_qualified,
            "totalConverted": self.total_converted,
            "totalRevenue": self.total_revenue,
            "avgCPA": self.avg_cpa,
            "avgConversionRate": self.avg_conversion_rate,
        }


@dataclass(frozen=True)
class MetricTrends:
    """Change in conversion rate between the recent and previous windows."""
    conversion_trend: float
    direction: TrendDirection

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conversionTrend": self.conversion_trend,
            "direction": self.direction.value,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Result of a metrics analysis."""
    aggregates: MetricAggregates
    trends: MetricTrends
    issues: List[Issue] = field(default_factory=list)

    @property
    def requires_optimization(self) -> bool:
        """True when any issue is high severity."""
        return any(issue.severity == IssueSeverity.HIGH for issue in self.issues)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the record handed back to the orchestrator."""
        return {
            "aggregates": self.aggregates.to_dict(),
            "trends": self.trends.to_dict(),
            "issues": [issue.to_dict() for issue in self.issues],
            "requiresOptimization": self.requires_optimization,
        }


class MetricsAnalyzer:
    """
    Analyzes a recency-ordered sequence of metric records.

    Issue rules (all evaluated, in this order):
    - Average conversion rate below target: LOW_CONVERSION (high)
    - Average CPA above target: HIGH_CPA (medium)
    - Conversion trend falling faster than the decline threshold:
      DECLINING_PERFORMANCE (high)
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        if settings.trend_window < 1:
            raise InvalidConfig(f"trend_window must be at least 1, got {settings.trend_window}")

        self.trend_window = settings.trend_window
        self.min_conversion_rate = settings.min_conversion_rate
        self.max_cpa = settings.max_cpa
        self.decline_threshold = settings.decline_threshold

    def analyze(self, records: Iterable[Union[MetricRecord, Mapping[str, Any]]]) -> AnalysisResult:
        """
        Analyze metric records.

        Args:
            records: Records ordered most recent first

        Returns:
            AnalysisResult with aggregates, trends and issues

        Raises:
            EmptyInput: no records were given
            InvalidInput: a record is malformed
        """
        metrics = self._coerce(records)
        if not metrics:
            raise EmptyInput("Cannot analyze an empty metrics sequence")

        aggregates = self._aggregate(metrics)
        trends = self._trends(metrics)
        issues = self._find_issues(aggregates, trends)

        logger.debug(
            f"Analyzed {len(metrics)} periods: conversion={aggregates.avg_conversion_rate:.1f}% "
            f"trend={trends.conversion_trend:.1f} issues={[i.type.value for i in issues]}"
        )

        return AnalysisResult(aggregates=aggregates, trends=trends, issues=issues)

    def _aggregate(self, metrics: Sequence[MetricRecord]) -> MetricAggregates:
        total_qualified = sum(m.qualified for m in metrics)
        total_converted = sum(m.converted for m in metrics)

        if total_qualified > 0:
            avg_conversion_rate = total_converted / total_qualified * 100
        else:
            avg_conversion_rate = 0.0

        return MetricAggregates(
            total_leads=sum(m.leads for m in metrics),
            total_qualified=total_qualified,
            total_converted=total_converted,
            total_revenue=sum(m.revenue for m in metrics),
            avg_cpa=sum(m.cpa for m in metrics) / len(metrics),
            avg_conversion_rate=avg_conversion_rate,
        )

    def _trends(self, metrics: Sequence[MetricRecord]) -> MetricTrends:
        window = self.trend_window
        recent = metrics[:window]
        previous = metrics[window:window * 2]

        conversion_trend = self._mean_rate(recent) - self._mean_rate(previous)

        if conversion_trend > 0:
            direction = TrendDirection.IMPROVING
        elif conversion_trend < 0:
            direction = TrendDirection.DECLINING
        else:
            direction = TrendDirection.STABLE

        return MetricTrends(conversion_trend=conversion_trend, direction=direction)

    @staticmethod
    def _mean_rate(window: Sequence[MetricRecord]) -> float:
        if not window:
            return 0.0
        return sum(m.conversion_rate for m in window) / len(window)

    def _find_issues(self, aggregates: MetricAggregates, trends: MetricTrends) -> List[Issue]:
        issues: List[Issue] = []

        if aggregates.avg_conversion_rate < self.min_conversion_rate:
            issues.append(Issue(
                type=IssueType.LOW_CONVERSION,
                message=(
                    f"Conversion rate ({aggregates.avg_conversion_rate:.1f}%) "
                    f"is below {self.min_conversion_rate:g}% target"
                ),
                severity=IssueSeverity.HIGH,
            ))

        if aggregates.avg_cpa > self.max_cpa:
            issues.append(Issue(
                type=IssueType.HIGH_CPA,
                message=f"CPA (${aggregates.avg_cpa:.2f}) exceeds ${self.max_cpa:g} target",
                severity=IssueSeverity.MEDIUM,
            ))

        if trends.conversion_trend < -self.decline_threshold:
            issues.append(Issue(
                type=IssueType.DECLINING_PERFORMANCE,
                message=f"Conversion rate declining by {abs(trends.conversion_trend):.1f}%",
                severity=IssueSeverity.HIGH,
            ))

        return issues

    def _coerce(self, records: Iterable[Union[MetricRecord, Mapping[str, Any]]]) -> List[MetricRecord]:
        if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
            raise InvalidInput(f"metrics must be a sequence of records, got {describe(records)}")

        metrics: List[MetricRecord] = []
        for index, record in enumerate(records):
            if isinstance(record, MetricRecord):
                metrics.append(record)
                continue
            if not isinstance(record, Mapping):
                raise InvalidInput(f"metric record {index} must be a mapping, got {describe(record)}")
            try:
                metrics.append(MetricRecord.model_validate(dict(record)))
            except ValidationError as e:
                logger.warning(f"Rejected metric record {index}: {e.error_count()} invalid field(s)")
                raise invalid_input_from(e, f"metric record {index}") from e
        return metrics


def analyze_metrics(records: Iterable[Union[MetricRecord, Mapping[str, Any]]]) -> AnalysisResult:
    """Analyze recency-ordered metric records with the configured thresholds."""
    return MetricsAnalyzer().analyze(records)
