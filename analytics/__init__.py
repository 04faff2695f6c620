"""
Campaign analytics.

- Metrics analysis (aggregates, conversion trend, issue flags)
- ROI calculation
"""

from .metrics_analyzer import (
    MetricsAnalyzer,
    MetricRecord,
    AnalysisResult,
    MetricAggregates,
    MetricTrends,
    Issue,
    IssueType,
    IssueSeverity,
    TrendDirection,
    analyze_metrics,
)
from .roi_calculator import ROICalculator, ROIInputs, ROIResult, calculate_roi

__all__ = [
    "MetricsAnalyzer",
    "MetricRecord",
    "AnalysisResult",
    "MetricAggregates",
    "MetricTrends",
    "Issue",
    "IssueType",
    "IssueSeverity",
    "TrendDirection",
    "analyze_metrics",
    "ROICalculator",
    "ROIInputs",
    "ROIResult",
    "calculate_roi",
]
