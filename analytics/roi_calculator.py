"""
ROI calculation for the automation system.

Compares monthly tooling cost against labor savings and attributed revenue.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from config.settings import Settings, get_settings
from lead_scoring.exceptions import InvalidConfig, InvalidInput, describe, invalid_input_from

logger = logging.getLogger(__name__)


class ROIInputs(BaseModel):
    """Cost/benefit inputs. Omitted fields fall back to configured defaults."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    tools_cost: Optional[float] = Field(default=None, alias="toolsCost")
    labor_hours_saved: Optional[float] = Field(default=None, alias="laborHoursSaved")
    labor_cost_per_hour: Optional[float] = Field(default=None, alias="laborCostPerHour")
    referral_revenue: Optional[float] = Field(default=None, alias="referralRevenue")
    estimated_lead_value: Optional[float] = Field(default=None, alias="estimatedLeadValue")


@dataclass(frozen=True)
class ROIResult:
    """ROI summary."""
    monthly_cost: float
    labor_savings: float
    total_benefit: float
    roi_percent: float
    payback_period: str  # "Immediate" or "N/A"

    @property
    def roi(self) -> str:
        """ROI formatted to one decimal place, e.g. '900.0%'."""
        return f"{self.roi_percent:.1f}%"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "monthlyCost": self.monthly_cost,
            "laborSavings": self.labor_savings,
            "totalBenefit": self.total_benefit,
            "roi": self.roi,
            "paybackPeriod": self.payback_period,
        }


class ROICalculator:
    """
    Calculates return on investment.

    laborSavings = laborHoursSaved * laborCostPerHour
    totalBenefit = laborSavings + referralRevenue + estimatedLeadValue
    roi% = (totalBenefit - toolsCost) / toolsCost * 100
    """

    IMMEDIATE = "Immediate"
    NOT_APPLICABLE = "N/A"

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.defaults = {
            "tools_cost": settings.roi_tools_cost,
            "labor_hours_saved": settings.roi_labor_hours_saved,
            "labor_cost_per_hour": settings.roi_labor_cost_per_hour,
            "referral_revenue": settings.roi_referral_revenue,
            "estimated_lead_value": settings.roi_estimated_lead_value,
        }

    def calculate(self, inputs: Union[ROIInputs, Mapping[str, Any], None] = None) -> ROIResult:
        """
        Calculate ROI.

        Args:
            inputs: ROIInputs or a partial mapping; None uses every default

        Raises:
            InvalidInput: a field is not numeric
            InvalidConfig: tools cost is zero or negative
        """
        values = self._resolve(inputs)

        tools_cost = values["tools_cost"]
        if tools_cost <= 0:
            raise InvalidConfig(f"toolsCost must be positive, got {tools_cost}")

        labor_savings = values["labor_hours_saved"] * values["labor_cost_per_hour"]
        total_benefit = labor_savings + values["referral_revenue"] + values["estimated_lead_value"]
        roi_percent = (total_benefit - tools_cost) / tools_cost * 100

        result = ROIResult(
            monthly_cost=tools_cost,
            labor_savings=labor_savings,
            total_benefit=total_benefit,
            roi_percent=roi_percent,
            payback_period=self.IMMEDIATE if total_benefit > tools_cost else self.NOT_APPLICABLE,
        )
        logger.debug(f"ROI {result.roi} on cost {tools_cost} (benefit {total_benefit})")
        return result

    def _resolve(self, inputs: Union[ROIInputs, Mapping[str, Any], None]) -> Dict[str, float]:
        if inputs is None:
            inputs = ROIInputs()
        elif isinstance(inputs, Mapping):
            try:
                inputs = ROIInputs.model_validate(dict(inputs))
            except ValidationError as e:
                logger.warning(f"Rejected ROI inputs: {e.error_count()} invalid field(s)")
                raise invalid_input_from(e, "ROI inputs") from e
        elif not isinstance(inputs, ROIInputs):
            raise InvalidInput(f"ROI inputs must be a mapping, got {describe(inputs)}")

        provided = inputs.model_dump(exclude_none=True)
        return {**self.defaults, **provided}


def calculate_roi(inputs: Union[ROIInputs, Mapping[str, Any], None] = None) -> ROIResult:
    """Calculate ROI with configured defaults for omitted fields."""
    return ROICalculator().calculate(inputs)
