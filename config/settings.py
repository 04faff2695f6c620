"""
Centralized configuration for the lead rules library.

All settings are loaded from environment variables via .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Library settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Lead scoring
    lead_score_threshold_hot: int = 70
    lead_score_threshold_warm: int = 50

    # Metrics analysis
    trend_window: int = 7
    min_conversion_rate: float = 30.0
    max_cpa: float = 100.0
    decline_threshold: float = 5.0

    # ROI defaults
    roi_tools_cost: float = 200.0
    roi_labor_hours_saved: float = 40.0
    roi_labor_cost_per_hour: float = 50.0
    roi_referral_revenue: float = 0.0
    roi_estimated_lead_value: float = 0.0

    # Workflow templates
    default_workflow_type: str = "follow-up"


@lru_cache()
def get_settings() -> Settings:
    """Get cached library settings."""
    return Settings()
