"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_PALETTE: list[str] = [
    "#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6", "#06B6D4",
    "#22C55E", "#A855F7", "#F97316", "#E11D48", "#14B8A6", "#0EA5E9",
]

DEFAULT_TRACKED_STATUSES: list[str] = [
    "Declined",
    "For Approval",
    "Approved",
    "For Evaluation",
]


class CatalogConfig(BaseSettings):
    """Locations of the baseline catalog and the station rule table.

    ``None`` selects the files shipped under ``config/``.
    """

    model_config = {"env_prefix": "LICENSEREPORT_CATALOG_"}

    catalog_path: str | None = None
    rules_path: str | None = None


class WindowConfig(BaseSettings):
    """Reporting window applied to the monthly status chart."""

    model_config = {"env_prefix": "LICENSEREPORT_WINDOW_"}

    date_start: str | None = None
    date_end: str | None = None
    region: str = ""


class ChartConfig(BaseSettings):
    """Chart rendering configuration."""

    model_config = {"env_prefix": "LICENSEREPORT_CHART_"}

    palette: list[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE))
    daily_window_days: int = 30
    tracked_statuses: list[str] = Field(default_factory=lambda: list(DEFAULT_TRACKED_STATUSES))


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "LICENSEREPORT_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    window: WindowConfig = Field(default_factory=WindowConfig)
    chart: ChartConfig = Field(default_factory=ChartConfig)
