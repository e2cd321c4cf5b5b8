"""Configuration, logging and startup checks."""

from __future__ import annotations

from claim_report.core.config import (
    APIConfig,
    AppSettings,
    LayoutConfig,
    ObservabilityConfig,
    ReportConfig,
    SupabaseConfig,
)
from claim_report.core.logging_config import setup_logging
from claim_report.core.startup_checks import validate_settings

__all__ = [
    "APIConfig",
    "AppSettings",
    "LayoutConfig",
    "ObservabilityConfig",
    "ReportConfig",
    "SupabaseConfig",
    "setup_logging",
    "validate_settings",
]
