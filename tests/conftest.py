"""Shared fixtures for claim-report tests."""

from __future__ import annotations

from typing import Any

import pytest

from claim_report.core.config import AppSettings, LayoutConfig, SupabaseConfig
from claim_report.layout.engine import ReportLayoutEngine
from claim_report.models import ClaimRecord
from tests.fakes.sample_rows import make_row


@pytest.fixture
def sample_row() -> dict[str, Any]:
    return make_row()


@pytest.fixture
def sample_claim(sample_row: dict[str, Any]) -> ClaimRecord:
    return ClaimRecord.from_row(sample_row)


@pytest.fixture
def layout_config() -> LayoutConfig:
    """Default layout constants on the v1 schema."""
    return LayoutConfig(schema_version="v1", overflow_policy="warn")


@pytest.fixture
def engine(layout_config: LayoutConfig) -> ReportLayoutEngine:
    return ReportLayoutEngine(layout_config)


@pytest.fixture
def settings(layout_config: LayoutConfig) -> AppSettings:
    """Settings with a real-looking Supabase project and key."""
    return AppSettings(
        supabase=SupabaseConfig(url="https://test-project.supabase.co", anon_key="test-anon-key"),
        layout=layout_config,
    )
