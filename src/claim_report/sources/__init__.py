"""Claim record sources."""

from __future__ import annotations

from typing import TYPE_CHECKING

from claim_report.models import get_schema
from claim_report.sources.memory import MemoryClaimSource
from claim_report.sources.protocols import IClaimSource
from claim_report.sources.supabase import SupabaseClaimSource

if TYPE_CHECKING:
    from claim_report.core.config import AppSettings


def create_claim_source(settings: AppSettings) -> IClaimSource:
    """Build the Supabase source for the configured schema version."""
    return SupabaseClaimSource(settings.supabase, get_schema(settings.layout.schema_version))


__all__ = ["IClaimSource", "MemoryClaimSource", "SupabaseClaimSource", "create_claim_source"]
