"""Claim record source protocol: the contract every backend implements."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from claim_report.models import ClaimRecord


@runtime_checkable
class IClaimSource(Protocol):
    """Protocol for claim record sources (Supabase view, in-memory, etc.)."""

    async def fetch(self, claim_id: str) -> ClaimRecord:
        """Fetch the single row for *claim_id*. Raises ClaimNotFoundError if absent."""
        ...
