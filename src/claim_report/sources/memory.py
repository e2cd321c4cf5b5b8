"""In-memory claim source backed by a dict, for tests and offline rendering."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from claim_report.exceptions import ClaimNotFoundError
from claim_report.models import ClaimRecord

log = logging.getLogger(__name__)


class MemoryClaimSource:
    """Serves rows from a plain dict keyed by claim id without touching the network."""

    def __init__(self, rows: Iterable[Mapping[str, Any]] = (), id_field: str = "warranty_claim_id") -> None:
        self._id_field = id_field
        self._rows: dict[str, ClaimRecord] = {}
        for row in rows:
            self.add(row)

    def add(self, row: Mapping[str, Any]) -> None:
        claim_id = str(row[self._id_field])
        self._rows[claim_id] = ClaimRecord.from_row(row)
        log.debug(f"Added claim {claim_id} to memory source")

    async def fetch(self, claim_id: str) -> ClaimRecord:
        if claim_id not in self._rows:
            raise ClaimNotFoundError(claim_id)
        return self._rows[claim_id]
