"""Report service: fetch one claim and render it to PDF bytes."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from claim_report.exceptions import BadRequestError
from claim_report.formatters.protocols import IOutputFormatter
from claim_report.sources.protocols import IClaimSource

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedReport:
    """Rendered document plus what the HTTP layer needs to serve it."""

    claim_id: str
    content: bytes
    filename: str
    content_type: str = "application/pdf"


class ReportService:
    """Fetches, lays out and serializes one claim at a time."""

    def __init__(self, source: IClaimSource, formatter: IOutputFormatter, filename_prefix: str = "warranty_") -> None:
        self._source = source
        self._formatter = formatter
        self._filename_prefix = filename_prefix

    async def render(self, claim_id: str | None) -> RenderedReport:
        """Render the report for *claim_id*.

        Raises BadRequestError for a missing id; source errors propagate.
        """
        claim_id = (claim_id or "").strip()
        if not claim_id:
            raise BadRequestError("Missing ?claim=<warranty_claim_id>")

        start = time.perf_counter()
        claim = await self._source.fetch(claim_id)
        content = self._formatter.format(claim)
        log.info(
            f"Rendered claim {claim_id}: {len(content)} bytes in {(time.perf_counter() - start) * 1000:.1f} ms"
        )
        return RenderedReport(
            claim_id=claim_id,
            content=content,
            filename=f"{self._filename_prefix}{claim_id}.pdf",
            content_type=self._formatter.content_type,
        )
