"""Supabase (PostgREST) claim source.

Reads one row from the claims view::

    GET {SUPABASE_URL}/rest/v1/warranty_claims_pdf_v
        ?select=<columns>&warranty_claim_id=eq.<id>&limit=1

The request is made once: no retries, no caching.
"""

from __future__ import annotations

import logging

import httpx

from claim_report.core.config import SupabaseConfig
from claim_report.core.types import JsonList
from claim_report.exceptions import ClaimNotFoundError, ConfigurationError, UpstreamFetchError
from claim_report.models import ClaimRecord, ClaimSchema

log = logging.getLogger(__name__)


class SupabaseClaimSource:
    """Fetches claim rows from a Supabase REST view with the anon key."""

    def __init__(
        self,
        config: SupabaseConfig,
        schema: ClaimSchema,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not config.anon_key:
            raise ConfigurationError("Missing env: SUPABASE_ANON_KEY")
        self._config = config
        self._schema = schema
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._config.url.rstrip('/')}/rest/v1/{self._config.view}"

    def build_params(self, claim_id: str) -> dict[str, str]:
        return {
            "select": ",".join(self._schema.select_fields()),
            self._schema.id_field: f"eq.{claim_id}",
            "limit": "1",
        }

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._config.anon_key,
            "Authorization": f"Bearer {self._config.anon_key}",
            "Accept": "application/json",
        }

    async def fetch(self, claim_id: str) -> ClaimRecord:
        """Fetch the row for *claim_id*.

        Raises:
            UpstreamFetchError: non-2xx status, transport failure or malformed body.
            ClaimNotFoundError: the view returned no rows.
        """
        async with httpx.AsyncClient(timeout=self._config.timeout, transport=self._transport) as client:
            try:
                resp = await client.get(self.endpoint, params=self.build_params(claim_id), headers=self._headers())
            except httpx.HTTPError as exc:
                log.error(f"Claim {claim_id}: request to {self.endpoint} failed: {exc}")
                raise UpstreamFetchError(f"Error fetching claim: {exc}") from exc

        if not resp.is_success:
            log.error(f"Claim {claim_id}: upstream returned {resp.status_code}")
            raise UpstreamFetchError(
                f"Error fetching claim ({resp.status_code}): {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        rows = self._decode(resp, claim_id)
        if not rows:
            raise ClaimNotFoundError(claim_id)
        log.debug(f"Claim {claim_id}: fetched {len(rows[0])} fields")
        return ClaimRecord.from_row(rows[0])

    @staticmethod
    def _decode(resp: httpx.Response, claim_id: str) -> JsonList:
        try:
            rows = resp.json()
        except ValueError as exc:
            raise UpstreamFetchError(
                f"Error fetching claim ({resp.status_code}): response is not JSON",
                status_code=resp.status_code,
                body=resp.text,
            ) from exc
        if not isinstance(rows, list) or any(not isinstance(r, dict) for r in rows):
            raise UpstreamFetchError(
                f"Error fetching claim {claim_id}: expected a JSON array of rows",
                status_code=resp.status_code,
                body=resp.text,
            )
        return rows
