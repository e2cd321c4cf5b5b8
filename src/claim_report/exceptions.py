"""Exception hierarchy for claim-report."""

from __future__ import annotations


class ClaimReportError(Exception):
    """Base exception for all claim-report errors."""


class BadRequestError(ClaimReportError):
    """Raised when the request does not carry a usable claim identifier."""


class ClaimNotFoundError(ClaimReportError):
    """Raised when the record source returns zero rows for a claim."""

    def __init__(self, claim_id: str) -> None:
        super().__init__(f"Claim not found: {claim_id}")
        self.claim_id = claim_id


class UpstreamFetchError(ClaimReportError):
    """Non-success response (or transport failure) from the record source."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ConfigurationError(ClaimReportError):
    """Raised when a required credential or setting is missing."""


class ContentOverflowError(ClaimReportError):
    """Layout ran past the bottom margin with ``overflow_policy='raise'``."""

    def __init__(self, cursor: float, bottom_margin: float) -> None:
        super().__init__(
            f"Report content overflows the page: cursor {cursor:g} is below bottom margin {bottom_margin:g}"
        )
        self.cursor = cursor
        self.bottom_margin = bottom_margin


class SchemaError(ClaimReportError):
    """Raised when an unknown claim schema version is requested."""
