"""API middleware and exception handlers."""

from __future__ import annotations

from claim_report.api.middleware.error_handler import register_error_handlers

__all__ = ["register_error_handlers"]
