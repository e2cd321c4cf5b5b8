"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from claim_report.core.config import SUPABASE_URL_PLACEHOLDER
from claim_report.exceptions import ConfigurationError

if TYPE_CHECKING:
    from claim_report.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings. Raises ConfigurationError on fatal misconfig."""
    _check_anon_key(settings)
    _check_url(settings)
    _check_eval_box(settings)


def _check_anon_key(settings: AppSettings) -> None:
    """The URL has a fallback, the key does not."""
    if not settings.supabase.anon_key.strip():
        raise ConfigurationError(
            "Missing env: SUPABASE_ANON_KEY. Set it via environment variable or secrets manager."
        )


def _check_url(settings: AppSettings) -> None:
    if settings.supabase.url.rstrip("/") == SUPABASE_URL_PLACEHOLDER:
        log.warning(
            "SUPABASE_URL is not set; falling back to the placeholder project URL. "
            "Record fetches will fail until it is configured."
        )


def _check_eval_box(settings: AppSettings) -> None:
    """Warn when wrapped evaluation text cannot fit inside its box."""
    layout = settings.layout
    needed = layout.wrap_line_step * (layout.wrap_max_lines - 1)
    available = layout.eval_box_height + layout.wrap_top_offset - layout.eval_box_drop
    if needed > available:
        log.warning(
            f"Evaluation box height {layout.eval_box_height:g} is too small for "
            f"{layout.wrap_max_lines} wrapped lines; text will spill below the box."
        )
