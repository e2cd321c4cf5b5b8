"""Health check endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from claim_report.core.config import SUPABASE_URL_PLACEHOLDER

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    """Liveness probe plus a configuration summary (never exposes the key)."""
    settings = request.app.state.settings
    return {
        "status": "ok",
        "supabase_url_configured": settings.supabase.url.rstrip("/") != SUPABASE_URL_PLACEHOLDER,
        "anon_key_configured": bool(settings.supabase.anon_key),
        "schema_version": settings.layout.schema_version,
    }


@router.get("/ready")
async def ready() -> dict[str, str]:
    """Readiness probe: the app can serve requests."""
    return {"status": "ready"}
