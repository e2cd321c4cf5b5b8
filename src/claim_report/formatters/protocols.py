"""Page-drawing and output formatter protocols."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from claim_report.models import ClaimRecord


@runtime_checkable
class IPageCanvas(Protocol):
    """Single-page drawing surface the layout engine's ops are painted onto."""

    def draw_text(self, content: str, x: float, y: float, *, bold: bool = False, size: int = 10) -> None:
        """Draw a left-aligned text run with its baseline at (x, y)."""
        ...

    def draw_rect(self, x: float, y: float, width: float, height: float, border_width: float = 1.0) -> None:
        """Stroke an unfilled rectangle with its lower-left corner at (x, y)."""
        ...

    def serialize(self) -> bytes:
        """Finish the page and return the complete document bytes."""
        ...


@runtime_checkable
class IOutputFormatter(Protocol):
    """Protocol for claim report formatters."""

    def format(self, claim: ClaimRecord) -> bytes:
        """Render the claim into output bytes."""
        ...

    def format_to_file(self, claim: ClaimRecord, path: Path) -> Path:
        """Render and write to a file. Returns the output path."""
        ...

    @property
    def content_type(self) -> str:
        """MIME type for the output format (e.g. 'application/pdf')."""
        ...


__all__ = ["IOutputFormatter", "IPageCanvas"]
