"""CLI for claim-report: render / fetch / ops / serve commands."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from pydantic import ValidationError
from rich.table import Table

from claim_report.core.config import AppSettings, LayoutConfig
from claim_report.core.startup_checks import validate_settings
from claim_report.exceptions import ClaimReportError
from claim_report.formatters.pdf_formatter import PDFFormatter
from claim_report.layout.engine import ReportLayoutEngine
from claim_report.layout.ops import TextOp
from claim_report.models import ClaimRecord, get_schema
from claim_report.services.report_service import ReportService
from claim_report.sources import create_claim_source

app = typer.Typer(name="claim-report", help="Warranty claim diagnostic reports as single-page PDFs")
console = Console()


def _build_settings(schema_version: Optional[str], overflow: Optional[str]) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    settings = AppSettings()
    overrides: dict = {}
    if schema_version:
        overrides["schema_version"] = schema_version
    if overflow:
        overrides["overflow_policy"] = overflow
    if overrides:
        try:
            settings.layout = LayoutConfig(**{**settings.layout.model_dump(), **overrides})
        except ValidationError as exc:
            raise typer.BadParameter(f"Invalid layout option: {exc.errors()[0]['msg']}") from exc
    return settings


def _load_record(record_path: Path) -> ClaimRecord:
    """Load one record from a JSON object (or a one-element array, as PostgREST returns)."""
    raw = json.loads(record_path.read_text(encoding="utf-8"))
    if isinstance(raw, list) and len(raw) == 1:
        raw = raw[0]
    if not isinstance(raw, dict):
        raise typer.BadParameter(f"Expected a JSON object in {record_path}")
    return ClaimRecord.from_row(raw)


def _setup_cli_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)


@app.command()
def render(
    record_file: Path = typer.Argument(..., help="JSON file with one claim row"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output PDF path"),
    schema_version: Optional[str] = typer.Option(None, "--schema", help="Claim schema version"),
    overflow: Optional[str] = typer.Option(None, "--overflow", help="Overflow policy: warn or raise"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Render a claim record from a JSON file, without touching the database."""
    _setup_cli_logging(verbose)
    settings = _build_settings(schema_version, overflow)
    claim = _load_record(record_file)
    try:
        formatter = PDFFormatter(settings)
        claim_id = claim.get(formatter.engine.schema.id_field) or record_file.stem
        path = output or Path(f"{settings.report.filename_prefix}{claim_id}.pdf")
        formatter.format_to_file(claim, path)
    except ClaimReportError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Report saved to {path}[/green]")


@app.command()
def fetch(
    claim_id: str = typer.Argument(..., help="Warranty claim id"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output PDF path"),
    schema_version: Optional[str] = typer.Option(None, "--schema", help="Claim schema version"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Fetch a claim from Supabase and render it."""
    _setup_cli_logging(verbose)
    settings = _build_settings(schema_version, None)

    async def _run() -> None:
        validate_settings(settings)
        service = ReportService(
            create_claim_source(settings),
            PDFFormatter(settings),
            filename_prefix=settings.report.filename_prefix,
        )
        report = await service.render(claim_id)
        path = output or Path(report.filename)
        path.write_bytes(report.content)
        console.print(f"[green]Report saved to {path}[/green]")

    try:
        asyncio.run(_run())
    except ClaimReportError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc


@app.command()
def ops(
    record_file: Path = typer.Argument(..., help="JSON file with one claim row"),
    schema_version: Optional[str] = typer.Option(None, "--schema", help="Claim schema version"),
) -> None:
    """Print the draw operations for a record as a table."""
    settings = _build_settings(schema_version, None)
    claim = _load_record(record_file)
    try:
        engine = ReportLayoutEngine(
            settings.layout,
            get_schema(settings.layout.schema_version),
            title=settings.report.company_name,
        )
        result = engine.layout(claim)
    except ClaimReportError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    table = Table(title=f"{len(result.ops)} draw ops (final cursor {result.cursor:g})")
    table.add_column("#", justify="right")
    table.add_column("Op")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("Detail")
    for i, op in enumerate(result.ops):
        if isinstance(op, TextOp):
            detail = f"{op.content!r} size={op.size}{' bold' if op.bold else ''}"
            table.add_row(str(i), "text", f"{op.x:g}", f"{op.y:g}", detail)
        else:
            table.add_row(str(i), "rect", f"{op.x:g}", f"{op.y:g}", f"{op.width:g}x{op.height:g}")
    console.print(table)
    if result.truncated:
        console.print(f"[yellow]Truncated: {', '.join(result.truncated)}[/yellow]")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = AppSettings()
    uvicorn.run(
        "claim_report.api.app:app",
        host=host or settings.api.host,
        port=port or settings.api.port,
    )


if __name__ == "__main__":
    app()
