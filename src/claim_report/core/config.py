"""Nested pydantic-settings configuration for the application.

Each group reads its own env vars through a sub-model env prefix::

    export SUPABASE_URL=https://abcd.supabase.co
    export SUPABASE_ANON_KEY=eyJhbGciOi...
    export CLAIMS_LAYOUT_OVERFLOW_POLICY=raise
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

SUPABASE_URL_PLACEHOLDER = "https://YOUR-PROJECT-REF.supabase.co"


class SupabaseConfig(BaseSettings):
    """Hosted database (PostgREST view) connection.

    Env vars use the ``SUPABASE_`` prefix so the usual ``SUPABASE_URL`` /
    ``SUPABASE_ANON_KEY`` pair is picked up as-is.
    """

    model_config = {"env_prefix": "SUPABASE_"}

    url: str = SUPABASE_URL_PLACEHOLDER
    anon_key: str = ""
    view: str = "warranty_claims_pdf_v"
    timeout: float = Field(default=30.0, gt=0.0)


class LayoutConfig(BaseSettings):
    """Page grid and spacing constants for the claim report.

    All coordinates are PDF points with the origin at the bottom-left corner.
    Env vars use ``CLAIMS_LAYOUT_`` prefix.
    """

    model_config = {"env_prefix": "CLAIMS_LAYOUT_"}

    schema_version: str = "v1"
    overflow_policy: Literal["warn", "raise"] = "warn"

    # Page
    page_width: float = 595.0
    page_height: float = 842.0
    top_y: float = 800.0
    bottom_margin: float = 30.0

    # Columns
    margin_left: float = 30.0
    value_x: float = 130.0
    diagnostic_value_x: float = 180.0
    claim_number_x: float = 420.0

    # Font sizes
    title_font_size: int = Field(default=12, ge=6, le=72)
    section_font_size: int = Field(default=11, ge=6, le=72)
    body_font_size: int = Field(default=10, ge=6, le=72)
    table_font_size: int = Field(default=8, ge=4, le=72)
    wrap_font_size: int = Field(default=9, ge=4, le=72)

    # Vertical steps
    header_step: float = 40.0
    line_step: float = 16.0
    section_gap_step: float = 24.0
    item_end_step: float = 20.0
    subsection_step: float = 14.0
    cells_before_gap: float = 8.0
    cells_after_gap: float = 10.0

    # Six-cell voltage table
    cell_count: int = Field(default=6, ge=1)
    cell_width: float = 50.0
    cell_gap: float = 2.0
    cell_header_height: float = 12.0
    cell_value_height: float = 14.0
    cell_row_gap: float = 2.0
    cell_padding_below: float = 14.0
    cell_header_text_inset: float = 6.0
    cell_value_text_inset: float = 10.0
    cell_text_baseline: float = 2.0

    # Assessment grid
    assessment_label_x: tuple[float, float] = (30.0, 280.0)
    assessment_value_x: tuple[float, float] = (150.0, 420.0)
    assessment_end_step: float = 32.0

    # Evaluation block
    eval_box_x: float = 130.0
    eval_box_width: float = 430.0
    eval_box_height: float = 36.0
    eval_box_drop: float = 3.0
    eval_text_inset: float = 4.0
    eval_step: float = 44.0
    wrap_top_offset: float = 14.0
    wrap_chars_per_line: int = Field(default=88, ge=1)
    wrap_max_lines: int = Field(default=3, ge=1)
    wrap_line_step: float = 12.0

    # Signature block
    signature_diag_width: float = 300.0
    signature_recv_width: float = 220.0
    signature_height: float = 36.0
    signature_gap: float = 15.0
    signature_box_drop: float = 18.0
    signature_name_inset: float = 6.0
    signature_name_drop: float = 6.0


class ReportConfig(BaseSettings):
    """Report identity. Env vars use ``CLAIMS_REPORT_`` prefix."""

    model_config = {"env_prefix": "CLAIMS_REPORT_"}

    company_name: str = "KAPS AUTO PARTS"
    filename_prefix: str = "warranty_"


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``CLAIMS_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "CLAIMS_OBSERVABILITY_"}

    service_name: str = "claim-report"
    log_level: str = "INFO"


class APIConfig(BaseSettings):
    """HTTP API configuration. Env vars use ``CLAIMS_API_`` prefix."""

    model_config = {"env_prefix": "CLAIMS_API_"}

    title: str = "Claim Report"
    description: str = "Warranty claim diagnostic reports rendered as single-page PDFs"
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs.

    Each sub-config reads its own env vars.
    """

    supabase: SupabaseConfig = Field(default_factory=SupabaseConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    api: APIConfig = Field(default_factory=APIConfig)
