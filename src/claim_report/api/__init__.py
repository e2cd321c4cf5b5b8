"""HTTP API for claim reports."""
