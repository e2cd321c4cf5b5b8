"""Shared type aliases for the framework layer."""

from __future__ import annotations

from typing import Any, Union

# Scalar values a PostgREST row can carry for the report fields
FieldValue = Union[str, int, float, bool, None]

# Rows as decoded from the REST response
JsonList = list[dict[str, Any]]
