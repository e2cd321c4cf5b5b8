"""Claim record and versioned record schemas.

A ``ClaimRecord`` wraps exactly one row fetched from the claims view. The
``ClaimSchema`` describes which columns that row carries for a given
revision of the report, so one layout engine can serve every revision.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from claim_report.core.types import FieldValue
from claim_report.exceptions import SchemaError

# ── Claim record ─────────────────────────────────────────────────────


@dataclass(frozen=True, eq=False)
class ClaimRecord(Mapping[str, FieldValue]):
    """Immutable field-name -> value mapping for one warranty claim.

    Equality comes from ``Mapping``, so a record compares equal to a dict
    with the same items and, like a dict, is not hashable.
    """

    fields: Mapping[str, FieldValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> ClaimRecord:
        return cls(fields=dict(row))

    def __getitem__(self, key: str) -> FieldValue:
        return self.fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, key: str, default: FieldValue = None) -> FieldValue:
        return self.fields.get(key, default)

    def first_present(self, *keys: str) -> FieldValue:
        """Return the first value that is not ``None`` (``??`` chaining)."""
        for key in keys:
            value = self.fields.get(key)
            if value is not None:
                return value
        return None


# ── Record schemas ───────────────────────────────────────────────────


def _cells(suffix: str, count: int = 6) -> tuple[str, ...]:
    return tuple(f"cell{i}_{suffix}" for i in range(1, count + 1))


ASSESSMENT_FIELDS: tuple[str, ...] = ("defective", "non_adjustable", "recharge", "no_defect")

EVALUATION_FIELDS: tuple[str, ...] = (
    "result",
    "factory_defect",
    "non_factory_defect",
    "remarks",
    "findings",
    "final_result",
)


@dataclass(frozen=True)
class ClaimSchema:
    """Column layout of one report revision.

    ``address_fields`` holding a single column renders that column as-is;
    several columns are joined with ``", "`` skipping blanks.
    """

    version: str
    id_field: str = "warranty_claim_id"
    date_field: str = "date_claimed"
    customer_field: str = "account_name"
    address_fields: tuple[str, ...] = ("account_address",)
    barcode_field: str = "barcode"
    sku_field: str = "sku_code"
    voltage_before_field: str = "voltage_before_charge"
    voltage_after_field: str = "voltage_after_charge"
    cells_before: tuple[str, ...] = _cells("before")
    cells_after: tuple[str, ...] = _cells("after")
    electrolyte_field: str | None = "electrolyte"
    assessment_fields: tuple[str, ...] = ASSESSMENT_FIELDS
    evaluation_fields: tuple[str, ...] = EVALUATION_FIELDS
    diagnosed_by_fields: tuple[str, ...] = ("diagnosed_by", "diagnosed_by_name")
    received_by_field: str = "received_by"

    @property
    def include_electrolyte(self) -> bool:
        return self.electrolyte_field is not None

    def select_fields(self) -> list[str]:
        """Column list for the PostgREST ``select`` parameter, without duplicates."""
        columns: list[str] = [
            self.id_field,
            self.date_field,
            self.customer_field,
            *self.address_fields,
            self.sku_field,
            self.barcode_field,
            self.voltage_before_field,
            *self.cells_before,
            self.voltage_after_field,
            *self.cells_after,
        ]
        if self.electrolyte_field:
            columns.append(self.electrolyte_field)
        columns.extend(self.assessment_fields)
        columns.extend(self.evaluation_fields)
        columns.extend(self.diagnosed_by_fields)
        columns.append(self.received_by_field)
        return list(dict.fromkeys(columns))

    def address(self, claim: ClaimRecord) -> FieldValue:
        """Compose the address value for *claim* (``None`` when every part is blank)."""
        if len(self.address_fields) == 1:
            return claim.get(self.address_fields[0])
        parts = [str(claim.get(f)).strip() for f in self.address_fields if claim.get(f) is not None]
        parts = [p for p in parts if p]
        return ", ".join(parts) if parts else None


SCHEMAS: dict[str, ClaimSchema] = {
    "v1": ClaimSchema(version="v1"),
    "composite_address": ClaimSchema(
        version="composite_address",
        address_fields=("address_street", "address_city", "address_province"),
    ),
    "no_electrolyte": ClaimSchema(version="no_electrolyte", electrolyte_field=None),
}


def get_schema(version: str) -> ClaimSchema:
    """Look up a built-in schema. Raises SchemaError for unknown versions."""
    try:
        return SCHEMAS[version]
    except KeyError:
        raise SchemaError(
            f"Unknown claim schema version {version!r}. Known: {', '.join(sorted(SCHEMAS))}"
        ) from None
