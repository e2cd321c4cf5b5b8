"""Fixed captions printed on the claim report."""

from __future__ import annotations

CLAIM_NUMBER_PREFIX = "Claim No.: "

CLAIM_INFO_LABELS: tuple[str, str, str] = ("Date Claimed:", "Customer:", "Address:")

ITEM_HEADING = "Item Information"
BARCODE_LABEL = "Barcode:"
SKU_LABEL = "SKU:"

DIAGNOSTIC_HEADING = "Diagnostic Report"
BEFORE_CHARGING_HEADING = "A. Testing Before Charging"
AFTER_CHARGING_HEADING = "B. Testing After Charging"
OPEN_CIRCUIT_VOLTAGE_LABEL = "Open Circuit Voltage:"
ELECTROLYTE_LABEL = "Electrolyte:"
CELL_HEADER_TEMPLATE = "Cell {index}"

ASSESSMENT_HEADING = "C. Assessment / Status"

# Keyed by record field name; grid order follows the schema's field order.
ASSESSMENT_LABELS: dict[str, str] = {
    "defective": "Defective:",
    "non_adjustable": "Non-Adjustable:",
    "recharge": "Recharge:",
    "no_defect": "No Defect:",
}

EVALUATION_LABELS: dict[str, str] = {
    "result": "Result",
    "factory_defect": "Factory Defect",
    "non_factory_defect": "Non-Factory Defect",
    "remarks": "Remarks",
    "findings": "Findings",
    "final_result": "Final Result",
}

DIAGNOSED_BY_LABEL = "Diagnosed By"
RECEIVED_BY_LABEL = "Received By"


def field_label(field_name: str) -> str:
    """Fallback caption for fields without a fixed label (``no_defect`` → ``No Defect``)."""
    return field_name.replace("_", " ").title()
