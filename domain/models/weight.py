"""
Weight unit conversion.

All weights are stored in pounds. Conversion to kilograms happens only at the
presentation edge.
"""

from typing import Literal

WeightUnit = Literal["lb", "kg"]

CANONICAL_UNIT: WeightUnit = "lb"
KG_TO_LB = 2.20462


def convert_weight(value: float, from_unit: WeightUnit, to_unit: WeightUnit) -> float:
    """
    Convert a weight between pounds and kilograms.

    Examples:
        >>> round(convert_weight(100, "kg", "lb"), 3)
        220.462
        >>> convert_weight(135, "lb", "lb")
        135
    """
    if from_unit == to_unit:
        return value
    if from_unit == "lb" and to_unit == "kg":
        return value / KG_TO_LB
    if from_unit == "kg" and to_unit == "lb":
        return value * KG_TO_LB
    raise ValueError(f"Unsupported conversion: {from_unit} -> {to_unit}")


def to_display_weight(stored_lb: float, unit: WeightUnit, precision: int = 1) -> float:
    """Convert a stored (lb) value into ``unit``, rounded for display."""
    return round(convert_weight(stored_lb, CANONICAL_UNIT, unit), precision)


def to_storage_weight(value: float, unit: WeightUnit) -> float:
    """Convert a user-entered value into the canonical storage unit."""
    return convert_weight(value, unit, CANONICAL_UNIT)
