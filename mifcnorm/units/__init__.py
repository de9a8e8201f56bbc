"""Units module for category-safe unit parsing and conversion.

Public API:
    parse_unit(text) -> Unit
        Parse free-form unit text ("ng/mL", "uL", "µl") into a Unit

    format_unit(unit) -> str
        Canonical display string of a unit

    convert(value, from_unit, to_unit) -> float
        Linear conversion within one category

    base_unit(category) -> Unit
        Pivot unit of a category

Key Principles:
1. Every unit belongs to exactly one category
2. Conversion across categories always fails, never coerces
3. No rounding beyond native float arithmetic

Examples:
    >>> from mifcnorm.units import parse_unit, convert, Unit
    >>>
    >>> convert(153.914, parse_unit("ng/ml"), Unit.G_L)
    0.000153914
    >>>
    >>> convert(1.0, Unit.NG_ML, Unit.UL)
    Traceback (most recent call last):
    ...
    IncompatibleCategoryError: Cannot convert from Concentration to Volume
"""

from .unitdefs import (
    Category,
    Unit,
    BASE_UNITS,
    OUTPUT_UNIT,
)
from .unitapi import (
    parse_unit,
    format_unit,
    convert,
    base_unit,
    units_in,
)

__all__ = [
    "Category",
    "Unit",
    "BASE_UNITS",
    "OUTPUT_UNIT",
    "parse_unit",
    "format_unit",
    "convert",
    "base_unit",
    "units_in",
]
