"""Unit definitions: physical categories and the closed set of known units.

Each Unit member carries its category, its scale factor relative to the
category's base unit, and its canonical display string. The table is built
once at import time and never mutated.

Base units:
    Concentration        g/L
    Volume               L
    Mass                 g
    Rate                 g/day
    CellNormalizedRate   g/day/10^6 cells
"""

from enum import Enum


# ============================================================================
# Categories
# ============================================================================

class Category(Enum):
    """Physical dimension of a unit. Conversion is only defined within one."""

    CONCENTRATION = "Concentration"
    VOLUME = "Volume"
    MASS = "Mass"
    RATE = "Rate"
    CELL_NORMALIZED_RATE = "CellNormalizedRate"


# ============================================================================
# Units
# ============================================================================

class Unit(Enum):
    """Known units as (category, factor to base unit, display string)."""

    # Concentration (base: g/L, equivalent to mg/mL)
    G_L = (Category.CONCENTRATION, 1.0, "g/L")
    MG_ML = (Category.CONCENTRATION, 1.0, "mg/mL")
    MG_DL = (Category.CONCENTRATION, 1.0 / 100.0, "mg/dL")
    NG_ML = (Category.CONCENTRATION, 1.0 / 1_000_000.0, "ng/mL")
    PG_ML = (Category.CONCENTRATION, 1.0 / 1_000_000_000.0, "pg/mL")

    # Volume (base: L)
    L = (Category.VOLUME, 1.0, "L")
    DL = (Category.VOLUME, 1.0 / 10.0, "dL")
    ML = (Category.VOLUME, 1.0 / 1_000.0, "mL")
    UL = (Category.VOLUME, 1.0 / 1_000_000.0, "µL")

    # Mass (base: g)
    G = (Category.MASS, 1.0, "g")
    NG = (Category.MASS, 1.0 / 1_000_000_000.0, "ng")

    # Rate (base: g/day)
    G_DAY = (Category.RATE, 1.0, "g/day")
    NG_DAY = (Category.RATE, 1.0 / 1_000_000_000.0, "ng/day")

    # Cell-normalized rate (base: g/day/10^6 cells)
    G_DAY_MILLION_CELLS = (Category.CELL_NORMALIZED_RATE, 1.0, "g/day/10^6 cells")
    NG_DAY_MILLION_CELLS = (Category.CELL_NORMALIZED_RATE, 1.0 / 1_000_000_000.0, "ng/day/10^6 cells")
    G_DAY_CELL = (Category.CELL_NORMALIZED_RATE, 1_000_000.0, "g/day/cell")
    NG_DAY_CELL = (Category.CELL_NORMALIZED_RATE, 1_000_000.0 / 1_000_000_000.0, "ng/day/cell")

    def __init__(self, category: Category, factor: float, display: str):
        self.category = category
        self.factor = factor
        self.display = display

    def __str__(self) -> str:
        return self.display


BASE_UNITS = {
    Category.CONCENTRATION: Unit.G_L,
    Category.VOLUME: Unit.L,
    Category.MASS: Unit.G,
    Category.RATE: Unit.G_DAY,
    Category.CELL_NORMALIZED_RATE: Unit.G_DAY_MILLION_CELLS,
}

# Single fixed output unit of the normalizer
OUTPUT_UNIT = Unit.NG_DAY_MILLION_CELLS


__all__ = [
    "Category",
    "Unit",
    "BASE_UNITS",
    "OUTPUT_UNIT",
]
