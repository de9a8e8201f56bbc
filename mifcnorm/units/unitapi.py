"""Public API for unit parsing, formatting and conversion.

All conversions pivot through the base unit of a category:

    value -> base -> target  ==  value * from.factor / to.factor

Converting between categories is never allowed; a concentration can not
silently become a volume or a rate.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

try:
    from rapidfuzz import fuzz, process
except ImportError as e:
    raise ImportError("rapidfuzz not installed. pip install rapidfuzz") from e

from mifcnorm.errors import IncompatibleCategoryError, UnknownUnitError
from mifcnorm.units.unitdefs import BASE_UNITS, Category, Unit

logger = logging.getLogger(__name__)

# Minimum WRatio score for an "unknown unit" suggestion
SUGGESTION_THRESHOLD = 80


# ============================================================================
# Alias Configuration
# ============================================================================

def _alias_key(text: str) -> str:
    """Collapse a unit spelling to its lookup key.

    Lowercases, drops all whitespace and folds the micro sign and Greek mu
    to ASCII "u".

    Examples:
        >>> _alias_key(" µL ")
        'ul'
        >>> _alias_key("ng/day/10^6 cells")
        'ng/day/10^6cells'
    """
    text = text.replace("µ", "u").replace("μ", "u")
    return re.sub(r"\s+", "", text).lower()


def _load_config() -> Dict[str, Any]:
    """Load the alias table from YAML.

    The MIFCNORM_UNIT_ALIASES environment variable overrides the packaged
    unitaliases.yaml.

    Returns:
        Mapping of Unit member name -> list of accepted spellings
    """
    env_path = os.environ.get("MIFCNORM_UNIT_ALIASES")
    config_path = Path(env_path) if env_path else Path(__file__).parent / "unitaliases.yaml"

    if not config_path.exists():
        logger.warning(f"Unit alias file not found: {config_path}; only display strings will parse")
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _build_lookup(config: Dict[str, Any]) -> Dict[str, Unit]:
    """Build alias key -> Unit lookup from display strings and configured aliases.

    Raises:
        ValueError: If the config names an unknown unit, or one spelling maps
            to two different units
    """
    lookup: Dict[str, Unit] = {}

    def add(spelling: str, unit: Unit) -> None:
        key = _alias_key(spelling)
        existing = lookup.get(key)
        if existing is not None and existing is not unit:
            raise ValueError(
                f"Alias <{spelling}> is ambiguous between {existing.name} and {unit.name}"
            )
        lookup[key] = unit

    for unit in Unit:
        add(unit.display, unit)

    for name, aliases in config.items():
        try:
            unit = Unit[name]
        except KeyError:
            raise ValueError(f"Unit alias config names unknown unit <{name}>") from None
        for alias in aliases or []:
            add(str(alias), unit)

    return lookup


# Built once on module load; read-only afterwards
_LOOKUP = _build_lookup(_load_config())


# ============================================================================
# Parsing and Formatting
# ============================================================================

def _suggest(text: str) -> Optional[str]:
    """Closest known spelling for an unrecognized unit, if any is close."""
    choices = {key: unit.display for key, unit in _LOOKUP.items()}
    match = process.extractOne(_alias_key(text), list(choices), scorer=fuzz.WRatio)
    if match is None:
        return None
    key, score, _ = match
    if score < SUGGESTION_THRESHOLD:
        return None
    return choices[key]


def parse_unit(text: str) -> Unit:
    """Parse free-form unit text into a Unit.

    Args:
        text: Unit text such as "ng/mL", "uL", "µl", "nanograms per milliliter"

    Returns:
        Matching Unit member

    Raises:
        UnknownUnitError: If no alias matches

    Examples:
        >>> parse_unit("ng/ml")
        <Unit.NG_ML: ...>
        >>> parse_unit("uL") is parse_unit("µL")
        True
    """
    if text is None:
        raise UnknownUnitError("")

    unit = _LOOKUP.get(_alias_key(str(text)))
    if unit is None:
        raise UnknownUnitError(str(text).strip(), suggestion=_suggest(str(text)))
    return unit


def format_unit(unit: Unit) -> str:
    """Canonical display string for a unit (used for output and notes)."""
    return unit.display


# ============================================================================
# Conversion
# ============================================================================

def base_unit(category: Category) -> Unit:
    """The pivot unit of a category."""
    return BASE_UNITS[category]


def units_in(category: Category) -> List[Unit]:
    """All known units of a category, in definition order."""
    return [u for u in Unit if u.category is category]


def convert(value: float, from_unit: Unit, to_unit: Unit) -> float:
    """Convert a value between two units of the same category.

    Args:
        value: Numeric value expressed in from_unit
        from_unit: Unit of the value
        to_unit: Target unit

    Returns:
        value * from_unit.factor / to_unit.factor, without rounding

    Raises:
        IncompatibleCategoryError: If the units belong to different categories

    Examples:
        >>> convert(200.0, Unit.UL, Unit.L)
        0.0002
        >>> convert(1.0, Unit.NG_ML, Unit.L)
        Traceback (most recent call last):
        ...
        IncompatibleCategoryError: Cannot convert from Concentration to Volume
    """
    if from_unit.category is not to_unit.category:
        raise IncompatibleCategoryError(from_unit.category, to_unit.category)

    return value * from_unit.factor / to_unit.factor


__all__ = [
    "parse_unit",
    "format_unit",
    "convert",
    "base_unit",
    "units_in",
]
