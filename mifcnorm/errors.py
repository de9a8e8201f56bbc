"""
Row-scoped Failure Types
------------------------

Every failure that can happen while turning one spreadsheet row into a
normalized record. None of these are process-fatal: the batch processor
logs them with the row number and moves on.

Each class carries a stable ``kind`` string used in logs and skip reports.

Hierarchy:
  RowError (ValueError)
    - DecodeError
    - Excluded
    - MissingValue
    - MissingValueUnit
    - MissingNormalizationInfo
    - UnknownUnitError
    - IncompatibleCategoryError
    - DivisionByZero
    - NonFiniteResult
"""

from typing import Optional


class RowError(ValueError):
    """Base class for all failures scoped to a single row."""

    kind = "RowError"


class DecodeError(RowError):
    """Row could not be decoded into a raw record (missing column, bad number)."""

    kind = "DecodeError"


class Excluded(RowError):
    """Row had a non-empty Exclude column."""

    kind = "Excluded"

    def __init__(self, marker: str = ""):
        self.marker = marker
        super().__init__(f"row had a non-empty Exclude column ({marker!r})")


class MissingValue(RowError):
    kind = "MissingValue"

    def __init__(self):
        super().__init__("row did not have an entered Value")


class MissingValueUnit(RowError):
    kind = "MissingValueUnit"

    def __init__(self):
        super().__init__("row did not have an entered Value Unit")


class MissingNormalizationInfo(RowError):
    kind = "MissingNormalizationInfo"

    def __init__(self):
        super().__init__("row did not have associated normalization info columns")


class UnknownUnitError(RowError):
    """Unit text did not match any known alias.

    Args:
        text: The unit text as it appeared in the input
        suggestion: Closest known spelling, if one was close enough
    """

    kind = "UnknownUnitError"

    def __init__(self, text: str, suggestion: Optional[str] = None):
        self.text = text
        self.suggestion = suggestion
        message = f"Unknown unit <{text}>"
        if suggestion:
            message += f" (did you mean <{suggestion}>?)"
        super().__init__(message)


class IncompatibleCategoryError(RowError):
    """Conversion attempted between units of different physical categories."""

    kind = "IncompatibleCategoryError"

    def __init__(self, from_category, to_category):
        self.from_category = from_category
        self.to_category = to_category
        super().__init__(f"Cannot convert from {from_category.value} to {to_category.value}")


class DivisionByZero(RowError):
    """Sample duration or cell count was zero."""

    kind = "DivisionByZero"


class NonFiniteResult(RowError):
    """Normalization produced inf or NaN from otherwise valid inputs."""

    kind = "NonFiniteResult"


__all__ = [
    "RowError",
    "DecodeError",
    "Excluded",
    "MissingValue",
    "MissingValueUnit",
    "MissingNormalizationInfo",
    "UnknownUnitError",
    "IncompatibleCategoryError",
    "DivisionByZero",
    "NonFiniteResult",
]
