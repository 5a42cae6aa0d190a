"""Typed pricing failures.

Every failure aborts the calculation; no partial result is ever returned.
``code`` is stable and surfaces as ``ServiceError.code``; ``field`` names
the offending input so callers can attach the message to a form field.
"""

from __future__ import annotations

import math
from typing import Any


class PricingError(ValueError):
    """Base class for all pricing input failures."""

    code = "PRICING_ERROR"
    field: str | None = None

    def __init__(self, message: str, *, field: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.message = message
        if field is not None:
            self.field = field
        self.value = value

    def detail(self) -> dict[str, Any]:
        """Structured detail for error envelopes."""
        out: dict[str, Any] = {}
        if self.field is not None:
            out["field"] = self.field
        if self.value is not None:
            out["value"] = self.value
        return out


class InvalidDimensionError(PricingError):
    code = "INVALID_DIMENSION"

    def __init__(self, field: str, value: float) -> None:
        kind = "non-positive" if math.isfinite(value) else "non-finite"
        super().__init__(
            f"{kind} dimension: {field} must be strictly positive (got {value})",
            field=field,
            value=value,
        )


class InvalidWeightError(PricingError):
    code = "INVALID_WEIGHT"
    field = "actual_weight_kg"

    def __init__(self, value: float, *, field: str | None = None) -> None:
        super().__init__(
            f"weight must be a finite positive number (got {value})", field=field, value=value
        )


class UnsupportedModeError(PricingError):
    code = "UNSUPPORTED_MODE"
    field = "mode"

    def __init__(self, value: Any) -> None:
        super().__init__(f"unsupported transport mode: {value!r}", value=str(value))


class UnsupportedPriorityError(PricingError):
    code = "UNSUPPORTED_PRIORITY"
    field = "priority"

    def __init__(self, value: Any) -> None:
        super().__init__(f"unsupported priority: {value!r}", value=str(value))


class EmptyShipmentError(PricingError):
    code = "EMPTY_SHIPMENT"
    field = "packages"

    def __init__(self) -> None:
        super().__init__("at least one package is required")


class InvalidQuantityError(PricingError):
    code = "INVALID_QUANTITY"

    def __init__(self, index: int, value: int) -> None:
        super().__init__(
            f"package {index}: quantity must be at least 1 (got {value})",
            field=f"packages[{index}].quantity",
            value=value,
        )


class AmountOverflowError(PricingError):
    code = "AMOUNT_OVERFLOW"

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is too large to represent", field=field)
