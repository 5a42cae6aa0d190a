"""The envelope every service operation returns.

INVARIANT: service methods return a ServiceResult for every pricing
outcome. Invalid input becomes ``ok=False`` with a stable error code;
only programming errors propagate as exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from freightctl.domain.errors import PricingError


class ServiceError(BaseModel):
    """Why an operation failed.

    ``detail`` carries ``field`` (the offending input) and ``value`` when
    they are known.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: PricingError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=exc.detail())


class ServiceResult(BaseModel):
    """Outcome of one service call.

    Attributes:
        ok: True when ``data`` holds a result.
        op: Operation name, used to pick a renderer (``"quote"``,
            ``"lookup_tariff"``, ...).
        data: JSON-ready payload.
        warnings: Non-fatal notes, such as an indicative price from a
            default tariff.
        error: Set when ``ok`` is False.
        meta: Tariff table version and, with ``--verbose``, timing spans.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: PricingError) -> ServiceResult:
        """Wrap a rejected input as an ``ok=False`` result."""
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
