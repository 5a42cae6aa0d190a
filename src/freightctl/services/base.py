"""BaseService — foundation for freightctl services.

Every service receives a :class:`TariffRepository` at construction time.
Operations take a single table snapshot up front and use it for the whole
calculation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from freightctl.infrastructure.tariffs import TariffRepository, TariffTable


class BaseService:
    """Base for service-layer classes.

    Usage::

        class PricingService(BaseService):
            def quote(self, ...) -> ServiceResult:
                table = self._snapshot()
                ...
    """

    def __init__(self, repository: TariffRepository, *, currency: str = "EUR") -> None:
        self._repository = repository
        self._currency = currency

    def _snapshot(self) -> TariffTable:
        return self._repository.snapshot()
