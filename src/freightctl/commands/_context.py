"""AppContext: the object every command receives through ``@click.pass_obj``.

Built once by the root group. Owns the tariff repository for the run and
turns ServiceResults into output and exit codes.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from freightctl.config.logging import configure_logging
from freightctl.output.formatters import OutputSettings, format_result
from freightctl.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from freightctl.config.settings import FreightSettings
    from freightctl.infrastructure.tariffs import TariffRepository
    from freightctl.services.pricing import PricingService
    from freightctl.services.result import ServiceResult


class AppContext:
    """Per-invocation state shared by all commands.

    Tariff configuration is only turned into a repository when a command
    first needs it, so ``--help`` works with a broken ``[tariffs]`` table.
    """

    def __init__(self, settings: FreightSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @cached_property
    def repository(self) -> TariffRepository:
        from freightctl.infrastructure.tariffs import TariffRepository

        return TariffRepository.from_config(self.settings.tariffs)

    @property
    def pricing(self) -> PricingService:
        from freightctl.services.pricing import PricingService

        return PricingService(self.repository, currency=self.settings.pricing.currency)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; exit 1 if it failed.

        Successful output goes to stdout and its warnings to stderr, so
        ``freightctl -q quote ...`` pipes a bare price. ``--json`` output
        already embeds the warnings. Failures go to stderr.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
