"""Command group: tariffs (show, lookup)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from freightctl.commands._base import FrtGroup

if TYPE_CHECKING:
    from freightctl.commands._context import AppContext

_TARIFFS_EXAMPLES = """\
  freightctl tariffs show
  freightctl tariffs show --mode SEA
  freightctl tariffs lookup FR CI --mode AIR
  freightctl --json tariffs lookup fr xx --mode ROAD"""


@click.group(cls=FrtGroup, examples=_TARIFFS_EXAMPLES)
def tariffs() -> None:
    """Inspect the tariff table."""


@tariffs.command(
    examples="""\
  freightctl tariffs show
  freightctl tariffs show --mode AIR"""
)
@click.option("--mode", "-m", default=None, help="Only show tariffs for this mode.")
@click.pass_obj
def show(app: AppContext, mode: str | None) -> None:
    """List configured lane tariffs and per-mode defaults."""
    app.emit(app.pricing.list_tariffs(mode))


@tariffs.command(
    examples="""\
  freightctl tariffs lookup FR CI --mode AIR
  freightctl tariffs lookup CI BF --mode ROAD"""
)
@click.argument("origin")
@click.argument("destination")
@click.option("--mode", "-m", required=True, help="Transport mode: AIR, ROAD, SEA or RAIL.")
@click.pass_obj
def lookup(app: AppContext, origin: str, destination: str, mode: str) -> None:
    """Resolve the unit tariff for a lane, falling back to the mode default."""
    app.emit(app.pricing.lookup_tariff(origin, destination, mode))
