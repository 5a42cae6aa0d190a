"""Commands: quote, quote-multi."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from freightctl.commands._base import FrtCommand
from freightctl.domain.quote import MultiPackageInput, PackageLine, QuotePricingInput

if TYPE_CHECKING:
    from freightctl.commands._context import AppContext

_MODES_HELP = "Transport mode: AIR, ROAD, SEA or RAIL."
_PRIORITY_HELP = "STANDARD (default), NORMAL or URGENT."

_QUOTE_EXAMPLES = """\
  freightctl quote --weight 5 --length 50 --width 40 --height 30 --mode AIR --from FR --to CI
  freightctl quote -w 500 -l 100 -W 100 -H 100 --mode SEA --from fr --to bf --priority URGENT
  freightctl --json quote -w 12 -l 60 -W 40 -H 40 --mode ROAD --from CI --to BF"""

_MULTI_EXAMPLES = """\
  freightctl quote-multi --package 1,2,30,20,5,Tablet --package 3,15,60,40,40 \\
      --mode AIR --from FR --to BF --priority URGENT
  freightctl -q quote-multi -p 2,40,80,60,50 --mode ROAD --from CI --to BF"""


def _routing_options(func):  # type: ignore[no-untyped-def]
    func = click.option("--priority", default=None, help=_PRIORITY_HELP)(func)
    func = click.option("--to", "destination", required=True, help="Destination country code.")(
        func
    )
    func = click.option("--from", "origin", required=True, help="Origin country code.")(func)
    func = click.option("--mode", "-m", required=True, help=_MODES_HELP)(func)
    return func


@click.command(cls=FrtCommand, examples=_QUOTE_EXAMPLES)
@click.option("--weight", "-w", type=float, required=True, help="Actual weight in kg.")
@click.option("--length", "-l", type=float, required=True, help="Length in cm.")
@click.option("--width", "-W", type=float, required=True, help="Width in cm.")
@click.option("--height", "-H", type=float, required=True, help="Height in cm.")
@_routing_options
@click.pass_obj
def quote(
    app: AppContext,
    weight: float,
    length: float,
    width: float,
    height: float,
    mode: str,
    origin: str,
    destination: str,
    priority: str | None,
) -> None:
    """Price a single package."""
    app.emit(
        app.pricing.quote(
            QuotePricingInput(
                actual_weight_kg=weight,
                length_cm=length,
                width_cm=width,
                height_cm=height,
                mode=mode,
                origin_code=origin,
                destination_code=destination,
                priority=priority,
            )
        )
    )


def _parse_packages(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> list[PackageLine]:
    """Parse ``QTY,WEIGHT,L,W,H[,DESCRIPTION]`` specs."""
    packages: list[PackageLine] = []
    for raw in values:
        parts = [p.strip() for p in raw.split(",", 5)]
        if len(parts) < 5:
            msg = f"{raw!r}: expected QTY,WEIGHT,LENGTH,WIDTH,HEIGHT[,DESCRIPTION]"
            raise click.BadParameter(msg)
        try:
            quantity = int(parts[0])
            weight, length, width, height = (float(p) for p in parts[1:5])
        except ValueError as exc:
            raise click.BadParameter(f"{raw!r}: {exc}") from exc
        packages.append(
            PackageLine(
                weight_kg=weight,
                length_cm=length,
                width_cm=width,
                height_cm=height,
                quantity=quantity,
                description=parts[5] if len(parts) > 5 and parts[5] else None,
            )
        )
    return packages


@click.command("quote-multi", cls=FrtCommand, examples=_MULTI_EXAMPLES)
@click.option(
    "--package",
    "-p",
    "packages",
    multiple=True,
    callback=_parse_packages,
    help="Package line as QTY,WEIGHT,L,W,H[,DESCRIPTION]. Repeatable.",
)
@_routing_options
@click.pass_obj
def quote_multi(
    app: AppContext,
    packages: list[PackageLine],
    mode: str,
    origin: str,
    destination: str,
    priority: str | None,
) -> None:
    """Price a shipment of several package lines."""
    app.emit(
        app.pricing.quote_multi(
            MultiPackageInput(
                mode=mode,
                origin_code=origin,
                destination_code=destination,
                packages=packages,
                priority=priority,
            )
        )
    )
