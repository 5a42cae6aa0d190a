"""``freightctl`` entry point: global flags, settings, command registration."""

from __future__ import annotations

import click

from freightctl import __version__
from freightctl.commands import register_commands
from freightctl.commands._context import AppContext
from freightctl.config.settings import FreightSettings

_EPILOG = """\
Tariffs come from the built-in reference table, overridden by the
[tariffs] section of freightctl.toml (searched upwards from the current
directory, or named by FREIGHTCTL_CONFIG / --config)."""


@click.group(
    invoke_without_command=True,
    epilog=_EPILOG,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, prog_name="freightctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the price or tariff.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and per-stage timings.")
@click.option("--log-json", is_flag=True, help="Write log events to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    metavar="PATH",
    default=None,
    help="Read this TOML file instead of discovering freightctl.toml.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """freightctl — freight quotes from lane tariffs and volumetric weight."""
    ctx.obj = AppContext(FreightSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
