"""Subcommand modules for freightctl.

Provides register_commands() which uses deferred imports to keep
``freightctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group."""
    from freightctl.commands.quote import quote, quote_multi
    from freightctl.commands.tariffs import tariffs

    cli.add_command(quote)
    cli.add_command(quote_multi)
    cli.add_command(tariffs)
