"""Rich console and theme for human-readable output.

Renderers print into a Console backed by StringIO and return the text, so
``format_result`` stays a plain ``ServiceResult -> str`` function. Rich
drops colour codes on its own when stdout is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from freightctl.domain.types import TransportMode

_MODE_COLOURS: dict[TransportMode, str] = {
    TransportMode.AIR: "cyan",
    TransportMode.ROAD: "green",
    TransportMode.SEA: "blue",
    TransportMode.RAIL: "yellow",
}

FRT_THEME = Theme(
    {
        "frt.ok": "bold green",
        "frt.error": "bold red",
        "frt.op": "bold cyan",
        "frt.key": "dim",
        "frt.lane": "bold blue",
        "frt.price": "bold magenta",
        "frt.advisory": "yellow",
        **{f"frt.mode.{mode.value.lower()}": colour for mode, colour in _MODE_COLOURS.items()},
    }
)

DEFAULT_WIDTH = 120


def create_console(*, width: int = DEFAULT_WIDTH) -> Console:
    """A themed Console writing to an in-memory buffer."""
    return Console(file=StringIO(), theme=FRT_THEME, highlight=False, width=width)


def get_output(console: Console) -> str:
    """Everything printed to a console from :func:`create_console`."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_mode(mode: str) -> str:
    """Theme style for a transport mode name, or "" if unknown."""
    name = mode.strip().lower()
    return f"frt.mode.{name}" if name in {m.value.lower() for m in TransportMode} else ""
