"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from freightctl.domain.quote import QuotePricingResult
from freightctl.output.console import create_console, get_output, style_for_mode
from freightctl.output.display import format_for_display

if TYPE_CHECKING:
    from rich.console import Console

    from freightctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: the number that matters."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    d = result.data
    if result.op == "quote":
        return f"{d['final_price']:.2f} {d['currency']}"
    if result.op == "quote_multi":
        return f"{d['total_price']:.2f} {d['currency']}"
    if result.op == "lookup_tariff":
        return f"{d['tariff']} {d['currency']}"
    if result.op == "list_tariffs":
        return "\n".join(f"{i['lane']} {i['mode']} {i['tariff']}" for i in d.get("items", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    line = Text("OK", style="frt.ok")
    line.append(f"  {result.op}", style="frt.op")
    console.print(line)


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    line = Text(f"  {key}: ", style="frt.key")
    line.append(str(value), style=style)
    console.print(line)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    line = Text(f"{prefix}{duration:>8.3f}ms  ", style="dim")
    line.append(str(name))
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    line = Text("ERROR", style="frt.error")
    line.append(f"  {result.op}", style="frt.op")
    line.append(f" — {msg}")
    console.print(line)

    if err and err.detail and (verbose or "field" in err.detail):
        for k, v in err.detail.items():
            if verbose or k == "field":
                _field(console, k, v)


# ── Quote renderers ───────────────────────────────────────────────────


def _render_quote(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    quote = QuotePricingResult.model_validate(result.data)
    display = format_for_display(quote)

    _status_line(console, result)
    for line in display.detail_lines:
        console.print(Text(f"  {line}"))
    total = Text("  Total: ", style="frt.key")
    total.append(display.total_price_label, style="frt.price")
    console.print(total)
    for advisory in display.advisories:
        console.print(Text(f"  ! {advisory}", style="frt.advisory"))


def _render_quote_multi(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    currency = d["currency"]
    _status_line(console, result)
    _field(console, "lane", f"{d['lane']['label']} ({d['mode']})", style="frt.lane")

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Description")
    table.add_column("Qty", justify="right")
    table.add_column("Unit kg", justify="right")
    table.add_column("Taxable", justify="right")
    table.add_column("Unit price", justify="right")
    table.add_column("Line total", justify="right", style="frt.price")
    for index, line in enumerate(d["lines"], start=1):
        detail = line["detail"]
        table.add_row(
            str(index),
            line.get("description") or "",
            str(line["quantity"]),
            f"{line['weight_kg']:g}",
            f"{detail['taxable_mass']} {detail['taxable_unit']}",
            f"{line['unit_price']:.2f}",
            f"{line['line_total']:.2f}",
        )
    console.print(table)

    _field(console, "packages", d["total_package_count"])
    _field(console, "total_weight_kg", d["total_weight_kg"])
    _field(console, "before_priority", f"{d['total_before_priority']:.2f} {currency}")
    if d["priority_coefficient"] != 1:
        _field(
            console,
            "priority",
            f"{d['priority']} ×{d['priority_coefficient']:g} "
            f"(+{d['priority_surcharge']:.2f} {currency})",
        )
    _field(console, "total", f"{d['total_price']:.2f} {currency}", style="frt.price")


# ── Tariff renderers ──────────────────────────────────────────────────


def _render_lookup(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "lane", d["lane"], style="frt.lane")
    _field(console, "mode", d["mode"], style=style_for_mode(d["mode"]))
    _field(console, "tariff", f"{d['tariff']} {d['currency']}")
    _field(console, "source", "lane" if d["from_lane"] else "default")


def _render_tariff_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Lane", style="frt.lane", no_wrap=True)
    table.add_column("Mode")
    table.add_column(f"Tariff ({d['currency']})", justify="right")
    for item in d["items"]:
        table.add_row(
            item["lane"],
            Text(item["mode"], style=style_for_mode(item["mode"])),
            f"{item['tariff']:g}",
        )
    console.print(table)

    defaults = ", ".join(f"{mode}={value:g}" for mode, value in d["defaults"].items())
    _field(console, "defaults", defaults)


# ── Generic renderer ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_Renderer = Callable[..., None]

_OP_RENDERERS: dict[str, _Renderer] = {
    "quote": _render_quote,
    "quote_multi": _render_quote_multi,
    "lookup_tariff": _render_lookup,
    "list_tariffs": _render_tariff_list,
}
