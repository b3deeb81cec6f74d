"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import calendar
import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from tzctl.domain.display import day_name
from tzctl.output.console import create_console, get_output, style_for_state

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from tzctl.services.result import ServiceResult

    Renderer = Callable[..., None]


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
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render one line for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    d = result.data
    if result.op == "convert":
        return f"{d['local']['iso']}{d['offset']}"
    if result.op == "time_info":
        return str(d["current"]["text"])
    if result.op == "rules":
        rules = d["rules"]
        return f"{rules['standard_offset']} {rules['daylight_offset']}"
    if result.op == "date_info":
        return str(d["weekday"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="tz.ok")
    op = Text(f"  {result.op}", style="tz.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="tz.key")
    if key == "state":
        v = Text(str(value), style=style_for_state(str(value)))
    elif key in ("offset", "bias"):
        v = Text(str(value), style="tz.offset")
    elif key in ("local", "utc", "current"):
        v = Text(str(value), style="tz.when")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _ordinal(occurrence: int) -> str:
    return {1: "1st", 2: "2nd", 3: "3rd", 4: "4th"}.get(occurrence, "last")


def describe_rule(rule: dict[str, Any]) -> str:
    """Human description of a transition rule payload."""
    kind = rule["kind"]
    clock = f"{rule['hour']:02d}:{rule['minute']:02d}"
    if kind == "relative":
        weekday = day_name(rule["day_of_week"])
        month = calendar.month_name[rule["month"]]
        return f"{_ordinal(rule['day'])} {weekday} of {month} at {clock}"
    if kind == "absolute":
        return f"{rule['year']:04d}-{rule['month']:02d}-{rule['day']:02d} at {clock}"
    return kind


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="tz.error")
    op = Text(f"  {result.op}", style="tz.op")
    code = Text(f" [{err.code}]" if err else "", style="dim")
    dash = Text(" — ")
    console.print(label, op, code, dash, msg, sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Conversion renderers ──────────────────────────────────────────────


def _render_convert(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "utc", d["timestamp"])
    _field(console, "local", f"{d['local']['iso']}{d['offset']}")
    _field(console, "weekday", d["local"]["weekday"])
    _field(console, "state", d["state"])
    _field(console, "offset", d["offset"])
    _field(console, "rules_year", d["rules_year"])
    if verbose:
        console.print()
        console.print(_rules_table(d["rules"]))
        _field(console, "ticks", f"{d['utc_ticks']} -> {d['local_ticks']}")
        _render_meta(console, result)


def _render_time_info(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "current", d["current"]["text"])
    _field(console, "timestamp", d["timestamp"])

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("")
    table.add_column("Day")
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Offset", style="tz.offset")
    table.add_column("State")
    for side in ("utc", "local"):
        row = d[side]
        marker = "*" if side == d["preferred"] else " "
        table.add_row(
            f"{marker}{side}",
            row["day"],
            row["date"],
            row["time"],
            row["offset"],
            Text(row["state"], style=style_for_state(row["state"])),
        )
    console.print()
    console.print(table)
    if verbose:
        _render_meta(console, result)


# ── Inspection renderers ──────────────────────────────────────────────


def _rules_table(rules: dict[str, Any], starts: dict[str, Any] | None = None) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Transition")
    table.add_column("Rule")
    if starts is not None:
        table.add_column("Starts")
    table.add_column("Offset", style="tz.offset")
    table.add_column("Name")
    for label, prefix in (("standard", "standard"), ("daylight", "daylight")):
        row = [label, describe_rule(rules[f"{prefix}_date"])]
        if starts is not None:
            start = starts.get(f"{prefix}_start")
            row.append(start["iso"] if start else "-")
        row += [rules[f"{prefix}_offset"], rules[f"{prefix}_name"]]
        table.add_row(*row)
    return table


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "year", d["year"])
    _field(console, "observes_dst", d["observes_dst"])
    _field(console, "bias", d["rules"]["bias"])
    console.print()
    console.print(_rules_table(d["rules"], d))
    if verbose:
        _render_meta(console, result)


def _render_date_info(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "date", d["date"])
    _field(console, "weekday", d["weekday"])
    _field(console, "leap_year", d["leap_year"])
    _field(console, "day_of_year", d["day_of_year"])
    _field(console, "days_in_month", d["days_in_month"])
    _field(console, "rule", describe_rule(d["rule"]))
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "convert": _render_convert,
    "time_info": _render_time_info,
    "rules": _render_rules,
    "date_info": _render_date_info,
}
