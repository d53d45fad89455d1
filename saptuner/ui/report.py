"""
Result renderer.

Turns the orchestrator's plain return values into Rich output:
  1. Status panel   — daemon / configuration status, workloads, sapconf
  2. Outcome lines  — success message, or failure title + captured output

Diagnostic text from saptune/sapconf is printed as-is, never reworded.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console, Group
from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from saptuner.detect import WorkloadPresence
from saptuner.orchestrator import ActivationState
from saptuner.ui.theme import (
    COLOR_BRAND,
    COLOR_CRITICAL,
    COLOR_DIM,
    COLOR_TEXT,
    ICON_ERROR,
    ICON_PASS,
    ICON_WARNING,
    STATE_LABELS,
    STATE_STYLES,
)


# ── Status panel ──────────────────────────────────────────────────────────────

def print_status(
    console: Console,
    state: ActivationState,
    workloads: Optional[WorkloadPresence] = None,
    sapconf_replaceable: Optional[bool] = None,
) -> None:
    """Print the saptune status panel."""
    daemon, config = STATE_LABELS[state]
    style = str(STATE_STYLES[state])

    table = Table.grid(padding=(0, 3))
    table.add_column(style=COLOR_DIM)
    table.add_column()
    table.add_row("Daemon Status", Text(daemon, style=style))
    table.add_row("Configuration Status", Text(config, style=style))

    if workloads is not None:
        table.add_row("SAP software", Text(describe_workloads(workloads), style=COLOR_TEXT))
    if sapconf_replaceable is not None:
        label = "default (replaceable)" if sapconf_replaceable else "customised (kept)"
        table.add_row("sapconf configuration", Text(label, style=COLOR_TEXT))

    console.print(
        Panel(
            Padding(table, (1, 2)),
            title="[brand]saptune configuration[/brand]",
            border_style=COLOR_BRAND,
            expand=False,
        )
    )


def describe_workloads(workloads: WorkloadPresence) -> str:
    names = product_names(workloads.netweaver, workloads.hana)
    return ", ".join(names) if names else "none found"


def product_names(nw: bool, hana: bool) -> list[str]:
    names = []
    if nw:
        names.append("SAP NetWeaver")
    if hana:
        names.append("SAP HANA")
    return names


# ── Outcomes ──────────────────────────────────────────────────────────────────

def print_auto_result(
    console: Console, nw: bool, hana: bool, success: bool, output: str,
) -> None:
    """Render auto_configure()'s return value."""
    if not success:
        print_error_details(console, "Failed to apply new configuration", output)
        return

    names = product_names(nw, hana)
    if not names:
        console.print(
            f"  [warning]{ICON_WARNING} Cannot find a compatible installed SAP software "
            "to tune for, only generic performance tuning is performed.[/warning]"
        )
        return

    console.print(f"  [pass]{ICON_PASS}  saptune has been activated and system is now tuned for:[/pass]")
    for name in names:
        console.print(f"     [text]- {name}[/text]")


def print_toggle_result(console: Console, enable: bool, success: bool, output: str) -> None:
    """Render set_enabled()'s return value."""
    word = "enable" if enable else "disable"
    if success:
        console.print(f"  [pass]{ICON_PASS}  saptune is now {word}d.[/pass]")
    else:
        print_error_details(console, f"Failed to {word} saptune", output)


def print_error_details(console: Console, title: str, output: str) -> None:
    """Failure title plus the tool's captured output, verbatim."""
    body = Text()
    body.append("Error output: ", style=COLOR_DIM)
    body.append(output.rstrip() or "(no output)", style=COLOR_TEXT)
    console.print(
        Panel(
            Group(Text(""), body, Text("")),
            title=f"[critical]{ICON_ERROR} {title}[/critical]",
            border_style=COLOR_CRITICAL,
        )
    )
