"""
Interactive configuration dialog.

Shows the saptune status, then offers two actions picked with an
arrow-key menu:
  regenerate — auto-configure for the installed SAP software (and enable)
  toggle     — enable+start or disable+stop the daemon

The dialog refuses to run while a customised sapconf is in charge.
"""

from __future__ import annotations

import shutil

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from simple_term_menu import TerminalMenu

from saptuner.orchestrator import ActivationState, TuningOrchestrator
from saptuner.ui.report import (
    print_auto_result,
    print_status,
    print_toggle_result,
)
from saptuner.ui.theme import COLOR_DIM, COLOR_WARNING


# ── Action labels ─────────────────────────────────────────────────────────────

_REGENERATE_LABELS = {
    ActivationState.ACTIVE:         "Re-generate configuration",
    ActivationState.STOPPED:        "Re-generate configuration and enable the daemon",
    ActivationState.NOT_CONFIGURED: "Generate configuration automatically",
}
_REGENERATE_DEFAULT = "Generate configuration automatically and enable the daemon"

_TOGGLE_ENABLE = "Enable and start the daemon"
_TOGGLE_DISABLE = "Disable and stop the daemon"


def action_labels(state: ActivationState) -> tuple[str, str]:
    """(regenerate label, toggle label) for the given state."""
    regenerate = _REGENERATE_LABELS.get(state, _REGENERATE_DEFAULT)
    toggle = _TOGGLE_DISABLE if toggle_disables(state) else _TOGGLE_ENABLE
    return regenerate, toggle


def toggle_disables(state: ActivationState) -> bool:
    """Only a fully active saptune is switched off; anything else is switched on."""
    return state is ActivationState.ACTIVE


# ── Dialog ────────────────────────────────────────────────────────────────────

def run_dialog(orchestrator: TuningOrchestrator, console: Console) -> bool:
    """
    Run the dialog once. Returns False if an action was attempted and failed.

    Cancelling, or being refused, is not a failure.
    """
    state = orchestrator.current_state()
    print_status(console, state)
    console.print()

    if not orchestrator.can_replace_sapconf():
        _print_notice(
            console,
            "Your system is currently configured to use the legacy sapconf.\n"
            "saptune is a powerful replacement for sapconf, please erase the "
            "sapconf package before using this tool.",
        )
        return True

    if shutil.which(orchestrator.paths.saptune) is None:
        _print_notice(
            console,
            "saptune is not installed. Install the saptune package and run this "
            "tool again.",
        )
        return True

    regenerate, toggle = action_labels(state)
    console.print("  [bold]Action[/bold]")
    menu = TerminalMenu(
        [regenerate, toggle, "Cancel"],
        menu_cursor="› ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan", "bold"),
        cursor_index=0,
    )
    choice = menu.show()
    if choice is None or choice == 2:
        console.print("\n  [dim]Cancelled.[/dim]\n")
        return True

    console.print("  [dim]Applying settings, this may take several seconds...[/dim]\n")

    if choice == 0:
        nw, hana, success, out = orchestrator.auto_configure()
        print_auto_result(console, nw, hana, success, out)
        return success

    # Re-read: the state may have changed while the menu was open
    enable = not toggle_disables(orchestrator.current_state())
    success, out = orchestrator.set_enabled(enable)
    print_toggle_result(console, enable, success, out)
    return success


def _print_notice(console: Console, message: str) -> None:
    console.print(
        Panel(
            Text(message, style=COLOR_DIM),
            title=f"[{COLOR_WARNING}]saptune[/{COLOR_WARNING}]",
            border_style=COLOR_WARNING,
            expand=False,
        )
    )
