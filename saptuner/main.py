"""
saptuner — entry point.

CLI commands, logging setup, result rendering dispatch.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from saptuner import __version__
from saptuner.autoconf import AutoConfig
from saptuner.config import load_config
from saptuner.orchestrator import TuningOrchestrator
from saptuner.sysconfig import SysconfigEditor
from saptuner.ui.report import (
    print_auto_result,
    print_status,
    print_toggle_result,
)
from saptuner.ui.theme import SAPTUNER_THEME


# ── Console (shared across the tool) ─────────────────────────────────────────

console = Console(theme=SAPTUNER_THEME)


# ── Logging ──────────────────────────────────────────────────────────────────

def _setup_logging(verbose: bool) -> None:
    """Route library logging to stderr through Rich. INFO shows every command run."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    root = logging.getLogger("saptuner")
    root.handlers[:] = [handler]
    root.setLevel(logging.INFO if verbose else logging.WARNING)
    root.propagate = False


# ── CLI ───────────────────────────────────────────────────────────────────────

@click.group(name="saptuner", context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", prog_name="saptuner")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: /etc/saptuner/config.toml).",
)
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Log every saptune/sapconf/systemctl call and its output.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """SAP system tuning with saptune and sapconf.

    Detects installed SAP NetWeaver / HANA, decides whether saptune may
    take over from sapconf, and drives whichever one wins.

    \b
    Most commands need root privileges to talk to saptune and systemd.
    """
    _setup_logging(verbose)
    # Tests hand in their own orchestrator through obj=
    if ctx.obj is None:
        ctx.obj = TuningOrchestrator(load_config(config_path))


# ── Tuning commands ───────────────────────────────────────────────────────────

@cli.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Output status as JSON.")
@click.pass_obj
def status(orchestrator: TuningOrchestrator, as_json: bool) -> None:
    """Show saptune status, installed SAP software and sapconf state."""
    state = orchestrator.current_state()
    workloads = orchestrator.detect_workloads()
    replaceable = orchestrator.can_replace_sapconf()

    if as_json:
        payload = {
            "saptuner_version": __version__,
            "state": state.value,
            "generation": orchestrator.generation().value,
            "workloads": {"netweaver": workloads.netweaver, "hana": workloads.hana},
            "sapconf_replaceable": replaceable,
        }
        click.echo(json.dumps(payload, indent=2))
        return

    print_status(console, state, workloads, replaceable)


@cli.command()
@click.pass_obj
def enable(orchestrator: TuningOrchestrator) -> None:
    """Enable and start saptune (stops and disables sapconf first)."""
    _toggle(orchestrator, True)


@cli.command()
@click.pass_obj
def disable(orchestrator: TuningOrchestrator) -> None:
    """Disable and stop saptune."""
    _toggle(orchestrator, False)


def _toggle(orchestrator: TuningOrchestrator, enable: bool) -> None:
    console.print("  [dim]Applying settings, this may take several seconds...[/dim]")
    success, out = orchestrator.set_enabled(enable)
    print_toggle_result(console, enable, success, out)
    if not success:
        raise SystemExit(1)


@cli.command()
@click.pass_obj
def auto(orchestrator: TuningOrchestrator) -> None:
    """Tune for the installed SAP software with saptune or sapconf."""
    console.print("  [dim]Applying settings, this may take several seconds...[/dim]")
    nw, hana, success, out = orchestrator.auto_configure()
    print_auto_result(console, nw, hana, success, out)
    if not success:
        raise SystemExit(1)


@cli.command()
@click.pass_obj
def configure(orchestrator: TuningOrchestrator) -> None:
    """Interactive dialog: re-generate configuration or toggle the daemon."""
    from saptuner.ui.dialog import run_dialog

    if not run_dialog(orchestrator, console):
        raise SystemExit(1)


# ── Unattended profile ────────────────────────────────────────────────────────

@cli.group()
def autoyast() -> None:
    """Export, inspect and replay the unattended "enable tuning" flag."""


@autoyast.command("export")
@click.argument("profile", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--enable/--disable", "enable", default=None,
              help="Flag to store (default: read from the running system).")
@click.pass_obj
def autoyast_export(orchestrator: TuningOrchestrator, profile: Path, enable: Optional[bool]) -> None:
    """Write the flag to PROFILE as JSON."""
    autoconf = AutoConfig(orchestrator)
    if enable is None:
        autoconf.read()
    else:
        autoconf.enable = enable
    if not autoconf.save(profile):
        console.print(f"[critical]Could not write {profile}[/critical]")
        raise SystemExit(1)
    console.print(f"  [text]{autoconf.summary()}[/text]")


@autoyast.command("summary")
@click.argument("profile", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def autoyast_summary(orchestrator: TuningOrchestrator, profile: Path) -> None:
    """Describe what PROFILE would do."""
    autoconf = _load_profile(orchestrator, profile)
    console.print(f"  [text]{autoconf.summary()}[/text]")


@autoyast.command("apply")
@click.argument("profile", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def autoyast_apply(orchestrator: TuningOrchestrator, profile: Path) -> None:
    """Replay PROFILE: auto-configure and enable, or disable."""
    autoconf = _load_profile(orchestrator, profile)
    console.print(f"  [dim]{autoconf.summary()}[/dim]")
    outcome = autoconf.apply()
    if autoconf.enable:
        print_auto_result(console, *outcome)
    else:
        print_toggle_result(console, False, *outcome)
    if not outcome[-2]:
        raise SystemExit(1)


def _load_profile(orchestrator: TuningOrchestrator, profile: Path) -> AutoConfig:
    autoconf = AutoConfig(orchestrator)
    if not autoconf.load(profile):
        console.print(f"[critical]{profile} is not a valid profile[/critical]")
        raise SystemExit(1)
    return autoconf


# ── Sysconfig editing ─────────────────────────────────────────────────────────

_EXISTING_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


@cli.group()
def sysconfig() -> None:
    """Query and edit sysconfig files (KEY="value", KEY_N="value")."""


@sysconfig.command("keys")
@click.argument("file", type=_EXISTING_FILE)
def sysconfig_keys(file: Path) -> None:
    """List key names; an array is listed once."""
    for key in SysconfigEditor.from_file(file).keys():
        click.echo(key)


@sysconfig.command("get")
@click.argument("file", type=_EXISTING_FILE)
@click.argument("key")
def sysconfig_get(file: Path, key: str) -> None:
    """Print the value of KEY ('' if absent)."""
    click.echo(SysconfigEditor.from_file(file).get(key))


@sysconfig.command("set")
@click.argument("file", type=_EXISTING_FILE)
@click.argument("key")
@click.argument("value")
def sysconfig_set(file: Path, key: str, value: str) -> None:
    """Set KEY to VALUE, creating it if needed."""
    editor = SysconfigEditor.from_file(file)
    try:
        editor.set(key, value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="KEY") from exc
    editor.save(file)


@sysconfig.command("array-len")
@click.argument("file", type=_EXISTING_FILE)
@click.argument("key")
def sysconfig_array_len(file: Path, key: str) -> None:
    """Print the length of array KEY."""
    click.echo(SysconfigEditor.from_file(file).array_len(key))


@sysconfig.command("array-get")
@click.argument("file", type=_EXISTING_FILE)
@click.argument("key")
@click.argument("index", type=click.IntRange(min=0))
def sysconfig_array_get(file: Path, key: str, index: int) -> None:
    """Print element INDEX of array KEY ('' if absent)."""
    click.echo(SysconfigEditor.from_file(file).array_get(key, index))


@sysconfig.command("array-set")
@click.argument("file", type=_EXISTING_FILE)
@click.argument("key")
@click.argument("index", type=click.IntRange(min=0))
@click.argument("value")
def sysconfig_array_set(file: Path, key: str, index: int, value: str) -> None:
    """Set element INDEX of array KEY to VALUE."""
    editor = SysconfigEditor.from_file(file)
    editor.array_set(key, index, value)
    editor.save(file)


@sysconfig.command("array-resize")
@click.argument("file", type=_EXISTING_FILE)
@click.argument("key")
@click.argument("length", type=click.IntRange(min=0))
def sysconfig_array_resize(file: Path, key: str, length: int) -> None:
    """Shrink or grow array KEY to LENGTH elements (0 erases it)."""
    editor = SysconfigEditor.from_file(file)
    editor.array_resize(key, length)
    editor.save(file)


# ── Entry ─────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    cli()
