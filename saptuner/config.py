"""
Config file loading for saptuner.

Reads /etc/saptuner/config.toml and returns the probe locations and
executable names the orchestrator uses. Never raises — every key that is
missing or has the wrong shape falls back to the real-system default.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from saptuner.detect import SAP_ROOT
from saptuner.drift import SAPCONF_SYSCONFIG, SAPCONF_TEMPLATES

_CONFIG_PATH = Path("/etc/saptuner/config.toml")


@dataclass(frozen=True)
class TunerPaths:
    # Filesystem probes
    sap_root: Path = SAP_ROOT
    saptune_workarea: Path = Path("/var/lib/saptune/working/notes")  # exists on saptune >= 3
    saptune_solutions: Path = Path("/usr/share/saptune/solutions")   # has NETWEAVER+HANA
    sapconf_sysconfig: Path = SAPCONF_SYSCONFIG
    sapconf_templates: tuple[Path, ...] = field(default=SAPCONF_TEMPLATES)

    # Executables
    saptune: str = "saptune"
    sapconf: str = "sapconf"
    systemctl: str = "systemctl"


_PATH_KEYS = ("sap_root", "saptune_workarea", "saptune_solutions", "sapconf_sysconfig")
_COMMAND_KEYS = ("saptune", "sapconf", "systemctl")


def load_config(path: Path | None = None) -> TunerPaths:
    """
    Load and return saptuner config from TOML file.

    Returns TunerPaths — always valid, never raises.
    Missing file, parse errors, or bad shapes all return defaults.
    """
    config_path = path or _CONFIG_PATH
    defaults = TunerPaths()

    if not config_path.is_file():
        return defaults

    try:
        raw = config_path.read_bytes()
    except OSError:
        return defaults

    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore[no-redef]
        except ModuleNotFoundError:
            return defaults

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError):
        return defaults

    overrides: dict[str, Any] = {}

    paths = data.get("paths")
    if isinstance(paths, dict):
        for key in _PATH_KEYS:
            value = paths.get(key)
            if isinstance(value, str) and value:
                overrides[key] = Path(value)
        templates = paths.get("sapconf_templates")
        if isinstance(templates, list) and templates and all(isinstance(t, str) for t in templates):
            overrides["sapconf_templates"] = tuple(Path(t) for t in templates)

    commands = data.get("commands")
    if isinstance(commands, dict):
        for key in _COMMAND_KEYS:
            value = commands.get(key)
            if isinstance(value, str) and value:
                overrides[key] = value

    return replace(defaults, **overrides)
