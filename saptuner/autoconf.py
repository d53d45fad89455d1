"""
Unattended configuration — the single "enable tuning" flag.

An installer profile carries one boolean. AutoConfig imports/exports it,
reads it back from the running system, and replays it through the
orchestrator. The flag belongs to this object, not to the orchestrator.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Union

from saptuner.orchestrator import ActivationState, TuningOrchestrator

LOG = logging.getLogger(__name__)


class AutoConfig:
    def __init__(self, orchestrator: TuningOrchestrator, enable: bool = False) -> None:
        self.orchestrator = orchestrator
        self.enable = enable

    # ── Profile round trip ────────────────────────────────────────────────────

    def import_settings(self, exported: Mapping[str, Any]) -> bool:
        """There is only one bool parameter to import."""
        self.enable = bool(exported.get("enable", False))
        return True

    def export(self) -> dict[str, bool]:
        return {"enable": self.enable}

    def save(self, path: Union[str, Path]) -> bool:
        """Write the exported settings as JSON. Returns False on I/O failure."""
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(json.dumps(self.export(), indent=2) + "\n")
        except OSError as e:
            LOG.error("could not write %s: %s", target, e)
            return False
        return True

    def load(self, path: Union[str, Path]) -> bool:
        """
        Import settings from a JSON file written by save().

        A missing, unreadable or malformed file leaves the flag untouched
        and returns False.
        """
        try:
            data = json.loads(Path(path).read_text())
        except (json.JSONDecodeError, OSError):
            return False
        if not isinstance(data, dict):
            return False
        return self.import_settings(data)

    # ── System round trip ─────────────────────────────────────────────────────

    def summary(self) -> str:
        if self.enable:
            return (
                "SAP system tuning will be enabled, and configured automatically "
                "according to installed SAP software."
            )
        return "SAP system tuning is not enabled."

    def read(self) -> bool:
        """Memorise whether saptune is on right now."""
        state = self.orchestrator.current_state()
        self.enable = state in (ActivationState.ACTIVE, ActivationState.NOT_CONFIGURED)
        return True

    def apply(self) -> Union[tuple[bool, bool, bool, str], tuple[bool, str]]:
        """
        Enable (and auto-configure) or disable saptune according to the flag.

        Returns auto_configure()'s (nw, hana, success, output) when enabling,
        set_enabled()'s (success, output) when disabling.
        """
        if self.enable:
            # auto_configure also starts saptune
            return self.orchestrator.auto_configure()
        return self.orchestrator.set_enabled(False)

    def write(self) -> bool:
        outcome = self.apply()
        success, out = outcome[-2], outcome[-1]
        LOG.info("autoconfig write: success %s output %s", success, out)
        return success

    def reset(self) -> bool:
        self.enable = False
        return True

    def packages(self) -> dict[str, list[str]]:
        return {"install": ["saptune"], "remove": []}
