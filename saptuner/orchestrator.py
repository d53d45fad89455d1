"""
Tuning orchestrator — decides between saptune and sapconf and drives it.

saptune and sapconf must never tune the same machine at once. sapconf is
replaced by saptune whenever its configuration is still the shipped default;
a customised sapconf is kept and told to tune for the installed workloads.

Every external step can fail. The first failure ends the sequence and its
captured output is handed back to the caller untouched. Nothing is retried.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from saptuner.config import TunerPaths
from saptuner.detect import WorkloadPresence, detect_workloads
from saptuner.drift import can_replace_sapconf
from saptuner.runner import CommandResult, run_command

LOG = logging.getLogger(__name__)

Runner = Callable[..., CommandResult]


# ── States ────────────────────────────────────────────────────────────────────

class ActivationState(Enum):
    ACTIVE = "active"                   # running and tuning applied
    STOPPED = "stopped"                 # service stopped
    NOT_CONFIGURED = "not_configured"   # saptune is not the tuned profile
    NOT_TUNED = "not_tuned"             # no notes/solutions applied
    UNKNOWN = "unknown"

    @classmethod
    def from_exit_code(cls, code: int) -> "ActivationState":
        return _STATUS_CODES.get(code, cls.UNKNOWN)


_STATUS_CODES = {
    0: ActivationState.ACTIVE,
    1: ActivationState.STOPPED,
    2: ActivationState.NOT_CONFIGURED,
    3: ActivationState.NOT_TUNED,
}


# ── saptune command vocabulary ────────────────────────────────────────────────

class Generation(Enum):
    LEGACY = "legacy"     # saptune 2.x: `saptune daemon ...`
    CURRENT = "current"   # saptune 3.x: `saptune service ...`


class Verb(Enum):
    STATUS = "status"
    START = "start"
    STOP = "stop"


COMMANDS: dict[Generation, dict[Verb, tuple[str, ...]]] = {
    Generation.CURRENT: {
        Verb.STATUS: ("service", "status"),
        Verb.START: ("service", "takeover"),
        Verb.STOP: ("service", "disablestop"),
    },
    Generation.LEGACY: {
        Verb.STATUS: ("daemon", "status"),
        Verb.START: ("daemon", "start"),
        Verb.STOP: ("daemon", "stop"),
    },
}

# systemd unit whose enablement means "saptune is on", per generation
_SERVICE_UNIT = {
    Generation.CURRENT: "saptune.service",
    Generation.LEGACY: "tuned.service",
}

SAPCONF_UNIT = "sapconf.service"

SOLUTION_NETWEAVER = "NETWEAVER"
SOLUTION_HANA = "HANA"
SOLUTION_COMBINED = "NETWEAVER+HANA"


def select_solutions(nw: bool, hana: bool, combined_available: bool) -> list[str]:
    """
    Return the saptune solutions to apply, in order, for the detected workloads.

    Older saptune has no combined solution, so both are applied one after
    the other. No workload → no solution; saptune still tunes generically.
    """
    if nw and hana:
        if combined_available:
            return [SOLUTION_COMBINED]
        return [SOLUTION_NETWEAVER, SOLUTION_HANA]
    if nw:
        return [SOLUTION_NETWEAVER]
    if hana:
        return [SOLUTION_HANA]
    return []


# ── Orchestrator ──────────────────────────────────────────────────────────────

class TuningOrchestrator:
    """
    Arbitrate between saptune and sapconf.

    Construct one per process and pass it to whoever needs it. Collaborators
    (command runner, workload detector, drift comparator) default to the
    real-system implementations and can be swapped for tests.
    """

    def __init__(
        self,
        paths: Optional[TunerPaths] = None,
        runner: Optional[Runner] = None,
        detector: Optional[Callable[[], WorkloadPresence]] = None,
        comparator: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.paths = paths or TunerPaths()
        self._run = runner or run_command
        self._detect = detector or (lambda: detect_workloads(self.paths.sap_root))
        self._compare = comparator or (
            lambda: can_replace_sapconf(
                self.paths.sapconf_sysconfig, self.paths.sapconf_templates
            )
        )

    # ── Probes ────────────────────────────────────────────────────────────────

    def generation(self) -> Generation:
        """saptune 3 keeps a working area for notes; older releases do not."""
        if self.paths.saptune_workarea.exists():
            return Generation.CURRENT
        return Generation.LEGACY

    def has_combined_solution(self) -> bool:
        return self.paths.saptune_solutions.exists()

    def detect_workloads(self) -> WorkloadPresence:
        return self._detect()

    def can_replace_sapconf(self) -> bool:
        return self._compare()

    # ── Commands ──────────────────────────────────────────────────────────────

    def saptune(self, *args: str) -> CommandResult:
        return self._run(self.paths.saptune, *args)

    def sapconf(self, *args: str) -> CommandResult:
        return self._run(self.paths.sapconf, *args)

    def systemctl(self, *args: str) -> CommandResult:
        return self._run(self.paths.systemctl, *args)

    def _saptune_verb(self, verb: Verb, generation: Generation) -> CommandResult:
        return self.saptune(*COMMANDS[generation][verb])

    # ── Public API ────────────────────────────────────────────────────────────

    def current_state(self) -> ActivationState:
        """Ask saptune for its status and translate the exit code."""
        result = self._saptune_verb(Verb.STATUS, self.generation())
        return ActivationState.from_exit_code(result.status)

    def is_service_enabled(self) -> bool:
        unit = _SERVICE_UNIT[self.generation()]
        return self.systemctl("is-enabled", unit).ok

    def disable_sapconf(self) -> None:
        """
        Stop and disable sapconf.service.

        Best effort: sapconf is frequently not installed at all, so a failure
        here is logged and never stops saptune from being set up.
        """
        result = self.systemctl("stop", SAPCONF_UNIT)
        if not result.ok:
            LOG.info("Failed to stop sapconf: %s", result.output)
        result = self.systemctl("disable", SAPCONF_UNIT)
        if not result.ok:
            LOG.info("Failed to disable sapconf: %s", result.output)

    def set_enabled(self, enable: bool) -> tuple[bool, str]:
        """
        Enable+start or disable+stop saptune and its service.

        Enabling may take up to a minute. Returns (success, output); output
        is the failing command's captured text, '' on success.
        """
        generation = self.generation()
        if enable:
            self.disable_sapconf()
            result = self._saptune_verb(Verb.START, generation)
        else:
            result = self._saptune_verb(Verb.STOP, generation)
        if not result.ok:
            return False, result.output
        return True, ""

    def auto_configure(self) -> tuple[bool, bool, bool, str]:
        """
        Tune the system for whatever SAP software is installed.

        Uses saptune if sapconf is untouched (sapconf is then disabled),
        otherwise keeps the customised sapconf and lets it do the tuning.

        Returns:
            (netweaver tuned for, hana tuned for, success, error output)
        """
        nw, hana = self.detect_workloads()
        generation = self.generation()

        if self.can_replace_sapconf():
            ok, out = self._tune_with_saptune(nw, hana, generation)
        else:
            ok, out = self._tune_with_sapconf(nw, hana)
        return nw, hana, ok, out

    # ── Internal ──────────────────────────────────────────────────────────────

    def _tune_with_saptune(
        self, nw: bool, hana: bool, generation: Generation,
    ) -> tuple[bool, str]:
        LOG.info("tuning system using saptune")
        self.disable_sapconf()

        # Revert leftovers of an earlier run before applying anything new.
        # Fails harmlessly when nothing was applied yet.
        revert = self.saptune("revert", "all")
        if not revert.ok:
            LOG.info("saptune revert all exited %d", revert.status)

        for solution in select_solutions(nw, hana, self.has_combined_solution()):
            result = self.saptune("solution", "apply", solution)
            if not result.ok:
                return False, result.output

        result = self._saptune_verb(Verb.START, generation)
        if not result.ok:
            return False, result.output
        return True, ""

    def _tune_with_sapconf(self, nw: bool, hana: bool) -> tuple[bool, str]:
        LOG.info("tuning system using sapconf")
        steps = []
        if nw:
            steps.append("netweaver")
        if hana:
            steps.append("hana")
        if not steps:
            # Start sapconf with the last active profile
            steps.append("start")

        for step in steps:
            result = self.sapconf(step)
            if not result.ok:
                return False, result.output
        return True, ""
