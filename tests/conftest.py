"""
Shared pytest fixtures.
"""
import pytest

from saptuner.config import TunerPaths
from saptuner.detect import WorkloadPresence
from saptuner.orchestrator import TuningOrchestrator
from saptuner.runner import CommandResult


class FakeRunner:
    """Stands in for run_command: records every call, replies from a table."""

    def __init__(self, responses: dict | None = None):
        self.calls: list[tuple[str, ...]] = []
        self.responses = responses or {}

    def __call__(self, program: str, *args: str) -> CommandResult:
        cmd = (program, *args)
        self.calls.append(cmd)
        return self.responses.get(cmd, CommandResult("", 0))


def make_paths(root, current: bool = True, combined: bool = True) -> TunerPaths:
    """TunerPaths below root; current/combined create the saptune 3 probe dirs."""
    workarea = root / "var/lib/saptune/working/notes"
    solutions = root / "usr/share/saptune/solutions"
    if current:
        workarea.mkdir(parents=True, exist_ok=True)
    if combined:
        solutions.mkdir(parents=True, exist_ok=True)
    return TunerPaths(
        sap_root=root / "usr/sap",
        saptune_workarea=workarea,
        saptune_solutions=solutions,
        sapconf_sysconfig=root / "etc/sysconfig/sapconf",
        sapconf_templates=(
            root / "var/adm/fillup-templates/sysconfig.sapconf",
            root / "usr/share/fillup-templates/sysconfig.sapconf",
        ),
    )


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def make_orchestrator(tmp_path, runner):
    """Factory: orchestrator with fake runner, fixed workloads and drift verdict."""

    def _make(
        nw: bool = False,
        hana: bool = False,
        replaceable: bool = True,
        current: bool = True,
        combined: bool = True,
    ) -> TuningOrchestrator:
        return TuningOrchestrator(
            paths=make_paths(tmp_path, current=current, combined=combined),
            runner=runner,
            detector=lambda: WorkloadPresence(netweaver=nw, hana=hana),
            comparator=lambda: replaceable,
        )

    return _make


@pytest.fixture
def tuner_paths(tmp_path):
    """Saptune 3 layout below tmp_path; nothing under /usr/sap yet."""
    return make_paths(tmp_path)
