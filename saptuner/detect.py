"""
SAP workload detection — which SAP products live under /usr/sap.

Pure filesystem probe. Absence of evidence is False, never an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

SAP_ROOT = Path("/usr/sap")

# A NetWeaver instance has all four of these below /usr/sap/<SID>/
_NETWEAVER_DIRS = ("log", "data", "work", "exe")

# HANA: /usr/sap/<SID>/HDB<nr>/HDB
_HANA_PATTERN = "*/HDB*/HDB"


@dataclass(frozen=True)
class WorkloadPresence:
    netweaver: bool
    hana: bool

    @property
    def any(self) -> bool:
        return self.netweaver or self.hana

    def __iter__(self) -> Iterator[bool]:
        # Allows `nw, hana = detect_workloads()`
        yield self.netweaver
        yield self.hana


def detect_workloads(sap_root: Union[str, Path] = SAP_ROOT) -> WorkloadPresence:
    """Return which SAP workloads are installed below sap_root."""
    root = Path(sap_root)
    has_nw = all(_exists(root, f"*/{name}") for name in _NETWEAVER_DIRS)
    has_hana = _exists(root, _HANA_PATTERN)
    return WorkloadPresence(netweaver=has_nw, hana=has_hana)


def _exists(root: Path, pattern: str) -> bool:
    try:
        return any(True for _ in root.glob(pattern))
    except OSError:
        return False
