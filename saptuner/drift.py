"""
sapconf drift detection.

sapconf may be replaced by saptune only while its configuration still
matches the shipped fillup template. Line order and comments do not count,
only the key/value pairs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from saptuner.sysconfig import SysconfigEditor

LOG = logging.getLogger(__name__)

SAPCONF_SYSCONFIG = Path("/etc/sysconfig/sapconf")
SAPCONF_TEMPLATES = (
    Path("/var/adm/fillup-templates/sysconfig.sapconf"),
    Path("/usr/share/fillup-templates/sysconfig.sapconf"),
)

PathLike = Union[str, Path]


def documents_equal(a: str, b: str) -> bool:
    """True if both texts hold the same (index, key) → value pairs."""
    return SysconfigEditor(a).entries() == SysconfigEditor(b).entries()


def can_replace_sapconf(
    current: PathLike = SAPCONF_SYSCONFIG,
    templates: Iterable[PathLike] = SAPCONF_TEMPLATES,
) -> bool:
    """
    Return True if sapconf's configuration has never deviated from default.

    The first template that exists is the reference. A missing live file or
    a missing template both count as "unchanged": there is nothing to keep.
    """
    template = next((Path(t) for t in templates if Path(t).is_file()), None)
    if template is None:
        LOG.info("no sapconf template found, sapconf is replaceable")
        return True

    current_text = _read(Path(current))
    template_text = _read(template)
    if current_text is None or template_text is None:
        return True

    same = documents_equal(current_text, template_text)
    LOG.info("sapconf configuration %s", "matches template" if same else "is customised")
    return same


def _read(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError:
        return None
