"""
External command runner.

Every call into saptune, sapconf and systemctl goes through run_command().
A missing executable is an ordinary outcome (status 127), never an exception.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Mapping, NamedTuple, Optional

LOG = logging.getLogger(__name__)

# Same code a POSIX shell reports for "command not found"
TOOL_MISSING = 127


class CommandResult(NamedTuple):
    output: str     # stdout and stderr, interleaved as the program wrote them
    status: int     # exit code, or TOOL_MISSING

    @property
    def ok(self) -> bool:
        return self.status == 0


def run_command(
    program: str,
    *args: str,
    env: Optional[Mapping[str, str]] = None,
) -> CommandResult:
    """
    Run program with args, wait for it, and return its combined output.

    Args:
        program: Executable name (looked up on PATH) or absolute path.
        args:    Arguments, passed as a list, never through a shell.
        env:     Extra environment variables layered over os.environ.

    Returns:
        CommandResult(output, status). If the executable cannot be found
        or spawned, output is '' and status is TOOL_MISSING.

    Blocks until the program exits; there is no timeout. Starting the
    saptune service can legitimately take the better part of a minute.
    """
    # Force C locale so diagnostics come back untranslated
    _env = {**os.environ, "LANG": "C", "LC_ALL": "C", **(env or {})}
    cmd = [program, *args]
    try:
        proc = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            check=False,
            env=_env,
        )
    except FileNotFoundError:
        LOG.error("%s command does not exist", program)
        return CommandResult("", TOOL_MISSING)
    except OSError as exc:
        # found, but not something the kernel will execute
        LOG.error("%s command cannot be started: %s", program, exc)
        return CommandResult("", TOOL_MISSING)

    output = proc.stdout or ""
    LOG.info("%s command - %s: exit %d %s", program, " ".join(args), proc.returncode, output)
    return CommandResult(output, proc.returncode)
