"""Scoped subprocess execution for the external tools (git, repomix).

Every command runs in its own process group so that a timeout, or an
interrupt while waiting, can take down the tool together with anything it
spawned (``nix run`` in particular forks the real repomix process).
Output streams are merged, matching how the tools are read by a human:
diagnostics and progress interleaved in one log.
"""

from __future__ import annotations

import os
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence, Tuple

DRAIN_TIMEOUT_SEC = 5.0


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    argv: Tuple[str, ...]
    returncode: Optional[int]
    output: str
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return not self.timed_out and self.returncode == 0

    def excerpt(self, max_lines: int) -> str:
        """Return the first ``max_lines`` non-blank lines of output."""
        lines = [line.rstrip() for line in self.output.splitlines() if line.strip()]
        if max_lines > 0:
            lines = lines[:max_lines]
        if self.timed_out:
            lines.append(f"timed out; process group killed ({self.argv[0]})")
        elif not lines and self.returncode:
            lines.append(f"{self.argv[0]} exited with status {self.returncode}")
        return "\n".join(lines)


def _kill_group(proc: subprocess.Popen) -> None:
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except (ProcessLookupError, PermissionError):
        # Group already gone; fall back to the direct child.
        proc.kill()


def run_scoped(
    argv: Sequence[str],
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    timeout: Optional[float] = None,
) -> CommandResult:
    """Run ``argv`` to completion and return a :class:`CommandResult`.

    A missing executable surfaces as ``FileNotFoundError`` from ``Popen``;
    callers convert it into their own stage error.
    """

    process_env = os.environ.copy()
    if env:
        process_env.update(env)

    argv = tuple(str(arg) for arg in argv)
    proc = subprocess.Popen(
        list(argv),
        cwd=str(cwd) if cwd else None,
        env=process_env,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        errors="replace",
        start_new_session=True,
    )
    try:
        output, _ = proc.communicate(timeout=timeout or None)
    except subprocess.TimeoutExpired:
        _kill_group(proc)
        try:
            output, _ = proc.communicate(timeout=DRAIN_TIMEOUT_SEC)
        except subprocess.TimeoutExpired:
            # Something outside the group still holds the pipe open.
            if proc.stdout:
                proc.stdout.close()
            proc.wait()
            output = ""
        return CommandResult(argv=argv, returncode=proc.returncode, output=output or "", timed_out=True)
    except BaseException:
        _kill_group(proc)
        proc.wait()
        raise
    return CommandResult(argv=argv, returncode=proc.returncode, output=output or "")


__all__ = ["DRAIN_TIMEOUT_SEC", "CommandResult", "run_scoped"]
