"""Thin wrapper over the ``git`` executable used by the acquisition stage."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..process import CommandResult, run_scoped

# Never block on an interactive credential prompt; missing or private
# remotes must fail like any other clone error.
GIT_ENV = {"GIT_TERMINAL_PROMPT": "0"}


class GitClient:
    def __init__(self, *, executable: str = "git", timeout: Optional[float] = None) -> None:
        self.executable = executable
        self.timeout = timeout

    def clone(self, url: str, destination: Path) -> CommandResult:
        """Run ``git clone <url> <destination>``; raises OSError if git cannot be spawned."""
        return run_scoped(
            [self.executable, "clone", url, str(destination)],
            env=GIT_ENV,
            timeout=self.timeout,
        )


__all__ = ["GIT_ENV", "GitClient"]
