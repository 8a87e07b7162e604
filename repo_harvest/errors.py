"""Exception types shared by the harvest stages and the batch controller."""

from __future__ import annotations

from typing import Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .catalog import RepositoryRef


class HarvestError(RuntimeError):
    """Base class for every error raised by the harvester."""


class ConfigError(HarvestError):
    """Raised when the catalog or a setting is malformed. Aborts the run."""

    def __init__(self, message: str, entries: Iterable[str] = ()) -> None:
        self.entries = list(entries)
        super().__init__(message)


class WorkspaceError(HarvestError):
    """Raised when the acquisition or export root cannot be used. Aborts the run."""

    def __init__(self, path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot use {path}: {reason}")


class StageError(HarvestError):
    """Per-item failure; recorded by the controller, never fatal to the batch."""

    stage = "stage"

    def __init__(self, ref: "RepositoryRef", diagnostic: str = "", returncode: Optional[int] = None) -> None:
        self.ref = ref
        self.diagnostic = diagnostic
        self.returncode = returncode
        detail = f": {diagnostic.splitlines()[0]}" if diagnostic.strip() else ""
        super().__init__(f"{self.stage} failed for {ref}{detail}")


class AcquisitionError(StageError):
    stage = "clone"


class ExportError(StageError):
    stage = "export"


__all__ = [
    "HarvestError",
    "ConfigError",
    "WorkspaceError",
    "StageError",
    "AcquisitionError",
    "ExportError",
]
