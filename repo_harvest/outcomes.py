"""Per-item outcome kinds recorded by the batch controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .catalog import RepositoryRef


class Outcome(str, Enum):
    CLONED = "cloned"
    ALREADY_PRESENT = "already_present"
    CLONE_FAILED = "clone_failed"
    EXPORT_SUCCEEDED = "export_succeeded"
    EXPORT_FAILED = "export_failed"

    @classmethod
    def ordered(cls):
        return (
            cls.CLONED,
            cls.ALREADY_PRESENT,
            cls.CLONE_FAILED,
            cls.EXPORT_SUCCEEDED,
            cls.EXPORT_FAILED,
        )


@dataclass
class ItemResult:
    """What happened to one catalog entry.

    ``acquisition`` is None in remote export mode (nothing is cloned);
    ``export`` is None when acquisition failed and export was never attempted.
    """

    ref: RepositoryRef
    acquisition: Optional[Outcome] = None
    export: Optional[Outcome] = None
    artifact: Optional[Path] = None
    diagnostic: str = ""

    @property
    def failed(self) -> bool:
        return self.acquisition is Outcome.CLONE_FAILED or self.export is Outcome.EXPORT_FAILED

    def outcomes(self):
        return [outcome for outcome in (self.acquisition, self.export) if outcome is not None]


__all__ = ["Outcome", "ItemResult"]
