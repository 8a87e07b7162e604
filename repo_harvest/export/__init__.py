"""Export stage: flatten working copies into one text artifact each."""

from .stage import artifact_path, export

__all__ = ["artifact_path", "export"]
