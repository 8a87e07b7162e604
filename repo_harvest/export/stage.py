"""Export stage: flatten a working copy into a single text artifact.

The flattening tool (repomix by default) is opaque here: it is invoked as
``<flatten_command...> <source> -o <artifact>`` and only its exit status is
inspected. A partially written artifact from a failed run is left in place;
the next successful run overwrites it.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, TYPE_CHECKING

from ..catalog import RepositoryRef
from ..errors import ExportError
from ..process import run_scoped

if TYPE_CHECKING:  # pragma: no cover
    from ..pipeline.config import HarvestSettings

ARTIFACT_SUFFIX = ".txt"


def artifact_path(safe_identifier: str, export_root: Path) -> Path:
    return Path(export_root) / f"{safe_identifier}{ARTIFACT_SUFFIX}"


def build_command(flatten_command: Sequence[str], source: str | Path, output: Path) -> List[str]:
    return [*flatten_command, str(source), "-o", str(output)]


def export(
    source: str | Path,
    safe_identifier: str,
    settings: "HarvestSettings",
    *,
    ref: Optional[RepositoryRef] = None,
) -> Path:
    """Run the flattening tool on ``source`` and return the artifact path.

    ``source`` is a local working copy, or the remote URL in remote mode.
    Raises ExportError on a non-zero exit, a timeout, a tool that cannot
    be started, or any other error while running it.
    """
    output = artifact_path(safe_identifier, settings.export_root)
    argv = build_command(settings.flatten_command, source, output)
    label = ref or safe_identifier
    print(f"  flattening {source} -> {output}")
    try:
        result = run_scoped(argv, timeout=settings.export_timeout)
    except (OSError, subprocess.SubprocessError) as exc:
        raise ExportError(label, f"cannot run {argv[0]}: {exc}") from exc
    except Exception as exc:
        raise ExportError(label, f"{type(exc).__name__}: {exc}") from exc
    if not result.ok:
        raise ExportError(label, result.excerpt(settings.diagnostic_lines), result.returncode)
    return output


__all__ = ["ARTIFACT_SUFFIX", "artifact_path", "build_command", "export"]
