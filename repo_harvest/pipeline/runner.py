"""Entry points for running the clone-and-flatten harvest over the catalog."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from ..acquisition import acquire, working_copy_path
from ..catalog import RepositoryRef
from ..errors import AcquisitionError, ConfigError, ExportError, WorkspaceError
from ..export import export
from ..outcomes import ItemResult, Outcome
from .config import HarvestSettings, resolve_settings
from .summary import RunSummary, list_artifacts


def ensure_dir(path: Path) -> Path:
    """Create a run directory, converting filesystem failures into WorkspaceError."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WorkspaceError(path, str(exc)) from exc
    if not path.is_dir():
        raise WorkspaceError(path, "not a directory")
    return path


def process_repo(ref: RepositoryRef, settings: HarvestSettings) -> ItemResult:
    """Acquire then export a single ref; stage failures are recorded, never raised."""
    result = ItemResult(ref=ref)

    if settings.export_mode == "remote":
        source = ref.clone_url(settings.clone_url_template)
    else:
        try:
            result.acquisition = acquire(ref, settings)
        except AcquisitionError as exc:
            result.acquisition = Outcome.CLONE_FAILED
            result.diagnostic = exc.diagnostic
            print(f"  [error] failed to clone {ref}")
            for line in exc.diagnostic.splitlines():
                print(f"    {line}")
            return result
        source = working_copy_path(ref, settings.acquisition_root)

    try:
        result.artifact = export(source, ref.safe_identifier, settings, ref=ref)
    except ExportError as exc:
        result.export = Outcome.EXPORT_FAILED
        result.diagnostic = exc.diagnostic
        print(f"  [error] failed to flatten {ref}")
        for line in exc.diagnostic.splitlines():
            print(f"    {line}")
        return result

    result.export = Outcome.EXPORT_SUCCEEDED
    print(f"  done -> {result.artifact}")
    return result


def run_batch(settings: HarvestSettings) -> RunSummary:
    """Drive every catalog entry through acquisition and export, in catalog order."""
    if settings.export_mode == "local":
        ensure_dir(settings.acquisition_root)
        for name, refs in settings.catalog.shared_names().items():
            owners = ", ".join(str(ref) for ref in refs)
            print(f"[warn] {owners} share the working copy directory '{name}'; later entries reuse the first clone")
    ensure_dir(settings.export_root)

    catalog = settings.catalog.entries()
    summary = RunSummary()
    print(f"Processing {len(catalog)} repos...")
    for index, ref in enumerate(catalog, start=1):
        print(f"\n=== [{index}/{len(catalog)}] {ref} ===")
        summary.record(process_repo(ref, settings))

    summary.artifacts = list_artifacts(settings.export_root)
    print()
    print(summary.render(settings.export_root))
    return summary


def main(custom_repos: Optional[List[str]] = None) -> int:
    """Entry point used by both CLI and imports; returns the process exit status."""
    try:
        settings = resolve_settings(custom_repos or None)
        run_batch(settings)
    except ConfigError as exc:
        print(f"[fatal] configuration error: {exc}")
        return 1
    except WorkspaceError as exc:
        print(f"[fatal] {exc}")
        return 1
    except KeyboardInterrupt:
        print("\n[interrupted] re-run to resume; finished items are skipped or overwritten")
        return 130
    return 0


def cli() -> int:
    return main(sys.argv[1:])


__all__ = ["ensure_dir", "process_repo", "run_batch", "main", "cli"]
