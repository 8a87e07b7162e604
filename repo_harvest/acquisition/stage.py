"""Acquisition stage: make sure a local working copy exists for each ref.

A working copy lives at ``<acquisition_root>/<name>``. Presence of that
directory is what makes acquisition idempotent across runs. After every
successful clone a marker file is written under
``<acquisition_root>/.harvest/``; when ``require_clone_marker`` is set, a
directory without a marker (e.g. left behind by an interrupted run) is
discarded and cloned again.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Callable, Optional, TYPE_CHECKING

from ..catalog import RepositoryRef
from ..errors import AcquisitionError
from ..outcomes import Outcome
from .git_client import GitClient
from .remote import remote_exists

if TYPE_CHECKING:  # pragma: no cover
    from ..pipeline.config import HarvestSettings

MARKER_DIRNAME = ".harvest"
MARKER_SUFFIX = ".cloned"

RemoteCheck = Callable[[RepositoryRef], Optional[bool]]


def working_copy_path(ref: RepositoryRef, root: Path) -> Path:
    return Path(root) / ref.name


def marker_path(ref: RepositoryRef, root: Path) -> Path:
    return Path(root) / MARKER_DIRNAME / f"{ref.name}{MARKER_SUFFIX}"


def _write_marker(ref: RepositoryRef, root: Path) -> None:
    marker = marker_path(ref, root)
    marker.parent.mkdir(parents=True, exist_ok=True)
    marker.write_text(f"{ref.full_name}\n", encoding="utf-8")


def acquire(
    ref: RepositoryRef,
    settings: "HarvestSettings",
    *,
    git: Optional[GitClient] = None,
    remote_check: RemoteCheck = remote_exists,
) -> Outcome:
    """Return ``ALREADY_PRESENT`` or ``CLONED``; raise AcquisitionError otherwise."""

    root = settings.acquisition_root
    dest = working_copy_path(ref, root)

    if dest.exists():
        if not settings.require_clone_marker or marker_path(ref, root).exists():
            print(f"  already cloned: {dest.name}")
            return Outcome.ALREADY_PRESENT
        print(f"  [warn] {dest} has no completion marker; cloning again")
        try:
            shutil.rmtree(dest)
        except OSError as exc:
            raise AcquisitionError(ref, f"cannot remove incomplete copy {dest}: {exc}") from exc

    try:
        exists = remote_check(ref) if settings.remote_preflight else None
        url = ref.clone_url(settings.clone_url_template)
    except Exception as exc:
        raise AcquisitionError(ref, f"{type(exc).__name__}: {exc}") from exc
    if exists is False:
        raise AcquisitionError(ref, "remote repository not found")

    git = git or GitClient(executable=settings.git_executable, timeout=settings.clone_timeout)
    print(f"  cloning {url}...")
    try:
        result = git.clone(url, dest)
    except (OSError, subprocess.SubprocessError) as exc:
        raise AcquisitionError(ref, f"cannot run {settings.git_executable}: {exc}") from exc
    except Exception as exc:
        shutil.rmtree(dest, ignore_errors=True)
        raise AcquisitionError(ref, f"{type(exc).__name__}: {exc}") from exc

    if not result.ok:
        # A partial checkout would otherwise be accepted as complete next run.
        shutil.rmtree(dest, ignore_errors=True)
        raise AcquisitionError(ref, result.excerpt(settings.diagnostic_lines), result.returncode)

    try:
        _write_marker(ref, root)
    except OSError as exc:
        raise AcquisitionError(ref, f"cloned but could not write completion marker: {exc}") from exc
    return Outcome.CLONED


__all__ = ["MARKER_DIRNAME", "MARKER_SUFFIX", "working_copy_path", "marker_path", "acquire"]
