"""Central configuration constants and resolved settings for a harvest run."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from ..errors import ConfigError
from ..catalog import Catalog

ACQUISITION_ROOT = os.getenv("HARVEST_CLONE_DIR", "./isg-repos-cloned")
EXPORT_ROOT = os.getenv("HARVEST_EXPORT_DIR", "./isg-repos-repomix")
CLONE_URL_TEMPLATE = os.getenv("HARVEST_CLONE_URL_TEMPLATE", "https://github.com/{owner}/{name}.git")
GIT_EXECUTABLE = os.getenv("HARVEST_GIT", "git")
FLATTEN_COMMAND = os.getenv("HARVEST_FLATTEN_COMMAND", "nix run nixpkgs#repomix --")
CLONE_TIMEOUT_SEC = int(os.getenv("HARVEST_CLONE_TIMEOUT_SEC", "900"))  # 0 = no timeout
EXPORT_TIMEOUT_SEC = int(os.getenv("HARVEST_EXPORT_TIMEOUT_SEC", "900"))  # 0 = no timeout
DIAGNOSTIC_LINES = int(os.getenv("HARVEST_DIAGNOSTIC_LINES", "5"))
REQUIRE_CLONE_MARKER = os.getenv("HARVEST_REQUIRE_CLONE_MARKER", "0") == "1"
REMOTE_PREFLIGHT = os.getenv("HARVEST_REMOTE_PREFLIGHT", "1") == "1"
EXPORT_MODE = os.getenv("HARVEST_EXPORT_MODE", "local")

EXPORT_MODES = ("local", "remote")

REPOS = [
    "4A49/Infinite-Storage-Glitch",
    "KKarmugil/Infinite_Storage_Glitch",
    "Memorix101/infinite-storage-glitch-csharp",
    "Atiseug/py-ISG",
    "Rohit10701/infinite-storage-glitch",
    "thebitanpaul/Infinite-Storage-Glitch",
    "norangeflame/infinite-cloud-storage",
    "ycs77/infinite-storage-glitch-docker",
    "Sberm/Thats-Not-A-Vid.cc",
    "Santhoshkrk/Infinite-Storage-Glitch",
    "dev2180/infinite-storage-glitch",
    "ycs77/Infinite-Storage-Glitch",
    "PrLu/Infinite-Storage-Glitch",
    "harshmohite04/Infinite-Storage-Glitch",
    "unsigned-long-long-int/infinite-storage-glitch",
    "alexanki23890t/infinite-storage-glitch",
    "User1334/Infinite_Storage_Glitcher",
    "ranjeetmalik/Infinite-Storage-Glitch",
    "OM-bit-hub/Infinite_Storage_Glitch",
    "Nick4421/ISG-2.0",
    "Vidyarani11Patil/Infinite-Storage-Glitch-Project",
    "g-utsav/ISG---Infinite-Storage-Glitch",
    "yopremium21/Infinite-Storage-Glitch-youtube",
    "crosshair-01/Infinite-Storage-Glitch-master",
    "Archanadigraj/Infinite-Storage-Glitch-project",
    "knkr1/better-infinite-storage-glitch",
    "VMoorjani/EncryptedInfiniteStorageGlitch",
    "techkamar/isg_magic",
]


def _timeout(seconds: int) -> Optional[float]:
    return float(seconds) if seconds > 0 else None


@dataclass(frozen=True)
class HarvestSettings:
    """Resolved, immutable settings handed to the batch controller."""

    catalog: Catalog
    acquisition_root: Path
    export_root: Path
    clone_url_template: str = CLONE_URL_TEMPLATE
    git_executable: str = GIT_EXECUTABLE
    flatten_command: Tuple[str, ...] = tuple(shlex.split(FLATTEN_COMMAND))
    clone_timeout: Optional[float] = _timeout(CLONE_TIMEOUT_SEC)
    export_timeout: Optional[float] = _timeout(EXPORT_TIMEOUT_SEC)
    diagnostic_lines: int = DIAGNOSTIC_LINES
    require_clone_marker: bool = REQUIRE_CLONE_MARKER
    remote_preflight: bool = REMOTE_PREFLIGHT
    export_mode: str = EXPORT_MODE

    def __post_init__(self) -> None:
        if self.export_mode not in EXPORT_MODES:
            raise ConfigError(f"export mode must be one of {EXPORT_MODES}, got {self.export_mode!r}")
        if not self.flatten_command:
            raise ConfigError("flatten command is empty")
        try:
            self.clone_url_template.format(owner="owner", name="name", full_name="owner/name")
        except (KeyError, IndexError, ValueError, AttributeError) as exc:
            raise ConfigError(
                f"clone URL template {self.clone_url_template!r} is invalid "
                f"(placeholders are {{owner}}, {{name}}, {{full_name}}): {type(exc).__name__}: {exc}"
            ) from exc


def resolve_settings(custom_repos: Optional[Iterable[str]] = None) -> HarvestSettings:
    """Freeze the module constants into settings; raises ConfigError on a bad catalog."""

    catalog = Catalog.from_strings(REPOS if custom_repos is None else custom_repos)
    return HarvestSettings(
        catalog=catalog,
        acquisition_root=Path(ACQUISITION_ROOT),
        export_root=Path(EXPORT_ROOT),
        clone_url_template=CLONE_URL_TEMPLATE,
        git_executable=GIT_EXECUTABLE,
        flatten_command=tuple(shlex.split(FLATTEN_COMMAND)),
        clone_timeout=_timeout(CLONE_TIMEOUT_SEC),
        export_timeout=_timeout(EXPORT_TIMEOUT_SEC),
        diagnostic_lines=DIAGNOSTIC_LINES,
        require_clone_marker=REQUIRE_CLONE_MARKER,
        remote_preflight=REMOTE_PREFLIGHT,
        export_mode=EXPORT_MODE,
    )


__all__ = [
    "ACQUISITION_ROOT",
    "EXPORT_ROOT",
    "CLONE_URL_TEMPLATE",
    "GIT_EXECUTABLE",
    "FLATTEN_COMMAND",
    "CLONE_TIMEOUT_SEC",
    "EXPORT_TIMEOUT_SEC",
    "DIAGNOSTIC_LINES",
    "REQUIRE_CLONE_MARKER",
    "REMOTE_PREFLIGHT",
    "EXPORT_MODE",
    "EXPORT_MODES",
    "REPOS",
    "HarvestSettings",
    "resolve_settings",
]
