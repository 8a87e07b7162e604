"""Run summary: outcome counts plus a listing of what actually landed on disk."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from ..outcomes import ItemResult, Outcome


def human_size(num_bytes: int) -> str:
    """Format a byte count the way ``ls -lh`` does (``512``, ``1.5K``, ``12M``)."""
    size = float(num_bytes)
    for unit in ("", "K", "M", "G", "T"):
        if size < 1024 or unit == "T":
            if not unit:
                return f"{int(size)}"
            return f"{size:.1f}{unit}" if size < 10 else f"{size:.0f}{unit}"
        size /= 1024
    return f"{num_bytes}"


def list_artifacts(export_root: Path) -> List[Tuple[str, int]]:
    """Return (file name, size in bytes) for every file in the export root, sorted by name."""
    root = Path(export_root)
    if not root.is_dir():
        return []
    return sorted((entry.name, entry.stat().st_size) for entry in root.iterdir() if entry.is_file())


@dataclass
class RunSummary:
    items: List[ItemResult] = field(default_factory=list)
    artifacts: List[Tuple[str, int]] = field(default_factory=list)

    def record(self, item: ItemResult) -> None:
        self.items.append(item)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def counts(self) -> Dict[Outcome, int]:
        counter = Counter(outcome for item in self.items for outcome in item.outcomes())
        return {outcome: counter.get(outcome, 0) for outcome in Outcome.ordered()}

    @property
    def failures(self) -> List[ItemResult]:
        return [item for item in self.items if item.failed]

    def render(self, export_root: Path) -> str:
        lines = [
            "=========================================",
            f"Processed {self.total} repositories",
            "=========================================",
        ]
        for outcome, count in self.counts.items():
            lines.append(f"  {outcome.value:<18}{count:>4}")

        if self.failures:
            lines.append("")
            lines.append("Failures:")
            for item in self.failures:
                kind = "clone" if item.acquisition is Outcome.CLONE_FAILED else "export"
                lines.append(f"  {item.ref} ({kind})")
                for detail in item.diagnostic.splitlines():
                    lines.append(f"      {detail}")

        lines.append("")
        lines.append(f"Artifacts in {export_root}/ ({len(self.artifacts)} files):")
        for name, size in self.artifacts:
            lines.append(f"  {human_size(size):>6}  {name}")
        return "\n".join(lines)


__all__ = ["human_size", "list_artifacts", "RunSummary"]
