"""Repository identifiers and the curated catalog that feeds a harvest run."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .errors import ConfigError

SEPARATOR = "/"
SAFE_SEPARATOR = "_"


@dataclass(frozen=True)
class RepositoryRef:
    """An ``owner/name`` pair identifying a remote repository."""

    owner: str
    name: str

    @classmethod
    def parse(cls, raw: str) -> "RepositoryRef":
        text = (raw or "").strip()
        if text.count(SEPARATOR) != 1:
            raise ConfigError(f"expected exactly one '{SEPARATOR}' in {raw!r}", [raw])
        owner, name = text.split(SEPARATOR)
        for part in (owner, name):
            if not part or part in (".", "..") or any(ch.isspace() for ch in part):
                raise ConfigError(f"invalid repository identifier {raw!r}", [raw])
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}{SEPARATOR}{self.name}"

    @property
    def safe_identifier(self) -> str:
        """File-name safe form used for export artifacts (``owner_name``)."""
        return f"{self.owner}{SAFE_SEPARATOR}{self.name}"

    def clone_url(self, template: str) -> str:
        return template.format(owner=self.owner, name=self.name, full_name=self.full_name)

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True)
class Catalog:
    """Immutable, ordered list of repositories to harvest."""

    refs: Tuple[RepositoryRef, ...]

    @classmethod
    def from_strings(cls, raw_entries: Iterable[str]) -> "Catalog":
        """Parse every entry up front; any malformed entry aborts the whole catalog."""
        refs: List[RepositoryRef] = []
        bad: List[str] = []
        for raw in raw_entries:
            try:
                refs.append(RepositoryRef.parse(raw))
            except ConfigError:
                bad.append(raw)
        if bad:
            listed = ", ".join(repr(entry) for entry in bad)
            raise ConfigError(f"malformed catalog entries (expected 'owner/name'): {listed}", bad)
        if not refs:
            raise ConfigError("catalog is empty; add 'owner/name' entries to REPOS or pass them as arguments")
        return cls(refs=tuple(refs))

    def entries(self) -> Tuple[RepositoryRef, ...]:
        return self.refs

    def shared_names(self) -> Dict[str, List[RepositoryRef]]:
        """Working-copy names claimed by more than one ref."""
        counts = Counter(ref.name for ref in self.refs)
        return {
            name: [ref for ref in self.refs if ref.name == name]
            for name, count in counts.items()
            if count > 1
        }

    def __len__(self) -> int:
        return len(self.refs)

    def __iter__(self):
        return iter(self.refs)


__all__ = ["SEPARATOR", "SAFE_SEPARATOR", "RepositoryRef", "Catalog"]
