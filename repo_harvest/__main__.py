"""Module entrypoint for ``python -m repo_harvest``."""

from __future__ import annotations

from .pipeline.runner import cli

if __name__ == "__main__":
    raise SystemExit(cli())
