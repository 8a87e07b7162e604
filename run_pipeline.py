"""Compatibility wrapper around the harvest pipeline package."""

from __future__ import annotations

import sys
from typing import List, Optional

from repo_harvest.pipeline.runner import main as run_pipeline


def main(custom_repos: Optional[List[str]] = None) -> int:
    """Delegate to the harvest runner."""
    return run_pipeline(custom_repos)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
