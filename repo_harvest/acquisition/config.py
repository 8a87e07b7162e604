"""Configuration constants for the GitHub REST preflight used before cloning."""

from __future__ import annotations

import os
from typing import List

from ..secrets import github_tokens

GITHUB_TOKENS: List[str] = github_tokens()
USER_AGENT = "repo-harvest/0.1"
BASE_URL = "https://api.github.com"
REQUEST_TIMEOUT = int(os.getenv("GITHUB_REQUEST_TIMEOUT", "30"))
MAX_RETRIES = int(os.getenv("GITHUB_MAX_RETRIES", "3"))
BACKOFF_BASE_SEC = 2
MAX_WAIT_ON_403 = int(os.getenv("MAX_WAIT_ON_403", "30"))

__all__ = [
    "GITHUB_TOKENS",
    "USER_AGENT",
    "BASE_URL",
    "REQUEST_TIMEOUT",
    "MAX_RETRIES",
    "BACKOFF_BASE_SEC",
    "MAX_WAIT_ON_403",
]
