"""GitHub REST lookup used to fail fast on remotes that do not exist."""

from __future__ import annotations

from typing import Optional

import requests

from ..catalog import RepositoryRef
from .config import BASE_URL
from .http_client import request_with_backoff


def repo_api_url(ref: RepositoryRef) -> str:
    return f"{BASE_URL}/repos/{ref.owner}/{ref.name}"


def remote_exists(ref: RepositoryRef) -> Optional[bool]:
    """Return True/False when GitHub gives a definite answer, None when inconclusive.

    Only a 404 counts as "missing"; rate limits, auth problems and network
    errors leave the decision to ``git clone`` itself.
    """
    url = repo_api_url(ref)
    try:
        resp = request_with_backoff("GET", url)
    except requests.RequestException as exc:
        print(f"[warn] preflight for {ref} skipped: {exc}")
        return None
    if 200 <= resp.status_code < 300:
        return True
    if resp.status_code == 404:
        return False
    return None


__all__ = ["repo_api_url", "remote_exists"]
