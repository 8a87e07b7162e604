"""GitHub credentials for the preflight check.

Tokens come from a gitignored ``local_secrets.json`` at the project root
(or the file named by ``LOCAL_SECRETS_FILE``) and from ``GITHUB_TOKEN``.
None of them is required: without a token the preflight runs against the
anonymous rate limit.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

SECRETS_FILENAME = "local_secrets.json"
SECRETS_PATH_ENV = "LOCAL_SECRETS_FILE"
TOKEN_ENV = "GITHUB_TOKEN"
TOKENS_KEY = "github_tokens"


def secrets_path(path: Optional[str | Path] = None) -> Path:
    if path is None:
        path = os.getenv(SECRETS_PATH_ENV) or Path(__file__).resolve().parents[1] / SECRETS_FILENAME
    return Path(path).expanduser()


def load_local_secrets(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Parse the secrets file; a missing, unreadable or non-object file yields {}."""
    source = secrets_path(path)
    if not source.is_file():
        return {}
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        print(f"[warn] ignoring unreadable secrets file {source}: {exc}")
        return {}
    if not isinstance(data, dict):
        print(f"[warn] ignoring secrets file {source}: expected a JSON object")
        return {}
    return data


def github_tokens(
    secrets: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Return the configured tokens in rotation order, without blanks or repeats.

    ``github_tokens`` in the secrets file may be a list or a single string;
    ``GITHUB_TOKEN`` from the environment is appended last.
    """
    if secrets is None:
        secrets = load_local_secrets()
    if environ is None:
        environ = os.environ

    configured = secrets.get(TOKENS_KEY, [])
    if isinstance(configured, str):
        configured = [configured]
    candidates = [str(token) for token in configured if token]
    candidates.append(environ.get(TOKEN_ENV, ""))

    tokens: List[str] = []
    for token in (candidate.strip() for candidate in candidates):
        if token and token not in tokens:
            tokens.append(token)
    return tokens


__all__ = ["SECRETS_FILENAME", "secrets_path", "load_local_secrets", "github_tokens"]
