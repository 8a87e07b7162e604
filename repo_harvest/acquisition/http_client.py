"""HTTP helpers with bounded retry/backoff and token cycling for GitHub REST calls."""

from __future__ import annotations

import os
import time
from typing import Optional

import requests

from .config import (
    BACKOFF_BASE_SEC,
    GITHUB_TOKENS,
    MAX_RETRIES,
    MAX_WAIT_ON_403,
    REQUEST_TIMEOUT,
    USER_AGENT,
)

SESSION = requests.Session()
SESSION.headers.update(
    {
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": USER_AGENT,
    }
)

GITHUB_TOKEN_INDEX = 0
TERMINAL_ERRORS = {400, 404, 410, 422, 451}


def sleep_with_jitter(base: float) -> None:
    """Pause execution with +/- 25% jitter to avoid synchronized retries."""
    jitter = base * 0.25 * (0.5 - (os.urandom(1)[0] / 255.0))
    time.sleep(max(0.0, base + jitter))


def log_http_error(resp: requests.Response, url: str) -> None:
    """Print a short, human-readable message when GitHub returns an error."""
    try:
        body = resp.json()
    except ValueError:
        body = {"text": (resp.text or "")[:300]}
    if not isinstance(body, dict):
        body = {"text": str(body)[:300]}
    msg = body.get("message") or body.get("error") or body.get("text")
    print(f"[error] HTTP {resp.status_code} for {url}\n  -> {msg}")


def get_current_token() -> Optional[str]:
    """Return the token for the current index or None when none are configured."""
    if not GITHUB_TOKENS:
        return None
    return GITHUB_TOKENS[GITHUB_TOKEN_INDEX % len(GITHUB_TOKENS)] or None


def set_auth_header_for_current_token() -> None:
    """Set or clear the SESSION Authorization header for the current token index."""
    token = get_current_token()
    if token:
        SESSION.headers["Authorization"] = f"token {token}"
    else:
        SESSION.headers.pop("Authorization", None)


def switch_to_next_token() -> bool:
    """Advance to the next token if available; return True if switched."""
    global GITHUB_TOKEN_INDEX
    if len(GITHUB_TOKENS) <= 1:
        return False

    GITHUB_TOKEN_INDEX = (GITHUB_TOKEN_INDEX + 1) % len(GITHUB_TOKENS)
    set_auth_header_for_current_token()

    if GITHUB_TOKEN_INDEX == 0:
        print(f"[rate-limit] wrapped to token 1/{len(GITHUB_TOKENS)}")
    else:
        print(f"[rate-limit] switched to token {GITHUB_TOKEN_INDEX + 1}/{len(GITHUB_TOKENS)}")
    return True


def _rate_limit_wait(resp: requests.Response, attempt: int) -> int:
    headers = resp.headers or {}
    retry_after = headers.get("Retry-After")
    reset = headers.get("X-RateLimit-Reset")
    if retry_after and str(retry_after).isdigit():
        wait_sec = int(retry_after)
    elif reset and str(reset).isdigit():
        wait_sec = max(0, int(reset) - int(time.time())) + 1
    else:
        wait_sec = BACKOFF_BASE_SEC * (2 ** (attempt - 1))
    return min(wait_sec, MAX_WAIT_ON_403)


def request_with_backoff(method: str, url: str, **kwargs) -> requests.Response:
    """Perform a REST call with bounded retries, exponential backoff, and token cycling.

    Unlike a long-running crawler, the harvester never parks for a full
    rate-limit window: waits are capped at ``MAX_WAIT_ON_403`` and the final
    response is returned to the caller once ``MAX_RETRIES`` is spent.
    Connection errors on the last attempt are re-raised.
    """
    if "Authorization" not in SESSION.headers:
        set_auth_header_for_current_token()

    timeout = kwargs.pop("timeout", REQUEST_TIMEOUT)
    last_exc: Optional[requests.RequestException] = None
    resp: Optional[requests.Response] = None
    rotations = 0

    for attempt in range(1, MAX_RETRIES + 1):
        try:
            resp = SESSION.request(method, url, timeout=timeout, **kwargs)
        except requests.RequestException as exc:
            last_exc = exc
            if attempt < MAX_RETRIES:
                delay = BACKOFF_BASE_SEC * (2 ** (attempt - 1))
                print(f"[retry {attempt}/{MAX_RETRIES}] {exc} -> sleep {delay:.1f}s")
                sleep_with_jitter(delay)
            continue
        last_exc = None

        if 200 <= resp.status_code < 300:
            return resp

        if resp.status_code == 401:
            if switch_to_next_token():
                continue
            log_http_error(resp, url)
            return resp

        if resp.status_code in (403, 429):
            remaining = (resp.headers or {}).get("X-RateLimit-Remaining")
            if remaining == "0" and rotations < len(GITHUB_TOKENS) - 1 and switch_to_next_token():
                rotations += 1
                continue
            if attempt == MAX_RETRIES:
                log_http_error(resp, url)
                return resp
            wait_sec = _rate_limit_wait(resp, attempt)
            print(f"[backoff {resp.status_code}] waiting {wait_sec}s for {url}")
            sleep_with_jitter(wait_sec)
            continue

        if resp.status_code in TERMINAL_ERRORS:
            log_http_error(resp, url)
            return resp

        if attempt < MAX_RETRIES:
            delay = BACKOFF_BASE_SEC * (2 ** (attempt - 1))
            print(f"[retry {attempt}/{MAX_RETRIES}] HTTP {resp.status_code} -> sleep {delay:.1f}s")
            sleep_with_jitter(delay)
            continue

        return resp

    if last_exc:
        raise last_exc
    if resp is not None:
        return resp
    raise RuntimeError("Request failed after retries.")


__all__ = [
    "SESSION",
    "TERMINAL_ERRORS",
    "sleep_with_jitter",
    "log_http_error",
    "get_current_token",
    "set_auth_header_for_current_token",
    "switch_to_next_token",
    "request_with_backoff",
]
