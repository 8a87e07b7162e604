"""Tests for repo_harvest.acquisition.remote mapping GitHub responses to a preflight verdict.

Run with coverage:
    pytest tests/test_remote.py --maxfail=1 -v --cov=repo_harvest.acquisition.remote --cov-report=term-missing
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from repo_harvest.acquisition import remote
from repo_harvest.catalog import RepositoryRef

REF = RepositoryRef("octocat", "Hello-World")


def _resp(status):
    resp = MagicMock()
    resp.status_code = status
    return resp


def test_repo_api_url():
    assert remote.repo_api_url(REF) == "https://api.github.com/repos/octocat/Hello-World"


@pytest.mark.parametrize(
    ("status", "expected"),
    [(200, True), (404, False), (403, None), (500, None)],
)
@patch("repo_harvest.acquisition.remote.request_with_backoff")
def test_remote_exists_maps_status(mock_request, status, expected):
    mock_request.return_value = _resp(status)
    assert remote.remote_exists(REF) is expected
    mock_request.assert_called_once_with("GET", remote.repo_api_url(REF))


@patch("repo_harvest.acquisition.remote.request_with_backoff")
def test_remote_exists_is_inconclusive_on_network_error(mock_request, capsys):
    mock_request.side_effect = requests.ConnectionError("offline")
    assert remote.remote_exists(REF) is None
    assert "preflight" in capsys.readouterr().out
