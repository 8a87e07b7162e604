"""Tests for repo_harvest.process covering exit codes, timeouts, and group teardown.

Run with coverage:
    pytest tests/test_process.py --maxfail=1 -v --cov=repo_harvest.process --cov-report=term-missing
"""

import signal
import sys
import time

import pytest

from repo_harvest import process


def test_run_scoped_merges_streams_and_reports_exit_code():
    script = "import sys; print('to stdout'); print('to stderr', file=sys.stderr); sys.exit(3)"
    result = process.run_scoped([sys.executable, "-c", script])
    assert result.returncode == 3
    assert result.ok is False
    assert "to stdout" in result.output
    assert "to stderr" in result.output
    assert result.timed_out is False


def test_run_scoped_success_and_env_passthrough(tmp_path):
    script = "import os; print(os.environ['HARVEST_ECHO'])"
    result = process.run_scoped([sys.executable, "-c", script], env={"HARVEST_ECHO": "visible"}, cwd=tmp_path)
    assert result.ok is True
    assert result.output.strip() == "visible"


def test_run_scoped_kills_hung_process_after_timeout():
    started = time.monotonic()
    result = process.run_scoped([sys.executable, "-c", "import time; time.sleep(60)"], timeout=0.5)
    assert result.timed_out is True
    assert result.ok is False
    assert time.monotonic() - started < 30
    assert "timed out" in result.excerpt(5)


def test_run_scoped_missing_executable_raises():
    with pytest.raises(FileNotFoundError):
        process.run_scoped(["definitely-not-a-real-tool-xyz"])


def test_run_scoped_tears_down_group_on_interrupt(monkeypatch):
    killed = []

    class _InterruptedPopen:
        pid = 4242
        returncode = None

        def __init__(self, *args, **kwargs):
            assert kwargs["start_new_session"] is True

        def communicate(self, timeout=None):
            raise KeyboardInterrupt

        def wait(self):
            return -9

        def kill(self):
            killed.append("direct")

    monkeypatch.setattr(process.subprocess, "Popen", _InterruptedPopen)
    monkeypatch.setattr(process.os, "killpg", lambda pid, sig: killed.append((pid, sig)))

    with pytest.raises(KeyboardInterrupt):
        process.run_scoped(["repomix"])
    assert killed == [(4242, signal.SIGKILL)]



def test_run_scoped_stops_draining_when_pipe_stays_open(monkeypatch):
    drains = []
    pipes = []

    class _Pipe:
        closed = False

        def close(self):
            self.closed = True

    class _LingeringPopen:
        pid = 4343
        returncode = None

        def __init__(self, *args, **kwargs):
            self.stdout = _Pipe()
            pipes.append(self.stdout)

        def communicate(self, timeout=None):
            drains.append(timeout)
            raise process.subprocess.TimeoutExpired("repomix", timeout)

        def wait(self):
            self.returncode = -9
            return -9

        def kill(self):
            pass

    monkeypatch.setattr(process.subprocess, "Popen", _LingeringPopen)
    monkeypatch.setattr(process.os, "killpg", lambda pid, sig: None)

    result = process.run_scoped(["repomix"], timeout=1.0)

    assert drains == [1.0, process.DRAIN_TIMEOUT_SEC]
    assert pipes[0].closed is True
    assert result.timed_out is True
    assert result.returncode == -9
    assert result.output == ""
    assert "timed out" in result.excerpt(5)

def test_excerpt_keeps_first_lines_only():
    output = "\n".join(f"line {i}" for i in range(1, 20))
    result = process.CommandResult(argv=("git",), returncode=128, output=output)
    assert result.excerpt(5).splitlines() == ["line 1", "line 2", "line 3", "line 4", "line 5"]


def test_excerpt_falls_back_to_exit_status_when_silent():
    result = process.CommandResult(argv=("repomix",), returncode=2, output="\n\n")
    assert result.excerpt(5) == "repomix exited with status 2"
