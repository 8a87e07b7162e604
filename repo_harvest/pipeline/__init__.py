"""Batch controller for the clone-and-flatten harvest."""

from .runner import main, process_repo, run_batch

__all__ = ["main", "process_repo", "run_batch"]
