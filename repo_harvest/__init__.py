"""Batch harvester that clones a curated list of GitHub repositories and flattens each one to text."""

__version__ = "0.1.0"

__all__ = ["__version__"]
