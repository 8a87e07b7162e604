"""Acquisition stage: clone each catalog entry once into the acquisition root."""

from .stage import acquire, marker_path, working_copy_path

__all__ = ["acquire", "marker_path", "working_copy_path"]
