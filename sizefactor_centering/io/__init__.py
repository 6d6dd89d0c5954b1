"""Logging helpers for sizefactor-centering."""

from .logging import log_yaml

__all__ = [
    "log_yaml",
]
