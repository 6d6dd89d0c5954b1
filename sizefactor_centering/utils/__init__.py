"""Utility functions for sizefactor-centering.

Provides helpers for working with block labels.
"""

from .stats import (
    total_groups,
    validate_blocks,
    factorize_blocks,
)

__all__ = [
    "total_groups",
    "validate_blocks",
    "factorize_blocks",
]
