"""Test fixtures for sizefactor-centering.

Provides mock data generators and test utilities.
"""

from .mock_size_factors import (
    create_size_factors,
    create_blocked_size_factors,
    inject_invalid,
)

__all__ = [
    "create_size_factors",
    "create_blocked_size_factors",
    "inject_invalid",
]
