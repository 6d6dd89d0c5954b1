"""Detection and replacement of invalid size factors.

Size factors of infinity, NaN or non-positive values may occur in datasets
that have not been properly filtered to remove low-quality cells.

Example Usage
-------------
>>> from sizefactor_centering.core.centering import compute
>>> from sizefactor_centering.core.sanitize import (
...     SanitizeDiagnostics, SanitizeConfig, HandlerAction, sanitize,
... )
>>> diag = SanitizeDiagnostics()
>>> mean = compute(size_factors, diag)
>>> if diag.has_invalid:
...     sanitize(size_factors, diag, SanitizeConfig(handle_zero=HandlerAction.SANITIZE))
"""

from .config import (
    HandlerAction,
    SanitizeConfig,
    parse_action,
)

from .diagnostics import (
    SanitizeDiagnostics,
    is_invalid,
    flag_invalid,
)

from .engine import (
    InvalidSizeFactorError,
    find_smallest_valid_factor,
    find_largest_valid_factor,
    sanitize,
)

__all__ = [
    # Config
    "HandlerAction",
    "SanitizeConfig",
    "parse_action",
    # Diagnostics
    "SanitizeDiagnostics",
    "is_invalid",
    "flag_invalid",
    # Replacement
    "InvalidSizeFactorError",
    "find_smallest_valid_factor",
    "find_largest_valid_factor",
    "sanitize",
]
