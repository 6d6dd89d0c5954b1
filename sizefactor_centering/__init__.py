"""sizefactor-centering: Centering of size factors for scaling normalization.

This package provides tools for:
- Centering size factors so that their mean is 1
- Blocked centering, either per block or relative to the lowest-coverage block
- Counting invalid (NaN, infinite, non-positive) size factors
- Replacing invalid size factors after centering

Example usage:
    >>> import numpy as np
    >>> from sizefactor_centering import compute, compute_blocked, SanitizeDiagnostics
    >>>
    >>> size_factors = np.array([2.0, 4.0, np.nan, 6.0])
    >>> diag = SanitizeDiagnostics()
    >>> float(compute(size_factors, diag))
    4.0
    >>> diag.n_nan
    1
"""

__version__ = "0.1.0"

from .core.centering import (
    BlockMode,
    CenteringConfig,
    SizeFactorConfig,
    CenteringResult,
    SizeFactorCenterer,
    compute_mean,
    compute,
    compute_blocked_mean,
    compute_blocked,
)
from .core.sanitize import (
    HandlerAction,
    SanitizeConfig,
    SanitizeDiagnostics,
    InvalidSizeFactorError,
    sanitize,
)

__all__ = [
    "__version__",
    "BlockMode",
    "CenteringConfig",
    "SizeFactorConfig",
    "CenteringResult",
    "SizeFactorCenterer",
    "compute_mean",
    "compute",
    "compute_blocked_mean",
    "compute_blocked",
    "HandlerAction",
    "SanitizeConfig",
    "SanitizeDiagnostics",
    "InvalidSizeFactorError",
    "sanitize",
]
