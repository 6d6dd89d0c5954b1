"""Diagnostics for invalid size factors.

Provides the counter structure filled while scanning size factors, and the
predicates that classify a size factor as negative, zero, NaN or infinite.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict

import numpy as np


@dataclass
class SanitizeDiagnostics:
    """Counts of invalid size factors, by category.

    Instances are owned by the caller and may be shared across several
    calls to aggregate counts. Centering only ever increments the counters.

    Attributes
    ----------
    n_negative : int
        Number of negative values (including negative infinity)
    n_zero : int
        Number of values equal to zero
    n_nan : int
        Number of NaN values
    n_infinite : int
        Number of positive infinite values
    """

    n_negative: int = 0
    n_zero: int = 0
    n_nan: int = 0
    n_infinite: int = 0

    @property
    def has_negative(self) -> bool:
        return self.n_negative > 0

    @property
    def has_zero(self) -> bool:
        return self.n_zero > 0

    @property
    def has_nan(self) -> bool:
        return self.n_nan > 0

    @property
    def has_infinite(self) -> bool:
        return self.n_infinite > 0

    @property
    def n_invalid(self) -> int:
        """Total number of invalid values recorded."""
        return self.n_negative + self.n_zero + self.n_nan + self.n_infinite

    @property
    def has_invalid(self) -> bool:
        return self.n_invalid > 0

    def merge(self, other: "SanitizeDiagnostics") -> "SanitizeDiagnostics":
        """Add the counts of another diagnostics object into this one."""
        self.n_negative += other.n_negative
        self.n_zero += other.n_zero
        self.n_nan += other.n_nan
        self.n_infinite += other.n_infinite
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "n_negative": self.n_negative,
            "n_zero": self.n_zero,
            "n_nan": self.n_nan,
            "n_infinite": self.n_infinite,
        }


def is_invalid(value: float, diagnostics: SanitizeDiagnostics) -> bool:
    """Check whether a single size factor is invalid.

    Categories are tested in order: negative, zero, NaN, infinite. Negative
    infinity is therefore counted as negative.

    Parameters
    ----------
    value : float
        Size factor to check
    diagnostics : SanitizeDiagnostics
        Counter incremented for the category of an invalid value

    Returns
    -------
    bool
        True if the value is invalid
    """
    if value < 0:
        diagnostics.n_negative += 1
        return True
    if value == 0:
        diagnostics.n_zero += 1
        return True
    if math.isnan(value):
        diagnostics.n_nan += 1
        return True
    if math.isinf(value):
        diagnostics.n_infinite += 1
        return True
    return False


def flag_invalid(values: np.ndarray, diagnostics: SanitizeDiagnostics) -> np.ndarray:
    """Vectorized form of :func:`is_invalid`.

    Parameters
    ----------
    values : np.ndarray
        Size factors to check
    diagnostics : SanitizeDiagnostics
        Counters incremented once per invalid value

    Returns
    -------
    np.ndarray
        Boolean mask, True where the value is invalid
    """
    values = np.asarray(values)

    negative = values < 0
    zero = values == 0
    nan = np.isnan(values)
    # +inf only; -inf is already counted as negative
    infinite = np.isposinf(values)

    diagnostics.n_negative += int(np.count_nonzero(negative))
    diagnostics.n_zero += int(np.count_nonzero(zero))
    diagnostics.n_nan += int(np.count_nonzero(nan))
    diagnostics.n_infinite += int(np.count_nonzero(infinite))

    return negative | zero | nan | infinite
