"""Replacement of invalid size factors.

Sanitization is a separate step from centering and should run after it,
so that replacement values do not interfere with the mean calculations.
The diagnostics gathered during centering tell us which categories need
to be handled at all.
"""

import logging
from typing import Optional

import numpy as np

from .config import HandlerAction, SanitizeConfig
from .diagnostics import SanitizeDiagnostics

logger = logging.getLogger(__name__)


class InvalidSizeFactorError(ValueError):
    """Raised when an invalid size factor is found and the action is ERROR."""


def find_smallest_valid_factor(size_factors: np.ndarray) -> float:
    """Smallest positive finite size factor, or 1 if there is none."""
    values = np.asarray(size_factors)
    valid = values[np.isfinite(values) & (values > 0)]
    if valid.size == 0:
        return 1.0
    return float(valid.min())


def find_largest_valid_factor(size_factors: np.ndarray) -> float:
    """Largest positive finite size factor, or 1 if there is none."""
    values = np.asarray(size_factors)
    valid = values[np.isfinite(values) & (values > 0)]
    if valid.size == 0:
        return 1.0
    return float(valid.max())


def _check_error(action: HandlerAction, count: int, label: str) -> None:
    if action is HandlerAction.ERROR:
        raise InvalidSizeFactorError(f"Detected {count} size factor(s) {label}")


def sanitize(
    size_factors: np.ndarray,
    diagnostics: SanitizeDiagnostics,
    config: Optional[SanitizeConfig] = None,
) -> int:
    """Replace invalid size factors in place.

    Zero and negative values are replaced with the smallest valid size
    factor, NaN with 1 and positive infinity with the largest valid size
    factor. Replacement values are computed before any replacement is made.

    Parameters
    ----------
    size_factors : np.ndarray
        Size factors, modified in place
    diagnostics : SanitizeDiagnostics
        Diagnostics from a previous scan of ``size_factors``
        (e.g. from centering with ``ignore_invalid=True``)
    config : SanitizeConfig, optional
        Per-category handler actions

    Returns
    -------
    int
        Number of values replaced

    Raises
    ------
    InvalidSizeFactorError
        If a category with a non-zero count has the ERROR action
    """
    config = config or SanitizeConfig()
    if not isinstance(size_factors, np.ndarray):
        raise TypeError("size_factors must be a numpy array to be sanitized in place")

    handle_zero = diagnostics.has_zero and config.handle_zero is not HandlerAction.IGNORE
    handle_negative = (
        diagnostics.has_negative and config.handle_negative is not HandlerAction.IGNORE
    )
    handle_nan = diagnostics.has_nan and config.handle_nan is not HandlerAction.IGNORE
    handle_infinite = (
        diagnostics.has_infinite and config.handle_infinite is not HandlerAction.IGNORE
    )

    if handle_zero:
        _check_error(config.handle_zero, diagnostics.n_zero, "of zero")
    if handle_negative:
        _check_error(config.handle_negative, diagnostics.n_negative, "that are negative")
    if handle_nan:
        _check_error(config.handle_nan, diagnostics.n_nan, "that are NaN")
    if handle_infinite:
        _check_error(config.handle_infinite, diagnostics.n_infinite, "that are infinite")

    masks = []
    if handle_zero or handle_negative:
        smallest = find_smallest_valid_factor(size_factors)
        if handle_zero:
            masks.append((size_factors == 0, smallest))
        if handle_negative:
            masks.append((size_factors < 0, smallest))
    if handle_nan:
        masks.append((np.isnan(size_factors), 1.0))
    if handle_infinite:
        masks.append((np.isposinf(size_factors), find_largest_valid_factor(size_factors)))

    replaced = 0
    for mask, replacement in masks:
        size_factors[mask] = replacement
        replaced += int(np.count_nonzero(mask))

    if replaced:
        logger.info("Replaced %d invalid size factor(s)", replaced)
    return replaced
