"""Centering of size factors prior to scaling normalization.

Centering scales all size factors so that their mean is equal to 1. The
aim is to ensure that normalized expression values are on roughly the same
scale as the original counts, which simplifies interpretation and gives any
pseudo-count added before log-transformation a predictable shrinkage effect.

For datasets with multiple blocks, ``compute_blocked`` computes one mean per
block and combines them according to ``CenteringConfig.block_mode``.

All arithmetic is performed in the floating-point type of the input array;
float32 size factors are summed and divided in float32.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from ...io.logging import log_yaml
from ...utils.stats import factorize_blocks, total_groups, validate_blocks
from ..sanitize.diagnostics import SanitizeDiagnostics, flag_invalid
from ..sanitize.engine import sanitize
from .config import BlockMode, CenteringConfig, SizeFactorConfig

logger = logging.getLogger(__name__)


def _as_size_factors(size_factors, in_place: bool = False) -> np.ndarray:
    if in_place:
        if not isinstance(size_factors, np.ndarray):
            raise TypeError("size_factors must be a numpy array to be centered in place")
        values = size_factors
    else:
        values = np.asarray(size_factors)

    if values.dtype.kind != "f":
        raise TypeError(f"size_factors must be floating-point, got dtype {values.dtype}")
    if values.ndim != 1:
        raise ValueError(f"size_factors must be 1-D, got shape {values.shape}")
    return values


def _valid_subset(
    values: np.ndarray,
    diagnostics: Optional[SanitizeDiagnostics],
    config: CenteringConfig,
) -> Optional[np.ndarray]:
    """Mask of values that contribute to the mean, or None if all do."""
    if not config.ignore_invalid:
        return None
    diag = diagnostics if diagnostics is not None else SanitizeDiagnostics()
    return ~flag_invalid(values, diag)


def _group_sums(values: np.ndarray, blocks: np.ndarray, ngroups: int) -> np.ndarray:
    """Sum of values per block, added one at a time in the input dtype."""
    sums = np.zeros(ngroups, dtype=values.dtype)
    np.add.at(sums, blocks, values)
    return sums


def compute_mean(
    size_factors: np.ndarray,
    diagnostics: Optional[SanitizeDiagnostics] = None,
    config: Optional[CenteringConfig] = None,
):
    """Compute the mean size factor.

    Parameters
    ----------
    size_factors : np.ndarray
        Size factor for each cell
    diagnostics : SanitizeDiagnostics, optional
        Filled with counts of invalid size factors when
        ``config.ignore_invalid`` is True; otherwise untouched
    config : CenteringConfig, optional
        Centering options

    Returns
    -------
    np.floating
        Mean of the (valid) size factors, in the dtype of ``size_factors``.
        Zero if there are no (valid) size factors.
    """
    config = config or CenteringConfig()
    values = _as_size_factors(size_factors)
    dtype = values.dtype

    keep = _valid_subset(values, diagnostics, config)
    if keep is not None:
        values = values[keep]

    denom = values.size
    if denom:
        total = _group_sums(values, np.zeros(denom, dtype=np.intp), 1)
        return total[0] / dtype.type(denom)
    return dtype.type(0)


def compute(
    size_factors: np.ndarray,
    diagnostics: Optional[SanitizeDiagnostics] = None,
    config: Optional[CenteringConfig] = None,
):
    """Center size factors in place so that their mean is 1.

    Parameters
    ----------
    size_factors : np.ndarray
        Size factor for each cell. On output, contains the centered size
        factors, unless the mean was zero, in which case it is untouched.
    diagnostics : SanitizeDiagnostics, optional
        See :func:`compute_mean`
    config : CenteringConfig, optional
        Centering options

    Returns
    -------
    np.floating
        The mean size factor before centering.
    """
    values = _as_size_factors(size_factors, in_place=True)
    mean = compute_mean(values, diagnostics, config)
    if mean != 0:
        values /= mean
    else:
        logger.warning("Mean size factor is zero; size factors left uncentered")
    return mean


def _blocked_mean(
    values: np.ndarray,
    blocks: np.ndarray,
    diagnostics: Optional[SanitizeDiagnostics],
    config: CenteringConfig,
) -> np.ndarray:
    dtype = values.dtype
    ngroups = total_groups(blocks)

    keep = _valid_subset(values, diagnostics, config)
    if keep is not None:
        values = values[keep]
        blocks = blocks[keep]

    group_mean = _group_sums(values, blocks, ngroups)
    group_num = np.bincount(blocks, minlength=ngroups)

    filled = group_num > 0
    group_mean[filled] /= group_num[filled].astype(dtype)
    return group_mean


def compute_blocked_mean(
    size_factors: np.ndarray,
    blocks,
    diagnostics: Optional[SanitizeDiagnostics] = None,
    config: Optional[CenteringConfig] = None,
) -> np.ndarray:
    """Compute the mean size factor for each block.

    Parameters
    ----------
    size_factors : np.ndarray
        Size factor for each cell
    blocks : array-like of int
        Block assignment for each cell, in ``[0, G)`` where G is the total
        number of blocks
    diagnostics : SanitizeDiagnostics, optional
        See :func:`compute_mean`
    config : CenteringConfig, optional
        Centering options

    Returns
    -------
    np.ndarray
        Array of length G with the mean size factor of each block. Blocks
        without any (valid) size factors have a mean of zero.
    """
    config = config or CenteringConfig()
    values = _as_size_factors(size_factors)
    codes = validate_blocks(blocks, values.shape[0])
    return _blocked_mean(values, codes, diagnostics, config)


def lowest_block_mean(group_mean: np.ndarray):
    """Smallest positive block mean, or None if no block mean is positive.

    Blocks with a mean of zero are either empty or full of invalid size
    factors, so they are skipped rather than treated as the minimum.
    """
    group_mean = np.asarray(group_mean)
    positive = group_mean[group_mean > 0]
    if positive.size == 0:
        return None
    return positive.min()


def compute_blocked(
    size_factors: np.ndarray,
    blocks,
    diagnostics: Optional[SanitizeDiagnostics] = None,
    config: Optional[CenteringConfig] = None,
) -> np.ndarray:
    """Center size factors in place, accounting for blocks.

    Parameters
    ----------
    size_factors : np.ndarray
        Size factor for each cell. On output, contains size factors
        centered according to ``config.block_mode``.
    blocks : array-like of int
        Block assignment for each cell, in ``[0, G)``
    diagnostics : SanitizeDiagnostics, optional
        See :func:`compute_mean`
    config : CenteringConfig, optional
        Centering options

    Returns
    -------
    np.ndarray
        Array of length G with the mean size factor of each block before
        centering.
    """
    config = config or CenteringConfig()
    values = _as_size_factors(size_factors, in_place=True)
    codes = validate_blocks(blocks, values.shape[0])
    group_mean = _blocked_mean(values, codes, diagnostics, config)

    if config.block_mode is BlockMode.PER_BLOCK:
        divisors = group_mean[codes]
        np.divide(values, divisors, out=values, where=divisors != 0)

    elif config.block_mode is BlockMode.LOWEST:
        lowest = lowest_block_mean(group_mean)
        if lowest is not None:
            logger.debug("Scaling all blocks by lowest block mean %g", lowest)
            values /= lowest
        else:
            logger.warning("No block has a positive mean; size factors left uncentered")

    return group_mean


@dataclass
class CenteringResult:
    """Result from centering one set of size factors.

    Attributes
    ----------
    block_mode : BlockMode
        Block mode in effect (only relevant for blocked centering)
    mean : float, optional
        Mean size factor, for unblocked centering
    group_means : np.ndarray, optional
        Mean size factor per block, for blocked centering
    block_levels : List
        Block label for each entry of ``group_means``
    divisor : float, optional
        Single value all size factors were divided by (unblocked and
        LOWEST modes), or None if no division took place
    diagnostics : SanitizeDiagnostics
        Counts of invalid size factors found by this call
    n_sanitized : int
        Number of invalid size factors replaced after centering
    """

    block_mode: BlockMode = BlockMode.LOWEST
    mean: Optional[float] = None
    group_means: Optional[np.ndarray] = None
    block_levels: List[Any] = field(default_factory=list)
    divisor: Optional[float] = None
    diagnostics: SanitizeDiagnostics = field(default_factory=SanitizeDiagnostics)
    n_sanitized: int = 0

    @property
    def blocked(self) -> bool:
        return self.group_means is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        record: Dict[str, Any] = {"blocked": self.blocked}
        if self.blocked:
            record["block_mode"] = self.block_mode.value
            record["group_means"] = {
                str(level): float(m) for level, m in zip(self.block_levels, self.group_means)
            }
        else:
            record["mean"] = self.mean
        record["divisor"] = self.divisor
        record["diagnostics"] = self.diagnostics.to_dict()
        record["n_sanitized"] = self.n_sanitized
        return record


class SizeFactorCenterer:
    """Center (and optionally sanitize) size factors.

    Parameters
    ----------
    config : SizeFactorConfig
        Centering and sanitization configuration

    Example
    -------
    >>> from sizefactor_centering.core.centering import SizeFactorCenterer, SizeFactorConfig
    >>> centerer = SizeFactorCenterer(SizeFactorConfig())
    >>> result = centerer.center(size_factors, blocks=adata.obs["sample_id"])
    >>> result.group_means
    """

    def __init__(self, config: Optional[SizeFactorConfig] = None):
        self.config = config or SizeFactorConfig()

    def _resolve_blocks(self, blocks) -> Tuple[np.ndarray, List[Any]]:
        """Integer block codes and the label of each code."""
        if not isinstance(blocks, pd.Categorical) and not isinstance(
            getattr(blocks, "dtype", None), pd.CategoricalDtype
        ):
            arr = np.asarray(blocks)
            if arr.dtype.kind in "iu":
                return arr, list(range(total_groups(arr)))
        return factorize_blocks(blocks)

    def center(
        self,
        size_factors: np.ndarray,
        blocks=None,
        diagnostics: Optional[SanitizeDiagnostics] = None,
        log_path: Optional[Union[str, Path]] = None,
    ) -> CenteringResult:
        """Center size factors in place.

        Parameters
        ----------
        size_factors : np.ndarray
            Size factor for each cell, modified in place
        blocks : array-like, optional
            Block label for each cell. Integer labels are used directly as
            block indices; other labels (strings, categoricals) are
            factorized first.
        diagnostics : SanitizeDiagnostics, optional
            Caller-owned accumulator. The counts for this call are added to
            it; warnings and sanitization only use this call's counts.
        log_path : str or Path, optional
            If given, a YAML summary of the result is appended to this file

        Returns
        -------
        CenteringResult
            Means, divisor and diagnostics
        """
        centering = self.config.centering
        local = SanitizeDiagnostics()
        result = CenteringResult(block_mode=centering.block_mode, diagnostics=local)

        if blocks is None:
            mean = compute(size_factors, local, centering)
            result.mean = float(mean)
            result.divisor = float(mean) if mean != 0 else None
            logger.debug("Centered %d size factors by mean %g", len(size_factors), mean)
        else:
            codes, levels = self._resolve_blocks(blocks)
            group_means = compute_blocked(size_factors, codes, local, centering)
            result.group_means = group_means
            result.block_levels = levels
            if centering.block_mode is BlockMode.LOWEST:
                lowest = lowest_block_mean(group_means)
                result.divisor = None if lowest is None else float(lowest)
            logger.debug(
                "Centered %d size factors across %d blocks (%s)",
                len(size_factors),
                len(group_means),
                centering.block_mode.value,
            )

        if self.config.sanitize.enabled:
            result.n_sanitized = self._sanitize(size_factors, local)

        if local.has_invalid:
            logger.warning(
                "Found %d invalid size factor(s): %s",
                local.n_invalid,
                local.to_dict(),
            )
        if diagnostics is not None:
            diagnostics.merge(local)

        if log_path is not None:
            log_yaml(log_path, result.to_dict())

        return result

    def _sanitize(self, size_factors: np.ndarray, diagnostics: SanitizeDiagnostics) -> int:
        if not self.config.centering.ignore_invalid:
            # Diagnostics are only filled when invalid values are ignored
            flag_invalid(size_factors, diagnostics)
        if not diagnostics.has_invalid:
            return 0
        return sanitize(size_factors, diagnostics, self.config.sanitize)
