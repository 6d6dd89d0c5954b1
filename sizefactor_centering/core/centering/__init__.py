"""Centering of size factors prior to scaling normalization.

Example Usage
-------------
>>> from sizefactor_centering.core.centering import (
...     compute, compute_blocked, CenteringConfig, BlockMode,
... )
>>> mean = compute(size_factors)
>>> config = CenteringConfig(block_mode=BlockMode.PER_BLOCK)
>>> group_means = compute_blocked(size_factors, blocks, config=config)
"""

# Configuration classes
from .config import (
    BlockMode,
    CenteringConfig,
    SizeFactorConfig,
    parse_block_mode,
)

from .engine import (
    compute_mean,
    compute,
    compute_blocked_mean,
    compute_blocked,
    lowest_block_mean,
    CenteringResult,
    SizeFactorCenterer,
)

__all__ = [
    # Config
    "BlockMode",
    "CenteringConfig",
    "SizeFactorConfig",
    "parse_block_mode",
    # Functions
    "compute_mean",
    "compute",
    "compute_blocked_mean",
    "compute_blocked",
    "lowest_block_mean",
    # Engine
    "CenteringResult",
    "SizeFactorCenterer",
]
