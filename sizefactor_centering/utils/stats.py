"""Block label utilities for sizefactor-centering.

Provides helpers to derive the number of blocks from a label array,
validate integer block assignments and factorize arbitrary labels into
dense integer codes.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple, Union

import numpy as np
import pandas as pd

ArrayLike = Union[Iterable, np.ndarray, pd.Series]


def total_groups(blocks: ArrayLike) -> int:
    """Return the number of blocks implied by a label array.

    Parameters
    ----------
    blocks : ArrayLike
        Integer block assignments.

    Returns
    -------
    int
        One past the largest label, or 0 if there are no labels.
    """
    arr = np.asarray(blocks)
    if arr.size == 0:
        return 0
    return int(arr.max()) + 1


def validate_blocks(blocks: ArrayLike, n: int) -> np.ndarray:
    """Check integer block assignments against the number of cells.

    Parameters
    ----------
    blocks : ArrayLike
        Integer block assignments, one per cell.
    n : int
        Number of cells.

    Returns
    -------
    np.ndarray
        Block assignments as a 1-D integer array.

    Raises
    ------
    ValueError
        If the labels are not integers, not 1-D, have the wrong length
        or contain negative values.
    """
    arr = np.asarray(blocks)
    if arr.size == 0 and arr.dtype.kind not in "iu":
        arr = arr.astype(np.intp)
    if arr.dtype.kind not in "iu":
        raise ValueError(f"Block assignments must be integers, got dtype {arr.dtype}")
    if arr.ndim != 1:
        raise ValueError(f"Block assignments must be 1-D, got shape {arr.shape}")
    if arr.shape[0] != n:
        raise ValueError(
            f"Length of block assignments ({arr.shape[0]}) does not match "
            f"number of size factors ({n})"
        )
    if arr.size and arr.min() < 0:
        raise ValueError("Block assignments must be non-negative")
    return arr


def factorize_blocks(labels: ArrayLike) -> Tuple[np.ndarray, List]:
    """Convert arbitrary block labels into dense integer codes.

    Categorical labels keep their category order (including unused
    categories, which become empty blocks). Other labels are sorted.

    Parameters
    ----------
    labels : ArrayLike
        Block label for each cell (strings, integers, categoricals).

    Returns
    -------
    Tuple[np.ndarray, List]
        Integer code per cell and the label for each code.

    Raises
    ------
    ValueError
        If any label is missing.
    """
    if isinstance(labels, pd.Series):
        labels = labels.array
    if isinstance(labels, pd.Categorical) or isinstance(
        getattr(labels, "dtype", None), pd.CategoricalDtype
    ):
        cat = pd.Categorical(labels)
        codes = np.asarray(cat.codes, dtype=np.intp)
        levels = list(cat.categories)
    else:
        codes, uniques = pd.factorize(pd.Series(labels), sort=True)
        codes = np.asarray(codes, dtype=np.intp)
        levels = list(uniques)

    if codes.size and codes.min() < 0:
        raise ValueError("Block labels must not contain missing values")
    return codes, levels
