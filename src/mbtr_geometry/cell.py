"""Filter separating interactions anchored in the original cell from image-only ones."""

from __future__ import annotations

from functools import reduce

import numpy as np


def cell_anchor_mask(cell_limit: int, *indices):
    """Return where at least one participating atom belongs to the original cell.

    Atoms with index below ``cell_limit`` are the real atoms of the simulation
    cell; the rest are periodic copies. A pair or triplet made only of copies
    is a translated duplicate of an interaction that is already counted, so it
    is dropped.

    Parameters
    ----------
    cell_limit : int
        Number of atoms in the original cell.
    *indices : int or array-like of int
        Atom indices of the participants. Arrays are broadcast against each
        other.

    Returns
    -------
    bool or ndarray of bool
        ``min(indices) < cell_limit``, elementwise for array input.
    """
    if not indices:
        raise ValueError("cell_anchor_mask needs at least one index.")
    smallest = reduce(np.minimum, (np.asarray(idx) for idx in indices))
    mask = smallest < cell_limit
    if np.ndim(mask) == 0:
        return bool(mask)
    return mask
