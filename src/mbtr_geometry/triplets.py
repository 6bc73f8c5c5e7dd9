"""Angle descriptors over atom triplets."""

from __future__ import annotations

from typing import Dict

import numpy as np
from einops import rearrange
from tqdm import tqdm

from .cell import cell_anchor_mask
from .keys import TripletKey


def _canonical_count(n_atoms: int) -> int:
    # choose the vertex, then an unordered pair of arms among the rest
    return n_atoms * (n_atoms - 1) * (n_atoms - 2) // 2 if n_atoms >= 3 else 0


def triplet_count(n_atoms: int, cell_limit: int) -> int:
    """Number of canonical triplets with at least one atom in the original cell."""
    return _canonical_count(n_atoms) - _canonical_count(n_atoms - cell_limit)


def angle_cosines(
    positions: np.ndarray,
    cell_limit: int,
    *,
    dtype=np.float64,
    show_progress: bool = False,
) -> Dict[TripletKey, float]:
    """Cosine of every angle ``i-j-k`` with vertex ``j``.

    Only one of ``(i, j, k)`` and ``(k, j, i)`` is produced, the one with
    ``i < k``. A triplet is kept when at least one of its atoms belongs to
    the original cell. Arm vectors are taken straight from ``positions``; the
    displacement tensor is not needed.

    The enumeration runs one first arm ``i`` at a time, so memory stays
    quadratic in the number of atoms.

    Parameters
    ----------
    positions : (n, 3) ndarray
        Cartesian positions, periodic copies included.
    cell_limit : int
        Number of atoms in the original cell.
    dtype : numpy dtype, optional
        Floating point type used for the arithmetic.
    show_progress : bool, optional
        Display a tqdm bar over the outer loop.

    Returns
    -------
    dict of TripletKey to float
        Keys are inserted in lexicographic ``(i, j, k)`` order. Values are
        clipped to ``[-1, 1]``.

    Raises
    ------
    ValueError
        If an arm has zero length, i.e. two atoms of a triplet coincide.
    """
    positions = np.asarray(positions, dtype=dtype)
    n_atoms = positions.shape[0]
    indices = np.arange(n_atoms)
    cosines: Dict[TripletKey, float] = {}

    for i in tqdm(range(n_atoms - 1), leave=False, desc="angle cosines", disable=not show_progress):
        js = indices[indices != i]
        ks = indices[i + 1:]

        j_grid = rearrange(js, "j -> j 1")
        k_grid = rearrange(ks, "k -> 1 k")
        valid = (j_grid != k_grid) & cell_anchor_mask(cell_limit, i, j_grid, k_grid)
        j_sel, k_sel = np.nonzero(valid)
        if j_sel.size == 0:
            continue

        centers = positions[js]
        arm_i = positions[i] - centers
        arm_k = rearrange(positions[ks], "k d -> 1 k d") - rearrange(centers, "j d -> j 1 d")

        arm_i = arm_i[j_sel]
        arm_k = arm_k[j_sel, k_sel]
        norms = np.linalg.norm(arm_i, axis=-1) * np.linalg.norm(arm_k, axis=-1)
        if np.any(norms == 0.0):
            bad = int(np.flatnonzero(norms == 0.0)[0])
            raise ValueError(
                f"Triplet ({i}, {js[j_sel[bad]]}, {ks[k_sel[bad]]}) has a zero-length arm; "
                "atoms must not share a position."
            )
        values = np.clip(np.einsum("nd,nd->n", arm_i, arm_k) / norms, -1.0, 1.0)

        for j, k, value in zip(js[j_sel].tolist(), ks[k_sel].tolist(), values.tolist()):
            cosines[TripletKey(i, j, k)] = value

    return cosines
