"""Pair descriptors derived from the displacement tensor."""

from __future__ import annotations

from typing import Dict, List, Tuple

import numpy as np

from .cell import cell_anchor_mask

ElementPair = Tuple[int, int]


def distance_matrix(displacements: np.ndarray) -> np.ndarray:
    """Euclidean norm of every displacement vector.

    Parameters
    ----------
    displacements : (n, n, 3) ndarray
        Output of :meth:`DisplacementCache.tensor`.

    Returns
    -------
    (n, n) ndarray
        Symmetric distance matrix with an exactly zero diagonal.
    """
    return np.sqrt(np.einsum("ijk,ijk->ij", displacements, displacements))


def inverse_distance_matrix(distances: np.ndarray) -> np.ndarray:
    """Elementwise reciprocal of ``distances`` with the diagonal fixed to zero.

    Raises
    ------
    ValueError
        If two distinct atoms are at zero distance.
    """
    n_atoms = distances.shape[0]
    off_diagonal = ~np.eye(n_atoms, dtype=bool)
    coincident = off_diagonal & (distances == 0.0)
    if np.any(coincident):
        i, j = np.argwhere(coincident)[0]
        raise ValueError(f"Atoms {i} and {j} share a position; inverse distance is undefined.")

    inverse = np.zeros_like(distances)
    np.divide(1.0, distances, out=inverse, where=off_diagonal)
    return inverse


def anchored_pairs(n_atoms: int, cell_limit: int) -> Tuple[np.ndarray, np.ndarray]:
    """Row-major ``(i, j)`` index arrays with ``i < j`` and at least one cell atom."""
    rows, cols = np.triu_indices(n_atoms, k=1)
    keep = cell_anchor_mask(cell_limit, rows, cols)
    return rows[keep], cols[keep]


def _element_pair_columns(atomic_numbers: np.ndarray, rows: np.ndarray, cols: np.ndarray):
    z_i = atomic_numbers[rows]
    z_j = atomic_numbers[cols]
    return np.minimum(z_i, z_j), np.maximum(z_i, z_j)


def element_pairs(atomic_numbers: np.ndarray, cell_limit: int) -> List[ElementPair]:
    """Sorted element pairs ``(Z_low, Z_high)`` that occur among anchored atom pairs."""
    rows, cols = anchored_pairs(atomic_numbers.shape[0], cell_limit)
    z_low, z_high = _element_pair_columns(atomic_numbers, rows, cols)
    return sorted(set(zip(z_low.tolist(), z_high.tolist())))


def inverse_distance_by_element_pair(
    inverse_distances: np.ndarray,
    atomic_numbers: np.ndarray,
    cell_limit: int,
) -> Dict[ElementPair, np.ndarray]:
    """Group inverse distances by the unordered pair of atomic numbers involved.

    Every unordered atom pair ``{i, j}`` contributes once, and only when at
    least one of the two atoms lies in the original cell. Pairs between two
    periodic copies repeat an interaction of the cell and are skipped.

    Returns
    -------
    dict of (int, int) to ndarray
        Keys are ``(min(Z_i, Z_j), max(Z_i, Z_j))`` in sorted order; values
        list the inverse distances in row-major ``(i, j)`` order.
    """
    rows, cols = anchored_pairs(atomic_numbers.shape[0], cell_limit)
    values = inverse_distances[rows, cols]
    z_low, z_high = _element_pair_columns(atomic_numbers, rows, cols)

    grouped: Dict[ElementPair, np.ndarray] = {}
    for pair in sorted(set(zip(z_low.tolist(), z_high.tolist()))):
        selected = (z_low == pair[0]) & (z_high == pair[1])
        grouped[pair] = values[selected]
    return grouped
