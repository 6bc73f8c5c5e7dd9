from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import numpy as np


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class ConfigurationSnapshot:
    """Immutable atomic configuration consumed by :class:`GeometryKernel`.

    Parameters
    ----------
    positions : (n_atoms, 3) array-like of float
        Cartesian coordinates. Periodic copies are already placed at their
        image positions.
    atomic_numbers : (n_atoms,) array-like of int
        Atomic number of each atom, parallel to ``positions``.
    element_index : mapping of int to int
        Atomic number to feature index. Must be injective.
    cell_limit : int
        Atoms ``0 .. cell_limit - 1`` form the original simulation cell; the
        remaining ones are periodic copies.

    Notes
    -----
    No two atoms may share a position. This is not checked here because it
    costs a full pairwise pass; the kernel operations that would divide by a
    zero length raise ``ValueError`` instead.
    """

    positions: np.ndarray
    atomic_numbers: np.ndarray
    element_index: Mapping[int, int] = field(default_factory=dict)
    cell_limit: int = 0

    def __post_init__(self) -> None:
        positions = np.array(self.positions, dtype=float, copy=True)
        if positions.size == 0:
            positions = positions.reshape(0, 3)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(f"positions must have shape (n_atoms, 3), but got {positions.shape}.")
        if not np.all(np.isfinite(positions)):
            raise ValueError("positions must be finite.")

        atomic_numbers = np.array(self.atomic_numbers, copy=True)
        if atomic_numbers.size == 0:
            atomic_numbers = atomic_numbers.astype(int).reshape(0)
        if atomic_numbers.ndim != 1:
            raise ValueError(f"atomic_numbers must be one-dimensional, but got shape {atomic_numbers.shape}.")
        if atomic_numbers.dtype.kind not in "iu":
            raise ValueError(f"atomic_numbers must be integers, but got dtype {atomic_numbers.dtype}.")
        if atomic_numbers.shape[0] != positions.shape[0]:
            raise ValueError(
                f"positions and atomic_numbers must describe the same atoms "
                f"({positions.shape[0]} positions vs {atomic_numbers.shape[0]} atomic numbers)."
            )

        if isinstance(self.cell_limit, bool) or not isinstance(self.cell_limit, (int, np.integer)):
            raise ValueError(f"cell_limit must be an integer, but got {self.cell_limit!r}.")
        cell_limit = int(self.cell_limit)
        if not 0 <= cell_limit <= positions.shape[0]:
            raise ValueError(f"cell_limit must lie in [0, {positions.shape[0]}], but got {cell_limit}.")

        element_index = {int(z): int(idx) for z, idx in dict(self.element_index).items()}
        if len(set(element_index.values())) != len(element_index):
            raise ValueError("element_index must map each atomic number to a distinct feature index.")

        object.__setattr__(self, "positions", _frozen(positions))
        object.__setattr__(self, "atomic_numbers", _frozen(atomic_numbers.astype(np.int64)))
        object.__setattr__(self, "element_index", MappingProxyType(element_index))
        object.__setattr__(self, "cell_limit", cell_limit)

    @property
    def n_atoms(self) -> int:
        return int(self.positions.shape[0])

    @property
    def n_cell_atoms(self) -> int:
        return self.cell_limit

    def is_cell_atom(self, index: int) -> bool:
        return 0 <= index < self.cell_limit

    def feature_index(self, atomic_number: int) -> int:
        """Look up the feature-space index of an atomic number."""
        try:
            return self.element_index[int(atomic_number)]
        except KeyError as exc:
            raise ValueError(f"Atomic number {atomic_number} has no entry in element_index.") from exc
