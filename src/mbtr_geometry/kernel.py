from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Union

import numpy as np

from . import pairwise, triplets
from .config import KernelConfig
from .displacement import DisplacementCache
from .keys import TripletKey
from .snapshot import ConfigurationSnapshot

ArrayLike = Union[Sequence, np.ndarray]


class GeometryKernel:
    """
    Geometric building blocks of a many-body tensor representation.

    Pair quantities are derived from a memoised displacement tensor; angle
    cosines are computed directly from positions. Every method returns a new
    container owned by the caller.

    Parameters
    ----------
    snapshot : ConfigurationSnapshot
        Atomic configuration, periodic copies already appended after the
        ``cell_limit`` atoms of the original cell.
    config : KernelConfig, optional
        Numerical and diagnostic settings. Defaults to ``KernelConfig()``.
    """

    def __init__(self, snapshot: ConfigurationSnapshot, config: Optional[KernelConfig] = None) -> None:
        if not isinstance(snapshot, ConfigurationSnapshot):
            raise ValueError(f"snapshot must be a ConfigurationSnapshot, got {type(snapshot).__name__}.")
        self.snapshot = snapshot
        self.config = config or KernelConfig()
        self._cache = DisplacementCache(snapshot.positions, self.config)

    @classmethod
    def from_arrays(
        cls,
        positions: ArrayLike,
        atomic_numbers: ArrayLike,
        element_index: Mapping[int, int],
        cell_limit: int,
        config: Optional[KernelConfig] = None,
    ) -> "GeometryKernel":
        snapshot = ConfigurationSnapshot(
            positions=positions,
            atomic_numbers=atomic_numbers,
            element_index=element_index,
            cell_limit=cell_limit,
        )
        return cls(snapshot, config)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n_atoms={self.snapshot.n_atoms}, "
            f"cell_limit={self.snapshot.cell_limit}, backend={self.config.backend!r})"
        )

    @property
    def displacements_initialized(self) -> bool:
        return self._cache.initialized

    def displacements(self) -> np.ndarray:
        """``(n, n, 3)`` array with ``d[i, j] = positions[j] - positions[i]``."""
        return self._cache.displacements()

    def distance_matrix(self) -> np.ndarray:
        return pairwise.distance_matrix(self._cache.tensor())

    def inverse_distance_matrix(self) -> np.ndarray:
        """Reciprocal distances with a zero diagonal."""
        return pairwise.inverse_distance_matrix(self.distance_matrix())

    def inverse_distance_by_element_pair(self) -> Dict[pairwise.ElementPair, np.ndarray]:
        """Inverse distances grouped by ``(min(Z_i, Z_j), max(Z_i, Z_j))``.

        See :func:`mbtr_geometry.pairwise.inverse_distance_by_element_pair`.
        """
        return pairwise.inverse_distance_by_element_pair(
            self.inverse_distance_matrix(),
            self.snapshot.atomic_numbers,
            self.snapshot.cell_limit,
        )

    def element_pairs(self) -> List[pairwise.ElementPair]:
        return pairwise.element_pairs(self.snapshot.atomic_numbers, self.snapshot.cell_limit)

    def angle_cosines(self) -> Dict[TripletKey, float]:
        """Cosines of the angles ``i-j-k`` keyed by canonical :class:`TripletKey`.

        See :func:`mbtr_geometry.triplets.angle_cosines`.
        """
        return triplets.angle_cosines(
            self.snapshot.positions,
            self.snapshot.cell_limit,
            dtype=self.config.dtype,
            show_progress=self.config.show_progress,
        )

    def triplet_count(self) -> int:
        return triplets.triplet_count(self.snapshot.n_atoms, self.snapshot.cell_limit)
