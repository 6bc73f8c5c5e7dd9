from __future__ import annotations

import threading
from typing import Optional

import numpy as np

from .backends import compute_displacements, warn_if_oversized
from .config import KernelConfig


class DisplacementCache:
    """Lazily computed ``(n_atoms, n_atoms, 3)`` tensor of pairwise displacement vectors.

    Entry ``(i, j)`` is ``positions[j] - positions[i]``. The tensor is built on
    the first request and reused afterwards. The first build is serialised by
    a lock so that concurrent callers observe a single initialisation.
    """

    def __init__(self, positions: np.ndarray, config: Optional[KernelConfig] = None) -> None:
        self._positions = positions
        self._config = config or KernelConfig()
        self._tensor: Optional[np.ndarray] = None
        self._initialized = False
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _build(self) -> np.ndarray:
        n_atoms = self._positions.shape[0]
        if n_atoms == 0:
            return np.zeros((0, 0, 3), dtype=self._config.dtype)
        warn_if_oversized(n_atoms, self._config.dtype, self._config.memory_warning_bytes)
        tensor = compute_displacements(
            self._positions,
            backend=self._config.backend,
            dtype=self._config.dtype,
            device=self._config.device,
        )
        tensor = np.ascontiguousarray(tensor, dtype=self._config.dtype)
        tensor.setflags(write=False)
        return tensor

    def tensor(self) -> np.ndarray:
        """Return the memoised tensor itself (read-only, no copy)."""
        if not self._initialized:
            with self._lock:
                if not self._initialized:
                    self._tensor = self._build()
                    self._initialized = True
        return self._tensor

    def displacements(self) -> np.ndarray:
        """Return a writable copy of the displacement tensor."""
        return self.tensor().copy()
