from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .bindings import check_separator

_BACKENDS = {"numpy", "torch"}


@dataclass
class KernelConfig:
    """Configuration parameters for :class:`GeometryKernel`.

    Only tunables that do not change the geometry live here; the atomic
    configuration itself is carried by :class:`ConfigurationSnapshot`.
    """

    dtype: np.dtype = np.float64
    backend: str = "numpy"
    device: str = "cpu"
    show_progress: bool = False
    memory_warning_bytes: Optional[int] = 1 << 30
    key_separator: str = ","

    def __post_init__(self) -> None:
        if self.backend not in _BACKENDS:
            raise ValueError(
                "Unsupported backend '{}'. Choose from 'numpy' or 'torch'.".format(self.backend)
            )
        check_separator(self.key_separator)
        self.dtype = np.dtype(self.dtype)
        if self.dtype.kind != "f":
            raise ValueError(f"dtype must be a floating point type, got {self.dtype}.")
