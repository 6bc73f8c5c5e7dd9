"""Evaluation of the pairwise displacement tensor on the available array backends."""

from __future__ import annotations

import warnings

import numpy as np
from einops import rearrange


def displacement_nbytes(n_atoms: int, dtype=np.float64) -> int:
    """Size in bytes of an ``(n_atoms, n_atoms, 3)`` tensor of ``dtype``."""
    return int(n_atoms) * int(n_atoms) * 3 * np.dtype(dtype).itemsize


def warn_if_oversized(n_atoms: int, dtype, limit_bytes) -> None:
    if limit_bytes is None:
        return
    nbytes = displacement_nbytes(n_atoms, dtype)
    if nbytes > limit_bytes:
        warnings.warn(
            f"Displacement tensor for {n_atoms} atoms needs {nbytes / 2**20:.1f} MiB "
            f"(warning threshold {limit_bytes / 2**20:.1f} MiB). Consider fewer periodic copies.",
            RuntimeWarning,
            stacklevel=3,
        )


def numpy_displacements(positions: np.ndarray, dtype=np.float64) -> np.ndarray:
    """Return ``d[i, j] = positions[j] - positions[i]`` as an ``(n, n, 3)`` array."""

    positions = np.asarray(positions, dtype=dtype)
    return rearrange(positions, "j d -> 1 j d") - rearrange(positions, "i d -> i 1 d")


def _require_torch():
    try:
        import torch  # type: ignore
    except ImportError as exc:  # pragma: no cover - depends on optional deps
        raise ModuleNotFoundError(
            "The 'torch' backend requires PyTorch. Install optional extras "
            "(e.g. `pip install mbtr-geometry[torch]`) to enable this feature."
        ) from exc
    return torch


def torch_displacements(positions: np.ndarray, dtype=np.float64, device: str = "cpu") -> np.ndarray:
    """Torch counterpart of :func:`numpy_displacements`; the result is copied back to numpy."""

    torch = _require_torch()
    with torch.no_grad():
        pos = torch.from_numpy(np.asarray(positions, dtype=dtype).copy()).to(device=device)
        diff = rearrange(pos, "j d -> 1 j d") - rearrange(pos, "i d -> i 1 d")
        return diff.cpu().numpy()


def compute_displacements(positions: np.ndarray, *, backend: str = "numpy", dtype=np.float64,
                          device: str = "cpu") -> np.ndarray:
    if backend == "numpy":
        return numpy_displacements(positions, dtype=dtype)
    if backend == "torch":
        return torch_displacements(positions, dtype=dtype, device=device)
    raise ValueError("Unsupported backend '{}'. Choose from 'numpy' or 'torch'.".format(backend))
