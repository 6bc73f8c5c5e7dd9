import numpy as np
import pytest

from mbtr_geometry import GeometryKernel


@pytest.fixture
def right_angle_kernel():
    positions = [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]
    return GeometryKernel.from_arrays(positions, [1, 1, 1], {1: 0}, cell_limit=3)


@pytest.fixture
def periodic_kernel():
    # two cell atoms on a cubic lattice (a = 3), images of both shifted by +a along x
    lattice = np.array([3.0, 0.0, 0.0])
    cell = np.array([[0.0, 0.0, 0.0], [1.2, 0.7, 0.3]])
    positions = np.vstack([cell, cell + lattice, cell - lattice])
    atomic_numbers = [8, 1, 8, 1, 8, 1]
    return GeometryKernel.from_arrays(positions, atomic_numbers, {1: 0, 8: 1}, cell_limit=2)


@pytest.fixture
def random_kernel():
    rng = np.random.default_rng(7)
    positions = rng.uniform(-4.0, 4.0, size=(9, 3))
    atomic_numbers = rng.choice([1, 6, 8], size=9)
    return GeometryKernel.from_arrays(positions, atomic_numbers, {1: 0, 6: 1, 8: 2}, cell_limit=4)
