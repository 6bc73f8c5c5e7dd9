import threading
import warnings

import numpy as np
import pytest

from mbtr_geometry import DisplacementCache, GeometryKernel, KernelConfig
from mbtr_geometry.backends import compute_displacements, displacement_nbytes


def test_entry_points_from_i_to_j(right_angle_kernel):
    disp = right_angle_kernel.displacements()
    assert disp.shape == (3, 3, 3)
    np.testing.assert_array_equal(disp[0, 1], [1.0, 0.0, 0.0])
    np.testing.assert_array_equal(disp[1, 2], [-1.0, 1.0, 0.0])
    np.testing.assert_array_equal(disp[2, 1], -disp[1, 2])
    assert np.all(disp[np.arange(3), np.arange(3)] == 0.0)


def test_lazy_initialisation(right_angle_kernel):
    assert not right_angle_kernel.displacements_initialized
    right_angle_kernel.distance_matrix()
    assert right_angle_kernel.displacements_initialized


def test_repeated_calls_are_identical_and_independent(random_kernel):
    first = random_kernel.displacements()
    first[0, 1] = 99.0
    second = random_kernel.displacements()
    assert not np.array_equal(first, second)
    np.testing.assert_array_equal(second, random_kernel.displacements())
    np.testing.assert_array_equal(random_kernel.distance_matrix(), random_kernel.distance_matrix())


def test_memoised_tensor_is_built_once(monkeypatch, random_kernel):
    calls = []
    import mbtr_geometry.displacement as displacement_module

    original = displacement_module.compute_displacements

    def counting(*args, **kwargs):
        calls.append(1)
        return original(*args, **kwargs)

    monkeypatch.setattr(displacement_module, "compute_displacements", counting)
    cache = DisplacementCache(random_kernel.snapshot.positions)

    threads = [threading.Thread(target=cache.tensor) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    cache.displacements()

    assert len(calls) == 1
    assert cache.initialized


def test_internal_tensor_is_read_only(random_kernel):
    cache = DisplacementCache(random_kernel.snapshot.positions)
    with pytest.raises(ValueError):
        cache.tensor()[0, 0, 0] = 1.0


def test_empty_configuration():
    kernel = GeometryKernel.from_arrays([], [], {}, cell_limit=0)
    assert kernel.displacements().shape == (0, 0, 3)
    assert kernel.distance_matrix().shape == (0, 0)
    assert kernel.inverse_distance_by_element_pair() == {}
    assert kernel.angle_cosines() == {}


def test_float32_dtype(random_kernel):
    kernel = GeometryKernel(random_kernel.snapshot, KernelConfig(dtype=np.float32))
    assert kernel.displacements().dtype == np.float32
    np.testing.assert_allclose(kernel.distance_matrix(), random_kernel.distance_matrix(), rtol=1e-5)


def test_memory_warning(random_kernel):
    n_atoms = random_kernel.snapshot.n_atoms
    config = KernelConfig(memory_warning_bytes=displacement_nbytes(n_atoms) - 1)
    kernel = GeometryKernel(random_kernel.snapshot, config)
    with pytest.warns(RuntimeWarning, match="Displacement tensor"):
        kernel.displacements()


def test_memory_warning_can_be_disabled(random_kernel):
    kernel = GeometryKernel(random_kernel.snapshot, KernelConfig(memory_warning_bytes=None))
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        kernel.displacements()


def test_unknown_backend_rejected():
    with pytest.raises(ValueError, match="Unsupported backend"):
        compute_displacements(np.zeros((2, 3)), backend="jax")


def test_torch_backend_matches_numpy(random_kernel):
    pytest.importorskip("torch")
    kernel = GeometryKernel(random_kernel.snapshot, KernelConfig(backend="torch"))
    np.testing.assert_allclose(kernel.displacements(), random_kernel.displacements())
