"""
Pytest configuration and fixtures for GA-Kernel tests.
"""

import pytest
import torch

from ga_kernel.utils.config import get_config, set_config


@pytest.fixture
def device():
    """Get available device."""
    if torch.cuda.is_available():
        return torch.device('cuda')
    return torch.device('cpu')


@pytest.fixture
def cpu_device():
    """Force CPU device for consistent testing."""
    return torch.device('cpu')


@pytest.fixture
def exact_dtype():
    """Integer dtype so that add/sub round trips are exact."""
    return torch.int64


@pytest.fixture
def dimension():
    """Default space dimension for tests."""
    return 3


@pytest.fixture
def generator():
    """Seeded generator for reproducible random coefficients."""
    return torch.Generator().manual_seed(0)


@pytest.fixture
def random_multivector(dimension, exact_dtype, generator):
    """Factory for random exact multivectors in `dimension` dimensions."""
    from ga_kernel.algebra import Multivector

    def make():
        coeffs = torch.randint(-9, 10, (1 << dimension,), generator=generator, dtype=exact_dtype)
        return Multivector(dimension, coefficients=coeffs)

    return make


@pytest.fixture
def mixed_multivector(dimension, exact_dtype):
    """e1 coefficient 2 plus e1^e2 coefficient 5 in 3D."""
    from ga_kernel.algebra import Multivector

    mv = Multivector(dimension, dtype=exact_dtype)
    mv.set_coefficient(0b001, 2)
    mv.set_coefficient(0b011, 5)
    return mv


@pytest.fixture
def restore_config():
    """Restore the active Config after the test."""
    previous = get_config()
    yield previous
    set_config(previous)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "gpu: marks tests that require GPU"
    )


def pytest_collection_modifyitems(config, items):
    """Skip GPU tests if no GPU available."""
    if not torch.cuda.is_available():
        skip_gpu = pytest.mark.skip(reason="No GPU available")
        for item in items:
            if "gpu" in item.keywords:
                item.add_marker(skip_gpu)
